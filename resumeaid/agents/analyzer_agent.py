import io
import json

from pydantic import ValidationError
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from resumeaid.agents.generator import Generator
from resumeaid.latex_utils.prompts import build_analysis_prompt
from resumeaid.logger import get_logger
from resumeaid.models.analysis import ResumeAnalysis


class AnalysisError(RuntimeError):
    """Resume analysis could not produce a usable result."""


def extract_pdf_text(pdf_bytes: bytes) -> str:
    try:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        return "\n".join((page.extract_text() or "") for page in reader.pages).strip()
    except (PdfReadError, ValueError, OSError) as e:
        raise AnalysisError(f"Could not read PDF: {e}") from e


def extract_json_object(text: str) -> dict:
    """Parse a JSON object from a model reply, tolerating prose around it."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            raise AnalysisError("AI response was not valid JSON")
        try:
            data = json.loads(text[start:end + 1])
        except json.JSONDecodeError as e:
            raise AnalysisError("AI response was not valid JSON") from e
    if not isinstance(data, dict):
        raise AnalysisError("AI response was not a JSON object")
    return data


class ResumeAnalyzerAgent:
    def __init__(self, generator: Generator, max_chars: int = 5000) -> None:
        self.generator = generator
        self.max_chars = max_chars
        self._log = get_logger(__name__)

    def analyze_text(self, resume_text: str, target_role: str) -> ResumeAnalysis:
        prompt = build_analysis_prompt(resume_text, target_role, self.max_chars)
        reply = self.generator.generate(prompt)
        data = extract_json_object(reply or "")
        try:
            return ResumeAnalysis.model_validate(data)
        except ValidationError as e:
            self._log.error("AI returned an invalid analysis: %s", reply)
            raise AnalysisError("AI response did not match the analysis schema") from e

    def analyze(self, pdf_bytes: bytes, target_role: str) -> ResumeAnalysis:
        resume_text = extract_pdf_text(pdf_bytes)
        if not resume_text:
            raise AnalysisError("No text could be extracted from the PDF")
        self._log.info("[cyan]Analyzing[/] %d characters for role '%s'", len(resume_text), target_role)
        return self.analyze_text(resume_text, target_role)
