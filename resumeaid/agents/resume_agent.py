from dataclasses import dataclass
from typing import Literal

from resumeaid.agents.generator import Generator
from resumeaid.latex_utils.prompts import build_resume_prompt, is_placeholder_content
from resumeaid.latex_utils.sanitizer import LatexSanitizer
from resumeaid.latex_utils.templates import render_template_resume
from resumeaid.latex_utils.writer import wrap_document
from resumeaid.logger import get_logger
from resumeaid.models.profile import Profile


@dataclass
class GeneratedResume:
    latex: str
    source: Literal["ai", "template"]


class ResumeWriterAgent:
    """Ask the LLM for a resume body, falling back to the template on any failure."""

    def __init__(self, generator: Generator) -> None:
        self.generator = generator
        self._log = get_logger(__name__)

    def generate_body(self, profile: Profile, job_description: str | None, target_role: str) -> GeneratedResume:
        prompt = build_resume_prompt(profile, job_description, target_role)
        try:
            raw = self.generator.generate(prompt)
        except Exception as e:
            self._log.warning("[yellow]AI generation error, falling back to template[/]: %s", e)
            return self._template(profile, job_description, target_role)

        content = LatexSanitizer.sanitize(raw)
        if not content:
            self._log.warning("[yellow]AI returned empty content, using template instead[/]")
            return self._template(profile, job_description, target_role)
        if is_placeholder_content(content):
            self._log.warning("[yellow]AI generated placeholder content, using template instead[/]")
            return self._template(profile, job_description, target_role)
        return GeneratedResume(latex=content, source="ai")

    def generate(self, profile: Profile, job_description: str | None, target_role: str) -> GeneratedResume:
        """Return a complete, wrapped LaTeX document."""
        self._log.info("Profile received: %s", profile.section_counts())
        body = self.generate_body(profile, job_description, target_role)
        return GeneratedResume(latex=wrap_document(body.latex), source=body.source)

    def _template(self, profile: Profile, job_description: str | None, target_role: str) -> GeneratedResume:
        return GeneratedResume(latex=render_template_resume(profile, job_description, target_role), source="template")
