import os
import subprocess
import tempfile
from typing import Protocol

import httpx

from resumeaid.logger import get_logger
from resumeaid.models.settings import Settings

log = get_logger(__name__)


class CompilationError(RuntimeError):
    """LaTeX could not be turned into a PDF; the message is safe to show users."""


class Compiler(Protocol):
    def compile(self, latex: str) -> bytes: ...


def extract_diagnostics(log_text: str, limit: int = 5) -> str:
    """Pull TeX error lines ("! ...") plus the line that follows each one."""
    lines = log_text.splitlines()
    found = []
    for i, line in enumerate(lines):
        if line.startswith("!"):
            detail = line.lstrip("! ").strip()
            if i + 1 < len(lines) and lines[i + 1].startswith("l."):
                detail += f" ({lines[i + 1].strip()})"
            found.append(detail)
            if len(found) >= limit:
                break
    return "\n".join(found)


class RemoteLatexCompiler:
    """Compile through a latexonline-style GET endpoint (`?text=<latex>`)."""

    def __init__(self, url: str, timeout: float = 60.0, client: httpx.Client | None = None) -> None:
        self.url = url
        self.timeout = timeout
        self.client = client

    def compile(self, latex: str) -> bytes:
        try:
            if self.client is not None:
                response = self.client.get(self.url, params={"text": latex}, timeout=self.timeout)
            else:
                with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
                    response = client.get(self.url, params={"text": latex})
        except httpx.HTTPError as e:
            log.error("Compiler connection error: %s", e)
            raise CompilationError("Failed to connect to LaTeX compiler") from e

        if response.is_error:
            log.error("Remote compiler error (%s): %s", response.status_code, response.text[:2000])
            detail = extract_diagnostics(response.text)
            raise CompilationError(detail or "Remote LaTeX compilation failed")
        return response.content


class LocalLatexCompiler:
    """Compile with a local TeX distribution in a throwaway directory."""

    def __init__(self, command: str = "pdflatex", timeout: float = 60.0) -> None:
        self.command = command
        self.timeout = timeout

    def compile(self, latex: str) -> bytes:
        with tempfile.TemporaryDirectory() as temp_dir:
            tex_path = os.path.join(temp_dir, "resume.tex")
            pdf_path = os.path.join(temp_dir, "resume.pdf")
            log_path = os.path.join(temp_dir, "resume.log")
            with open(tex_path, "w", encoding="utf-8") as f:
                f.write(latex)

            command = [self.command, "-interaction=nonstopmode", f"-output-directory={temp_dir}", tex_path]
            try:
                # Run twice to resolve references
                for _ in range(2):
                    subprocess.run(command, check=True, capture_output=True, text=True, timeout=self.timeout)
            except FileNotFoundError as e:
                raise CompilationError(f"'{self.command}' command not found") from e
            except subprocess.TimeoutExpired as e:
                raise CompilationError("LaTeX compilation timed out") from e
            except subprocess.CalledProcessError as e:
                detail = ""
                if os.path.exists(log_path):
                    with open(log_path, "r", encoding="utf-8", errors="replace") as lf:
                        detail = extract_diagnostics(lf.read())
                log.error("[red]LaTeX compilation failed[/]: %s", detail or e.stdout)
                raise CompilationError(detail or "LaTeX compilation failed") from e

            if not os.path.exists(pdf_path):
                raise CompilationError("Compilation seemed to succeed, but no PDF was found")
            with open(pdf_path, "rb") as f:
                return f.read()


def build_compiler(settings: Settings) -> Compiler:
    if settings.latex_compiler == "local":
        return LocalLatexCompiler(settings.pdflatex_cmd, settings.latex_compiler_timeout)
    return RemoteLatexCompiler(settings.latex_compiler_url, settings.latex_compiler_timeout)
