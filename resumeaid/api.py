"""HTTP endpoints for resume generation, compilation, analysis and profiles."""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, File, Form, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from resumeaid.agents.analyzer_agent import AnalysisError, ResumeAnalyzerAgent
from resumeaid.agents.generator import AgentGenerator, Generator
from resumeaid.agents.resume_agent import ResumeWriterAgent
from resumeaid.compiler import CompilationError, Compiler, build_compiler
from resumeaid.latex_utils.sanitizer import LatexSanitizer
from resumeaid.logger import configure_logging, get_logger
from resumeaid.models.profile import CamelModel, Profile
from resumeaid.models.settings import Settings
from resumeaid.profile_store import ProfileStore

log = get_logger(__name__)


class GenerateResumeRequest(CamelModel):
    profile: Optional[Profile] = None
    job_description: Optional[str] = None
    target_role: Optional[str] = None


class LatexRequest(CamelModel):
    latex: Optional[str] = None


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def create_app(
    settings: Settings | None = None,
    generator: Generator | None = None,
    analyzer_generator: Generator | None = None,
    compiler: Compiler | None = None,
    store: ProfileStore | None = None,
) -> FastAPI:
    """Create the FastAPI app; collaborators default to ones built from settings."""
    settings = settings or Settings()
    configure_logging()

    writer = ResumeWriterAgent(generator or AgentGenerator(settings, stage="writer"))
    analyzer = ResumeAnalyzerAgent(
        analyzer_generator or generator or AgentGenerator(settings, stage="analyzer"),
        max_chars=settings.analysis_max_chars,
    )
    compiler = compiler or build_compiler(settings)
    store = store or ProfileStore(settings.profile_store_path)

    app = FastAPI(title="ResumeAid", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.store = store

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/generate-resume")
    def generate_resume(body: GenerateResumeRequest) -> JSONResponse:
        if body.profile is None or not (body.target_role or "").strip():
            return _error("Missing required fields", 400)
        try:
            result = writer.generate(body.profile, body.job_description, body.target_role)
        except Exception as exc:
            log.exception("Resume generation error: %s", exc)
            return _error("Resume generation failed", 500)
        return JSONResponse({"latex": result.latex, "source": result.source})

    @app.post("/api/compile-latex")
    def compile_latex(body: LatexRequest) -> Response:
        if not body.latex:
            return _error("No LaTeX provided", 400)
        try:
            pdf = compiler.compile(body.latex)
        except CompilationError as exc:
            return _error(str(exc), 500)
        return Response(
            content=pdf,
            media_type="application/pdf",
            headers={"Content-Disposition": 'inline; filename="resume.pdf"'},
        )

    @app.post("/api/analyze-resume")
    def analyze_resume(
        file: Optional[UploadFile] = File(None),
        target_role: str = Form("", alias="targetRole"),
    ) -> JSONResponse:
        if file is None:
            return _error("No file provided", 400)
        try:
            analysis = analyzer.analyze(file.file.read(), target_role)
        except AnalysisError as exc:
            log.error("Analysis error: %s", exc)
            return _error("Failed to analyze resume", 500)
        except Exception as exc:
            log.exception("Analysis error: %s", exc)
            return _error("Failed to analyze resume", 500)
        return JSONResponse(analysis.to_json_dict())

    @app.post("/api/sanitize")
    def sanitize(body: LatexRequest) -> dict[str, str]:
        return {"latex": LatexSanitizer.sanitize(body.latex)}

    @app.get("/api/profiles")
    def list_profiles() -> JSONResponse:
        return JSONResponse([p.to_json_dict() for p in store.get_all()])

    @app.get("/api/profiles/{profile_id}")
    def get_profile(profile_id: str) -> JSONResponse:
        profile = store.get(profile_id)
        if profile is None:
            return _error("Profile not found", 404)
        return JSONResponse(profile.to_json_dict())

    @app.post("/api/profiles")
    def save_profile(profile: Profile) -> JSONResponse:
        return JSONResponse(store.save(profile).to_json_dict())

    @app.delete("/api/profiles/{profile_id}")
    def delete_profile(profile_id: str) -> JSONResponse:
        if not store.delete(profile_id):
            return _error("Profile not found", 404)
        return JSONResponse({"deleted": profile_id})

    log.info("[green]ResumeAid app ready[/] (compiler=%s)", settings.latex_compiler)
    return app
