from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central application settings (env-driven).

    - AI_WRITER_MODEL: any pydantic-ai model name, provider-prefixed
      (e.g., "ollama:mistral:latest", "openai:gpt-4o-mini").
    - AI_ANALYZER_MODEL: optional override for the resume analysis stage.
    - LATEX_COMPILER: "remote" posts to LATEX_COMPILER_URL, "local" runs PDFLATEX_CMD.
    - PROFILE_STORE_PATH: JSON file holding saved profiles.
    """

    # ollama:llama3.1:8b
    # openai:gpt-4o-mini
    ai_writer_model: str = Field(default="ollama:mistral:latest", alias="AI_WRITER_MODEL")
    ai_analyzer_model: str | None = Field(default=None, alias="AI_ANALYZER_MODEL")

    llm_temperature: float = Field(default=0.3, alias="LLM_TEMPERATURE")
    llm_max_tokens: int = Field(default=2048, alias="LLM_MAX_TOKENS")
    llm_timeout: float = Field(default=120.0, alias="LLM_TIMEOUT")

    latex_compiler: Literal["remote", "local"] = Field(default="remote", alias="LATEX_COMPILER")
    latex_compiler_url: str = Field(default="https://latexonline.cc/compile", alias="LATEX_COMPILER_URL")
    latex_compiler_timeout: float = Field(default=60.0, alias="LATEX_COMPILER_TIMEOUT")
    pdflatex_cmd: str = Field(default="pdflatex", alias="PDFLATEX_CMD")

    profile_store_path: str = Field(default="data/profiles.json", alias="PROFILE_STORE_PATH")
    analysis_max_chars: int = Field(default=5000, alias="ANALYSIS_MAX_CHARS")

    host: str = Field(default="127.0.0.1", alias="RESUMEAID_HOST")
    port: int = Field(default=8000, alias="RESUMEAID_PORT")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    model_config = {
        "extra": "ignore",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    def resolve_model(self, stage: str) -> str:
        """Return the model name to use for a given stage ("writer" or "analyzer")."""
        if stage == "analyzer":
            return self.ai_analyzer_model or self.ai_writer_model
        return self.ai_writer_model

    def cors_origin_list(self) -> list[str]:
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
