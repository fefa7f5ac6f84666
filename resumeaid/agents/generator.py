from typing import Protocol

from pydantic_ai import Agent
from pydantic_ai.settings import ModelSettings

from resumeaid.logger import get_logger
from resumeaid.models.settings import Settings


class Generator(Protocol):
    """Anything that turns a prompt into free text."""

    def generate(self, prompt: str) -> str: ...


class AgentGenerator:
    """Generator backed by a pydantic-ai Agent.

    The agent is built per call so a missing provider key only surfaces when
    a completion is actually requested.
    """

    def __init__(self, settings: Settings | None = None, stage: str = "writer") -> None:
        self.settings = settings or Settings()
        self.stage = stage
        self._log = get_logger(__name__)

    def model_settings(self) -> ModelSettings:
        return ModelSettings(
            temperature=self.settings.llm_temperature,
            max_tokens=self.settings.llm_max_tokens,
            timeout=self.settings.llm_timeout,
        )

    def generate(self, prompt: str) -> str:
        use_model = self.settings.resolve_model(self.stage)
        self._log.info("[bold magenta]Model for %s[/]: %s", self.stage, use_model)
        agent = Agent(model=use_model, model_settings=self.model_settings())
        result = agent.run_sync(prompt)
        return getattr(result, "output", None) or getattr(result, "data", None) or ""
