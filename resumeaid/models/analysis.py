from typing import List

from pydantic import Field, field_validator

from resumeaid.models.profile import CamelModel


class RoadmapStep(CamelModel):
    period: str
    task: str


class ResumeAnalysis(CamelModel):
    """Structured reply of the resume analysis prompt."""

    ats_score: int = Field(ge=0, le=100)
    risk_factor: str
    job_probability: float = Field(ge=0, le=100)
    improvements: List[str] = []
    roadmap: List[RoadmapStep] = []
    interview_risk_detection: str = ""
    personal_branding_score: int = Field(default=0, ge=0, le=100)

    @field_validator("job_probability", mode="before")
    def strip_percent(cls, v):
        # models often answer "65%" instead of 65
        if isinstance(v, str):
            return v.strip().rstrip("%").strip()
        return v

    @field_validator("risk_factor")
    def risk_level_prefix(cls, v: str) -> str:
        if not v.strip().lower().startswith(("low", "medium", "high")):
            raise ValueError("riskFactor must start with Low, Medium or High")
        return v.strip()
