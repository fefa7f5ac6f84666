from __future__ import annotations

import re
import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

_EMAIL_RE = re.compile(r"\S+@\S+\.\S+")


def _new_id() -> str:
    return str(uuid.uuid4())


class CamelModel(BaseModel):
    """Base for records shared with the browser (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class Experience(CamelModel):
    id: str = Field(default_factory=_new_id)
    company: str
    position: str
    location: str = ""
    start_date: str
    end_date: str = ""
    current: bool = False
    description: List[str] = []
    technologies: List[str] = []

    @field_validator("company", "position", "start_date")
    def required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("field is required")
        return v

    @model_validator(mode="after")
    def end_date_unless_current(self):
        if not self.current and not (self.end_date or "").strip():
            raise ValueError("end date is required unless the position is current")
        return self


class Education(CamelModel):
    id: str = Field(default_factory=_new_id)
    institution: str
    degree: str
    field: str
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    gpa: Optional[str] = None

    @field_validator("institution", "degree", "field")
    def required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("field is required")
        return v


class Project(CamelModel):
    id: str = Field(default_factory=_new_id)
    name: str
    description: str = ""
    technologies: List[str] = []
    link: Optional[str] = None
    start_date: str = ""
    end_date: Optional[str] = None


class Certification(CamelModel):
    id: str = Field(default_factory=_new_id)
    name: str
    issuer: str
    issue_date: str = ""
    expiry_date: Optional[str] = None
    credential_id: Optional[str] = None
    link: Optional[str] = None


class Profile(CamelModel):
    id: str = Field(default_factory=_new_id)
    full_name: str
    email: str
    phone: str
    location: str
    linkedin: Optional[str] = None
    portfolio: Optional[str] = None
    github: Optional[str] = None

    summary: Optional[str] = None

    experience: List[Experience] = []
    education: List[Education] = []
    technical_skills: List[str] = []
    soft_skills: List[str] = []
    projects: List[Project] = []
    certifications: List[Certification] = []
    languages: List[str] = []
    achievements: List[str] = []
    publications: List[str] = []

    target_role: Optional[str] = None
    target_industry: Optional[str] = None

    created_at: str = ""
    updated_at: str = ""

    @field_validator("full_name", "phone", "location")
    def required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("field is required")
        return v

    @field_validator("email")
    def valid_email(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("email is required")
        if not _EMAIL_RE.search(v):
            raise ValueError("email is invalid")
        return v

    def links(self) -> List[str]:
        return [link for link in (self.linkedin, self.github, self.portfolio) if link]

    def section_counts(self) -> dict[str, int]:
        return {
            "experience": len(self.experience),
            "education": len(self.education),
            "technical_skills": len(self.technical_skills),
            "projects": len(self.projects),
            "certifications": len(self.certifications),
            "languages": len(self.languages),
        }
