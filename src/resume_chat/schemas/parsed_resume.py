from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SectionKind(StrEnum):
    """Resume section kinds, in the order header detection checks them."""

    OBJECTIVE = "objective"
    SKILLS = "skills"
    EDUCATION = "education"
    EXPERIENCE = "experience"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    LANGUAGES = "languages"


class _RecordModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactInfo(_RecordModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    # Holds a matched LinkedIn profile URL when one is found.
    location: str = ""


class EducationEntry(_RecordModel):
    institution: str | None = None
    degree: str | None = None
    field: str | None = None
    year: str | None = None
    details: str | None = None


class ExperienceEntry(_RecordModel):
    company: str | None = None
    position: str | None = None
    duration: str | None = None
    responsibilities: list[str] = []
    details: str | None = None


class ProjectEntry(_RecordModel):
    name: str | None = None
    description: str | None = None
    technologies: list[str] = []


class ParsedResume(_RecordModel):
    """Canonical structured form of one uploaded resume.

    ``raw_sections`` keeps the verbatim text of every detected section and
    ``raw_text`` the entire decoded document; both are always present so
    consumers never need existence checks.
    """

    model_config = ConfigDict(frozen=True)

    objective_or_summary: str | None = None
    skills: list[str] = []
    education: list[EducationEntry] = []
    experience: list[ExperienceEntry] = []
    projects: list[ProjectEntry] = []
    certifications: list[str] = []
    languages: list[str] = []
    contact: ContactInfo = Field(default_factory=ContactInfo)
    raw_sections: dict[SectionKind, str] = {}
    raw_text: str | None = None

    def with_raw_text(self, text: str) -> "ParsedResume":
        """Return a copy carrying the full document text for RAG answers."""
        return self.model_copy(update={"raw_text": text})

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
