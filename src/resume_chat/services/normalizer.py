"""Coerce stored or foreign-shaped resume data into ``ParsedResume``.

Accepts the camelCase JSON form, snake_case attribute names, and the
legacy keys written by earlier versions of the application
(``skills_or_tech_stack``, ``contact_information``, ``_raw_sections``,
``_raw_text``). Anything unrecognised is replaced by its default.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from resume_chat.schemas.parsed_resume import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ParsedResume,
    ProjectEntry,
    SectionKind,
)

logger = logging.getLogger(__name__)


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return str(value)
    return None


def _list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list | tuple) else []


def _named_text(value: Any) -> str | None:
    """A plain string, or the name/title of a small object."""
    if isinstance(value, Mapping):
        value = _pick(value, "name", "title", "text")
    text = _text(value)
    return text.strip() if text and text.strip() else None


def _string_list(value: Any) -> list[str]:
    return [t for t in (_named_text(item) for item in _list(value)) if t]


def _education(item: Any) -> EducationEntry | None:
    if isinstance(item, EducationEntry):
        return item
    if isinstance(item, str):
        return EducationEntry(details=item)
    if not isinstance(item, Mapping):
        return None
    return EducationEntry(
        institution=_text(_pick(item, "institution", "school")),
        degree=_text(_pick(item, "degree", "title")),
        field=_text(_pick(item, "field", "field_of_study")),
        year=_text(_pick(item, "year", "end_year")),
        details=_text(item.get("details")),
    )


def _duration(item: Mapping[str, Any]) -> str | None:
    duration = _text(item.get("duration"))
    if duration:
        return duration
    start = _text(_pick(item, "start_date", "start_year", "from"))
    end = _text(_pick(item, "end_date", "end_year", "to"))
    if start and end:
        return f"{start} - {end}"
    return start or end


def _experience(item: Any) -> ExperienceEntry | None:
    if isinstance(item, ExperienceEntry):
        return item
    if isinstance(item, str):
        return ExperienceEntry(details=item)
    if not isinstance(item, Mapping):
        return None
    return ExperienceEntry(
        company=_text(_pick(item, "company", "organization", "employer")),
        position=_text(_pick(item, "position", "title", "role")),
        duration=_duration(item),
        responsibilities=_string_list(item.get("responsibilities")),
        details=_text(_pick(item, "details", "description")),
    )


def _project(item: Any) -> ProjectEntry | None:
    if isinstance(item, ProjectEntry):
        return item
    if isinstance(item, str):
        return ProjectEntry(name=item)
    if not isinstance(item, Mapping):
        return None
    technologies = item.get("technologies")
    if isinstance(technologies, str):
        technologies = [t.strip() for t in technologies.split(",")]
    return ProjectEntry(
        name=_text(_pick(item, "name", "title")),
        description=_text(_pick(item, "description", "details")),
        technologies=_string_list(technologies),
    )


def _entries(value: Any, build) -> list:
    return [e for e in (build(item) for item in _list(value)) if e is not None]


def _contact(value: Any) -> ContactInfo:
    if isinstance(value, ContactInfo):
        return value
    if not isinstance(value, Mapping):
        return ContactInfo()
    return ContactInfo(
        name=_text(value.get("name")) or "",
        email=_text(value.get("email")) or "",
        phone=_text(value.get("phone")) or "",
        location=_text(value.get("location")) or "",
    )


def _raw_sections(value: Any) -> dict[SectionKind, str]:
    if not isinstance(value, Mapping):
        return {}
    sections: dict[SectionKind, str] = {}
    for key, text in value.items():
        if not isinstance(text, str):
            continue
        try:
            sections[SectionKind(key)] = text
        except ValueError:
            continue
    return sections


def _objective(value: Any) -> str | None:
    if isinstance(value, Mapping):
        value = value.get("text")
    return _text(value)


def normalize_parsed(data: Any) -> ParsedResume:
    """Build a complete ``ParsedResume`` from whatever was stored."""
    if isinstance(data, ParsedResume):
        return data
    if not isinstance(data, Mapping):
        return ParsedResume()

    try:
        return ParsedResume(
            objective_or_summary=_objective(
                _pick(data, "objectiveOrSummary", "objective_or_summary", "summary")
            ),
            skills=_string_list(_pick(data, "skills", "skills_or_tech_stack")),
            education=_entries(data.get("education"), _education),
            experience=_entries(data.get("experience"), _experience),
            projects=_entries(data.get("projects"), _project),
            certifications=_string_list(data.get("certifications")),
            languages=_string_list(data.get("languages")),
            contact=_contact(_pick(data, "contact", "contact_information", "contactInformation")),
            raw_sections=_raw_sections(_pick(data, "rawSections", "raw_sections", "_raw_sections")),
            raw_text=_text(_pick(data, "rawText", "raw_text", "_raw_text")),
        )
    except ValidationError as e:
        logger.warning("Discarding malformed resume record: %s", e)
        return ParsedResume()
