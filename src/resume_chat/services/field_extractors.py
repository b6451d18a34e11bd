"""Per-section extraction of structured entries from buffered lines.

Every extractor is a single forward pass over the section's lines with
no backtracking; entries are emitted in input order.
"""

import re
from collections.abc import Callable, Iterable

from resume_chat.schemas.parsed_resume import (
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    SectionKind,
)
from resume_chat.services.keywords import STOP_WORDS, is_tech_keyword, mentions_tech_keyword

SKILL_SPLIT_RE = re.compile(r"[,|•·\t\n]")
LEADING_MARKER_RE = re.compile(r"^(?:[-*•·▪◦]+|\d+[.)])\s*")
BULLET_RE = re.compile(r"^[-•·]\s*")
LIST_ITEM_RE = re.compile(r"^(?:[-•·*]|\d+[.)])\s*")
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
LEADING_YEAR_RE = re.compile(r"^\d{4}")
DATE_RANGE_RE = re.compile(
    r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s+\d{4}\b"
    r"|\b\d{4}\s*[-–—]\s*(?:present|current|\d{4})\b",
    re.IGNORECASE,
)
DEGREE_FIELD_RE = re.compile(r"^(?P<degree>.+?)\s+in\s+(?P<field>.+)$", re.IGNORECASE)
TECH_SPLIT_RE = re.compile(r"[,|]")

MIN_CONFIRMED_SKILLS = 3


def _dedupe(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


def _skill_tokens(lines: Iterable[str]) -> list[str]:
    tokens = []
    for line in lines:
        for part in SKILL_SPLIT_RE.split(line):
            token = LEADING_MARKER_RE.sub("", part.strip()).strip()
            if token:
                tokens.append(token)
    return tokens


def _is_plain_skill(token: str) -> bool:
    return 2 <= len(token) <= 100 and token.lower() not in STOP_WORDS


def extract_skills(lines: list[str]) -> list[str]:
    """Split skill lines on list delimiters and keep plausible skill tokens.

    A token survives when it matches the technology vocabulary or is a
    reasonably sized non-stop-word. When fewer than three survive, every
    non-stop-word token is taken instead, technology matches first.
    """
    tokens = _skill_tokens(lines)
    kept = [t for t in tokens if is_tech_keyword(t) or _is_plain_skill(t)]
    if len(kept) >= MIN_CONFIRMED_SKILLS:
        return _dedupe(kept)

    recall = [t for t in tokens if t.lower() not in STOP_WORDS]
    confirmed = [t for t in recall if is_tech_keyword(t)]
    others = [t for t in recall if not is_tech_keyword(t)]
    return _dedupe(confirmed + others)


def _append(existing: str | None, text: str) -> str:
    return f"{existing} {text}" if existing else text


def _split_degree(entry: EducationEntry) -> None:
    if entry.degree and not entry.field and (match := DEGREE_FIELD_RE.match(entry.degree)):
        entry.degree = match.group("degree").strip()
        entry.field = match.group("field").strip()


def extract_education(lines: list[str]) -> list[EducationEntry]:
    entries: list[EducationEntry] = []
    current: EducationEntry | None = None
    # Set once a trailing year line ends the entry it belongs to.
    closed = False

    for line in lines:
        year = YEAR_RE.search(line)
        if year:
            if current is not None and current.year is None:
                current.year = year.group(0)
                current.details = _append(current.details, line)
                closed = True
                continue
            current = EducationEntry(year=year.group(0), details=line)
            entries.append(current)
            closed = False
        else:
            if current is None or closed:
                current = EducationEntry()
                entries.append(current)
                closed = False
            if current.institution is None:
                current.institution = line
            elif current.degree is None:
                current.degree = line
            else:
                current.details = _append(current.details, line)

    for entry in entries:
        _split_degree(entry)
    return entries


def extract_experience(lines: list[str]) -> list[ExperienceEntry]:
    entries: list[ExperienceEntry] = []
    current: ExperienceEntry | None = None

    for line in lines:
        if DATE_RANGE_RE.search(line):
            if current is None or current.duration is not None:
                current = ExperienceEntry()
                entries.append(current)
            current.duration = line
        elif BULLET_RE.match(line):
            if current is None:
                current = ExperienceEntry()
                entries.append(current)
            item = BULLET_RE.sub("", line).strip()
            if item:
                current.responsibilities.append(item)
        else:
            # A plain line after bullets opens the next role.
            if current is None or current.responsibilities:
                current = ExperienceEntry()
                entries.append(current)
            if current.company is None:
                current.company = line
            elif current.position is None:
                current.position = line
            else:
                current.details = _append(current.details, line)

    return entries


def _is_title_line(line: str) -> bool:
    if LIST_ITEM_RE.match(line):
        return True
    return len(line) < 80 and "," not in line and not LEADING_YEAR_RE.match(line)


def _is_bare_project_name(line: str) -> bool:
    return (
        10 <= len(line) <= 200
        and not LEADING_YEAR_RE.match(line)
        and not line.isupper()
        and "@" not in line
    )


def extract_projects(lines: list[str]) -> list[ProjectEntry]:
    entries: list[ProjectEntry] = []
    current: ProjectEntry | None = None

    for line in lines:
        if _is_title_line(line):
            current = ProjectEntry(name=LIST_ITEM_RE.sub("", line).strip() or line)
            entries.append(current)
        elif current is None:
            continue
        elif current.description is None:
            current.description = line
        elif mentions_tech_keyword(line) or TECH_SPLIT_RE.search(line):
            current.technologies.extend(
                t for t in (part.strip() for part in TECH_SPLIT_RE.split(line)) if t
            )
        else:
            current.description = _append(current.description, line)

    if not entries:
        entries = [ProjectEntry(name=line) for line in lines if _is_bare_project_name(line)]
    return entries


def extract_lines(lines: list[str]) -> list[str]:
    return [line for line in lines if line.strip()]


def extract_objective(lines: list[str]) -> str:
    return "\n".join(lines)


# Structured extraction per section kind; objective is stored as text.
EXTRACTORS: dict[SectionKind, Callable[[list[str]], object]] = {
    SectionKind.OBJECTIVE: extract_objective,
    SectionKind.SKILLS: extract_skills,
    SectionKind.EDUCATION: extract_education,
    SectionKind.EXPERIENCE: extract_experience,
    SectionKind.PROJECTS: extract_projects,
    SectionKind.CERTIFICATIONS: extract_lines,
    SectionKind.LANGUAGES: extract_lines,
}
