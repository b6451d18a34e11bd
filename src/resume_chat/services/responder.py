"""Question answering over a parsed resume.

Answers come from the RAG delegate when one is configured and the
record carries the document text; otherwise (or when the delegate fails
or returns nothing) a deterministic keyword responder maps the question
to a section and returns its verbatim text or a formatted summary.
"""

import asyncio
import logging
from enum import StrEnum
from typing import Protocol

from resume_chat.schemas.parsed_resume import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ParsedResume,
    ProjectEntry,
    SectionKind,
)

logger = logging.getLogger(__name__)

NOT_FOUND = "The resume does not contain this information."


class Intent(StrEnum):
    SKILLS = "skills"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    CONTACT = "contact"
    SUMMARY = "summary"
    LANGUAGES = "languages"


HELP_MESSAGE = (
    "Please ask a question about the resume. Try: "
    + ", ".join(f"'{intent.value}'" for intent in list(Intent)[:-1])
    + f", or '{Intent.LANGUAGES.value}'."
)

# Checked in declaration order; the first intent with a matching keyword wins.
INTENT_KEYWORDS: dict[Intent, tuple[str, ...]] = {
    Intent.SKILLS: (
        "skill", "skills", "technical skills", "tech", "tech stack", "technologies", "competencies",
    ),
    Intent.EXPERIENCE: (
        "experience", "work", "employment", "jobs", "job", "work history", "career",
    ),
    Intent.EDUCATION: (
        "education", "degree", "college", "university", "qualification", "academic",
    ),
    Intent.PROJECTS: ("projects", "project", "portfolio"),
    Intent.CERTIFICATIONS: (
        "certifications", "certificate", "licenses", "certification", "credentials",
    ),
    Intent.CONTACT: ("contact", "email", "phone", "contact information", "phone number"),
    Intent.SUMMARY: ("summary", "about", "objective", "overview", "profile"),
    Intent.LANGUAGES: ("languages", "language", "language skills"),
}

INTENT_SECTIONS: dict[Intent, SectionKind] = {
    Intent.SKILLS: SectionKind.SKILLS,
    Intent.EXPERIENCE: SectionKind.EXPERIENCE,
    Intent.EDUCATION: SectionKind.EDUCATION,
    Intent.PROJECTS: SectionKind.PROJECTS,
    Intent.CERTIFICATIONS: SectionKind.CERTIFICATIONS,
    Intent.SUMMARY: SectionKind.OBJECTIVE,
    Intent.LANGUAGES: SectionKind.LANGUAGES,
}


class RagGenerator(Protocol):
    async def generate(self, full_text: str, record: ParsedResume, question: str) -> str | None: ...


def detect_intent(query: str) -> Intent | None:
    q = query.strip().lower()
    for intent, keywords in INTENT_KEYWORDS.items():
        if any(q == k or k in q for k in keywords):
            return intent
    return None


def _bullets(items: list[str]) -> str | None:
    return "\n".join(f"- {item}" for item in items) if items else None


def _format_experience(entry: ExperienceEntry) -> str:
    head = " — ".join(p for p in (entry.position, entry.company, entry.duration) if p)
    lines = [f"- {head or entry.details or 'Role'}"]
    if head and entry.details:
        lines.append(f"  {entry.details}")
    lines.extend(f"  • {item}" for item in entry.responsibilities)
    return "\n".join(lines)


def _format_education(entry: EducationEntry) -> str:
    text = entry.degree or ""
    if entry.field:
        text = f"{text} in {entry.field}" if text else entry.field
    if entry.institution:
        text = f"{text}, {entry.institution}" if text else entry.institution
    if not text:
        text = entry.details or ""
    if entry.year and entry.year not in text:
        text = f"{text} — {entry.year}" if text else entry.year
    return f"- {text}"


def _format_project(entry: ProjectEntry) -> str:
    text = " — ".join(p for p in (entry.name, entry.description) if p)
    if entry.technologies:
        text = f"{text} ({', '.join(entry.technologies)})"
    return f"- {text.strip()}"


def _format_contact(contact: ContactInfo) -> str | None:
    labelled = [
        ("Name", contact.name),
        ("Email", contact.email),
        ("Phone", contact.phone),
        ("Location", contact.location),
    ]
    return _bullets([f"{label}: {value}" for label, value in labelled if value])


def _structured_answer(record: ParsedResume, intent: Intent) -> str | None:
    match intent:
        case Intent.SKILLS:
            return _bullets(record.skills)
        case Intent.EXPERIENCE:
            return "\n".join(map(_format_experience, record.experience)) or None
        case Intent.EDUCATION:
            return "\n".join(map(_format_education, record.education)) or None
        case Intent.PROJECTS:
            return "\n".join(map(_format_project, record.projects)) or None
        case Intent.CERTIFICATIONS:
            return _bullets(record.certifications)
        case Intent.CONTACT:
            return _format_contact(record.contact)
        case Intent.SUMMARY:
            summary = (record.objective_or_summary or "").strip()
            return summary or None
        case Intent.LANGUAGES:
            return _bullets(record.languages)
    return None


def answer_deterministic(record: ParsedResume, question: str) -> str:
    """Answer from the parsed record alone; never raises or returns ""."""
    q = question.strip().lower()
    if not q:
        return HELP_MESSAGE

    intent = detect_intent(q)
    if intent is None:
        return NOT_FOUND

    section = INTENT_SECTIONS.get(intent)
    if section is not None:
        raw = record.raw_sections.get(section, "").strip()
        if raw:
            return raw

    return _structured_answer(record, intent) or NOT_FOUND


class RetrievalResponder:
    def __init__(self, rag: RagGenerator | None = None, timeout: float = 20.0) -> None:
        self.rag = rag
        self.timeout = timeout

    async def answer(self, record: ParsedResume, question: str) -> str:
        if self.rag is not None and record.raw_text:
            answer = await self._ask_rag(record, question)
            if answer:
                return answer
        return answer_deterministic(record, question)

    async def _ask_rag(self, record: ParsedResume, question: str) -> str | None:
        try:
            answer = await asyncio.wait_for(
                self.rag.generate(record.raw_text, record, question), timeout=self.timeout
            )
        except TimeoutError:
            logger.warning("RAG answer timed out after %.1fs, using parsed data", self.timeout)
            return None
        except Exception as e:
            logger.warning("RAG answer failed, using parsed data: %s", e)
            return None
        if not isinstance(answer, str) or not answer.strip():
            return None
        return answer
