"""Keyword vocabularies and parser profiles.

A ``ParserProfile`` bundles the section-header dictionary with the
length tolerances used by header detection, so the plain and enhanced
parsing behaviours share one engine and differ only in configuration.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache

from resume_chat.schemas.parsed_resume import SectionKind

PLAIN_SECTION_KEYWORDS: dict[SectionKind, tuple[str, ...]] = {
    SectionKind.OBJECTIVE: ("objective", "summary", "profile", "about"),
    SectionKind.SKILLS: ("skills", "technical skills", "tech stack", "competencies"),
    SectionKind.EDUCATION: ("education", "academic", "qualification"),
    SectionKind.EXPERIENCE: (
        "experience",
        "work history",
        "employment",
        "professional experience",
    ),
    SectionKind.PROJECTS: ("projects", "personal projects", "portfolio"),
    SectionKind.CERTIFICATIONS: ("certifications", "certificates", "licenses"),
    SectionKind.LANGUAGES: ("languages", "language proficiency"),
}

ENHANCED_SECTION_KEYWORDS: dict[SectionKind, tuple[str, ...]] = {
    SectionKind.OBJECTIVE: (
        "objective",
        "summary",
        "profile",
        "about me",
        "professional summary",
        "career objective",
    ),
    SectionKind.SKILLS: (
        "skills",
        "technical skills",
        "tech stack",
        "core competencies",
        "competencies",
        "expertise",
        "skill set",
    ),
    SectionKind.EDUCATION: ("education", "academic", "qualification", "qualifications"),
    SectionKind.EXPERIENCE: (
        "experience",
        "work history",
        "employment",
        "professional experience",
        "work experience",
        "career history",
    ),
    SectionKind.PROJECTS: ("projects", "personal projects", "portfolio", "key projects"),
    SectionKind.CERTIFICATIONS: (
        "certifications",
        "certificates",
        "certification",
        "licenses",
    ),
    SectionKind.LANGUAGES: ("languages", "language proficiency", "language skills"),
}

# Curated technology vocabulary used to confirm skill tokens and to spot
# technology lines inside project descriptions.
TECH_KEYWORDS: tuple[str, ...] = (
    "python", "java", "javascript", "typescript", "c++", "c#", "golang", "rust",
    "ruby", "php", "swift", "kotlin", "scala", "matlab", "perl",
    "html", "css", "sass", "react", "angular", "vue", "svelte", "next.js",
    "node.js", "express", "django", "flask", "fastapi", "spring", "rails",
    ".net", "sql", "mysql", "postgresql", "sqlite", "mongodb", "redis",
    "elasticsearch", "graphql", "rest api", "aws", "azure", "gcp", "docker",
    "kubernetes", "terraform", "ansible", "jenkins", "git", "linux", "bash",
    "tensorflow", "pytorch", "scikit-learn", "pandas", "numpy", "spark",
    "hadoop", "kafka", "machine learning", "deep learning", "nlp", "ci/cd",
    "agile", "scrum", "figma",
)
TECH_KEYWORD_SET: frozenset[str] = frozenset(TECH_KEYWORDS)

# Narrower list for the whole-document sweep; every entry is specific
# enough to be matched on word boundaries in free prose.
SWEEP_KEYWORDS: tuple[str, ...] = (
    "Python", "Java", "JavaScript", "TypeScript", "C++", "C#", "Ruby", "PHP",
    "Swift", "Kotlin", "React", "Angular", "Vue", "Node.js", "Django", "Flask",
    "FastAPI", "SQL", "MySQL", "PostgreSQL", "MongoDB", "Redis",
    "AWS", "Azure", "GCP", "Docker", "Kubernetes", "Git", "Linux", "HTML",
    "CSS", "TensorFlow", "PyTorch", "Machine Learning",
)

STOP_WORDS: frozenset[str] = frozenset(
    {"and", "or", "the", "with", "using", "experience", "years", "proficient", "skills", "technical"}
)


@lru_cache(maxsize=512)
def phrase_pattern(phrase: str) -> re.Pattern[str]:
    """Case-insensitive pattern matching ``phrase`` as a whole word sequence."""
    return re.compile(rf"(?<![a-z0-9]){re.escape(phrase)}(?![a-z0-9])", re.IGNORECASE)


def is_tech_keyword(token: str) -> bool:
    """True when the token and a known technology contain one another."""
    lowered = token.lower().strip()
    if not lowered:
        return False
    return any(kw in lowered or lowered in kw for kw in TECH_KEYWORDS)


def is_exact_tech_keyword(token: str) -> bool:
    return token.lower().strip() in TECH_KEYWORD_SET


def mentions_tech_keyword(text: str) -> bool:
    return any(phrase_pattern(kw).search(text) for kw in TECH_KEYWORDS if len(kw) > 1)


@dataclass(frozen=True)
class ParserProfile:
    name: str
    section_keywords: Mapping[SectionKind, tuple[str, ...]]
    header_max_length: int = 60
    header_prose_max_length: int = 100
    loose_header_max_length: int = 150
    contact_line_limit: int = 5
    fallback_enabled: bool = True

    def matching_phrase(self, lowered: str, kind: SectionKind) -> str | None:
        """Return the first trigger phrase of ``kind`` found in ``lowered``."""
        for phrase in self.section_keywords.get(kind, ()):
            if phrase_pattern(phrase).search(lowered):
                return phrase
        return None

    def mentions_section(self, lowered: str) -> SectionKind | None:
        for kind in SectionKind:
            if self.matching_phrase(lowered, kind):
                return kind
        return None


PLAIN_PROFILE = ParserProfile(
    name="plain",
    section_keywords=PLAIN_SECTION_KEYWORDS,
    fallback_enabled=False,
)

ENHANCED_PROFILE = ParserProfile(
    name="enhanced",
    section_keywords=ENHANCED_SECTION_KEYWORDS,
)

PROFILES: dict[str, ParserProfile] = {
    PLAIN_PROFILE.name: PLAIN_PROFILE,
    ENHANCED_PROFILE.name: ENHANCED_PROFILE,
}


def get_profile(name: str) -> ParserProfile:
    return PROFILES.get(name, ENHANCED_PROFILE)
