"""Recovery strategies for documents whose skills section went undetected.

Strategies are tried in order and the first one that produces skills
wins. Each one sees the whole original document, including lines the
segmenter discarded.
"""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from resume_chat.schemas.parsed_resume import SectionKind
from resume_chat.services.field_extractors import extract_skills
from resume_chat.services.keywords import (
    SWEEP_KEYWORDS,
    ParserProfile,
    is_exact_tech_keyword,
    phrase_pattern,
)

logger = logging.getLogger(__name__)

# "+" and "#" are not word characters, so these need explicit boundaries.
SPECIAL_SWEEP_PATTERNS: dict[str, re.Pattern[str]] = {
    "C++": re.compile(r"(?<![A-Za-z0-9+])C\+\+(?![A-Za-z0-9+])", re.IGNORECASE),
    "C#": re.compile(r"(?<![A-Za-z0-9#])C#(?![A-Za-z0-9#])", re.IGNORECASE),
}


@dataclass(frozen=True)
class SkillFallbackResult:
    skills: list[str]
    raw_text: str
    strategy: str


class SkillFallbackStrategy(Protocol):
    name: str

    def attempt(self, lines: list[str], profile: ParserProfile) -> SkillFallbackResult | None: ...


def _mentions_other_section(lowered: str, profile: ParserProfile) -> bool:
    return any(
        profile.matching_phrase(lowered, kind)
        for kind in SectionKind
        if kind is not SectionKind.SKILLS
    )


class LooseHeaderStrategy:
    """Find any short line mentioning skills and collect the lines after it.

    A candidate block is accepted only when at least one of its tokens is
    a known technology; prose that happens to mention skills is passed on
    to the next strategy.
    """

    name = "loose_header"

    def attempt(self, lines: list[str], profile: ParserProfile) -> SkillFallbackResult | None:
        for index, line in enumerate(lines):
            stripped = line.strip()
            if not stripped or len(stripped) >= profile.loose_header_max_length:
                continue
            if profile.matching_phrase(stripped.lower(), SectionKind.SKILLS) is None:
                continue
            collected = self._collect(lines[index + 1 :], profile)
            skills = extract_skills(collected)
            if any(is_exact_tech_keyword(skill) for skill in skills):
                return SkillFallbackResult(skills, "\n".join(collected), self.name)
        return None

    @staticmethod
    def _collect(lines: list[str], profile: ParserProfile) -> list[str]:
        collected: list[str] = []
        blank_run = 0
        for line in lines:
            stripped = line.strip()
            if not stripped:
                blank_run += 1
                if blank_run >= 2:
                    break
                continue
            blank_run = 0
            if _mentions_other_section(stripped.lower(), profile):
                break
            collected.append(stripped)
        return collected


class KeywordSweepStrategy:
    """Scan the full text for known technologies on word boundaries."""

    name = "keyword_sweep"

    def __init__(self, keywords: tuple[str, ...] = SWEEP_KEYWORDS) -> None:
        self.keywords = keywords

    def attempt(self, lines: list[str], profile: ParserProfile) -> SkillFallbackResult | None:
        text = "\n".join(lines)
        found: list[str] = []
        for keyword in self.keywords:
            pattern = SPECIAL_SWEEP_PATTERNS.get(keyword) or phrase_pattern(keyword)
            match = pattern.search(text)
            if match and match.group(0) not in found:
                found.append(match.group(0))
        if not found:
            return None
        return SkillFallbackResult(found, ", ".join(found), self.name)


DEFAULT_STRATEGIES: tuple[SkillFallbackStrategy, ...] = (
    LooseHeaderStrategy(),
    KeywordSweepStrategy(),
)


def run_skill_fallbacks(
    lines: list[str],
    profile: ParserProfile,
    strategies: tuple[SkillFallbackStrategy, ...] = DEFAULT_STRATEGIES,
) -> SkillFallbackResult | None:
    for strategy in strategies:
        result = strategy.attempt(lines, profile)
        if result is not None:
            logger.debug("Skills recovered by %s fallback: %d found", result.strategy, len(result.skills))
            return result
    return None
