"""Line-by-line section segmentation.

The segmenter is a small finite-state accumulator: ``SegmenterState``
holds the active section and the lines buffered for it, and ``consume``
is a pure transition returning the blocks closed by the line together
with the next state. ``segment`` folds a whole document through it.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from resume_chat.schemas.parsed_resume import SectionKind
from resume_chat.services.keywords import ENHANCED_PROFILE, ParserProfile

logger = logging.getLogger(__name__)

ALL_CAPS_RE = re.compile(r"^[A-Z\s:]+$")


@dataclass(frozen=True)
class SectionBlock:
    """A closed run of body lines; ``kind`` is None for text before any header."""

    kind: SectionKind | None
    lines: tuple[str, ...]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class SegmenterState:
    current: SectionKind | None = None
    buffer: tuple[str, ...] = ()


@dataclass
class Segmentation:
    blocks: list[SectionBlock] = field(default_factory=list)
    # Lines seen before the first recognised header.
    preamble: list[str] = field(default_factory=list)

    def detected(self) -> set[SectionKind]:
        return {b.kind for b in self.blocks if b.kind is not None}


def _has_header_shape(line: str, profile: ParserProfile) -> bool:
    if len(line) < profile.header_max_length:
        return True
    if ALL_CAPS_RE.match(line):
        return True
    if ":" in line:
        return True
    return len(line) < profile.header_prose_max_length and "," not in line and "." not in line


def is_header_for(line: str, kind: SectionKind, profile: ParserProfile) -> bool:
    lowered = line.lower().strip()
    bare = lowered.rstrip(":").strip()
    phrases = profile.section_keywords.get(kind, ())
    for phrase in phrases:
        if bare == phrase:
            return True
        if lowered.startswith(phrase) and lowered[len(phrase) : len(phrase) + 1] in (":", "-", " "):
            return True
    return profile.matching_phrase(lowered, kind) is not None and _has_header_shape(line, profile)


def classify_header(line: str, profile: ParserProfile = ENHANCED_PROFILE) -> SectionKind | None:
    """Return the section a header line opens, checking kinds in enum order."""
    for kind in SectionKind:
        if is_header_for(line, kind, profile):
            return kind
    return None


def consume(
    state: SegmenterState,
    line: str,
    profile: ParserProfile = ENHANCED_PROFILE,
) -> tuple[list[SectionBlock], SegmenterState]:
    stripped = line.strip()
    if not stripped:
        return [], state

    kind = classify_header(stripped, profile)
    if kind is None:
        return [], SegmenterState(state.current, state.buffer + (stripped,))

    emissions = [SectionBlock(state.current, state.buffer)] if state.buffer else []
    return emissions, SegmenterState(kind, ())


def finish(state: SegmenterState) -> list[SectionBlock]:
    if not state.buffer:
        return []
    return [SectionBlock(state.current, state.buffer)]


def segment(lines: Iterable[str], profile: ParserProfile = ENHANCED_PROFILE) -> Segmentation:
    result = Segmentation()
    state = SegmenterState()
    for line in lines:
        emissions, state = consume(state, line, profile)
        _collect(result, emissions)
    _collect(result, finish(state))
    logger.debug("Detected sections: %s", sorted(result.detected()))
    return result


def _collect(result: Segmentation, blocks: list[SectionBlock]) -> None:
    for block in blocks:
        if block.kind is None:
            result.preamble.extend(block.lines)
        else:
            result.blocks.append(block)
