import logging

import httpx

from resume_chat.core.config import Settings
from resume_chat.schemas.parsed_resume import ParsedResume, SectionKind
from resume_chat.services.contact_extractor import extract_contact
from resume_chat.services.field_extractors import EXTRACTORS
from resume_chat.services.keywords import ENHANCED_PROFILE, ParserProfile
from resume_chat.services.layout_parser import extract_layout_text
from resume_chat.services.normalizer import normalize_parsed
from resume_chat.services.section_segmenter import segment
from resume_chat.services.skill_fallback import run_skill_fallbacks

logger = logging.getLogger(__name__)

# Structured field filled by each section's extractor.
SECTION_FIELDS: dict[SectionKind, str] = {
    SectionKind.SKILLS: "skills",
    SectionKind.EDUCATION: "education",
    SectionKind.EXPERIENCE: "experience",
    SectionKind.PROJECTS: "projects",
    SectionKind.CERTIFICATIONS: "certifications",
    SectionKind.LANGUAGES: "languages",
}


def parse_resume_text(text: str, profile: ParserProfile = ENHANCED_PROFILE) -> ParsedResume:
    """Extract a structured resume from decoded document text.

    Never raises: a document with no recognisable structure yields an
    empty record, possibly with skills recovered by the fallback scan.
    """
    lines = text.splitlines()
    segmentation = segment(lines, profile)

    raw: dict = {field: [] for field in SECTION_FIELDS.values()}
    raw_sections: dict[SectionKind, str] = {}
    objective: list[str] = []

    for block in segmentation.blocks:
        # Raw text is recorded before structured extraction runs.
        previous = raw_sections.get(block.kind)
        raw_sections[block.kind] = f"{previous}\n{block.text}" if previous else block.text

        extracted = EXTRACTORS[block.kind](list(block.lines))
        if block.kind is SectionKind.OBJECTIVE:
            objective.append(extracted)
        else:
            raw[SECTION_FIELDS[block.kind]].extend(extracted)

    if SectionKind.SKILLS in raw_sections:
        raw["skills"] = list(dict.fromkeys(raw["skills"]))

    if profile.fallback_enabled and not raw["skills"] and not raw_sections.get(SectionKind.SKILLS):
        recovered = run_skill_fallbacks(lines, profile)
        if recovered is not None:
            raw["skills"] = recovered.skills
            raw_sections[SectionKind.SKILLS] = recovered.raw_text

    raw["objective_or_summary"] = "\n".join(objective) if objective else None
    raw["contact"] = extract_contact(lines, profile)
    raw["raw_sections"] = raw_sections
    return normalize_parsed(raw)


async def parse_document(
    text: str,
    settings: Settings,
    profile: ParserProfile = ENHANCED_PROFILE,
    image_data: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ParsedResume:
    """Parse an uploaded document, preferring layout-model text when available.

    The returned record always carries the original decoded text as
    ``raw_text``.
    """
    source = text
    if image_data:
        layout_text = await extract_layout_text(image_data, settings, transport=transport)
        if layout_text:
            logger.info("Parsing layout-model text (%d chars)", len(layout_text))
            source = layout_text
    return parse_resume_text(source, profile).with_raw_text(text)
