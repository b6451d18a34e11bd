import re

from resume_chat.schemas.parsed_resume import ContactInfo
from resume_chat.services.keywords import ENHANCED_PROFILE, ParserProfile

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
LINKEDIN_RE = re.compile(r"(?:https?://)?(?:www\.)?linkedin\.com/in/[\w-]+", re.IGNORECASE)


def extract_contact(lines: list[str], profile: ParserProfile = ENHANCED_PROFILE) -> ContactInfo:
    """Scan the top of the document for name, email, phone and profile link.

    Only the first ``profile.contact_line_limit`` non-blank lines are
    inspected, and the first match of each kind wins. The name is the
    first line unless that line reads like a section header.
    """
    head = [line.strip() for line in lines if line.strip()][: profile.contact_line_limit]
    contact = ContactInfo()
    if not head:
        return contact

    if profile.mentions_section(head[0].lower()) is None:
        contact.name = head[0]

    for line in head:
        if not contact.email and (match := EMAIL_RE.search(line)):
            contact.email = match.group(0)
        if not contact.phone and (match := PHONE_RE.search(line)):
            contact.phone = match.group(0)
        if not contact.location and (match := LINKEDIN_RE.search(line)):
            contact.location = match.group(0)

    return contact
