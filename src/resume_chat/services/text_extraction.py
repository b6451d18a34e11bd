import asyncio
import io
import re
from collections.abc import Callable

import pdfplumber
from docx import Document

from resume_chat.core.exceptions import ExtractionError

# Null bytes and C0/C1 control characters except tab, newline and carriage return.
CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def sanitize_text(text: str) -> str:
    """Strip control characters and normalise line endings."""
    text = CONTROL_CHARS_RE.sub("", text)
    return text.replace("\r\n", "\n").replace("\r", "\n")


def extract_text_from_pdf(content: bytes) -> str:
    try:
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
            return "\n\n".join(pages).strip()
    except Exception as e:
        raise ExtractionError(f"PDF extraction failed: {e}") from e


def extract_text_from_docx(content: bytes) -> str:
    try:
        doc = Document(io.BytesIO(content))
        return "\n".join(para.text for para in doc.paragraphs if para.text.strip())
    except Exception as e:
        raise ExtractionError(f"DOCX extraction failed: {e}") from e


def extract_text_from_txt(content: bytes) -> str:
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        return content.decode("latin-1")


EXTRACTORS: dict[str, Callable[[bytes], str]] = {
    ".pdf": extract_text_from_pdf,
    ".docx": extract_text_from_docx,
    ".txt": extract_text_from_txt,
}


def extract_text(content: bytes, suffix: str) -> str:
    """Decode an uploaded file into sanitised plain text."""
    extractor = EXTRACTORS.get(suffix.lower())
    if not extractor:
        raise ExtractionError(f"Unsupported file type: {suffix}")
    return sanitize_text(extractor(content))


async def extract_text_async(content: bytes, suffix: str) -> str:
    return await asyncio.to_thread(extract_text, content, suffix)
