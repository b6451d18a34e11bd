import logging

from google import genai
from google.genai import types

from resume_chat.schemas.parsed_resume import ParsedResume

logger = logging.getLogger(__name__)

RAG_PROMPT = (
    "You are an assistant answering questions about a single resume. "
    "Below is the text extracted from the resume document.\n\n"
    "RESUME CONTENT:\n{text}\n\n"
    "DETECTED SECTIONS: {sections}\n\n"
    "QUESTION: {question}\n\n"
    "Instructions:\n"
    "- Answer only from the resume content above and be specific.\n"
    '- If the information is not in the resume, reply exactly "{not_found}"\n'
    "- For skills questions, list every skill the resume mentions.\n"
    "- For experience questions, give the details from the work experience section.\n"
    "- Use bullet points or short structured text.\n"
    "- Never invent or infer facts that the resume does not state."
)


class GeminiRagGenerator:
    """Answers resume questions with Gemini, using the full text as context."""

    def __init__(self, client: genai.Client, model: str, not_found: str) -> None:
        self.client = client
        self.model = model
        self.not_found = not_found

    def build_prompt(self, full_text: str, record: ParsedResume, question: str) -> str:
        sections = ", ".join(kind.value for kind in record.raw_sections) or "none"
        return RAG_PROMPT.format(
            text=full_text,
            sections=sections,
            question=question,
            not_found=self.not_found,
        )

    async def generate(self, full_text: str, record: ParsedResume, question: str) -> str | None:
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=self.build_prompt(full_text, record, question),
            config=types.GenerateContentConfig(temperature=0.2),
        )
        text = response.text
        if not text:
            return None
        return text.strip() or None
