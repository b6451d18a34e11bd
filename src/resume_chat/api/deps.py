from fastapi import Depends
from google import genai

from resume_chat.core.config import Settings, get_settings
from resume_chat.core.database import get_db
from resume_chat.core.llm import get_gemini_client
from resume_chat.services.keywords import ParserProfile, get_profile
from resume_chat.services.rag import GeminiRagGenerator
from resume_chat.services.responder import NOT_FOUND, RetrievalResponder

__all__ = ["get_db", "get_llm_client", "get_parser_profile", "get_responder"]


def get_llm_client() -> genai.Client | None:
    return get_gemini_client()


def get_parser_profile(settings: Settings = Depends(get_settings)) -> ParserProfile:
    return get_profile(settings.parser_profile)


def get_responder(
    llm_client: genai.Client | None = Depends(get_llm_client),
    settings: Settings = Depends(get_settings),
) -> RetrievalResponder:
    rag = None
    if llm_client is not None:
        rag = GeminiRagGenerator(llm_client, settings.gemini_model, NOT_FOUND)
    return RetrievalResponder(rag=rag, timeout=settings.rag_timeout_seconds)
