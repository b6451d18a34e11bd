from fastapi import APIRouter, Depends

from resume_chat.api.deps import get_parser_profile, get_responder
from resume_chat.core.config import Settings, get_settings
from resume_chat.schemas.parsed_resume import ParsedResume
from resume_chat.schemas.session import AnswerResponse, AskRequest, ParseRequest
from resume_chat.services.keywords import ParserProfile
from resume_chat.services.normalizer import normalize_parsed
from resume_chat.services.responder import RetrievalResponder
from resume_chat.services.resume_parser import parse_document
from resume_chat.services.text_extraction import sanitize_text

router = APIRouter(tags=["parsing"])


@router.post("/parse", response_model=ParsedResume)
async def parse_text(
    data: ParseRequest,
    settings: Settings = Depends(get_settings),
    profile: ParserProfile = Depends(get_parser_profile),
) -> ParsedResume:
    """Parse already-decoded resume text without storing it."""
    return await parse_document(
        sanitize_text(data.text), settings, profile, image_data=data.image_data
    )


@router.post("/ask", response_model=AnswerResponse)
async def ask(
    data: AskRequest,
    responder: RetrievalResponder = Depends(get_responder),
) -> AnswerResponse:
    """Answer a question about a client-held parsed record."""
    record = normalize_parsed(data.record)
    answer = await responder.answer(record, sanitize_text(data.question))
    return AnswerResponse(answer=answer)
