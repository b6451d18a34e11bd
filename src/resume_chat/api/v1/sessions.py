import logging
import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from resume_chat.api.deps import get_db, get_parser_profile, get_responder
from resume_chat.core.config import Settings, get_settings
from resume_chat.core.exceptions import (
    ExtractionError,
    FileValidationError,
    NotFoundError,
    PreconditionError,
)
from resume_chat.models.session import ResumeSession
from resume_chat.schemas.session import (
    ChatMessageRead,
    MessageCreate,
    MessageRole,
    SessionRead,
    SessionUpdate,
)
from resume_chat.services import session_service
from resume_chat.services.keywords import ParserProfile
from resume_chat.services.normalizer import normalize_parsed
from resume_chat.services.responder import RetrievalResponder
from resume_chat.services.resume_parser import parse_document
from resume_chat.services.text_extraction import extract_text_async

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _validate_upload(file: UploadFile, settings: Settings) -> str:
    if not file.filename:
        raise FileValidationError("Filename is required")

    ext = Path(file.filename).suffix.lower()
    if ext not in settings.allowed_extensions:
        raise FileValidationError(
            f"File type '{ext}' not allowed. Allowed: {', '.join(sorted(settings.allowed_extensions))}"
        )
    return ext


async def _get_session_or_404(db: AsyncSession, session_id: uuid.UUID) -> ResumeSession:
    session = await session_service.get_session(db, session_id)
    if not session:
        raise NotFoundError("Session", str(session_id))
    return session


@router.post("/", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
async def upload_resume(
    file: UploadFile,
    title: str | None = Form(None),
    image_data: str | None = Form(None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    profile: ParserProfile = Depends(get_parser_profile),
) -> SessionRead:
    # 1. Validate file
    ext = _validate_upload(file, settings)

    # 2. Read content and check size
    content = await file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise FileValidationError(f"File size exceeds maximum of {settings.max_upload_size_mb}MB")

    # 3. Extract text
    try:
        text = await extract_text_async(content, ext)
    except ExtractionError as e:
        logger.warning("Text extraction failed for %s: %s", file.filename, e)
        raise FileValidationError(str(e)) from e
    if not text.strip():
        raise PreconditionError("The uploaded file contains no extractable text")

    # 4. Parse and store
    parsed = await parse_document(text, settings, profile, image_data=image_data)
    session = await session_service.create_session(db, parsed, file.filename or "resume", title)
    logger.info("Created session %s for %s", session.id, session.file_name)
    return SessionRead.model_validate(session)


@router.get("/", response_model=list[SessionRead])
async def list_sessions(
    db: AsyncSession = Depends(get_db),
) -> list[SessionRead]:
    sessions = await session_service.list_sessions(db)
    return [SessionRead.model_validate(s) for s in sessions]


@router.get("/{session_id}", response_model=SessionRead)
async def get_session(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> SessionRead:
    session = await _get_session_or_404(db, session_id)
    return SessionRead.model_validate(session)


@router.patch("/{session_id}", response_model=SessionRead)
async def rename_session(
    session_id: uuid.UUID,
    data: SessionUpdate,
    db: AsyncSession = Depends(get_db),
) -> SessionRead:
    session = await _get_session_or_404(db, session_id)
    session = await session_service.rename_session(db, session, data.title)
    return SessionRead.model_validate(session)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    session = await _get_session_or_404(db, session_id)
    await session_service.delete_session(db, session)


@router.get("/{session_id}/messages", response_model=list[ChatMessageRead])
async def list_messages(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> list[ChatMessageRead]:
    await _get_session_or_404(db, session_id)
    messages = await session_service.list_messages(db, session_id)
    return [ChatMessageRead.model_validate(m) for m in messages]


@router.post(
    "/{session_id}/messages",
    response_model=ChatMessageRead,
    status_code=status.HTTP_201_CREATED,
)
async def ask_question(
    session_id: uuid.UUID,
    data: MessageCreate,
    db: AsyncSession = Depends(get_db),
    responder: RetrievalResponder = Depends(get_responder),
) -> ChatMessageRead:
    """Store the user's question and the assistant's answer to it."""
    session = await _get_session_or_404(db, session_id)
    await session_service.add_message(db, session.id, MessageRole.USER, data.content)

    record = normalize_parsed(session.parsed_data)
    answer = await responder.answer(record, data.content)
    reply = await session_service.add_message(db, session.id, MessageRole.ASSISTANT, answer)
    return ChatMessageRead.model_validate(reply)
