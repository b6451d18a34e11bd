import uuid
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resume_chat.models.session import ChatMessage, ResumeSession
from resume_chat.schemas.parsed_resume import ParsedResume
from resume_chat.schemas.session import MessageRole
from resume_chat.services.text_extraction import sanitize_text

WELCOME_MESSAGE = (
    "Hello! I've analyzed the resume for {name}. I can answer questions about "
    "their skills, experience, education, projects, and more. What would you like to know?"
)


def session_title(parsed: ParsedResume, file_name: str) -> str:
    if parsed.contact.name:
        return f"{parsed.contact.name}'s Resume"
    return Path(file_name).stem or file_name


async def create_session(
    db: AsyncSession,
    parsed: ParsedResume,
    file_name: str,
    title: str | None = None,
) -> ResumeSession:
    session = ResumeSession(
        title=sanitize_text(title or session_title(parsed, file_name))[:300],
        file_name=file_name,
        file_type=Path(file_name).suffix.lstrip(".").lower() or "txt",
        parsed_data=parsed.to_json_dict(),
    )
    db.add(session)
    await db.flush()
    await db.refresh(session)

    name = parsed.contact.name or "this candidate"
    await add_message(db, session.id, MessageRole.ASSISTANT, WELCOME_MESSAGE.format(name=name))
    return session


async def get_session(db: AsyncSession, session_id: uuid.UUID) -> ResumeSession | None:
    result = await db.execute(select(ResumeSession).where(ResumeSession.id == session_id))
    return result.scalar_one_or_none()


async def list_sessions(db: AsyncSession) -> list[ResumeSession]:
    result = await db.execute(select(ResumeSession).order_by(ResumeSession.created_at.desc()))
    return list(result.scalars().all())


async def rename_session(db: AsyncSession, session: ResumeSession, title: str) -> ResumeSession:
    session.title = sanitize_text(title)
    await db.flush()
    await db.refresh(session)
    return session


async def delete_session(db: AsyncSession, session: ResumeSession) -> None:
    await db.delete(session)
    await db.flush()


async def add_message(
    db: AsyncSession,
    session_id: uuid.UUID,
    role: MessageRole,
    content: str,
) -> ChatMessage:
    message = ChatMessage(session_id=session_id, role=role.value, content=sanitize_text(content))
    db.add(message)
    await db.flush()
    await db.refresh(message)
    return message


async def list_messages(db: AsyncSession, session_id: uuid.UUID) -> list[ChatMessage]:
    result = await db.execute(
        select(ChatMessage)
        .where(ChatMessage.session_id == session_id)
        .order_by(ChatMessage.created_at)
    )
    return list(result.scalars().all())
