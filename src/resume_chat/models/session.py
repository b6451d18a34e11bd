import uuid
from typing import Any

from sqlalchemy import JSON, ForeignKey, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resume_chat.models.base import Base, CreatedAtMixin, TimestampMixin, UUIDPrimaryKeyMixin

JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class ResumeSession(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "resume_sessions"

    title: Mapped[str] = mapped_column(
        String(300), nullable=False, default="New Resume Analysis", server_default="New Resume Analysis"
    )
    file_name: Mapped[str] = mapped_column(String(500), nullable=False)
    file_type: Mapped[str] = mapped_column(String(20), nullable=False)
    parsed_data: Mapped[dict[str, Any]] = mapped_column(JSONDocument, nullable=False, default=dict)

    messages: Mapped[list["ChatMessage"]] = relationship(
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ChatMessage.created_at",
    )

    def __repr__(self) -> str:
        return f"<ResumeSession {self.title} ({self.file_name})>"


class ChatMessage(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "chat_messages"

    session_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("resume_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(nullable=False)

    session: Mapped["ResumeSession"] = relationship(back_populates="messages")

    def __repr__(self) -> str:
        return f"<ChatMessage {self.role} in {self.session_id}>"
