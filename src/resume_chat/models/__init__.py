from resume_chat.models.base import Base
from resume_chat.models.session import ChatMessage, ResumeSession

__all__ = ["Base", "ChatMessage", "ResumeSession"]
