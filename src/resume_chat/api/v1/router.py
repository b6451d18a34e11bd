from fastapi import APIRouter

from resume_chat.api.v1 import health, parsing, sessions

api_v1_router = APIRouter()
api_v1_router.include_router(health.router)
api_v1_router.include_router(parsing.router)
api_v1_router.include_router(sessions.router)
