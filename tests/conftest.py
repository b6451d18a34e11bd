import os
from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from resume_chat.api.deps import get_db, get_llm_client
from resume_chat.main import create_app
from resume_chat.models import Base

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL")

SAMPLE_DATA_DIR = Path(__file__).parent.parent / "sample_data" / "resumes"

SAMPLE_RESUME_TEXT = """Jane Doe
jane@x.com, (555) 123-4567

Skills
Python, Go, SQL

Experience
Acme Co
Engineer
2019 - Present
- Built X
- Shipped Y
"""


def make_gemini_response(text: str | None) -> MagicMock:
    """Create a mock Gemini generate_content response."""
    response = MagicMock()
    response.text = text
    return response


def make_gemini_client(text: str | None = "Gemini says hello") -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=make_gemini_response(text))
    return client


@pytest.fixture
def mock_gemini_client() -> MagicMock:
    """Return a mocked google.genai.Client."""
    return make_gemini_client()


@pytest_asyncio.fixture
async def test_engine(tmp_path):
    url = TEST_DATABASE_URL or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    engine = create_async_engine(url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession]:
    """Provide a session that rolls back after each test."""
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session
        await session.rollback()


def _build_client(db_session: AsyncSession, llm_client) -> AsyncClient:
    app = create_app()

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_llm_client] = lambda: llm_client

    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test", follow_redirects=True)


@pytest_asyncio.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient]:
    """API client with no Gemini key configured (deterministic answers only)."""
    async with _build_client(db_session, None) as ac:
        yield ac


@pytest_asyncio.fixture
async def rag_client(db_session, mock_gemini_client) -> AsyncGenerator[AsyncClient]:
    """API client whose answers come from a mocked Gemini client."""
    async with _build_client(db_session, mock_gemini_client) as ac:
        yield ac


@pytest.fixture(scope="session")
def sample_txt() -> Path:
    return SAMPLE_DATA_DIR / "sample_resume.txt"


@pytest.fixture
def sample_docx_bytes(tmp_path: Path) -> bytes:
    """Build a small DOCX resume on the fly."""
    from docx import Document

    doc = Document()
    for line in SAMPLE_RESUME_TEXT.splitlines():
        if line.strip():
            doc.add_paragraph(line)
    path = tmp_path / "resume.docx"
    doc.save(str(path))
    return path.read_bytes()
