"""Unit tests for Settings configuration."""

import pytest

from resume_chat.core.config import Settings


@pytest.mark.unit
class TestSettings:
    def test_default_settings(self) -> None:
        """Check that default values are correct."""
        settings = Settings(
            _env_file=None,  # Prevent reading .env file during tests
        )
        assert settings.app_name == "Resume Chat Assistant"
        assert settings.app_version == "0.1.0"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.max_upload_size_mb == 10
        assert settings.parser_profile == "enhanced"
        assert settings.rag_timeout_seconds == 20.0

    def test_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Override env vars and verify settings pick them up."""
        monkeypatch.setenv("APP_NAME", "Test App")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("PARSER_PROFILE", "plain")
        monkeypatch.setenv("RAG_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("GEMINI_MODEL", "gemini-test")

        settings = Settings(
            _env_file=None,  # Prevent reading .env file during tests
        )
        assert settings.app_name == "Test App"
        assert settings.debug is True
        assert settings.port == 9000
        assert settings.parser_profile == "plain"
        assert settings.rag_timeout_seconds == 2.5
        assert settings.gemini_model == "gemini-test"

    def test_collaborators_disabled_without_keys(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GOOGLE_AI_API_KEY", raising=False)
        monkeypatch.delenv("HUGGINGFACE_API_KEY", raising=False)
        settings = Settings(_env_file=None)
        assert settings.rag_enabled is False
        assert settings.layout_enabled is False

    def test_collaborators_enabled_with_keys(self) -> None:
        settings = Settings(_env_file=None, google_ai_api_key="g", huggingface_api_key="h")
        assert settings.rag_enabled is True
        assert settings.layout_enabled is True

    def test_allowed_extensions_set(self) -> None:
        """The allowed_extensions default should include .pdf, .docx, .txt."""
        settings = Settings(
            _env_file=None,  # Prevent reading .env file during tests
        )
        assert ".pdf" in settings.allowed_extensions
        assert ".docx" in settings.allowed_extensions
        assert ".txt" in settings.allowed_extensions
        assert isinstance(settings.allowed_extensions, set)
