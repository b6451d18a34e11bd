"""Unit tests for the layout model client."""

import json

import httpx
import pytest

from resume_chat.core.config import Settings
from resume_chat.services.layout_parser import extract_layout_text, flatten_layout_output


@pytest.mark.unit
class TestFlattenLayoutOutput:
    def test_token_objects(self) -> None:
        payload = {"tokens": [{"word": "Jane"}, {"text": "Doe"}, {"label": "Skills"}, {"score": 1}]}
        assert flatten_layout_output(payload) == "Jane Doe Skills"

    def test_text_object(self) -> None:
        assert flatten_layout_output({"text": "  Jane Doe\nSkills  "}) == "Jane Doe\nSkills"

    def test_bare_list(self) -> None:
        assert flatten_layout_output([{"word": "Jane"}, "Doe"]) == "Jane Doe"

    @pytest.mark.parametrize("payload", [None, 3, "text", {"error": "loading"}])
    def test_unknown_shapes_flatten_to_empty(self, payload) -> None:
        assert flatten_layout_output(payload) == ""


@pytest.mark.unit
class TestExtractLayoutText:
    async def test_posts_image_to_model(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"word": "Jane"}, {"word": "Doe"}])

        settings = Settings(
            _env_file=None,
            huggingface_api_key="hf-test",
            huggingface_api_url="https://models.test/",
            layout_model="org/layout",
        )
        text = await extract_layout_text("aW1hZ2U=", settings, transport=httpx.MockTransport(handler))

        assert text == "Jane Doe"
        request = seen[0]
        assert str(request.url) == "https://models.test/org/layout"
        assert request.headers["Authorization"] == "Bearer hf-test"
        assert json.loads(request.content) == {"inputs": "aW1hZ2U="}

    async def test_disabled_without_key(self) -> None:
        settings = Settings(_env_file=None, huggingface_api_key="")
        assert await extract_layout_text("aW1hZ2U=", settings) is None

    async def test_http_error_returns_none(self, caplog: pytest.LogCaptureFixture) -> None:
        settings = Settings(_env_file=None, huggingface_api_key="hf-test")
        transport = httpx.MockTransport(lambda request: httpx.Response(401))
        assert await extract_layout_text("aW1hZ2U=", settings, transport=transport) is None
        assert "Layout model request failed" in caplog.text

    async def test_invalid_url_returns_none(self) -> None:
        settings = Settings(
            _env_file=None,
            huggingface_api_key="hf-test",
            huggingface_api_url="https://models.test/\x00",
        )
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"text": "x"}))
        assert await extract_layout_text("aW1hZ2U=", settings, transport=transport) is None

    async def test_invalid_json_returns_none(self) -> None:
        settings = Settings(_env_file=None, huggingface_api_key="hf-test")
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>"))
        assert await extract_layout_text("aW1hZ2U=", settings, transport=transport) is None

    async def test_empty_output_returns_none(self) -> None:
        settings = Settings(_env_file=None, huggingface_api_key="hf-test")
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"tokens": []}))
        assert await extract_layout_text("aW1hZ2U=", settings, transport=transport) is None
