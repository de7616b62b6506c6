"""Vendor client behaviour with requests patched out."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from myarc.core.ai.gemini_client import GeminiClient
from myarc.core.ai.memory_client import MemoryClient
from myarc.core.ai.result import STATUS_ERROR, STATUS_UNAVAILABLE

pytestmark = pytest.mark.unit


def _gemini(api_key="test-key", dims=3):
    return GeminiClient(
        api_key,
        base_url="https://gemini.invalid/v1beta",
        model="gen-model",
        prompt_model="prompt-model",
        embedding_model="embed-model",
        embedding_dimensions=dims,
        embedding_max_chars=20,
        timeout=5,
    )


def _response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


def test_unconfigured_gemini_makes_no_calls():
    client = _gemini(api_key="")
    with patch("myarc.core.ai.gemini_client.requests.post") as post:
        assert client.embed("hello").status == STATUS_UNAVAILABLE
        assert client.generate("hello").status == STATUS_UNAVAILABLE
    post.assert_not_called()
    assert client.configured is False


def test_embed_sanitizes_and_clips_text():
    client = _gemini()
    with patch(
        "myarc.core.ai.gemini_client.requests.post",
        return_value=_response({"embedding": {"values": [0.1, 0.2, 0.3]}}),
    ) as post:
        result = client.embed("write to bob@example.com about the trip")
    assert result.is_ok
    assert result.value == [0.1, 0.2, 0.3]
    sent = post.call_args.kwargs["json"]["content"]["parts"][0]["text"]
    assert "bob@example.com" not in sent
    assert sent.startswith("write to [EMAIL]")
    assert len(sent) <= 20
    assert post.call_args.kwargs["json"]["outputDimensionality"] == 3
    assert post.call_args.kwargs["headers"]["x-goog-api-key"] == "test-key"


def test_embed_dimension_mismatch_is_error():
    client = _gemini(dims=4)
    with patch(
        "myarc.core.ai.gemini_client.requests.post",
        return_value=_response({"embedding": {"values": [0.1, 0.2]}}),
    ):
        result = client.embed("hello")
    assert result.status == STATUS_ERROR


def test_transport_failure_is_returned_not_raised():
    client = _gemini()
    with patch(
        "myarc.core.ai.gemini_client.requests.post",
        side_effect=requests.ConnectionError("boom"),
    ):
        assert client.embed("hello").status == STATUS_ERROR
        assert client.generate("hello").status == STATUS_ERROR


def test_generate_json_strips_code_fences():
    client = _gemini()
    body = {"candidates": [{"content": {"parts": [{"text": '```json\n{"sentiment": "positive"}\n```'}]}}]}
    with patch("myarc.core.ai.gemini_client.requests.post", return_value=_response(body)) as post:
        result = client.generate_json("analyze 555-123-4567", response_schema={"type": "object"})
    assert result.value == {"sentiment": "positive"}
    payload = post.call_args.kwargs["json"]
    assert payload["generationConfig"]["responseMimeType"] == "application/json"
    assert "555-123-4567" not in payload["contents"][0]["parts"][0]["text"]


def test_generate_json_malformed_output():
    client = _gemini()
    body = {"candidates": [{"content": {"parts": [{"text": "not json at all"}]}}]}
    with patch("myarc.core.ai.gemini_client.requests.post", return_value=_response(body)):
        result = client.generate_json("x", response_schema={"type": "object"})
    assert result.status == STATUS_ERROR
    assert result.detail == "gemini_malformed_json"


def test_memory_search_reads_results_and_sanitizes_query():
    client = MemoryClient("m0-key", base_url="https://mem0.invalid/", timeout=5)
    body = {"results": [{"memory": "Training for a marathon"}, {"id": "x"}, {"memory": "Likes tea"}]}
    with patch("myarc.core.ai.memory_client.requests.post", return_value=_response(body)) as post:
        result = client.search("7", "call me at 555-123-4567")
    assert result.value == ["Training for a marathon", "Likes tea"]
    assert post.call_args.args[0] == "https://mem0.invalid/v1/memories/search/"
    assert post.call_args.kwargs["headers"]["Authorization"] == "Token m0-key"
    assert "555-123-4567" not in post.call_args.kwargs["json"]["query"]


def test_memory_unconfigured_returns_empty():
    client = MemoryClient(None, base_url="https://mem0.invalid")
    assert client.search("1", "q").value_or([]) == []
    assert client.add("1", "text").status == STATUS_UNAVAILABLE


def test_memory_transport_failure_logs_path_only(caplog):
    client = MemoryClient("m0-key", base_url="https://mem0.invalid", timeout=5)
    with patch(
        "myarc.core.ai.memory_client.requests.post",
        side_effect=requests.Timeout("slow"),
    ), caplog.at_level("WARNING", logger="myarc.core.ai.memory_client"):
        result = client.add("3", "private thoughts")
    assert result.status == STATUS_ERROR
    record = caplog.records[-1]
    assert record.args == ("/v1/memories/", "Timeout")
    assert "private thoughts" not in caplog.text
