"""
End-to-end HTTP tests through FastAPI's TestClient: model listing, chat
replies, tool routing, SSE streaming, embeddings and service endpoints.
"""

import json

import pytest
from fastapi.testclient import TestClient

from app.config.settings import Settings, get_settings
from app.main import create_app

PREFIX = "/mock/v1"


def _chat(client, text: str, **body):
    payload = {"model": "x", "messages": [{"role": "user", "content": text}], **body}
    return client.post(f"{PREFIX}/chat/completions", json=payload)


def _sse_payloads(text: str) -> list[str]:
    return [line[len("data: ") :] for line in text.split("\n\n") if line.startswith("data: ")]


class TestModels:
    def test_list_models(self, client):
        resp = client.get(f"{PREFIX}/models")
        assert resp.status_code == 200
        body = resp.json()
        assert body["object"] == "list"
        assert len(body["data"]) == 1
        model = body["data"][0]
        assert model["id"] == "mock-gpt-4"
        assert model["object"] == "model"
        assert model["owned_by"] == "tanzu-workshop"
        assert isinstance(model["created"], int)


class TestChatCompletions:
    def test_plain_reply(self, client):
        resp = _chat(client, "What is Tanzu Spring Runtime?")
        assert resp.status_code == 200
        body = resp.json()
        assert body["object"] == "chat.completion"
        assert body["id"].startswith("chatcmpl-mock-")
        assert body["model"] == "mock-gpt-4"
        message = body["choices"][0]["message"]
        assert message["role"] == "assistant"
        assert message["content"].startswith("Tanzu Spring is Broadcom's")
        assert "tool_calls" not in message
        assert body["choices"][0]["finish_reason"] == "stop"
        assert body["usage"]["prompt_tokens"] == 50
        assert body["usage"]["total_tokens"] == 50 + body["usage"]["completion_tokens"]

    def test_tool_call(self, client):
        resp = _chat(client, "what's the weather", tools=[{"type": "function", "function": {"name": "get_weather"}}])
        body = resp.json()
        choice = body["choices"][0]
        assert choice["finish_reason"] == "tool_calls"
        assert choice["message"]["content"] is None
        call = choice["message"]["tool_calls"][0]
        assert call["id"].startswith("call_mock_")
        assert call["type"] == "function"
        assert call["function"] == {"name": "get_weather", "arguments": "{}"}

    def test_tool_prompt_without_tools_returns_fallback(self, client, default_text):
        body = _chat(client, "what's the weather", tools=[]).json()
        content = body["choices"][0]["message"]["content"]
        assert content == default_text
        assert "TOOL_CALL:" not in content

    def test_undeclared_tool_returns_fallback(self, client, default_text):
        tools = [{"type": "function", "function": {"name": "create_ticket"}}]
        body = _chat(client, "what's the weather", tools=tools).json()
        assert body["choices"][0]["message"]["content"] == default_text
        assert body["choices"][0]["finish_reason"] == "stop"

    def test_tool_result_conversation_still_resolves_last_user_message(self, client):
        body = client.post(
            f"{PREFIX}/chat/completions",
            json={
                "messages": [
                    {"role": "user", "content": "tell me about billing"},
                    {"role": "assistant", "content": None, "tool_calls": [{"id": "call_1"}]},
                    {"role": "tool", "content": "{}", "tool_call_id": "call_1"},
                ]
            },
        ).json()
        assert body["choices"][0]["message"]["content"].startswith("I understand you have a billing")

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"messages": None},
            {"messages": [], "stream": None},
            {"messages": [{"role": "user"}], "extra": 1},
            {"messages": [{"role": "user", "content": 123}]},
            {"messages": [{"role": "user", "content": "zzz"}], "stream": "maybe"},
            {"messages": [{"role": "user", "content": "what's the weather"}], "tools": {"function": {"name": "x"}}},
            {"messages": [{"role": "user", "content": "what's the weather"}], "tools": ["junk", {"function": "x"}]},
            {"messages": "hello", "model": 5},
            {"messages": [42, {"role": 7, "content": False, "tool_calls": "none", "tool_call_id": 3}]},
        ],
    )
    def test_permissive_bodies(self, client, default_text, body):
        resp = client.post(f"{PREFIX}/chat/completions", json=body)
        assert resp.status_code == 200
        assert resp.json()["choices"][0]["message"]["content"] == default_text

    def test_string_content_parts_are_text(self, client):
        body = client.post(
            f"{PREFIX}/chat/completions", json={"messages": [{"role": "user", "content": ["hello", 7]}]}
        ).json()
        assert body["choices"][0]["message"]["content"].startswith("Hello! I'm the Support Assistant")

    @pytest.mark.parametrize("flag", ["true", "1", 1])
    def test_lenient_stream_flag(self, client, flag):
        resp = _chat(client, "hello", stream=flag)
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/event-stream")

    def test_streaming(self, client):
        with client.stream(
            "POST",
            f"{PREFIX}/chat/completions",
            json={"messages": [{"role": "user", "content": "hello"}], "stream": True},
        ) as resp:
            assert resp.status_code == 200
            assert resp.headers["content-type"].startswith("text/event-stream")
            text = resp.read().decode("utf-8")

        payloads = _sse_payloads(text)
        assert payloads[-1] == "[DONE]"
        assert payloads.count("[DONE]") == 1
        chunks = [json.loads(p) for p in payloads[:-1]]
        assert all(c["object"] == "chat.completion.chunk" for c in chunks)
        assert chunks[0]["choices"][0]["delta"]["content"] == "Hello! "
        streamed = "".join(c["choices"][0]["delta"]["content"] for c in chunks)
        assert streamed.startswith("Hello! I'm the Support Assistant")
        assert streamed.endswith("How can I assist you today?")

    def test_streaming_tool_call_is_not_streamed(self, client):
        resp = _chat(client, "what time is it", stream=True, tools=[{"function": {"name": "get_current_time"}}])
        assert resp.headers["content-type"].startswith("application/json")
        assert resp.json()["choices"][0]["message"]["tool_calls"][0]["function"]["name"] == "get_current_time"


class TestEmbeddings:
    def test_two_inputs(self, client, registry):
        resp = client.post(f"{PREFIX}/embeddings", json={"model": "x", "input": ["a", "b"]})
        assert resp.status_code == 200
        body = resp.json()
        assert body["object"] == "list"
        assert body["model"] == "mock-text-embedding-ada-002"
        assert [d["index"] for d in body["data"]] == [0, 1]
        assert all(d["object"] == "embedding" for d in body["data"])
        assert all(len(d["embedding"]) == 1536 for d in body["data"])
        assert body["data"][0]["embedding"] == pytest.approx(registry.embedding_of("a"))
        assert body["usage"] == {"prompt_tokens": 0, "total_tokens": 0}

    def test_single_string_input(self, client):
        body = client.post(f"{PREFIX}/embeddings", json={"input": "twelve chars"}).json()
        assert len(body["data"]) == 1
        assert body["usage"]["total_tokens"] == 3

    def test_deterministic_across_requests(self, client):
        first = client.post(f"{PREFIX}/embeddings", json={"input": ["same"]}).json()
        second = client.post(f"{PREFIX}/embeddings", json={"input": ["same"]}).json()
        assert first["data"][0]["embedding"] == second["data"][0]["embedding"]

    @pytest.mark.parametrize(
        "body, expected",
        [
            ({"input": [1, 2]}, ["1", "2"]),
            ({"input": ["a", None]}, ["a", ""]),
            ({"input": 42, "model": 3}, ["42"]),
            ({"input": None}, []),
            ({}, []),
        ],
    )
    def test_permissive_inputs(self, client, registry, body, expected):
        resp = client.post(f"{PREFIX}/embeddings", json=body)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert [d["index"] for d in data] == list(range(len(expected)))
        for d, text in zip(data, expected):
            assert d["embedding"] == pytest.approx(registry.embedding_of(text))


class TestServiceEndpoints:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_ready(self, client):
        resp = client.get("/ready")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "rules": 11}


class TestWithoutLifespan:
    """App served without running its lifespan still honours settings."""

    def test_registry_uses_configured_dimension(self):
        app = create_app()
        app.dependency_overrides[get_settings] = lambda: Settings(embedding_dimension=8)
        client = TestClient(app)

        body = client.post(f"{PREFIX}/embeddings", json={"input": ["a"]}).json()
        assert len(body["data"][0]["embedding"]) == 8
        assert getattr(app.state, "registry", None) is None
