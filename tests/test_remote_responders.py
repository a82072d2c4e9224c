import asyncio
import json

import httpx
import pytest
from langchain_core.language_models import FakeListChatModel

from advisor.core.history import InvalidHistoryError
from advisor.core.prompt import TROUBLE_CONNECTING_MESSAGE, WARMING_UP_MESSAGE
from advisor.responders import (
    GeminiResponder,
    HuggingFaceResponder,
    OpenAIResponder,
    ProviderError,
)
from config.settings import Settings


def _settings(**overrides) -> Settings:
    base = {
        "openai_api_key": "sk-test",
        "openai_api_url": "https://llm.test/v1/chat/completions",
        "hf_inference_url": "https://hf.test/models/advisor",
        "google_api_key": None,
        "openai_model": "gpt-3.5-turbo",
        "max_tokens": 500,
    }
    base.update(overrides)
    return Settings(**base)


def _transport(status_code=200, payload=None, requests=None, text=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)


def _failing_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


def _no_network():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"unexpected request to {request.url}")

    return httpx.MockTransport(handler)


# --- OpenAI -----------------------------------------------------------------


def test_openai_request_alternates_turns_and_ends_with_message() -> None:
    requests = []
    payload = {"choices": [{"message": {"role": "assistant", "content": "  Pay the 22% card first. "}}]}
    responder = OpenAIResponder(_settings(), transport=_transport(payload=payload, requests=requests))

    answer = asyncio.run(
        responder.respond("Which debt first?", ["q1", "a1", "q2", "a2"])
    )

    assert answer == "Pay the 22% card first."
    assert len(requests) == 1
    request = requests[0]
    assert request.headers["Authorization"] == "Bearer sk-test"
    body = json.loads(request.content)
    assert body["model"] == "gpt-3.5-turbo"
    assert body["max_tokens"] == 500
    messages = body["messages"]
    assert len(messages) == 6
    assert [m["role"] for m in messages] == ["system"] + ["user", "assistant"] * 2 + ["user"]
    assert [m["content"] for m in messages[1:]] == ["q1", "a1", "q2", "a2", "Which debt first?"]


def test_openai_missing_key_returns_configuration_message() -> None:
    responder = OpenAIResponder(_settings(openai_api_key=None), transport=_no_network())

    answer = asyncio.run(responder.respond("Should I refinance?"))

    assert "OPENAI_API_KEY" in answer


@pytest.mark.parametrize(
    "payload",
    [
        {"choices": []},
        {"choices": [{"message": {"content": ""}}]},
        {},
        {"choices": [{"message": "oops"}]},
        {"choices": {"0": {"message": {"content": "keyed"}}}},
        ["not", "an", "object"],
    ],
)
def test_openai_empty_answer_falls_back_to_trouble_message(payload) -> None:
    responder = OpenAIResponder(_settings(), transport=_transport(payload=payload))

    assert asyncio.run(responder.respond("Budget?")) == TROUBLE_CONNECTING_MESSAGE


def test_openai_http_error_is_classified() -> None:
    error = {"error": {"message": "Incorrect API key", "code": "invalid_api_key"}}
    responder = OpenAIResponder(_settings(), transport=_transport(401, error))

    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(responder.respond("Budget?"))

    assert excinfo.value.status_code == 401
    assert excinfo.value.provider == "openai"
    assert json.loads(excinfo.value.body) == error


def test_openai_transport_error_has_no_status() -> None:
    responder = OpenAIResponder(_settings(), transport=_failing_transport())

    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(responder.respond("Budget?"))

    assert excinfo.value.status_code is None
    assert "connection refused" in excinfo.value.body


def test_openai_rejects_odd_history_before_calling_out() -> None:
    responder = OpenAIResponder(_settings(), transport=_no_network())

    with pytest.raises(InvalidHistoryError):
        asyncio.run(responder.respond("And now?", ["q1", "a1", "q2"]))


# --- Hugging Face -----------------------------------------------------------


def test_huggingface_payload_is_flattened_prompt_without_auth() -> None:
    requests = []
    responder = HuggingFaceResponder(
        _settings(), transport=_transport(payload=[{"generated_text": "ok"}], requests=requests)
    )

    asyncio.run(responder.respond("Roth or traditional?", ["q1", "a1"]))

    request = requests[0]
    assert "Authorization" not in request.headers
    body = json.loads(request.content)
    assert body["inputs"].startswith("System: You are FinanceGuru")
    assert body["inputs"].endswith("User: q1\nAssistant: a1\nUser: Roth or traditional?\nAssistant:")
    assert body["parameters"]["return_full_text"] is False
    assert body["parameters"]["do_sample"] is True
    assert body["parameters"]["max_new_tokens"] == 500


@pytest.mark.parametrize(
    "payload, expected",
    [
        ("Start with a budget.", "Start with a budget."),
        ([{"generated_text": " Pay yourself first. "}], "Pay yourself first."),
        ({"generated_text": "Index funds are a solid core."}, "Index funds are a solid core."),
        ("Automate savings.\nUser: thanks!\nAssistant: anytime", "Automate savings."),
        ([], TROUBLE_CONNECTING_MESSAGE),
        ({"unexpected": True}, TROUBLE_CONNECTING_MESSAGE),
        ([{"generated_text": "\nUser: leaked"}], TROUBLE_CONNECTING_MESSAGE),
    ],
)
def test_huggingface_response_shapes(payload, expected) -> None:
    responder = HuggingFaceResponder(_settings(), transport=_transport(payload=payload))

    assert asyncio.run(responder.respond("Any tips?")) == expected


def test_huggingface_loading_model_returns_warming_message() -> None:
    error = {"error": "Model mistralai/Mistral-7B-Instruct-v0.2 is currently loading", "estimated_time": 20.0}
    responder = HuggingFaceResponder(_settings(), transport=_transport(503, error))

    assert asyncio.run(responder.respond("Any tips?")) == WARMING_UP_MESSAGE


@pytest.mark.parametrize(
    "status_code, payload",
    [
        (503, {"error": "Service unavailable"}),
        (500, {"error": "loading failed badly"}),
        (302, {"generated_text": "moved"}),
    ],
)
def test_huggingface_other_errors_raise(status_code, payload) -> None:
    responder = HuggingFaceResponder(_settings(), transport=_transport(status_code, payload))

    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(responder.respond("Any tips?"))

    assert excinfo.value.status_code == status_code
    assert excinfo.value.payload == payload


def test_huggingface_non_json_error_body_is_kept() -> None:
    responder = HuggingFaceResponder(_settings(), transport=_transport(502, text="Bad Gateway"))

    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(responder.respond("Any tips?"))

    assert excinfo.value.body == "Bad Gateway"


# --- Gemini -----------------------------------------------------------------


class _ExplodingModel:
    async def ainvoke(self, messages):
        raise RuntimeError("quota exhausted")


def test_gemini_missing_key_returns_configuration_message() -> None:
    responder = GeminiResponder(_settings())

    assert "GOOGLE_API_KEY" in asyncio.run(responder.respond("Emergency fund size?"))


def test_gemini_returns_model_text() -> None:
    llm = FakeListChatModel(responses=["  Aim for three to six months.  "])
    responder = GeminiResponder(_settings(), llm=llm)

    answer = asyncio.run(responder.respond("Emergency fund size?", ["q1", "a1"]))

    assert answer == "Aim for three to six months."


def test_gemini_failure_is_classified() -> None:
    responder = GeminiResponder(_settings(), llm=_ExplodingModel())

    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(responder.respond("Emergency fund size?"))

    assert excinfo.value.provider == "gemini"
    assert "quota exhausted" in excinfo.value.body
