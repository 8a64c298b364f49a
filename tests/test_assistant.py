"""Tests for the Forge Assistant without a live model."""

from types import SimpleNamespace

import pytest

from forgemunch_mcp.assistant import ChatTurn, ForgeAssistant
from forgemunch_mcp.assistant.chat import FALLBACK_MESSAGE


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)


class FakeMessages:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.text)])


def _assistant_with(messages):
    assistant = ForgeAssistant()
    assistant.client = SimpleNamespace(messages=messages)
    return assistant


def test_fallback_without_api_key(no_api_key):
    """Without a key the assistant returns docs instead of calling a model."""
    assistant = ForgeAssistant()
    assert assistant.client is None

    result = assistant.ask("How do sigs work?")

    assert result["answer"] == FALLBACK_MESSAGE
    assert "## Sigs" in result["docs_context"]
    assert any(s["title"] == "Sigs" for s in result["sources"])


def test_unknown_command(no_api_key):
    result = ForgeAssistant().ask("hello", command="bogus")
    assert "error" in result


def test_followups(no_api_key):
    assistant = ForgeAssistant()

    assert assistant.ask("sigs", command="docs")["followups"] == []
    followups = assistant.ask("sigs")["followups"]
    assert followups[0]["command"] == "docs"


def test_model_from_environment(monkeypatch, no_api_key):
    monkeypatch.setenv("FORGEMUNCH_ASSISTANT_MODEL", "claude-test")
    assert ForgeAssistant().model == "claude-test"


def test_ask_sends_history_and_file(no_api_key):
    messages = FakeMessages(text="Sigs declare types.")
    assistant = _assistant_with(messages)

    history = [
        ChatTurn(role="user", content="hi"),
        ChatTurn(role="assistant", content=""),
        ChatTurn(role="system", content="ignored"),
    ]
    result = assistant.ask(
        "What is Person?",
        command="explain",
        history=history,
        file_name="social.frg",
        file_content="sig Person {}",
    )

    assert result["answer"] == "Sigs declare types."
    call = messages.calls[0]
    assert call["messages"][0] == {"role": "user", "content": "hi"}
    assert len(call["messages"]) == 2
    assert call["messages"][-1]["content"].startswith("Please explain")
    assert "social.frg" in call["system"]
    assert "sig Person {}" in call["system"]


def test_docs_command_omits_file(no_api_key):
    messages = FakeMessages(text="ok")
    assistant = _assistant_with(messages)

    assistant.ask("test expect", command="docs", file_content="sig Secret {}")

    call = messages.calls[0]
    assert "sig Secret {}" not in call["system"]
    assert "documentation" in call["messages"][-1]["content"]


def test_request_failure_falls_back(no_api_key):
    assistant = _assistant_with(FakeMessages(error=RuntimeError("boom")))

    result = assistant.ask("What is a pred?")

    assert result["answer"] == FALLBACK_MESSAGE
    assert "docs_context" in result
