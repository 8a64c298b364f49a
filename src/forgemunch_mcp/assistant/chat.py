"""Forge Assistant: documentation-grounded chat over Claude."""

import os
from dataclasses import dataclass, field
from typing import Optional

import structlog

from ..docs import DOCS_BASE_URL, build_docs_context, find_relevant_docs

logger = structlog.get_logger(__name__)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"

COMMANDS = ("", "docs", "explain")

BASE_PROMPT = """You are the Forge Assistant, an expert on the Forge modeling language. Forge is a lightweight modeling language similar to Alloy, used for teaching formal methods and modeling.

Your role:
- Answer questions about Forge syntax, semantics, and usage
- Help debug Forge models and explain error messages
- Explain sigs, fields, constraints, predicates, functions, quantifiers, bounds, testing, and temporal operators
- Provide code examples in Forge when helpful, using Forge syntax (not Alloy)
- Be pedagogically minded: guide students toward understanding rather than just giving answers

Forge has three sublanguages:
- Froglet (#lang forge/froglet): functions and partial functions only
- Relational Forge (#lang forge): adds relations and relational operators
- Temporal Forge (#lang forge/temporal): adds linear-temporal operators

Constraints are NOT instructions: they define rules the world must satisfy.

NEVER provide answers to homework or assignments. If a student seems to be asking for a homework solution, guide them conceptually without giving the answer."""

FALLBACK_MESSAGE = (
    "I encountered an error while processing your question. "
    "Please make sure a language model is available (set ANTHROPIC_API_KEY). "
    f"You can also check the [Forge documentation]({DOCS_BASE_URL}/) directly."
)


@dataclass
class ChatTurn:
    role: str      # "user" | "assistant"
    content: str


@dataclass
class ForgeAssistant:
    """Prompt-and-forward assistant with bundled docs as context."""

    model: str = field(default_factory=lambda: os.environ.get("FORGEMUNCH_ASSISTANT_MODEL", DEFAULT_MODEL))
    max_tokens: int = 1024

    def __post_init__(self):
        self.client = None
        self._init_client()

    def _init_client(self):
        """Initialize Anthropic client if API key is available."""
        api_key = os.environ.get("ANTHROPIC_API_KEY")
        if api_key:
            from anthropic import Anthropic
            self.client = Anthropic(api_key=api_key)

    def ask(
        self,
        question: str,
        command: str = "",
        history: Optional[list[ChatTurn]] = None,
        file_name: Optional[str] = None,
        file_content: Optional[str] = None,
    ) -> dict:
        """Answer a question about Forge.

        Args:
            question: The user's prompt
            command: "" for general help, "docs" or "explain"
            history: Earlier turns of the conversation
            file_name: Name of the user's current Forge file
            file_content: Text of that file, included for "" and "explain"

        Returns:
            Dict with answer, command, sources and followups
        """
        if command not in COMMANDS:
            return {"error": f"Unknown command: {command}"}

        system, final_prompt = self._build_prompt(question, command, file_name, file_content)
        messages = self._history_messages(history or [])
        messages.append({"role": "user", "content": final_prompt})

        sources = [
            {"title": s.title, "url": s.url} for s in find_relevant_docs(question)
        ]

        result = {
            "command": command,
            "sources": sources,
            "followups": self._followups(command),
        }

        if not self.client:
            result["answer"] = FALLBACK_MESSAGE
            result["docs_context"] = build_docs_context(question)
            return result

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system,
                messages=messages,
            )
            result["answer"] = "".join(
                block.text for block in response.content if getattr(block, "type", "") == "text"
            )
        except Exception as e:
            logger.error("assistant_request_failed", error=str(e), model=self.model)
            result["answer"] = FALLBACK_MESSAGE
            result["docs_context"] = build_docs_context(question)

        return result

    def _build_prompt(
        self,
        question: str,
        command: str,
        file_name: Optional[str],
        file_content: Optional[str],
    ) -> tuple[str, str]:
        """Build the system prompt and the final user message."""
        docs_context = build_docs_context(question)

        if command == "docs":
            system = (
                f"{BASE_PROMPT}\n\nThe user is asking about Forge documentation. "
                f"Here is the relevant documentation:\n\n{docs_context}"
            )
            prompt = (
                f"Based on the documentation above, please answer this question: {question}\n\n"
                "Include links to the relevant documentation pages when possible."
            )
            return system, prompt

        file_context = ""
        if file_content:
            label = file_name or "current file"
            file_context = (
                f"\n\nThe user's current Forge file ({label}):\n```forge\n{file_content}\n```"
            )

        system = f"{BASE_PROMPT}\n\nRelevant Forge documentation:\n\n{docs_context}{file_context}"

        if command == "explain":
            prompt = (
                "Please explain the following Forge code or concept. "
                f"Be thorough but accessible:\n\n{question}"
            )
        else:
            prompt = question

        return system, prompt

    def _history_messages(self, history: list[ChatTurn]) -> list[dict]:
        """Convert earlier turns to API messages, skipping empty ones."""
        messages = []
        for turn in history:
            if turn.role not in ("user", "assistant") or not turn.content:
                continue
            messages.append({"role": turn.role, "content": turn.content})
        return messages

    def _followups(self, command: str) -> list[dict]:
        if command == "docs":
            return []
        return [{
            "prompt": "Show me the relevant documentation for this topic",
            "command": "docs",
            "label": "Look up docs",
        }]
