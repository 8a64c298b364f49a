"""Chat assistant for Forge questions."""

from .chat import BASE_PROMPT, COMMANDS, ChatTurn, ForgeAssistant

__all__ = ["BASE_PROMPT", "COMMANDS", "ChatTurn", "ForgeAssistant"]
