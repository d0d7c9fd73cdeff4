"""LLM module -- search-augmented conversation and function tools."""

from src.llm.base import BaseLLM
from src.llm.conversation import ConversationLLM
from src.llm.tools import ToolDispatcher

__all__ = ["BaseLLM", "ConversationLLM", "ToolDispatcher"]
