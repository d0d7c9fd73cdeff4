"""Conversation LLM -- answers user prompts augmented with web search text.

Default model: gpt-4o-mini (configurable via OPENAI_CONVERSATION_MODEL).
"""

import asyncio
import json
from typing import Any, Dict, List, Optional

from src.llm.base import BaseLLM
from src.llm.tools import ToolDispatcher
from src.security.guardrails import WebSearchError
from src.utils.config import settings
from src.utils.logger import get_logger
from src.web.formatting import render_insertion

log = get_logger(__name__)

SYSTEM_PROMPT = """You are a helpful AI assistant.

Instructions:
- Provide a clear, accurate answer
- Use the web information below when it is relevant
- If the information is insufficient, say so honestly
- Keep responses concise but complete"""


class ConversationLLM(BaseLLM):
    """Generates final responses shown to the user."""

    def __init__(self, model: str | None = None, insertion_template: str | None = None, **kwargs):
        super().__init__(model=model or settings.conversation_model, **kwargs)
        self._insertion_template = insertion_template

    @property
    def insertion_template(self) -> str:
        return self._insertion_template or settings.insertion_template

    def build_messages(self, query: str, search_text: str) -> List[Dict[str, Any]]:
        system = SYSTEM_PROMPT
        if search_text:
            system += "\n\n" + render_insertion(self.insertion_template, query, search_text.rstrip("\n"))
        return [
            {"role": "system", "content": system},
            {"role": "user", "content": query},
        ]

    def generate_response(self, query: str, search_text: str) -> Optional[str]:
        """Build the augmented prompt, call the model, and return the answer."""
        return self.complete(self.build_messages(query, search_text), temperature=0.4)

    async def chat_with_tools(
        self,
        messages: List[Dict[str, Any]],
        dispatcher: ToolDispatcher,
    ) -> Optional[str]:
        """Let the model call the search tools once, then return its reply."""
        msg = await asyncio.to_thread(
            self.complete_message, messages, tools=dispatcher.definitions()
        )
        if msg is None:
            return None

        calls = getattr(msg, "tool_calls", None) or []
        if not calls:
            return msg.content

        convo = list(messages)
        convo.append(
            {
                "role": "assistant",
                "content": msg.content,
                "tool_calls": [
                    {
                        "id": call.id,
                        "type": "function",
                        "function": {
                            "name": call.function.name,
                            "arguments": call.function.arguments,
                        },
                    }
                    for call in calls
                ],
            }
        )

        for call in calls:
            status = dispatcher.format_message(call.function.name, call.function.arguments)
            if status:
                log.info(status)
            try:
                output = await dispatcher.run(call.function.name, call.function.arguments)
            except WebSearchError as exc:
                log.warning("Tool %s failed: %s", call.function.name, exc)
                output = {"error": str(exc)}
            convo.append(
                {"role": "tool", "tool_call_id": call.id, "content": json.dumps(output)}
            )

        final = await asyncio.to_thread(self.complete_message, convo)
        return final.content if final else None
