"""Conversations with history kept server-side.

Example:
    >>> chat = Chat(system_prompt="You are a helpful assistant")  # doctest: +SKIP
    >>> chat.send_message("Hello!")  # doctest: +SKIP
"""

import logging
from dataclasses import replace
from typing import Any

from polyfact.api_client import PolyfactAPIError, PolyfactClient, resolve_client
from polyfact.generation import GenerationOptions, GenerationResult, generate_with_token_usage
from polyfact.memory import create_memory, update_memory

logger = logging.getLogger(__name__)


class Chat:
    """A chat session.

    The chat (and, with ``auto_memory``, its memory) is created on the first
    message.
    """

    def __init__(
        self,
        system_prompt: str | None = None,
        auto_memory: bool = False,
        options: GenerationOptions | None = None,
        *,
        client: PolyfactClient | None = None,
    ):
        """Initialize chat.

        Args:
            system_prompt: Instructions applied to the whole conversation
            auto_memory: Store every exchange in a memory used as context
            options: Generation options applied to every message
            client: API client (default: built from configuration)
        """
        self.system_prompt = system_prompt
        self.auto_memory = auto_memory
        self.options = options or GenerationOptions()
        self.client = resolve_client(client)
        self.chat_id: str | None = None
        self.memory_id: str | None = None

    def _ensure_chat(self) -> str:
        if self.chat_id is None:
            payload = {"system_prompt": self.system_prompt} if self.system_prompt else {}
            data = self.client.post("/chats", json=payload)
            if not isinstance(data, dict) or not data.get("id"):
                raise PolyfactAPIError(f"Unexpected response from /chats: {data!r}")
            self.chat_id = str(data["id"])
            logger.debug(f"Created chat {self.chat_id}")
        return self.chat_id

    def _ensure_memory(self) -> str:
        if self.memory_id is None:
            self.memory_id = create_memory(client=self.client)
        return self.memory_id

    def send_message_with_token_usage(self, message: str) -> GenerationResult:
        """Send ``message`` and return the answer with its token usage."""
        options = replace(self.options, chat_id=self._ensure_chat())
        if self.auto_memory:
            options = replace(options, memory_id=self._ensure_memory())

        generation = generate_with_token_usage(message, options, client=self.client)

        if self.auto_memory:
            update_memory(
                self.memory_id,
                f"Human: {message}\nAI: {generation.result}",
                client=self.client,
            )
        return generation

    def send_message(self, message: str) -> str:
        """Send ``message`` and return the answer."""
        return self.send_message_with_token_usage(message).result

    def get_messages(self) -> list[dict[str, Any]]:
        """Return the chat history (empty before the first message)."""
        if self.chat_id is None:
            return []
        data = self.client.get(f"/chat/{self.chat_id}/history")
        if not isinstance(data, list):
            raise PolyfactAPIError(f"Unexpected chat history response: {data!r}")
        return data
