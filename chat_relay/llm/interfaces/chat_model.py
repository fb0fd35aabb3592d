from abc import ABC, abstractmethod
from typing import AsyncGenerator

from ..models.prompt import ChatPrompt


class ChatModel(ABC):
    """Interface for an upstream text-generation provider."""

    @abstractmethod
    async def complete(self, prompt: ChatPrompt) -> str:
        """Generates the full reply for a prompt.

        Args:
            prompt (ChatPrompt):  System instruction and user message.

        Returns:
            str  The generated text once the upstream has finished.
        """
        pass

    @abstractmethod
    def stream(self, prompt: ChatPrompt) -> AsyncGenerator[str, None]:
        """
        Generates the reply as a sequence of text fragments.

        The iterator is lazy and single-use: nothing is sent upstream until the
        first fragment is requested, and it cannot be restarted once consumed.

        :param prompt: System instruction and user message.
        :return: An async iterator over non-empty text fragments, in order.
        """
        pass


class ModelNotConfiguredError(RuntimeError):
    """Raised when the upstream credential is missing."""
