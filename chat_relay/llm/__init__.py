from .interfaces.chat_model import ChatModel, ModelNotConfiguredError
from .models.prompt import ChatPrompt
from .implementations.openrouter_chat_model import OpenRouterChatModel

__all__ = [
    "ChatModel",
    "ModelNotConfiguredError",
    "ChatPrompt",
    "OpenRouterChatModel",
]
