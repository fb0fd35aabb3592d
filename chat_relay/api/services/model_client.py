# chat_relay/api/services/model_client.py

from chat_relay.config import Settings
from chat_relay.llm import ChatModel, ChatPrompt, ModelNotConfiguredError, OpenRouterChatModel


def get_chat_model(settings: Settings) -> ChatModel:
    if not settings.api_key_configured:
        raise ModelNotConfiguredError("OPENROUTER_API_KEY is not set")
    return OpenRouterChatModel(
        api_key=settings.OPENROUTER_API_KEY,
        base_url=settings.OPENROUTER_BASE_URL,
        model=settings.OPENROUTER_MODEL,
    )


def build_prompt(message: str, settings: Settings) -> ChatPrompt:
    return ChatPrompt(system=settings.SYSTEM_PROMPT, user=message)
