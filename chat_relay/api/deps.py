from fastapi import Request

from chat_relay.config import Settings


def app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings
