from typing import Optional

from pydantic import BaseModel


class ChatRequest(BaseModel):
    # optional here so a missing message is reported as 400, not a validation error
    message: Optional[str] = None


class ChatReply(BaseModel):
    reply: str


class ChatError(BaseModel):
    error: str
    details: Optional[str] = None
    type: Optional[str] = None
