from typing import AsyncGenerator, AsyncIterator, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from chat_relay.api.deps import app_settings
from chat_relay.api.schemas.chat import ChatError, ChatReply, ChatRequest
from chat_relay.api.services import model_client
from chat_relay.config import Settings
from chat_relay.llm import ChatModel, ChatPrompt, ModelNotConfiguredError
from ...log import log


router = APIRouter()

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # disable proxy buffering
}


def upstream_failure(e: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "Server error", "details": str(e), "type": type(e).__name__},
    )


@router.post(
    "/chat",
    responses={
        200: {"content": {"text/plain": {}}, "description": "Reply text (stream) or {reply} (buffered)"},
        400: {"model": ChatError},
        500: {"model": ChatError},
    },
)
async def send_chat(
    payload: Optional[ChatRequest] = None,
    settings: Settings = Depends(app_settings),
):
    message = payload.message if payload else None
    log().info(f"💬 Chat message: {message!r}")

    if not message:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Message required"
        )

    try:
        model = model_client.get_chat_model(settings)
    except ModelNotConfiguredError:
        log().error("❌ OPENROUTER_API_KEY not found in environment")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="API key not configured"
        )

    prompt = model_client.build_prompt(message, settings)

    if settings.CHAT_RESPONSE_MODE == "buffered":
        return await reply_buffered(model, prompt)
    return await reply_streaming(model, prompt)


async def reply_buffered(model: ChatModel, prompt: ChatPrompt) -> ChatReply:
    try:
        reply = await model.complete(prompt)
    except Exception as e:
        log().error(f"❌ Upstream completion failed: {type(e).__name__}: {e}")
        raise upstream_failure(e)

    log().info(f"✅ Reply received ({len(reply)} chars)")
    return ChatReply(reply=reply)


async def reply_streaming(model: ChatModel, prompt: ChatPrompt) -> StreamingResponse:
    log().info("🚀 Starting AI stream...")
    fragments = model.stream(prompt)

    # Pull the first fragment before committing headers, so an upstream that
    # fails straight away still gets a proper JSON error response.
    try:
        first = await anext(fragments)
    except StopAsyncIteration:
        first = None
    except Exception as e:
        log().error(f"❌ Streaming error before first chunk: {type(e).__name__}: {e}")
        raise upstream_failure(e)

    return StreamingResponse(
        relay_fragments(first, fragments),
        media_type="text/plain; charset=utf-8",
        headers=STREAM_HEADERS,
    )


async def relay_fragments(
    first: Optional[str], fragments: AsyncGenerator[str, None]
) -> AsyncIterator[str]:
    """
    Yields the primed first fragment and then the rest of the upstream stream,
    one body chunk per fragment. Once bytes are out the status can no longer
    change, so a mid-stream failure is reported in-band.

    The upstream generator is closed on the way out, including when the
    client goes away mid-stream, so its client connection is released then
    rather than at garbage collection.
    """
    try:
        if first is None:
            log().info("✅ Stream completed successfully (0 chunks)")
            return

        chunk_count = 1
        log().debug(f"📦 Chunk {chunk_count}: {first!r}")
        yield first

        try:
            async for fragment in fragments:
                chunk_count += 1
                log().debug(f"📦 Chunk {chunk_count}: {fragment!r}")
                yield fragment
        except Exception as e:
            log().error(f"❌ Streaming error after {chunk_count} chunks: {type(e).__name__}: {e}")
            yield f"\n\n[ERROR: {e}]"
            return

        log().info(f"✅ Stream completed successfully ({chunk_count} chunks)")
    finally:
        await fragments.aclose()
