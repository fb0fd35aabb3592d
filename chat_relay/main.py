from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chat_relay import __version__
from chat_relay.api.middleware import BodySizeLimitMiddleware
from chat_relay.api.routes import chat, health
from chat_relay.config import Settings, get_settings
from chat_relay.log import log


def error_body(detail) -> dict:
    if isinstance(detail, dict):
        return detail
    return {"error": str(detail)}


def describe_validation_errors(exc: RequestValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    app = FastAPI(
        title="Chat Relay API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings or get_settings()
    log().setLevel(app.state.settings.LOG_LEVEL.upper())

    # innermost, so it wraps the receive channel the route handlers read from
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=app.state.settings.MAX_BODY_BYTES)

    # Log every request
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        client_ip = request.client.host if request.client else "-"
        log().info(
            f"📨 {request.method} {request.url.path} from {client_ip} "
            f"at {datetime.now(timezone.utc).isoformat()}"
        )
        return await call_next(request)

    # Add CORS middleware (outermost, so error responses carry the headers too)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # unknown path or unsupported method on a known path
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            log().warning(f"❌ Not found: {request.method} {request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"error": "Route not found"},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = describe_validation_errors(exc)
        log().warning(f"❌ Invalid request body for {request.url.path}: {details}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body", "details": details},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        log().error(f"🔥 Server Error: {type(exc).__name__}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "details": str(exc)},
        )

    # include our routers
    app.include_router(health.router, tags=["health"])
    app.include_router(chat.router, tags=["chat"])

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    log().info("🚀 Starting chat relay")
    log().info(f"📌 Local: http://localhost:{settings.PORT}")
    log().info(f"🔧 Health: http://localhost:{settings.PORT}/health")
    log().info(f"💬 Response mode: {settings.CHAT_RESPONSE_MODE}")
    log().info(f"🔑 API Key configured: {'YES ✅' if settings.api_key_configured else 'NO ❌'}")
    uvicorn.run("chat_relay.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
