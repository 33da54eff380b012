import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .analytics.analytics import router as analytics_router
from .chat.chat import router as chat_router
from .faqs.faqs import router as faqs_router
from models import ErrorResponse
from utils.config import Settings, get_settings
from utils.errors import ChatServiceError
from utils.logging_conf import setup_logging
from utils.mongodb_conn import MongodbConnection, get_mongodb_connection

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Finance Chat Assistant API")

    # Pre-flight requests are answered by the middleware for any origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ChatServiceError)
    async def chat_service_error_handler(request: Request, exc: ChatServiceError):
        logger.error("[API] %s %s failed: %s: %s", request.method, request.url.path, type(exc).__name__, exc)
        return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=str(exc)).model_dump())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content=ErrorResponse(error=f"Invalid request: {exc.errors()}").model_dump())

    app.include_router(chat_router)
    app.include_router(faqs_router)
    app.include_router(analytics_router)

    @app.get("/health")
    async def health(mongodb_conn: MongodbConnection = Depends(get_mongodb_connection)):
        if not await mongodb_conn.check_connection():
            return {"status": "error", "message": "MongoDB connection failed"}
        return {"status": "ok", "message": "Finance chat backend is running"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
