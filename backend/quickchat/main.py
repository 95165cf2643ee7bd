# quickchat/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from quickchat.api import auth, messages, socket
from quickchat.core.config import CORS_ORIGINS
from quickchat.core.errors import ChatError
from quickchat.core.presence import PresenceTable
from quickchat.core.rate_limit import limiter, rate_limit_exceeded_handler
from quickchat.infra.database import init_db
from quickchat.utils.logger import setup_logger

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield
    app.state.presence.clear()


app = FastAPI(
    title="QuickChat Backend",
    version="1.0.0",
    description="Two-party real-time chat backend",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_logger()

# Owned by the socket layer, handed to routes through api.deps.get_presence
app.state.presence = PresenceTable()

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.exception_handler(ChatError)
async def chat_error_handler(request: Request, exc: ChatError):
    logger.info("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("%s %s invalid request: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid request"},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("❌ Database error in %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Database error"},
    )


# Register routers
app.include_router(auth.router, tags=["Auth"])
app.include_router(messages.router, tags=["Messages"])
app.include_router(socket.router, tags=["Socket"])


@app.get("/health")
def health_check():
    return {"status": "ok"}
