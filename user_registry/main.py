"""User registry service: FastAPI for registration and lookups, Socket.IO for live presence"""
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from logging import getLogger
from typing import TypedDict

import socketio
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from user_registry.config import Settings
from user_registry.core.logging import setup_logging
from user_registry.database.connection import MongoConnection # Owns the MongoClient
from user_registry.database.user_store import UserStore # Registration and lookups
from user_registry.errors import StoreUnavailableError
from user_registry.presence.registry import PresenceRegistry # Who is live right now
from user_registry.realtime import LiveChannel, create_socket_server, register_live_handlers
from user_registry.routes.users import users_router

settings = Settings()

setup_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
logger = getLogger(__name__)

sio = create_socket_server(settings.CORS_ORIGINS)


# Define typed application state
class State(TypedDict):
    """Application state with type definitions"""
    user_store: UserStore
    presence_registry: PresenceRegistry
    live_channel: LiveChannel


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[State]:
    """FastAPI lifespan manager - startup and shutdown events"""
    # STARTUP
    logger.info("Starting user registry components...")

    connection = MongoConnection(
        uri=settings.MONGO_URI,
        db_name=settings.MONGO_DB_NAME,
        timeout_ms=settings.MONGO_TIMEOUT_MS,
    )
    user_store = UserStore(connection.get_collection("users"), bcrypt_rounds=settings.BCRYPT_ROUNDS)

    # An unreachable database is logged, the service keeps serving and
    # the store creates its indexes before the first insert instead
    if connection.ping():
        try:
            user_store.ensure_indexes()
        except StoreUnavailableError as e:
            logger.error("%s: %s", e.message, e.__cause__)

    # Rebuilt empty on every start
    presence_registry = PresenceRegistry()
    live_channel = LiveChannel(
        sio,
        presence_registry,
        resolve_user=user_store.find_user_by_id,
        room=settings.LIVE_ROOM,
    )
    register_live_handlers(sio, live_channel)

    # Yield state to FastAPI - this makes it available via request.state
    yield {
        "user_store": user_store,
        "presence_registry": presence_registry,
        "live_channel": live_channel,
    }

    # SHUTDOWN
    logger.info("Shutting down user registry components...")
    connection.close()


app = FastAPI(
    title="User Registry Service",
    description="User registration API with a live presence channel",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router, prefix=settings.API_PREFIX)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Unparseable bodies are a client error with the same shape as other failures"""
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    logger.debug("Rejected request to %s: %s", request.url.path, errors)
    return JSONResponse(status_code=400, content={"message": message})


@app.get("/", response_class=PlainTextResponse)
def root():
    """Liveness probe"""
    return "User registry API is running"

@app.get("/health")
def health_check():
    """Check if application is running"""
    return {"status": "healthy", "service": "user-registry"}


# Socket.IO in front, everything else falls through to FastAPI (lifespan included)
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("user_registry.main:asgi_app", host=settings.HOST, port=settings.PORT)
