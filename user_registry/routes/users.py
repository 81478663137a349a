"""Registration and user lookup routes"""
from logging import getLogger
from typing import List, Literal

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from user_registry.database.user_store import UserStore
from user_registry.dependencies import get_live_channel, get_presence_registry, get_user_store
from user_registry.errors import DuplicateKeyError, NotFoundError, StoreUnavailableError, UserValidationError
from user_registry.models.presence_models import LiveUsersResponse
from user_registry.models.user_models import MessageResponse, RegistrationRequest, RegistrationResponse, UserPublic
from user_registry.presence.registry import PresenceRegistry
from user_registry.realtime.live_channel import LiveChannel
from user_registry.validation import validate_registration

logger = getLogger(__name__)

users_router = APIRouter(tags=["users"])

# Server side failures never echo internals back to the client
REGISTER_FAILED = "Registration failed, please try again later"
LOOKUP_FAILED = "Could not load users, please try again later"


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@users_router.post(
    "/register",
    status_code=201,
    response_model=RegistrationResponse,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
async def register_user(
    payload: RegistrationRequest,
    store: UserStore = Depends(get_user_store),
    channel: LiveChannel = Depends(get_live_channel),
):
    """
    Register a new user.
    Fields are validated before the store is touched. If the body carries the
    caller's Socket.IO connectionId, that connection is joined to the live
    room straight away.
    """
    try:
        validate_registration(payload)
    except UserValidationError as e:
        return _message(400, e.message)

    try:
        user_id = await run_in_threadpool(store.create_user, payload)
    except (UserValidationError, DuplicateKeyError) as e:
        return _message(400, e.message)
    except StoreUnavailableError:
        return _message(500, REGISTER_FAILED)
    except Exception:
        logger.exception("Unexpected registration failure")
        return _message(500, REGISTER_FAILED)

    if payload.connectionId:
        joined = await channel.join(payload.connectionId, payload.emailId, payload.display_name)
        if not joined:
            logger.info("connectionId %s on registration is not an open connection", payload.connectionId)

    return RegistrationResponse(message="User registered successfully!", userId=user_id)


@users_router.get("/users", response_model=List[UserPublic], responses={500: {"model": MessageResponse}})
def list_users(
    sort: Literal["newest", "oldest"] = "newest",
    store: UserStore = Depends(get_user_store),
):
    """All users without passwords, newest first by default"""
    try:
        return store.list_users(newest_first=sort == "newest")
    except StoreUnavailableError:
        return _message(500, LOOKUP_FAILED)


@users_router.get(
    "/users/{email}",
    response_model=UserPublic,
    responses={404: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
def get_user_by_email(email: str, store: UserStore = Depends(get_user_store)):
    """Single user by email, without password"""
    try:
        return store.find_user_by_email(email)
    except NotFoundError as e:
        return _message(404, e.message)
    except StoreUnavailableError:
        return _message(500, LOOKUP_FAILED)


@users_router.get("/live-users", response_model=LiveUsersResponse)
async def get_live_users(registry: PresenceRegistry = Depends(get_presence_registry)):
    """Who is in the live room right now"""
    users = [user.to_payload() for user in registry.snapshot()]
    return LiveUsersResponse(count=len(users), users=users)
