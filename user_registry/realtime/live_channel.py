"""Connection lifecycle for the live users room.

Each Socket.IO connection moves CONNECTED -> JOINED -> DISCONNECTED.
Joining records the connection in the PresenceRegistry, puts it in the live
room and broadcasts the new member list to the room. Disconnecting a joined
connection removes it and broadcasts again. Bad join payloads are dropped
without a reply so a misbehaving client cannot break its connection handler.
"""
import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

from starlette.concurrency import run_in_threadpool

from user_registry.errors import RegistryError
from user_registry.models.user_models import UserPublic
from user_registry.presence.registry import PresenceRegistry

logger = logging.getLogger(__name__)

LIVE_ROOM = "live_users"
LIVE_USERS_EVENT = "liveUsers"


class ConnectionState(Enum):
    """Per connection state"""
    CONNECTED = "connected"
    JOINED = "joined"
    DISCONNECTED = "disconnected"


class LiveChannel:
    """Glue between the Socket.IO server and the PresenceRegistry"""
    def __init__(self,
    sio,
    registry: PresenceRegistry,
    resolve_user: Callable[[str], UserPublic] = None,
    room: str = LIVE_ROOM,
    ):
        # sio only needs emit/enter_room, which keeps this testable with mocks
        self.sio = sio
        self.registry = registry
        self.resolve_user = resolve_user
        self.room = room
        self.connections: Dict[str, ConnectionState] = {}

    def state_of(self, sid: str) -> ConnectionState:
        """Unknown sids are reported as disconnected"""
        return self.connections.get(sid, ConnectionState.DISCONNECTED)

    def is_connected(self, sid: str) -> bool:
        """True while the connection is open, joined or not"""
        return sid in self.connections

    async def on_connect(self, sid: str) -> None:
        """New transport connection, not yet in the registry"""
        self.connections[sid] = ConnectionState.CONNECTED
        logger.info("Live connection opened: %s", sid)

    async def on_join(self, sid: str, payload: Any) -> bool:
        """
        Handle a joinRoom/joinLive event.
        payload is either {"email", "displayName"}, {"userId"} or a bare
        user id string. Returns True if the connection was joined.
        """
        if not self.is_connected(sid):
            logger.debug("Join from unknown connection %s ignored", sid)
            return False

        if isinstance(payload, str):
            payload = {"userId": payload}
        if not isinstance(payload, dict):
            logger.debug("Malformed join payload from %s dropped", sid)
            return False

        email = payload.get("email")
        display_name = payload.get("displayName") or payload.get("name")
        user_id = payload.get("userId")

        if user_id and not email:
            user = await self._lookup(user_id)
            if user is None:
                return False
            email = user.emailId
            display_name = f"{user.firstName} {user.lastName}"

        if not isinstance(email, str) or not isinstance(display_name, str):
            logger.debug("Join from %s without usable email/name dropped", sid)
            return False

        return await self.join(sid, email, display_name)

    async def join(self, sid: str, email: str, display_name: str) -> bool:
        """Record the connection as live and broadcast. Repeated joins replace the entry"""
        if not self.is_connected(sid):
            logger.debug("Cannot join %s, connection is not open", sid)
            return False
        if not self.registry.join(sid, email, display_name):
            return False

        await self.sio.enter_room(sid, self.room)
        self.connections[sid] = ConnectionState.JOINED
        logger.info("Connection %s joined live room as %s", sid, email)
        await self.broadcast()
        return True

    async def on_disconnect(self, sid: str) -> None:
        """Forget the connection, broadcasting only if it had joined"""
        self.connections.pop(sid, None)
        if self.registry.leave(sid):
            logger.info("Live user left: %s", sid)
            await self.broadcast()
        else:
            logger.debug("Connection %s closed without joining", sid)

    async def broadcast(self) -> None:
        """Send the full member list to the live room"""
        payload = [user.to_payload() for user in self.registry.snapshot()]
        await self.sio.emit(LIVE_USERS_EVENT, payload, room=self.room)
        logger.debug("Broadcast %d live users", len(payload))

    async def _lookup(self, user_id: Any) -> Optional[UserPublic]:
        if self.resolve_user is None or not isinstance(user_id, str):
            return None
        try:
            # pymongo is blocking, keep it off the event loop
            return await run_in_threadpool(self.resolve_user, user_id)
        except RegistryError as e:
            logger.warning("Could not resolve live user %s: %s", user_id, e.message)
            return None
