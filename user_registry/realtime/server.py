"""Socket.IO server and event wiring for the live users room"""
from __future__ import annotations

import logging
from typing import Any, List

import socketio

from user_registry.realtime.live_channel import LiveChannel

logger = logging.getLogger(__name__)

JOIN_EVENTS = ("joinRoom", "joinLive")


def create_socket_server(cors_origins: List[str]) -> socketio.AsyncServer:
    """ASGI Socket.IO server sharing the HTTP CORS allow-list"""
    origins: Any = "*" if "*" in cors_origins else cors_origins
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=origins,
        logger=False,
        engineio_logger=False,
    )


def register_live_handlers(sio: socketio.AsyncServer, channel: LiveChannel) -> None:
    """Route connect, join and disconnect events to the channel"""

    async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
        await channel.on_connect(sid)

    async def join(sid: str, data: Any = None):
        await channel.on_join(sid, data)

    # newer python-socketio passes a disconnect reason
    async def disconnect(sid: str, *args: Any):
        await channel.on_disconnect(sid)

    sio.on("connect", handler=connect)
    sio.on("disconnect", handler=disconnect)
    for event in JOIN_EVENTS:
        sio.on(event, handler=join)
    logger.info("Live handlers registered for events %s", ", ".join(JOIN_EVENTS))
