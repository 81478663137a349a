"""FastAPI dependency injection functions for accessing application state."""
from fastapi import Request

from user_registry.database.user_store import UserStore
from user_registry.presence.registry import PresenceRegistry
from user_registry.realtime.live_channel import LiveChannel


# Dependency injection functions
def get_user_store(request: Request) -> UserStore:
    """Get user store from state"""
    return request.state.user_store

def get_live_channel(request: Request) -> LiveChannel:
    """Get live channel from state"""
    return request.state.live_channel

def get_presence_registry(request: Request) -> PresenceRegistry:
    """Get presence registry from state"""
    return request.state.presence_registry
