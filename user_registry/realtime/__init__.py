"""Realtime presence over Socket.IO"""
from .live_channel import ConnectionState, LiveChannel
from .server import create_socket_server, register_live_handlers

__all__ = ['ConnectionState', 'LiveChannel', 'create_socket_server', 'register_live_handlers']
