"""Database package for user records"""
from .connection import MongoConnection
from .user_store import UserStore

__all__ = ['MongoConnection', 'UserStore']
