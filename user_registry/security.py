"""Password hashing for stored credentials"""
import base64
import hashlib

import bcrypt


def prehash(password: str) -> bytes:
    """SHA-256 digest, base64 encoded, so bcrypt never sees more than 72 bytes"""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, rounds: int = 12) -> str:
    """bcrypt hash of the password, returned as text for storage"""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(prehash(password), salt).decode("utf-8")
