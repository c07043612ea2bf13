"""CDAP resource implementations."""

from .secure_key import SecureKey, SecureKeyId, SecureKeyRecord, SecureKeySpec

__all__ = [
    "SecureKey",
    "SecureKeyId",
    "SecureKeyRecord",
    "SecureKeySpec",
]
