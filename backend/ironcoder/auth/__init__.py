"""Credential storage and verification."""
from . import passwords, schemas, store, throttle
from .schemas import (
    UserRecord,
    StoreError,
    DuplicateUsernameError,
    StoreIOError,
    MalformedRecordError,
    InvalidRecordError,
)
from .store import CredentialStore, open_store
from .throttle import LoginThrottle

__all__ = [
    "passwords", "schemas", "store", "throttle",
    "UserRecord", "StoreError", "DuplicateUsernameError", "StoreIOError",
    "MalformedRecordError", "InvalidRecordError",
    "CredentialStore", "open_store", "LoginThrottle",
]
