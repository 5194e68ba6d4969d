"""Credential record schema and store exceptions."""
from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserRecord(BaseModel):
    """One username/secret pair as persisted in the store."""
    model_config = ConfigDict(frozen=True)

    username: str = Field(..., min_length=1, description="Unique, case-sensitive")
    password: str = Field(..., min_length=1, description="Stored secret (hash or plaintext)")

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        """Usernames are the first token of a line, so no whitespace."""
        if any(c.isspace() for c in v):
            raise ValueError("Username must not contain whitespace")
        return v

    @field_validator('password')
    @classmethod
    def validate_secret(cls, v):
        """The stored secret is the second token of a line."""
        if any(c.isspace() for c in v):
            raise ValueError("Stored password must not contain whitespace")
        return v

    def to_line(self) -> str:
        """Serialize as a store line, newline-terminated."""
        return f"{self.username} {self.password}\n"


class StoreError(Exception):
    """Base exception for credential store errors."""
    pass


class DuplicateUsernameError(StoreError):
    """Username is already registered."""
    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username '{username}' is already taken.")


class StoreIOError(StoreError):
    """The backing file could not be opened, read or written."""
    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Credential store {path}: {reason}")


class MalformedRecordError(StoreError):
    """A line in the store is not a `<username> <secret>` pair (strict mode)."""
    def __init__(self, line_no: int, line: str):
        self.line_no = line_no
        self.line = line
        super().__init__(f"Malformed record on line {line_no}")


class InvalidRecordError(StoreError):
    """Username or password rejected before anything is written."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
