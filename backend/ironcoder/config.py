"""Runtime configuration read from environment variables."""
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


def get_data_dir() -> Path:
    """Base directory for the credential file and logs (default: ~/.ironcoder)."""
    return Path(os.getenv("IRONCODER_DATA_DIR", Path.home() / ".ironcoder")).expanduser()


class Settings(BaseModel):
    """Store, throttle and logging settings."""
    credentials_path: Path
    log_dir: Path
    parse_mode: Literal["permissive", "strict"] = "permissive"
    password_scheme: Literal["argon2", "plaintext"] = "argon2"
    lockout_after: int = Field(5, ge=1, description="Failed logins before lockout")
    lockout_seconds: int = Field(300, ge=0, description="Lockout length")
    failure_window: int = Field(300, ge=1, description="Seconds a failure counts toward lockout")


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Raises pydantic.ValidationError on out-of-range or unknown values.
    """
    data_dir = get_data_dir()
    return Settings(
        credentials_path=os.getenv("IRONCODER_CREDENTIALS_PATH", data_dir / "users.txt"),
        log_dir=os.getenv("IRONCODER_LOG_DIR", data_dir / "logs"),
        parse_mode=os.getenv("IRONCODER_PARSE_MODE", "permissive").lower(),
        password_scheme=os.getenv("IRONCODER_PASSWORD_SCHEME", "argon2").lower(),
        lockout_after=os.getenv("IRONCODER_LOCKOUT_AFTER", "5"),
        lockout_seconds=os.getenv("IRONCODER_LOCKOUT_SECONDS", "300"),
        failure_window=os.getenv("IRONCODER_FAILURE_WINDOW", "300"),
    )
