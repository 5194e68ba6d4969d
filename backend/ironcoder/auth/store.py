"""Append-only flat-file credential store."""
import logging
import os
import threading
from pathlib import Path
from typing import Iterator, List, Tuple

from pydantic import ValidationError

from .. import config
from . import passwords
from .schemas import (
    UserRecord,
    DuplicateUsernameError,
    InvalidRecordError,
    MalformedRecordError,
    StoreIOError,
)

logger = logging.getLogger(__name__)

PERMISSIVE = "permissive"
STRICT = "strict"
PARSE_MODES = (PERMISSIVE, STRICT)


class CredentialStore:
    """
    Username -> secret registry backed by one text file.

    Each line is `<username> <secret>`, oldest first. Lines are only ever
    appended; nothing is rewritten or reordered. Every operation on an
    instance runs under the instance lock, so the duplicate check and the
    append in `register` cannot interleave with another thread's.
    """

    def __init__(
        self,
        path,
        parse_mode: str = PERMISSIVE,
        scheme=None,
    ):
        if parse_mode not in PARSE_MODES:
            raise ValueError(f"Unknown parse mode '{parse_mode}'. Expected one of {PARSE_MODES}.")
        self.path = Path(path)
        self.parse_mode = parse_mode
        self.scheme = scheme or passwords.get_scheme(passwords.ARGON2)
        self._lock = threading.RLock()

    # ---------
    # Reading
    # ---------

    def _iter_records(self) -> Iterator[Tuple[int, UserRecord]]:
        """
        Yield (line_no, record) in file order.

        Raises OSError from opening and UnicodeDecodeError from reading;
        callers decide what an absent file means.
        """
        with self.path.open("r", encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                tokens = line.split()
                if not tokens:
                    continue

                if self.parse_mode == STRICT and len(tokens) != 2:
                    raise MalformedRecordError(line_no, line.rstrip("\n"))
                if len(tokens) < 2:
                    # Permissive: a record without a password is dropped
                    logger.warning("Skipping malformed record on line %d of %s", line_no, self.path)
                    continue

                yield line_no, UserRecord.model_construct(username=tokens[0], password=tokens[1])

    def _read_error(self, exc: Exception) -> StoreIOError:
        if isinstance(exc, UnicodeDecodeError):
            return StoreIOError(self.path, f"cannot decode as UTF-8 (byte offset {exc.start})")
        return StoreIOError(self.path, f"cannot read ({exc.strerror or exc})")

    def exists(self, username: str) -> bool:
        """
        True iff a record with exactly this username is stored.

        Raises StoreIOError if the file cannot be opened, including when it
        has not been created yet.
        """
        with self._lock:
            try:
                for _, record in self._iter_records():
                    if record.username == username:
                        return True
            except (OSError, UnicodeDecodeError) as e:
                raise self._read_error(e) from e
            return False

    def verify(self, username: str, password: str) -> bool:
        """
        True iff a stored record has this username and its secret matches.

        An absent store verifies nothing and is not an error.
        """
        with self._lock:
            try:
                for _, record in self._iter_records():
                    if record.username == username and self.scheme.matches(record.password, password):
                        return True
            except FileNotFoundError:
                return False
            except (OSError, UnicodeDecodeError) as e:
                raise self._read_error(e) from e
            return False

    def records(self) -> List[UserRecord]:
        """All parsed records in file order. Absent store -> []."""
        with self._lock:
            try:
                return [record for _, record in self._iter_records()]
            except FileNotFoundError:
                return []
            except (OSError, UnicodeDecodeError) as e:
                raise self._read_error(e) from e

    def usernames(self) -> List[str]:
        return [record.username for record in self.records()]

    def __len__(self) -> int:
        return len(self.records())

    def __contains__(self, username) -> bool:
        return username in self.usernames()

    # ---------
    # Writing
    # ---------

    def _build_record(self, username: str, password: str) -> UserRecord:
        if not password:
            raise InvalidRecordError("Password must not be empty")
        try:
            return UserRecord(username=username, password=self.scheme.encode(password))
        except ValidationError as e:
            message = "; ".join(err["msg"] for err in e.errors())
            raise InvalidRecordError(message) from e

    def _ensure_file(self) -> None:
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)
        logger.info("Created credential store at %s", self.path)

    def _needs_separator(self) -> bool:
        """True if the file is non-empty and its last line is unterminated."""
        with self.path.open("rb") as f:
            f.seek(0, os.SEEK_END)
            if f.tell() == 0:
                return False
            f.seek(-1, os.SEEK_END)
            return f.read(1) != b"\n"

    def register(self, username: str, password: str) -> None:
        """
        Append a new record for `username`.

        Raises:
            InvalidRecordError: username/password cannot be stored as a line
            DuplicateUsernameError: username already registered (nothing written)
            StoreIOError: file could not be created, read or appended to
        """
        record = self._build_record(username, password)

        with self._lock:
            try:
                self._ensure_file()
            except OSError as e:
                raise StoreIOError(self.path, f"cannot create ({e.strerror or e})") from e

            if self.exists(username):
                logger.info("Rejected duplicate registration for '%s'", username)
                raise DuplicateUsernameError(username)

            try:
                prefix = "\n" if self._needs_separator() else ""
                with self.path.open("a", encoding="utf-8") as f:
                    f.write(prefix + record.to_line())
                    f.flush()
                    os.fsync(f.fileno())
            except OSError as e:
                raise StoreIOError(self.path, f"cannot append ({e.strerror or e})") from e

        logger.info("Registered user '%s'", username)


def open_store(settings=None, hasher=None) -> CredentialStore:
    """Build a store from settings (defaults to the environment)."""
    settings = settings or config.load_settings()
    return CredentialStore(
        settings.credentials_path,
        parse_mode=settings.parse_mode,
        scheme=passwords.get_scheme(settings.password_scheme, hasher),
    )

