"""Session controller: the page the shell shows and the actions behind its buttons."""
import logging
from typing import Optional

from pydantic import BaseModel

from .auth import CredentialStore, LoginThrottle, StoreError, DuplicateUsernameError
from .pages import Action, Page, INITIAL_PAGE, transition, available_actions

logger = logging.getLogger(__name__)

GUEST_NAME = "guest"


class ActionResult(BaseModel):
    """Outcome of a user action, ready to display."""
    success: bool
    page: Page
    message: str = ""


class SessionStatus(BaseModel):
    """Who is signed in, if anyone."""
    authenticated: bool
    guest: bool = False
    username: Optional[str] = None


class Session:
    """
    Holds the current page and signed-in user and runs the shell's actions.

    Store failures never escape an action; they become the result message
    and the page stays where it was.
    """

    def __init__(self, store: CredentialStore, throttle: Optional[LoginThrottle] = None):
        self.store = store
        self.throttle = throttle or LoginThrottle()
        self.page = INITIAL_PAGE
        self.username: Optional[str] = None
        self.guest = False
        self.message = ""

    def _go(self, action: Action, message: str = "", success: bool = True) -> ActionResult:
        self.page = transition(self.page, action)
        return self._result(success, message)

    def _result(self, success: bool, message: str) -> ActionResult:
        self.message = message
        return ActionResult(success=success, page=self.page, message=message)

    # ---------
    # Login page
    # ---------

    def submit_login(self, username: str, password: str) -> ActionResult:
        """Verify credentials and move to the home page on success."""
        if self.page != Page.LOGIN:
            transition(self.page, Action.LOGGED_IN)  # raises InvalidTransitionError

        if not username or not password:
            return self._result(False, "Enter both a username and a password.")

        allowed, error_msg = self.throttle.check(username)
        if not allowed:
            return self._result(False, error_msg)

        try:
            valid = self.store.verify(username, password)
        except StoreError as e:
            logger.error("Login for '%s' failed: %s", username, e)
            return self._result(False, f"Could not check credentials: {e}")

        self.throttle.record(username, valid)
        if not valid:
            logger.info("Failed login for '%s'", username)
            return self._result(False, "Invalid username or password.")

        logger.info("User '%s' logged in", username)
        self.username = username
        self.guest = False
        return self._go(Action.LOGGED_IN, f"Welcome, {username}!")

    def continue_as_guest(self) -> ActionResult:
        result = self._go(Action.GUEST, "Continuing as a guest.")
        self.username = None
        self.guest = True
        return result

    def open_register(self) -> ActionResult:
        return self._go(Action.OPEN_REGISTER)

    # ---------
    # Register page
    # ---------

    def submit_register(self, username: str, password: str, confirm: Optional[str] = None) -> ActionResult:
        """Create an account and return to the login page on success."""
        if self.page != Page.REGISTER:
            transition(self.page, Action.REGISTERED)  # raises InvalidTransitionError

        if confirm is not None and confirm != password:
            return self._result(False, "Passwords do not match.")

        try:
            self.store.register(username, password)
        except DuplicateUsernameError as e:
            return self._result(False, str(e))
        except StoreError as e:
            logger.error("Registration for '%s' failed: %s", username, e)
            return self._result(False, f"Could not create account: {e}")

        return self._go(Action.REGISTERED, "Account created. You can now log in.")

    def back(self) -> ActionResult:
        return self._go(Action.BACK)

    # ---------
    # Home / About / File menu
    # ---------

    def open_about(self) -> ActionResult:
        return self._go(Action.OPEN_ABOUT)

    def back_home(self) -> ActionResult:
        return self._go(Action.BACK_HOME)

    def back_to_login(self) -> ActionResult:
        """Sign out and return to the login page."""
        if self.username:
            logger.info("User '%s' signed out", self.username)
        self.username = None
        self.guest = False
        return self._go(Action.BACK_TO_LOGIN)

    def status(self) -> SessionStatus:
        if self.guest:
            return SessionStatus(authenticated=False, guest=True, username=GUEST_NAME)
        if self.username:
            return SessionStatus(authenticated=True, username=self.username)
        return SessionStatus(authenticated=False)

    def available_actions(self) -> list:
        return available_actions(self.page)
