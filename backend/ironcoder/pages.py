"""Page state machine for the shell."""
from enum import Enum
from typing import Dict, Tuple


class Page(str, Enum):
    LOGIN = "login"
    REGISTER = "register"
    HOME = "home"
    ABOUT = "about"


class Action(str, Enum):
    OPEN_REGISTER = "open_register"
    REGISTERED = "registered"
    BACK = "back"
    LOGGED_IN = "logged_in"
    GUEST = "guest"
    OPEN_ABOUT = "open_about"
    BACK_HOME = "back_home"
    BACK_TO_LOGIN = "back_to_login"


INITIAL_PAGE = Page.LOGIN

TRANSITIONS: Dict[Tuple[Page, Action], Page] = {
    (Page.LOGIN, Action.OPEN_REGISTER): Page.REGISTER,
    (Page.REGISTER, Action.REGISTERED): Page.LOGIN,
    (Page.REGISTER, Action.BACK): Page.LOGIN,
    (Page.LOGIN, Action.LOGGED_IN): Page.HOME,
    (Page.LOGIN, Action.GUEST): Page.HOME,
    (Page.HOME, Action.OPEN_ABOUT): Page.ABOUT,
    (Page.ABOUT, Action.BACK_HOME): Page.HOME,
}


class InvalidTransitionError(Exception):
    """Action is not available on the current page."""
    def __init__(self, page: Page, action: Action):
        self.page = page
        self.action = action
        super().__init__(f"Cannot '{action.value}' from the {page.value} page.")


def transition(page: Page, action: Action) -> Page:
    """Return the page reached by taking `action` on `page`."""
    # "Back to login" lives in the File menu, so it is available everywhere
    if action == Action.BACK_TO_LOGIN:
        return Page.LOGIN
    try:
        return TRANSITIONS[(page, action)]
    except KeyError:
        raise InvalidTransitionError(page, action) from None


def available_actions(page: Page) -> list:
    """Actions that can be taken from `page`, in declaration order."""
    actions = [a for (p, a) in TRANSITIONS if p == page]
    actions.append(Action.BACK_TO_LOGIN)
    return actions
