"""
Page navigation tests.

Initial page is LOGIN; LOGIN → REGISTER → LOGIN, LOGIN → HOME,
HOME → ABOUT → HOME, and "back to login" from anywhere.
"""

import pytest

from ironcoder.pages import (
    Action,
    Page,
    INITIAL_PAGE,
    InvalidTransitionError,
    available_actions,
    transition,
)


def test_initial_page_is_login():
    assert INITIAL_PAGE == Page.LOGIN


def test_register_round_trip():
    assert transition(Page.LOGIN, Action.OPEN_REGISTER) == Page.REGISTER
    assert transition(Page.REGISTER, Action.REGISTERED) == Page.LOGIN
    assert transition(Page.REGISTER, Action.BACK) == Page.LOGIN


def test_login_and_guest_reach_home():
    assert transition(Page.LOGIN, Action.LOGGED_IN) == Page.HOME
    assert transition(Page.LOGIN, Action.GUEST) == Page.HOME


def test_about_round_trip():
    assert transition(Page.HOME, Action.OPEN_ABOUT) == Page.ABOUT
    assert transition(Page.ABOUT, Action.BACK_HOME) == Page.HOME


def test_back_to_login_from_every_page():
    for page in Page:
        assert transition(page, Action.BACK_TO_LOGIN) == Page.LOGIN


@pytest.mark.parametrize("page,action", [
    (Page.LOGIN, Action.OPEN_ABOUT),
    (Page.HOME, Action.LOGGED_IN),
    (Page.ABOUT, Action.GUEST),
    (Page.REGISTER, Action.BACK_HOME),
])
def test_invalid_transitions(page, action):
    with pytest.raises(InvalidTransitionError):
        transition(page, action)


def test_available_actions():
    assert available_actions(Page.HOME) == [Action.OPEN_ABOUT, Action.BACK_TO_LOGIN]
    assert Action.GUEST in available_actions(Page.LOGIN)
    assert Action.GUEST not in available_actions(Page.REGISTER)
