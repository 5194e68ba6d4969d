"""Command line entry point: manage the credential store or run the shell."""
import argparse
import getpass
import sys
from pathlib import Path

from pydantic import ValidationError

from . import config
from .auth import CredentialStore, LoginThrottle, StoreError, open_store, passwords
from .auth.store import STRICT
from .logger import setup_logger
from .pages import Action, Page
from .session import Session

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2

ABOUT_TEXT = (
    "Iron Coder is an IDE designed to simplify embedded development in Rust. "
    "Inspired by modular hardware ecosystems such as Adafruit's Feather, Sparkfun's "
    "MicroMod, and more, Iron Coder generates project templates and code boilerplates "
    "based on hardware architecture descriptions."
)

PAGE_TITLES = {
    Page.LOGIN: "Welcome!",
    Page.REGISTER: "Create an account",
    Page.HOME: "Iron Coder",
    Page.ABOUT: "About Iron Coder",
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="ironcoder", description="Iron Coder credential store and shell.")
    ap.add_argument("--store", help="Credential file (default: $IRONCODER_CREDENTIALS_PATH)")
    ap.add_argument("--strict", action="store_true", help="Fail on malformed lines instead of skipping them")
    ap.add_argument("--plaintext", action="store_true", help="Read/write legacy plaintext passwords")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_reg = sub.add_parser("register", help="Register a new user (prompts for the password).")
    p_reg.add_argument("username")

    p_ver = sub.add_parser("verify", help="Check a username/password pair (prompts for the password).")
    p_ver.add_argument("username")

    sub.add_parser("list", help="List registered usernames in file order.")
    sub.add_parser("shell", help="Interactive login/register/home/about shell.")
    return ap


def make_store(args, settings: config.Settings) -> CredentialStore:
    """Apply command line overrides on top of the environment settings."""
    overrides = {}
    if args.store:
        overrides["credentials_path"] = Path(args.store)
    if args.strict:
        overrides["parse_mode"] = STRICT
    if args.plaintext:
        overrides["password_scheme"] = passwords.PLAINTEXT
    return open_store(settings.model_copy(update=overrides))


def run_shell(session: Session, read=input, read_secret=getpass.getpass, write=print) -> int:
    """Drive a Session from the terminal until EOF or 'quit'."""
    while True:
        write("")
        write(f"== {PAGE_TITLES[session.page]} ==")
        if session.page == Page.ABOUT:
            write(ABOUT_TEXT)
        if session.message:
            write(session.message)

        actions = session.available_actions()
        # The submit buttons are the LOGGED_IN / REGISTERED edges
        labels = {
            Action.LOGGED_IN: "log in",
            Action.REGISTERED: "create account",
        }
        for i, action in enumerate(actions, start=1):
            write(f"  {i}) {labels.get(action, action.value.replace('_', ' '))}")
        write("  q) quit")

        try:
            choice = read("> ").strip().lower()
        except EOFError:
            return EXIT_OK
        if choice in ("q", "quit"):
            return EXIT_OK
        if not choice.isdigit() or not 1 <= int(choice) <= len(actions):
            session.message = f"Unknown choice '{choice}'."
            continue

        action = actions[int(choice) - 1]
        if action == Action.LOGGED_IN:
            session.submit_login(read("Username: ").strip(), read_secret("Password: "))
        elif action == Action.REGISTERED:
            username = read("Username: ").strip()
            pw = read_secret("Password: ")
            session.submit_register(username, pw, read_secret("Confirm password: "))
        elif action == Action.GUEST:
            session.continue_as_guest()
        elif action == Action.OPEN_REGISTER:
            session.open_register()
        elif action == Action.BACK:
            session.back()
        elif action == Action.OPEN_ABOUT:
            session.open_about()
        elif action == Action.BACK_HOME:
            session.back_home()
        elif action == Action.BACK_TO_LOGIN:
            session.back_to_login()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = config.load_settings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        setup_logger(settings.log_dir)
    except OSError as e:
        print(f"Cannot set up logging in {settings.log_dir}: {e}", file=sys.stderr)
        return EXIT_ERROR

    store = make_store(args, settings)

    try:
        if args.cmd == "register":
            store.register(args.username, getpass.getpass("Password: "))
            print(f"Registered {args.username}")

        elif args.cmd == "verify":
            if store.verify(args.username, getpass.getpass("Password: ")):
                print("valid")
            else:
                print("invalid")
                return EXIT_INVALID

        elif args.cmd == "list":
            for username in store.usernames():
                print(username)

        elif args.cmd == "shell":
            return run_shell(Session(store, LoginThrottle.from_settings(settings)))

    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
