"""Iron Coder shell: credential store and page navigation."""
from . import auth, config, pages, session

__version__ = "0.1.0"

__all__ = ["auth", "config", "pages", "session"]
