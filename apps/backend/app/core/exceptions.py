"""Exceptions converted to responses by application handlers."""


class PageRedirect(Exception):
    """Raised by page dependencies to send the browser elsewhere."""

    def __init__(self, url: str) -> None:
        super().__init__(url)
        self.url = url


class AccountConflict(Exception):
    """Raised when a sign-in would take over an account linked elsewhere."""
