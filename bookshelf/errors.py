"""Error taxonomy shared by the store, catalog client and views."""


class BookshelfError(Exception):
    """Base class for expected, user-facing failures."""


class ValidationError(BookshelfError):
    """A submitted form is missing fields or is inconsistent."""


class AuthFailure(BookshelfError):
    """Bad credentials, or a missing, tampered or expired session token."""


class Conflict(BookshelfError):
    """The username is already registered."""


class UpstreamUnavailable(BookshelfError):
    """The external catalog could not be reached or returned garbage."""
