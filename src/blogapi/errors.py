"""Domain error taxonomy.

Learn: services raise these instead of HTTPException so they stay usable
outside a request (CLI, tests). main.py registers one handler that turns
any BlogApiError into a JSON response with the mapped status code.
Messages are short and safe to show to clients — no ids, no traces.
"""


class BlogApiError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BlogApiError):
    """A required field is missing or blank."""

    status_code = 400


class Unauthenticated(BlogApiError):
    """Missing/invalid/expired token, or bad credentials."""

    status_code = 401


class NotFound(BlogApiError):
    """Resource does not exist, or belongs to someone else."""

    status_code = 404


class Conflict(BlogApiError):
    """Unique value already taken (e.g. email)."""

    status_code = 409
