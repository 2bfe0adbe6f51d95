# errors.py
# exceptions the /api/days handler maps to JSON error responses


class NotFoundError(Exception):
    """No candidate event qualifies (404)."""

    def __init__(self, message: str = "No valid future or today events found"):
        super().__init__(message)
        self.message = message


class UpstreamError(Exception):
    """The data source failed or answered with something unusable (500)."""
