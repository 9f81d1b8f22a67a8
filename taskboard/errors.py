class TaskboardError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(TaskboardError):
    status_code = 400
    default_message = "invalid input"


class Unauthorized(TaskboardError):
    status_code = 401
    default_message = "Unauthorized"


class InvalidToken(Unauthorized):
    default_message = "Invalid token"


class NotFound(TaskboardError):
    status_code = 404
    default_message = "not found"


class Conflict(TaskboardError):
    status_code = 409
    default_message = "conflict"


class InternalError(TaskboardError):
    pass


class LoginRequired(Exception):
    """Raised by the interactive guard; rendered as a redirect to the login page."""
