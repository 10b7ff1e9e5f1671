class PostServiceError(Exception):
    """Base for failures that are answered with a ``{success: false, message}`` body."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Forbidden(PostServiceError):
    status_code = 403


class NotFound(PostServiceError):
    status_code = 404


class InternalError(PostServiceError):
    status_code = 500

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
