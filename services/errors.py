class PostsError(Exception):
    """Base error for post operations, carries the HTTP status to report"""
    status_code = 500
    default_message = "Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PostsError):
    status_code = 400
    default_message = "Text is required"


class AuthError(PostsError):
    status_code = 401
    default_message = "User not found"


class AuthorizationError(PostsError):
    status_code = 401
    default_message = "User not authorized"


class NotFoundError(PostsError):
    status_code = 404
    default_message = "Post not found"


class ConflictError(PostsError):
    status_code = 400
    default_message = "Conflict"


class StoreError(PostsError):
    """Persistence failure. The message is never shown to the caller."""
    status_code = 500
