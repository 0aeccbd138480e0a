"""
Typed errors raised by the blog client.

Every error carries a human-readable `message` and a machine-readable
`code`, so the CLI (or any other front end) can print or branch on them
without parsing strings.

Example:
    from blogclient.core.errors import InvalidCredentials

    try:
        await manager.login(email, password)
    except InvalidCredentials as exc:
        print(exc.message)
"""


class BlogClientError(Exception):
    """Base error for the blog client."""

    default_message = "Unexpected client error"
    default_code = "CLIENT_ERROR"

    def __init__(self, message: str | None = None, code: str | None = None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        super().__init__(self.message)


# ----- Authentication -----


class AuthError(BlogClientError):
    """Authentication / session related error."""

    default_message = "Authentication error"
    default_code = "AUTH_ERROR"


class InvalidCredentials(AuthError):
    """Unknown email or wrong password (deliberately indistinguishable)."""

    default_message = "Invalid email or password"
    default_code = "INVALID_CREDENTIALS"


class DuplicateEmail(AuthError):
    default_message = "User with this email already exists"
    default_code = "DUPLICATE_EMAIL"


class NotAuthenticated(AuthError):
    default_message = "No user logged in"
    default_code = "NOT_AUTHENTICATED"


class SessionExpiredOrRevoked(AuthError):
    default_message = "Session expired or revoked, please log in again"
    default_code = "SESSION_INVALID"


# ----- Record store -----


class StoreError(BlogClientError):
    """Failure reported by the remote record store."""

    default_message = "Record store error"
    default_code = "STORE_ERROR"


class StoreReadFailure(StoreError):
    default_message = "Failed to read from the record store"
    default_code = "STORE_READ_FAILED"


class StoreWriteFailure(StoreError):
    default_message = "Failed to write to the record store"
    default_code = "STORE_WRITE_FAILED"


# ----- Summarizer -----


class SummarizerError(BlogClientError):
    """The remote summarization call failed (best-effort collaborator)."""

    default_message = "Summarization failed"
    default_code = "SUMMARIZER_ERROR"


class NetworkTimeout(SummarizerError):
    default_message = "Request timed out. Please check your network connection."
    default_code = "NETWORK_TIMEOUT"
