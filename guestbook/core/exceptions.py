class GuestbookError(Exception):
    """Base exception for the guestbook frontend."""
    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)

# --- Startup Errors (process exit) ---
class StartupConfigError(GuestbookError):
    pass

# --- Routing Errors (404/405) ---
class RequestError(GuestbookError):
    pass

class PageNotFoundError(RequestError):
    def __init__(self, message: str = "page not found"):
        super().__init__(message)

class MethodNotAllowedError(RequestError):
    def __init__(self, allowed: str, message: str = None):
        self.allowed = allowed
        if message is None:
            message = f"only {allowed} requests are supported"
        super().__init__(message)

# --- Validation Errors (400) ---
class EntryValidationError(GuestbookError):
    pass

class NameRequiredError(EntryValidationError):
    def __init__(self, message: str = "name required"):
        super().__init__(message)

class MessageRequiredError(EntryValidationError):
    def __init__(self, message: str = "message required"):
        super().__init__(message)

class MessageNotSavedError(GuestbookError):
    def __init__(self, reason: str):
        super().__init__(f"failed to save message: {reason}")

# --- Backend Errors (500) ---
class BackendError(GuestbookError):
    """Base for failures talking to the guestbook backend."""
    pass

class BackendUnavailableError(BackendError):
    def __init__(self, original_error: str, message_prefix: str = "querying backend failed"):
        super().__init__(f"{message_prefix}: {original_error}")

class BackendBadStatusError(BackendError):
    def __init__(self, status_code: int, body: str = "", message: str = None):
        self.status_code = status_code
        self.body = body
        if message is None:
            message = f"got status code {status_code} from the backend: {body}"
        super().__init__(message)

class BackendDecodeError(BackendError):
    def __init__(self, original_error: str):
        super().__init__(f"could not decode json response from the api: {original_error}")
