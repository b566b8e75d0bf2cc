#Description: Typed exception hierarchy for OKX DEX API calls.

class OKXError(Exception):
    """Base class for every failure raised by the OKX adapters."""


class ConfigurationError(OKXError, ValueError):
    """Missing or invalid credential/transport setting. Raised at construction, before any I/O."""


class OKXTimeoutError(OKXError, TimeoutError):
    """Request did not complete within the configured timeout."""

    def __init__(self, method: str, path: str, timeout_ms: int):
        super().__init__(f"{method} {path} timed out after {timeout_ms} ms")
        self.method = method
        self.path = path
        self.timeout_ms = timeout_ms


class OKXNetworkError(OKXError):
    """Connection-level failure other than a timeout (refused, reset, DNS)."""


class HttpError(OKXError):
    """Non-2xx HTTP status. The body is kept verbatim and never parsed."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class DecodeError(OKXError):
    def __init__(self, text: str):
        super().__init__(f"Invalid JSON: {text}")
        self.text = text


class ApiError(OKXError):
    """Envelope returned with code != "0"."""

    def __init__(self, code: str, msg: str):
        super().__init__(f"OKXError {code}: {msg}")
        self.code = code
        self.msg = msg
