class RatesError(Exception):
    pass


class UpstreamError(RatesError):
    """Base for every failure of a single upstream fetch."""


class UpstreamTransportError(UpstreamError):
    pass


class UpstreamStatusError(UpstreamError):
    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        status = f"{status_code} {reason}".strip()
        super().__init__(f"Upstream responded with status {status}")


class UpstreamDecodeError(UpstreamError):
    pass


class UpstreamBaseMismatchError(UpstreamError):
    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Unexpected base currency in response: expected {expected}, got {actual!r}")


class RatesUnavailableError(RatesError):
    """Raised to callers when a required refresh could not produce rates."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)
