"""Exceptions raised while building SigV4 headers."""


class SigV4Error(Exception):
    """Base class for all signing errors."""


class ConfigurationError(SigV4Error):
    """A required configuration field is missing.

    Raised before any hashing happens, so no partial header map exists.
    """

    def __init__(self, missing_field: str) -> None:
        self.missing_field = missing_field
        super().__init__(f"missing config property '{missing_field}'")


class MalformedEndpointError(SigV4Error):
    """The endpoint URL does not yield a usable Host header."""

    def __init__(self, endpoint: str, reason: str = 'expected http(s)://host[:port][/path]') -> None:
        self.endpoint = endpoint
        super().__init__(f"malformed endpoint {endpoint!r}: {reason}")


class InvalidPayloadError(SigV4Error, ValueError):
    """The request data cannot be turned into a query string or JSON body."""
