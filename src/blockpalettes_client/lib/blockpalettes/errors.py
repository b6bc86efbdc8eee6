"""Exception hierarchy for Block Palettes client failures.

Every error raised by the client derives from :class:`BlockPalettesError` so
callers can catch the whole family at once, while the subclasses keep the
failure kinds distinguishable:

* :class:`TransportError`: network, DNS, TLS or HTTP status failures.
* :class:`RequestTimeoutError`: the transport gave up waiting.
* :class:`MalformedResponseError`: the body is not the expected shape.
* :class:`ApiError`: the upstream answered but reported ``success: false``.
* :class:`SelectorCompileError`: a scraper CSS selector does not compile.
* :class:`InvalidDateFormatError`: a palette date string is malformed.
"""


class BlockPalettesError(Exception):
    """Base class for all Block Palettes client errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TransportError(BlockPalettesError):
    """Raised when a request fails below the API level.

    Args:
        message: Human-readable error description.
        status_code: HTTP status code when the server answered with an error status.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RequestTimeoutError(TransportError):
    """Raised when the underlying HTTP transport times out."""


class MalformedResponseError(TransportError):
    """Raised when a response body cannot be decoded into the expected model."""


class ApiError(BlockPalettesError):
    """Raised when the upstream response reports ``success: false``."""

    def __str__(self) -> str:
        return f"API error: {self.message}"


class SelectorCompileError(BlockPalettesError):
    """Raised when a scraper CSS selector expression fails to compile.

    This is a configuration error, not a data condition: a selector that
    compiles but matches nothing yields an empty result instead.

    Args:
        selector: The offending selector expression.
        message: Parser error description.
    """

    def __init__(self, selector: str, message: str) -> None:
        self.selector = selector
        super().__init__(f"Invalid CSS selector {selector!r}: {message}")


class InvalidDateFormatError(BlockPalettesError, ValueError):
    """Raised when a palette date string does not match ``YYYY-MM-DD HH:MM:SS``.

    Args:
        value: The unparseable date string.
    """

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid date format: {value!r}")
