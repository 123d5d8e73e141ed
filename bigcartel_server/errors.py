"""Error types raised by the Big Cartel client.

Transport failures (connection errors, timeouts) are not wrapped: they
surface as the ``httpx`` exceptions that caused them.
"""

from __future__ import annotations


class BigCartelClientError(Exception):
    """Represents an error when communicating with the Big Cartel API."""


class BigCartelDecodeError(BigCartelClientError):
    """The response body could not be parsed as a JSON:API document."""


class BigCartelNotFoundError(BigCartelClientError):
    """The document parsed but carries no usable resource object."""


class BigCartelStatusError(BigCartelClientError):
    """The API answered with a status code other than the expected one."""

    def __init__(self, resource: str, status_code: int, expected: int) -> None:
        self.resource = resource
        self.status_code = status_code
        self.expected = expected
        super().__init__(
            f"the request to create the {resource} was unsuccessful: "
            f"status code {status_code}, expected {expected}"
        )
