"""Failures of a single series fetch. None of them are retried."""

from __future__ import annotations


class FetchError(Exception):
    """Base class for everything that can end a fetch attempt."""

    kind = "fetch"


class NetworkError(FetchError):
    """The request never produced a response (connect, read or timeout failure)."""

    kind = "network"


class HttpStatusError(FetchError):
    """The API answered with something other than 200 OK."""

    kind = "http_status"

    def __init__(self, code: int):
        super().__init__(f"Unexpected response status: {code}")
        self.code = code


class DecodeError(FetchError):
    """The response body could not be turned into a complete series."""

    kind = "decode"
