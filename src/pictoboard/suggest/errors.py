"""Error taxonomy for remote suggestion calls."""

from __future__ import annotations


class SuggestionError(Exception):
    """Base class for suggestion subsystem errors."""

    kind = "error"


class SuggestionAborted(SuggestionError):
    """The call was superseded by a newer sentence change."""

    kind = "aborted"


class RemoteUnavailable(SuggestionError):
    """Transport failure, HTTP error, timeout, or any unexpected exception."""

    kind = "unavailable"


class RemoteMalformed(SuggestionError):
    """The backend answered but the response could not be interpreted."""

    kind = "malformed"


class RemoteEmpty(SuggestionError):
    """The response parsed but yielded no known word ids."""

    kind = "empty"


__all__ = [
    "RemoteEmpty",
    "RemoteMalformed",
    "RemoteUnavailable",
    "SuggestionAborted",
    "SuggestionError",
]
