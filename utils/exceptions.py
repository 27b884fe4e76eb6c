"""
Error taxonomy for tweetlabel.

Client errors are terminal for the operation that raised them; nothing here
is retried. The command line entry point catches TweetLabelError, logs the
message and exits non-zero.
"""

from typing import Optional


class TweetLabelError(Exception):
    """Base class for every error raised by tweetlabel."""


class MissingCredentialsError(TweetLabelError):
    """No consumer key / secret available for the token exchange."""


class TransportError(TweetLabelError):
    """Network-level failure while contacting the token or search endpoint."""


class TokenParseError(TweetLabelError):
    """Token endpoint response was not JSON or had no access_token."""


class ResponseParseError(TweetLabelError):
    """Search endpoint response was not JSON or had no statuses list."""


class NotAuthenticatedError(TweetLabelError):
    """A search was attempted before a bearer token was acquired."""


class MalformedRecordError(TweetLabelError):
    """A line of the labeler source file does not have three tab-separated fields."""

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(
            f"Malformed record on line {line_number}: expected 3 tab-separated fields, got {line!r}"
        )


class UnrecognizedLabelError(TweetLabelError):
    """The operator typed something other than p, f, n or d."""

    def __init__(self, response: str, line_number: Optional[int] = None):
        self.response = response
        self.line_number = line_number
        where = f" at line {line_number}" if line_number is not None else ""
        super().__init__(f"Unrecognized label {response!r}{where}")


class RecordReadError(TweetLabelError):
    """The labeler source or the operator input could not be read or decoded."""

    def __init__(self, what: str, line_number: int, cause: Exception):
        self.what = what
        self.line_number = line_number
        super().__init__(f"Could not read {what} at line {line_number}: {cause}")
