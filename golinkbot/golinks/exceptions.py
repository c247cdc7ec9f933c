# golinkbot/golinks/exceptions.py

"""
Exception hierarchy for the go-links app.

Every error raised by the command, store and event layers derives from
`GoLinkError`. The `message` attribute is the user-facing text sent back to
Slack, so handlers can turn any of these into a plain-text reply.
"""


class GoLinkError(Exception):
    """Base class for all go-links errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidCommand(GoLinkError):
    """The slash command string itself is empty or malformed."""


class InvalidInput(GoLinkError):
    """The command text could not be parsed into the expected fields."""


class LinkExists(GoLinkError):
    """A link with the given name is already stored."""


class LinkNotFound(GoLinkError):
    """No link with the given name is stored."""


class StoreError(GoLinkError):
    """The backing store failed to read or write."""


class MalformedEvent(GoLinkError):
    """An inbound Slack event envelope is missing required keys."""
