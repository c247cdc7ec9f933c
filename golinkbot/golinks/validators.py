# golinkbot/golinks/validators.py

"""
Input validation for slash command payloads.

Slack sends every slash command as a `command` string (e.g. `/add`) and a
free-text `text` field. The helpers here check the command string, split the
text into its expected fields and validate the URL a user wants to store.
"""

# Standard library imports
import re
from typing import Tuple

# Local application imports
from .exceptions import InvalidCommand, InvalidInput

MIN_URL_LENGTH = 6
URL_SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)

INVALID_COMMAND_MESSAGE = "Please provide a valid command"


def validate_command_prefix(command: str) -> None:
    """
    Validates the slash command string received from Slack.

    Raises:
        InvalidCommand: If the command is empty, whitespace-only, or does not
                        start with a '/'.
    """
    if command is None or command.strip() == "":
        raise InvalidCommand(f"{INVALID_COMMAND_MESSAGE}: command cannot be empty")

    if not command.startswith("/"):
        raise InvalidCommand(f"{INVALID_COMMAND_MESSAGE}: command must start with a '/'")


def validate_url(url: str) -> bool:
    """Returns True if the URL is at least 6 characters and uses http(s)."""
    if not url or len(url) < MIN_URL_LENGTH:
        return False
    return bool(URL_SCHEME_PATTERN.match(url))


def parse_name_and_url(text: str) -> Tuple[str, str]:
    """
    Splits command text of the form `meet https://meet.google.com`.

    Any tokens after the URL are ignored.

    Raises:
        InvalidInput: If the text holds fewer than two whitespace-separated tokens.
    """
    parts = (text or "").split()
    if len(parts) < 2:
        raise InvalidInput("text must contain a name and a URL, ex: /add meet https://meet.google.com")
    return parts[0], parts[1]


def parse_name(text: str, usage: str = "/go meet") -> str:
    """Returns the first token of the command text, or raises InvalidInput."""
    parts = (text or "").split()
    if not parts:
        raise InvalidInput(f"text must contain a name, ex: {usage}")
    return parts[0]
