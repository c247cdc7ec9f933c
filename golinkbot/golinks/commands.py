# golinkbot/golinks/commands.py

"""
Slash Command Handlers for the go-links bot.

One handler per slash command. Every handler takes the raw `command` and
`text` fields Slack posted plus the `LinkStore` to operate on, and returns
either a plain-text reply or a `{"blocks": [...]}` payload. Handlers never
raise for user mistakes: any `GoLinkError` is turned into its message so the
view can always answer Slack with a 200.

Handlers:
- `go_command`:     `/go <name>` exact link, else group, else a hint.
- `add_command`:    `/add <name> <url>`
- `edit_command`:   `/edit <name> <url>`
- `delete_command`: `/delete <name>`
- `list_command`:   `/list`
"""

# Standard library imports
import logging
from functools import wraps
from typing import Any, Callable, Dict, Union

# Local application imports
from .exceptions import GoLinkError, LinkExists, LinkNotFound
from .resolver import all_links, group_links, resolve, resolve_group
from .slack_blocks import (get_group_message_blocks, get_link_message_blocks,
                           get_list_message_blocks)
from .stores import LinkStore
from .validators import parse_name, parse_name_and_url, validate_command_prefix, validate_url

LOGGER = logging.getLogger(__name__)

CommandResult = Union[str, Dict[str, Any]]
CommandHandler = Callable[[str, str, LinkStore], CommandResult]

INVALID_URL_MESSAGE = "Url is not valid"
EMPTY_LIST_MESSAGE = "No commands found yet. Add one with /add meet https://meet.google.com"


def _replies_with_errors(handler: CommandHandler) -> CommandHandler:
    """Turns any GoLinkError raised by a handler into its plain-text reply."""
    @wraps(handler)
    def wrapper(command: str, text: str, store: LinkStore) -> CommandResult:
        try:
            return handler(command, text, store)
        except GoLinkError as e:
            LOGGER.info(f"{handler.__name__} rejected '{command} {text}': {e.message}")
            return e.message
    return wrapper


# ==============================================================================
# 1. Read Commands
# ==============================================================================

@_replies_with_errors
def go_command(command: str, text: str, store: LinkStore) -> CommandResult:
    """
    Resolves `/go <name>`.

    Lookup order: an exact name match returns that link; otherwise every link
    in the group named by the text is returned; otherwise a not-found message
    pointing at `/list`.
    """
    validate_command_prefix(command)
    name = parse_name(text, usage="/go meet")

    link = resolve(store, name)
    if link is not None:
        return {"blocks": get_link_message_blocks(link)}

    group = resolve_group(store, name)
    if group:
        return {"blocks": get_group_message_blocks(name, group)}

    return (f"No command found with the name '{name}'. "
            f"Please check the name and try again, or use /list to see all commands.")


@_replies_with_errors
def list_command(command: str, text: str, store: LinkStore) -> CommandResult:
    """Lists every link, bucketed by group prefix."""
    validate_command_prefix(command)

    links = all_links(store)
    if not links:
        return EMPTY_LIST_MESSAGE
    return {"blocks": get_list_message_blocks(group_links(links))}


# ==============================================================================
# 2. Write Commands
# ==============================================================================

@_replies_with_errors
def add_command(command: str, text: str, store: LinkStore) -> CommandResult:
    """Stores a new link. Existing names are never overwritten."""
    validate_command_prefix(command)
    name, url = parse_name_and_url(text)

    if resolve(store, name) is not None:
        raise LinkExists(f"The command name '{name}' already exists")

    if not validate_url(url):
        return INVALID_URL_MESSAGE

    store.insert(name, url)
    LOGGER.info(f"Link '{name}' added with URL {url}")
    return f"{name} added with URL {url}"


@_replies_with_errors
def edit_command(command: str, text: str, store: LinkStore) -> CommandResult:
    validate_command_prefix(command)
    name, url = parse_name_and_url(text)

    if resolve(store, name) is None:
        raise LinkNotFound(
            f"The command name '{name}' was not found. Please make sure the name exists or add it first."
        )

    if not validate_url(url):
        return INVALID_URL_MESSAGE

    store.update(name, url)
    LOGGER.info(f"Link '{name}' updated to {url}")
    return "Updated Successfully"


@_replies_with_errors
def delete_command(command: str, text: str, store: LinkStore) -> CommandResult:
    validate_command_prefix(command)
    name = parse_name(text, usage="/delete meet")

    try:
        store.delete(name)
    except LinkNotFound:
        raise LinkNotFound(f"Could not delete the command '{name}': it was not found.")

    LOGGER.info(f"Link '{name}' deleted")
    return "Deleted Successfully"


# Slash command name (as registered with Slack) -> handler.
COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "go": go_command,
    "add": add_command,
    "edit": edit_command,
    "delete": delete_command,
    "list": list_command,
}
