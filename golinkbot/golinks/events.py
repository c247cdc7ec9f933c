# golinkbot/golinks/events.py

"""
Slack Events API handling.

Inbound `/event` payloads are decoded into small typed structures before any
logic runs. Missing or mistyped keys raise `MalformedEvent` instead of
surfacing as a KeyError deep inside a handler.

The only event the bot acts on is a channel `message` whose text contains the
inline trigger (default `go/`): the word right after the trigger is looked up
as a link name and, on an exact match, the link is posted back to the channel.
"""

# Standard library imports
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

# Local application imports
from .exceptions import GoLinkError, MalformedEvent
from .resolver import LinkEntry, resolve
from .slack_blocks import get_link_message_blocks
from .stores import LinkStore

LOGGER = logging.getLogger(__name__)

DEFAULT_TRIGGER = "go/"
TRAILING_PUNCTUATION = ".,;:!?)'\">"

# (channel, blocks, fallback text) -> None
Deliver = Callable[[str, List[Dict[str, Any]], str], None]


# ==============================================================================
# 1. Typed Envelope
# ==============================================================================

@dataclass(frozen=True)
class MessageEvent:
    type: str
    text: Optional[str] = None
    channel: Optional[str] = None
    user: Optional[str] = None
    subtype: Optional[str] = None
    bot_id: Optional[str] = None

    @property
    def is_from_bot(self) -> bool:
        return bool(self.bot_id) or self.subtype == "bot_message"


@dataclass(frozen=True)
class GenericEvent:
    """Any inner event other than `message`. Only its type is decoded."""
    type: str


@dataclass(frozen=True)
class UrlVerification:
    challenge: str


@dataclass(frozen=True)
class EventCallback:
    event: Union[MessageEvent, GenericEvent]
    team_id: Optional[str] = None
    event_id: Optional[str] = None


@dataclass(frozen=True)
class UnsupportedEnvelope:
    type: str


EventEnvelope = Union[UrlVerification, EventCallback, UnsupportedEnvelope]


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedEvent(f"Event field '{key}' must be a string")
    return value


def _required_str(data: Dict[str, Any], key: str) -> str:
    value = _optional_str(data, key)
    if value is None:
        raise MalformedEvent(f"Event field '{key}' is missing")
    return value


def parse_event_envelope(payload: Any) -> EventEnvelope:
    """
    Decodes a Slack Events API envelope.

    Returns:
        `UrlVerification` for the endpoint handshake, `EventCallback` for
        delivered events, or `UnsupportedEnvelope` for any other type.

    Raises:
        MalformedEvent: If the payload is not an object or a required key is
                        missing or has the wrong type.
    """
    if not isinstance(payload, dict):
        raise MalformedEvent("Event payload must be a JSON object")

    envelope_type = _required_str(payload, "type")

    if envelope_type == "url_verification":
        return UrlVerification(challenge=_required_str(payload, "challenge"))

    if envelope_type == "event_callback":
        inner = payload.get("event")
        if not isinstance(inner, dict):
            raise MalformedEvent("Event field 'event' is missing")
        event_type = _required_str(inner, "type")
        if event_type != "message":
            # Non-message events may carry objects under `user` or `channel`.
            return EventCallback(
                event=GenericEvent(type=event_type),
                team_id=_optional_str(payload, "team_id"),
                event_id=_optional_str(payload, "event_id"),
            )
        event = MessageEvent(
            type=event_type,
            text=_optional_str(inner, "text"),
            channel=_optional_str(inner, "channel"),
            user=_optional_str(inner, "user"),
            subtype=_optional_str(inner, "subtype"),
            bot_id=_optional_str(inner, "bot_id"),
        )
        return EventCallback(
            event=event,
            team_id=_optional_str(payload, "team_id"),
            event_id=_optional_str(payload, "event_id"),
        )

    return UnsupportedEnvelope(type=envelope_type)


# ==============================================================================
# 2. Message Trigger
# ==============================================================================

def extract_trigger_name(text: Optional[str], trigger: str = DEFAULT_TRIGGER) -> Optional[str]:
    """
    Returns the first word following the trigger in `text`, if any.

    >>> extract_trigger_name("see go/eng-wiki for details")
    'eng-wiki'
    """
    if not text or not trigger or trigger not in text:
        return None

    _, remainder = text.split(trigger, 1)
    words = remainder.split()
    if not words:
        return None
    name = words[0].rstrip(TRAILING_PUNCTUATION)
    return name or None


def handle_message_event(event: MessageEvent, store: LinkStore, deliver: Deliver,
                         trigger: str = DEFAULT_TRIGGER) -> Optional[LinkEntry]:
    """
    Posts the link named after the trigger back to the message's channel.

    Only exact name matches are posted. Delivery errors are logged and
    swallowed; the caller always acknowledges the event to Slack.

    Returns:
        The link that was delivered, or None if nothing was sent.
    """
    if event.type != "message" or event.is_from_bot or not event.channel:
        return None

    name = extract_trigger_name(event.text, trigger)
    if name is None:
        return None

    try:
        link = resolve(store, name)
    except GoLinkError as e:
        LOGGER.error(f"Could not resolve '{name}' for channel {event.channel}: {e.message}")
        return None

    if link is None:
        LOGGER.info(f"Trigger '{trigger}{name}' in {event.channel} did not match a link")
        return None

    try:
        deliver(event.channel, get_link_message_blocks(link), f"{link.name}: {link.url}")
    except Exception as e:
        LOGGER.exception(f"Failed to deliver link '{link.name}' to channel {event.channel}: {e}")
        return None

    LOGGER.info(f"Queued link '{link.name}' for channel {event.channel}")
    return link
