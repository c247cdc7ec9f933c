# golinkbot/golinks/views.py

"""
Main Views for the go-links Slack bot.

This module is the HTTP layer: it receives Slack webhooks, pulls the fields
out of each request, hands them to the command or event handlers together
with the configured link store, and turns the result into a response.

The main entry points are:
- `slash_command`: `/command/<name>` for go, add, edit, delete and list.
- `interactions`:  `/interaction`, acknowledges button clicks.
- `events`:        `/event`, the Slack Events API endpoint.

Slack treats any non-200 reply to a slash command as a failure and shows the
user a generic error, so command outcomes are always reported with a 200.
"""

# Standard library imports
import json
import logging

# Django imports
from django.conf import settings
from django.http import HttpRequest, HttpResponse, HttpResponseBadRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

# Local application imports
from .commands import COMMAND_HANDLERS, CommandResult
from .events import (EventCallback, UrlVerification, handle_message_event,
                     parse_event_envelope)
from .exceptions import MalformedEvent
from .stores import get_link_store
from .tasks import deliver_link_message
from .utils import slack_verification_required

LOGGER = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


def _reply(result: CommandResult) -> HttpResponse:
    """Plain strings go back as text, block payloads as JSON."""
    if isinstance(result, dict):
        return JsonResponse(result)
    return HttpResponse(result, content_type="text/plain; charset=utf-8")


# ==============================================================================
# 1. Health / Landing
# ==============================================================================

@require_GET
def index(request: HttpRequest) -> HttpResponse:
    return HttpResponse("Welcome to golinkbot!", content_type="text/plain; charset=utf-8")


# ==============================================================================
# 2. Slack Entry Points (Webhook Receivers)
# ==============================================================================

@csrf_exempt
@require_POST
@slack_verification_required
def slash_command(request: HttpRequest, name: str) -> HttpResponse:
    """
    Routes `/command/<name>` to the matching command handler.

    The slash command string (`command`) and its free text (`text`) come from
    the form-encoded Slack payload.
    """
    handler = COMMAND_HANDLERS.get(name)
    if handler is None:
        LOGGER.warning(f"Unhandled slash command endpoint: {name}")
        return HttpResponse(f"Command '{name}' is not recognized.", status=400)

    command = request.POST.get("command", "")
    text = request.POST.get("text", "")
    user = request.POST.get("user_name") or request.POST.get("user_id") or "unknown"
    LOGGER.info(f"Slash command '{command} {text}' received from {user}")

    store = get_link_store()
    try:
        return _reply(handler(command, text, store))
    except Exception as e:
        LOGGER.exception(f"Unexpected error in {name} command: {e}")
        return HttpResponse(UNEXPECTED_ERROR_MESSAGE, content_type="text/plain; charset=utf-8")


@csrf_exempt
@require_POST
@slack_verification_required
def interactions(request: HttpRequest) -> HttpResponse:
    """Acknowledges interactive payloads, e.g. clicks on a link's "Go" button."""
    return HttpResponse("ok", content_type="text/plain; charset=utf-8")


@csrf_exempt
@require_POST
@slack_verification_required
def events(request: HttpRequest) -> HttpResponse:
    """
    Handles the Slack Events API.

    `url_verification` handshakes echo the challenge. `message` events are
    scanned for the inline trigger; matching links are queued for delivery.
    Every other well-formed envelope is acknowledged and ignored.
    """
    try:
        envelope = parse_event_envelope(json.loads(request.body or b"null"))
    except (ValueError, MalformedEvent) as e:
        LOGGER.warning(f"Rejected malformed event payload: {e}")
        return HttpResponseBadRequest("Malformed event payload.")

    if isinstance(envelope, UrlVerification):
        return JsonResponse({"challenge": envelope.challenge})

    if isinstance(envelope, EventCallback) and envelope.event.type == "message":
        store = get_link_store()
        try:
            handle_message_event(
                envelope.event,
                store,
                deliver_link_message,
                trigger=getattr(settings, "GOLINKS_EVENT_TRIGGER", "go/"),
            )
        except Exception as e:
            LOGGER.exception(f"Unexpected error handling message event {envelope.event_id}: {e}")

    return HttpResponse("ok", content_type="text/plain; charset=utf-8")
