# golinkbot/golinks/tasks.py

"""
Asynchronous Background Tasks for the go-links app.

Slack expects the Events API endpoint to acknowledge within three seconds, so
posting the link message happens in a Celery worker instead of the request.
Delivery is attempted exactly once: a failed post is logged and dropped.

Tasks defined here are discovered by the Celery instance in
`golinkbot/celery.py`.
"""

# Standard library imports
import logging
from typing import Any, Dict, List, Optional

# Django imports
from django.conf import settings

# Third-party imports
from celery import shared_task
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

# --- Initialization ---
SLACK_CLIENT = WebClient(token=settings.SLACK_BOT_TOKEN)
LOGGER = logging.getLogger(__name__)


@shared_task(max_retries=0, ignore_result=True)
def post_link_message(channel: str, blocks: List[Dict[str, Any]], text: Optional[str] = None) -> bool:
    """
    Posts a link message to a Slack channel.

    Args:
        channel: The channel ID the triggering message came from.
        blocks: The Block Kit blocks describing the link.
        text: Plain-text fallback shown in notifications.

    Returns:
        True if Slack accepted the message, False otherwise.
    """
    if not settings.SLACK_BOT_TOKEN:
        LOGGER.error(f"SLACK_BOT_TOKEN is not set; dropping link message for channel {channel}.")
        return False

    try:
        SLACK_CLIENT.chat_postMessage(channel=channel, blocks=blocks, text=text or "")
    except SlackApiError as e:
        LOGGER.exception(f"Slack API error posting link message to channel {channel}: {e.response['error']}")
        return False

    LOGGER.info(f"Posted link message to channel {channel}")
    return True


def deliver_link_message(channel: str, blocks: List[Dict[str, Any]], text: str) -> None:
    """Queues `post_link_message`. Used as the event handler's delivery callback."""
    post_link_message.delay(channel, blocks, text)
