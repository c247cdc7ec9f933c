# golinkbot/golinks/slack_blocks.py

"""
Slack Block Kit Construction Utilities

This module builds the JSON structures for the messages the bot sends back
to Slack: a single link with a "Go" button, the links of one group, and the
grouped overview returned by `/list`.

Keeping block generation here leaves `commands.py` focused on validation and
lookups.
"""

# Standard library imports
from typing import Any, Dict, List, Sequence, Tuple

# Local application imports
from .resolver import LinkEntry

# Slack rejects messages carrying more than 50 blocks.
MAX_BLOCKS = 50
# Per-field text limits enforced by Slack.
MAX_HEADER_TEXT = 150
MAX_SECTION_TEXT = 3000
MAX_BUTTON_VALUE = 2000


def _title(text: str) -> str:
    return text.title()


def _clip(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit - 1] + "\u2026"


def get_link_block(link: LinkEntry) -> Dict[str, Any]:
    """
    Generates a section block for one link.

    The link name is shown title-cased alongside a "Go" button that opens the
    stored URL directly.
    """
    return {
        "type": "section",
        "text": {"type": "mrkdwn", "text": _clip(f"*{_title(link.name)}*\n<{link.url}>", MAX_SECTION_TEXT)},
        "accessory": {
            "type": "button",
            "text": {"type": "plain_text", "text": "Go", "emoji": True},
            "value": link.name[:MAX_BUTTON_VALUE],
            "url": link.url,
            "action_id": "go_link",
        },
    }


def get_link_message_blocks(link: LinkEntry) -> List[Dict[str, Any]]:
    return [get_link_block(link)]


def get_group_header_blocks(group: str) -> List[Dict[str, Any]]:
    """A header followed by a divider, used to title each group."""
    return [
        {"type": "header", "text": {"type": "plain_text", "text": _clip(_title(group), MAX_HEADER_TEXT), "emoji": True}},
        {"type": "divider"},
    ]


def get_group_message_blocks(group: str, links: Sequence[LinkEntry]) -> List[Dict[str, Any]]:
    """Builds the reply to `/go <group>` when the query matches a group of links."""
    blocks = [{
        "type": "section",
        "text": {"type": "mrkdwn", "text": _clip(f"Multiple urls found in *{group}*:", MAX_SECTION_TEXT)},
    }]
    blocks.extend(get_group_header_blocks(group))
    blocks.extend(get_link_block(link) for link in links)
    return _truncate(blocks, len(links))


def get_list_message_blocks(groups: Sequence[Tuple[str, Sequence[LinkEntry]]]) -> List[Dict[str, Any]]:
    """
    Builds the `/list` overview: one titled block list per group.

    Args:
        groups: Ordered (group name, links) pairs as produced by `group_links`.

    Returns:
        A list of blocks, truncated to Slack's per-message limit. When links
        are left out, the last block says how many.
    """
    blocks: List[Dict[str, Any]] = []
    total = 0
    for group, links in groups:
        blocks.extend(get_group_header_blocks(group))
        blocks.extend(get_link_block(link) for link in links)
        total += len(links)
    return _truncate(blocks, total)


def _truncate(blocks: List[Dict[str, Any]], total_links: int) -> List[Dict[str, Any]]:
    if len(blocks) <= MAX_BLOCKS:
        return blocks

    kept = blocks[:MAX_BLOCKS - 1]
    # Trailing headers/dividers without links under them look broken.
    while kept and kept[-1]["type"] in ("header", "divider"):
        kept.pop()
    shown = sum(1 for block in kept if block.get("accessory", {}).get("action_id") == "go_link")
    kept.append({
        "type": "context",
        "elements": [{
            "type": "mrkdwn",
            "text": f"...and {total_links - shown} more. Use `/go <group>` to see a single group.",
        }],
    })
    return kept
