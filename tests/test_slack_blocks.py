"""Tests for the Block Kit builders' Slack field limits."""

from golinks.resolver import LinkEntry
from golinks.slack_blocks import (MAX_HEADER_TEXT, MAX_SECTION_TEXT, get_group_message_blocks,
                                  get_link_block, get_list_message_blocks)


def test_long_group_name_header_is_clipped():
    group = "g" * 200
    blocks = get_list_message_blocks([(group, [LinkEntry(f"{group}-x", "https://x.example.com")])])

    header = blocks[0]["text"]["text"]
    assert len(header) <= MAX_HEADER_TEXT
    assert header.startswith("G" * 10)


def test_long_url_section_text_is_clipped():
    url = "https://example.com/" + "a" * 4000
    block = get_link_block(LinkEntry("docs", url))

    assert len(block["text"]["text"]) <= MAX_SECTION_TEXT
    assert block["accessory"]["url"] == url


def test_long_group_query_intro_is_clipped():
    group = "q" * 3100
    blocks = get_group_message_blocks(group, [LinkEntry(f"{group}-x", "https://x.example.com")])

    assert len(blocks[0]["text"]["text"]) <= MAX_SECTION_TEXT
    assert len(blocks[1]["text"]["text"]) <= MAX_HEADER_TEXT


def test_short_fields_are_unchanged():
    block = get_link_block(LinkEntry("eng-wiki", "https://wiki.example.com"))

    assert block["text"]["text"] == "*Eng-Wiki*\n<https://wiki.example.com>"
