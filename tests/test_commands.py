"""Tests for the slash command handlers, run against every store backend."""

import pytest

from conftest import link_names
from golinks.commands import (COMMAND_HANDLERS, add_command, delete_command, edit_command,
                              go_command, list_command)
from golinks.exceptions import StoreError
from golinks.slack_blocks import MAX_BLOCKS
from golinks.stores import InMemoryLinkStore


class TestCommandPrefix:

    @pytest.mark.parametrize("name", sorted(COMMAND_HANDLERS))
    @pytest.mark.parametrize("command", ["go", "add", "", "  "])
    def test_every_handler_rejects_bad_prefix(self, memory_store, name, command):
        memory_store.insert("meet", "https://meet.google.com")
        result = COMMAND_HANDLERS[name](command, "meet https://meet.google.com", memory_store)

        assert isinstance(result, str)
        assert result.startswith("Please provide a valid command")
        assert memory_store.list() == {"meet": "https://meet.google.com"}


class TestAddThenGo:

    def test_exact_match_returns_the_url(self, store):
        assert add_command("/add", "eng-wiki https://wiki.example.com", store) == \
            "eng-wiki added with URL https://wiki.example.com"

        result = go_command("/go", "eng-wiki", store)

        assert len(result["blocks"]) == 1
        assert result["blocks"][0]["accessory"]["url"] == "https://wiki.example.com"
        assert "Eng-Wiki" in result["blocks"][0]["text"]["text"]

    def test_group_query_returns_group_list(self, store):
        add_command("/add", "eng-wiki https://wiki.example.com", store)
        add_command("/add", "eng-ci https://ci.example.com", store)
        add_command("/add", "meet https://meet.google.com", store)

        result = go_command("/go", "eng", store)

        assert link_names(result["blocks"]) == ["eng-ci", "eng-wiki"]

    def test_not_found_suggests_list(self, store):
        result = go_command("/go", "nosuchname", store)

        assert "No command found with the name 'nosuchname'" in result
        assert "/list" in result

    def test_empty_text_shows_usage(self, store):
        assert "ex: /go meet" in go_command("/go", "  ", store)


class TestAdd:

    def test_duplicate_is_rejected_and_not_overwritten(self, store):
        add_command("/add", "eng-wiki https://wiki.example.com", store)

        result = add_command("/add", "eng-wiki https://other.example.com", store)

        assert "already exists" in result
        assert store.get("eng-wiki") == "https://wiki.example.com"

    def test_invalid_url(self, store):
        assert add_command("/add", "meet ftp://meet.google.com", store) == "Url is not valid"
        assert store.list() == {}

    def test_missing_url(self, store):
        result = add_command("/add", "meet", store)

        assert "text must contain a name and a URL" in result
        assert store.list() == {}


class TestEdit:

    def test_updates_existing(self, store):
        add_command("/add", "meet https://meet.google.com", store)

        assert edit_command("/edit", "meet https://zoom.us/j/1", store) == "Updated Successfully"
        assert store.get("meet") == "https://zoom.us/j/1"

    def test_absent_name(self, store):
        result = edit_command("/edit", "meet https://zoom.us/j/1", store)

        assert "was not found" in result
        assert store.list() == {}

    def test_invalid_url_keeps_old_value(self, store):
        add_command("/add", "meet https://meet.google.com", store)

        assert edit_command("/edit", "meet zoom", store) == "Url is not valid"
        assert store.get("meet") == "https://meet.google.com"


class TestDelete:

    def test_deletes_existing(self, store):
        add_command("/add", "meet https://meet.google.com", store)

        assert delete_command("/delete", "meet", store) == "Deleted Successfully"
        assert store.get("meet") is None

    def test_absent_name_leaves_store_unchanged(self, store):
        add_command("/add", "meet https://meet.google.com", store)

        result = delete_command("/delete", "nosuchname", store)

        assert "not found" in result
        assert store.list() == {"meet": "https://meet.google.com"}


class TestList:

    def test_empty_store(self, store):
        assert list_command("/list", "", store).startswith("No commands found yet")

    def test_every_name_in_exactly_one_group(self, store):
        for text in ("eng-wiki https://wiki.example.com", "eng-ci https://ci.example.com",
                     "hr-payroll https://hr.example.com", "meet https://meet.google.com"):
            add_command("/add", text, store)

        blocks = list_command("/list", "", store)["blocks"]

        headers = [block["text"]["text"] for block in blocks if block["type"] == "header"]
        assert headers == ["Eng", "Hr", "Others"]
        assert link_names(blocks) == ["eng-ci", "eng-wiki", "hr-payroll", "meet"]

    def test_large_list_is_truncated(self, memory_store):
        for i in range(60):
            memory_store.insert(f"team{i:02d}-link", f"https://example.com/{i}")

        blocks = list_command("/list", "", memory_store)["blocks"]

        assert len(blocks) <= MAX_BLOCKS
        assert blocks[-1]["type"] == "context"
        shown = len(link_names(blocks))
        assert f"and {60 - shown} more" in blocks[-1]["elements"][0]["text"]


class TestStoreFailures:

    class UnwritableStore(InMemoryLinkStore):
        """Reads work; every write fails."""

        def insert(self, name, url):
            raise StoreError("Failed to save your command, please try again later")

        def update(self, name, url):
            raise StoreError("Failed to save your command, please try again later")

        def delete(self, name):
            raise StoreError("Failed to save your command, please try again later")

    class UnreadableStore(InMemoryLinkStore):
        def get(self, name):
            raise StoreError("Could not load commands, please try again later")

        def list(self):
            raise StoreError("Could not load commands, please try again later")

    class UnlistableStore(InMemoryLinkStore):
        def list(self):
            raise StoreError("Could not load commands, please try again later")

    def test_add_reports_try_again_later(self):
        result = add_command("/add", "meet https://meet.google.com", self.UnwritableStore())
        assert result == "Failed to save your command, please try again later"

    def test_edit_reports_try_again_later(self):
        store = self.UnwritableStore({"meet": "https://meet.google.com"})

        result = edit_command("/edit", "meet https://zoom.us/j/1", store)

        assert result == "Failed to save your command, please try again later"
        assert store.get("meet") == "https://meet.google.com"

    def test_delete_reports_try_again_later(self):
        store = self.UnwritableStore({"meet": "https://meet.google.com"})

        result = delete_command("/delete", "meet", store)

        assert result == "Failed to save your command, please try again later"
        assert store.get("meet") == "https://meet.google.com"

    def test_go_reports_try_again_later_when_lookup_fails(self):
        result = go_command("/go", "meet", self.UnreadableStore())
        assert result == "Could not load commands, please try again later"

    def test_go_reports_try_again_later_when_group_scan_fails(self):
        result = go_command("/go", "eng", self.UnlistableStore())
        assert result == "Could not load commands, please try again later"

    def test_list_reports_try_again_later(self):
        result = list_command("/list", "", self.UnreadableStore())
        assert result == "Could not load commands, please try again later"
