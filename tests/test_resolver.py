"""Tests for link resolution and grouping."""

from golinks.resolver import (OTHERS_GROUP, LinkEntry, group_links, group_of, resolve,
                              resolve_group)
from golinks.stores import InMemoryLinkStore


def _store():
    return InMemoryLinkStore({
        "eng-wiki": "https://wiki.example.com",
        "eng-ci": "https://ci.example.com",
        "engineering": "https://eng.example.com",
        "meet": "https://meet.google.com",
        "hr-benefits": "https://hr.example.com/benefits",
    })


class TestGroupOf:

    def test_prefix_before_first_dash(self):
        assert group_of("eng-wiki-old") == "eng"

    def test_no_dash(self):
        assert group_of("meet") is None

    def test_leading_dash_has_no_group(self):
        assert group_of("-meet") is None


class TestResolve:

    def test_exact_match(self):
        assert resolve(_store(), "meet") == LinkEntry("meet", "https://meet.google.com")

    def test_miss(self):
        assert resolve(_store(), "eng") is None

    def test_empty_name(self):
        assert resolve(_store(), "") is None


class TestResolveGroup:

    def test_returns_group_members_sorted(self):
        names = [entry.name for entry in resolve_group(_store(), "eng")]
        assert names == ["eng-ci", "eng-wiki"]

    def test_does_not_match_longer_names_without_dash(self):
        assert "engineering" not in [entry.name for entry in resolve_group(_store(), "eng")]

    def test_unknown_group(self):
        assert resolve_group(_store(), "sales") == []


class TestGroupLinks:

    def test_groups_sorted_with_others_last(self):
        links = [LinkEntry(name, url) for name, url in _store().list().items()]
        groups = group_links(links)

        assert [group for group, _ in groups] == ["eng", "hr", OTHERS_GROUP]
        assert [entry.name for entry in groups[0][1]] == ["eng-ci", "eng-wiki"]
        assert [entry.name for entry in groups[-1][1]] == ["engineering", "meet"]

    def test_every_link_in_exactly_one_group(self):
        links = [LinkEntry(name, url) for name, url in _store().list().items()]
        grouped = [entry.name for _, entries in group_links(links) for entry in entries]
        assert sorted(grouped) == sorted(entry.name for entry in links)

    def test_others_prefix_merges_with_ungrouped(self):
        groups = group_links([LinkEntry("others-x", "https://x.io"), LinkEntry("solo", "https://s.io")])
        assert groups == [(OTHERS_GROUP, [LinkEntry("others-x", "https://x.io"), LinkEntry("solo", "https://s.io")])]

    def test_empty(self):
        assert group_links([]) == []
