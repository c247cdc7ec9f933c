# golinkbot/golinks/resolver.py

"""
Name resolution and grouping for go-links.

A link name may carry a group prefix separated by the first '-'
(`eng-wiki` belongs to group `eng`). `/go` tries an exact match first and
falls back to every link in the queried group; `/list` buckets all links by
group, with ungrouped names collected under `others`.
"""

# Standard library imports
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

# Local application imports
from .stores import LinkStore

OTHERS_GROUP = "others"


@dataclass(frozen=True)
class LinkEntry:
    """A resolved name -> URL pair, independent of the backing store."""
    name: str
    url: str


def group_of(name: str) -> Optional[str]:
    """Returns the segment before the first '-', or None if there is no usable prefix."""
    prefix, sep, _ = name.partition("-")
    if not sep or not prefix:
        return None
    return prefix


def resolve(store: LinkStore, name: str) -> Optional[LinkEntry]:
    """Exact-match lookup of a single link."""
    if not name:
        return None
    url = store.get(name)
    if url is None:
        return None
    return LinkEntry(name=name, url=url)


def resolve_group(store: LinkStore, prefix: str) -> List[LinkEntry]:
    """Returns every link whose name's first '-' segment equals `prefix`, sorted by name."""
    if not prefix:
        return []
    return sorted(
        (LinkEntry(name=name, url=url) for name, url in store.list().items()
         if name.partition("-")[0] == prefix),
        key=lambda entry: entry.name,
    )


def group_links(links: Iterable[LinkEntry]) -> List[Tuple[str, List[LinkEntry]]]:
    """
    Buckets links by group for the list view.

    Groups are ordered lexicographically with `others` always last, and the
    links inside each group are ordered by name. A name like `others-x` lands
    in the same `others` bucket as the ungrouped names.
    """
    buckets: Dict[str, List[LinkEntry]] = {}
    for entry in links:
        buckets.setdefault(group_of(entry.name) or OTHERS_GROUP, []).append(entry)

    ordered_groups = sorted(buckets, key=lambda group: (group == OTHERS_GROUP, group))
    return [
        (group, sorted(buckets[group], key=lambda entry: entry.name))
        for group in ordered_groups
    ]


def all_links(store: LinkStore) -> List[LinkEntry]:
    return [LinkEntry(name=name, url=url) for name, url in store.list().items()]
