# golinkbot/golinks/stores.py

"""
Link Store backends.

The command handlers never touch persistence directly. They receive a
`LinkStore` and only use its five operations, so the same handler code runs
against the database table, a flat JSON file, or an in-memory dict.

Backends:
- `DatabaseLinkStore`: the `url` table through the Django ORM (default).
- `JsonFileLinkStore`: a JSON array of `{"name", "url"}` objects on disk.
- `InMemoryLinkStore`: a per-instance dict, for tests and scripts.

The active backend is chosen by the `GOLINKS_STORE_BACKEND` setting and
built with `get_link_store()`.
"""

# Standard library imports
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

# Django imports
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError, IntegrityError, transaction

# Local application imports
from .exceptions import LinkExists, LinkNotFound, StoreError
from .models import Link

LOGGER = logging.getLogger(__name__)


class LinkStore(ABC):
    """Key-value interface over name -> URL pairs."""

    @abstractmethod
    def insert(self, name: str, url: str) -> None:
        """Stores a new link. Raises LinkExists if the name is taken."""

    @abstractmethod
    def update(self, name: str, url: str) -> None:
        """Replaces the URL of a link. Raises LinkNotFound if absent."""

    @abstractmethod
    def delete(self, name: str) -> None:
        """Removes a link. Raises LinkNotFound if absent."""

    @abstractmethod
    def get(self, name: str) -> Optional[str]:
        """Returns the URL stored under `name`, or None."""

    @abstractmethod
    def list(self) -> Dict[str, str]:
        """Returns every stored link as a name -> URL mapping."""


# ==============================================================================
# 1. Database Backend
# ==============================================================================

class DatabaseLinkStore(LinkStore):
    """Stores links in the `url` table. Uniqueness is enforced by the database."""

    def insert(self, name: str, url: str) -> None:
        try:
            with transaction.atomic():
                Link.objects.create(name=name, url=url)
        except IntegrityError:
            raise LinkExists(f"The command name '{name}' already exists")
        except DatabaseError as e:
            LOGGER.exception(f"Database error inserting link '{name}': {e}")
            raise StoreError("Failed to save your command, please try again later") from e

    def update(self, name: str, url: str) -> None:
        try:
            updated = Link.objects.filter(name=name).update(url=url)
        except DatabaseError as e:
            LOGGER.exception(f"Database error updating link '{name}': {e}")
            raise StoreError("Failed to save your command, please try again later") from e
        if not updated:
            raise LinkNotFound(f"The command name '{name}' was not found")

    def delete(self, name: str) -> None:
        try:
            deleted, _ = Link.objects.filter(name=name).delete()
        except DatabaseError as e:
            LOGGER.exception(f"Database error deleting link '{name}': {e}")
            raise StoreError("Failed to save your command, please try again later") from e
        if not deleted:
            raise LinkNotFound(f"The command name '{name}' was not found")

    def get(self, name: str) -> Optional[str]:
        try:
            return Link.objects.filter(name=name).values_list('url', flat=True).first()
        except DatabaseError as e:
            LOGGER.exception(f"Database error loading link '{name}': {e}")
            raise StoreError("Could not load commands, please try again later") from e

    def list(self) -> Dict[str, str]:
        try:
            return dict(Link.objects.values_list('name', 'url'))
        except DatabaseError as e:
            LOGGER.exception(f"Database error listing links: {e}")
            raise StoreError("Could not load commands, please try again later") from e


# ==============================================================================
# 2. JSON File Backend
# ==============================================================================

# One lock per resolved file path, shared by every store instance in the process.
_FILE_LOCKS: Dict[str, threading.Lock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _FILE_LOCKS_GUARD:
        return _FILE_LOCKS.setdefault(key, threading.Lock())


class JsonFileLinkStore(LinkStore):
    """
    Stores links as a JSON array file: `[{"name": ..., "url": ...}, ...]`.

    A missing file is treated as an empty store. Each write rewrites the file
    through a temporary file and an atomic rename.
    """

    def __init__(self, path):
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def _load(self) -> List[Dict[str, str]]:
        if not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            LOGGER.exception(f"Could not read link file {self.path}: {e}")
            raise StoreError("Could not load commands, please try again later") from e
        if data is None:
            return []
        if not isinstance(data, list):
            raise StoreError("Could not load commands, please try again later")
        # Entries without a string name and url are skipped.
        return [
            entry for entry in data
            if isinstance(entry, dict)
            and isinstance(entry.get("name"), str)
            and isinstance(entry.get("url"), str)
        ]

    def _save(self, entries: List[Dict[str, str]]) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # A unique temp file per write, so concurrent writers never share one.
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent,
                prefix=f".{self.path.name}.", suffix=".tmp", delete=False,
            ) as fh:
                tmp_name = fh.name
                json.dump(entries, fh, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            LOGGER.exception(f"Could not write link file {self.path}: {e}")
            raise StoreError("Failed to save your command, please try again later") from e

    def insert(self, name: str, url: str) -> None:
        with self._lock:
            entries = self._load()
            if any(entry["name"] == name for entry in entries):
                raise LinkExists(f"The command name '{name}' already exists")
            entries.append({"name": name, "url": url})
            self._save(entries)

    def update(self, name: str, url: str) -> None:
        with self._lock:
            entries = self._load()
            for entry in entries:
                if entry["name"] == name:
                    entry["url"] = url
                    break
            else:
                raise LinkNotFound(f"The command name '{name}' was not found")
            self._save(entries)

    def delete(self, name: str) -> None:
        with self._lock:
            entries = self._load()
            remaining = [entry for entry in entries if entry["name"] != name]
            if len(remaining) == len(entries):
                raise LinkNotFound(f"The command name '{name}' was not found")
            self._save(remaining)

    def get(self, name: str) -> Optional[str]:
        with self._lock:
            for entry in self._load():
                if entry["name"] == name:
                    return entry["url"]
        return None

    def list(self) -> Dict[str, str]:
        with self._lock:
            return {entry["name"]: entry["url"] for entry in self._load()}


# ==============================================================================
# 3. In-Memory Backend
# ==============================================================================

class InMemoryLinkStore(LinkStore):
    """Holds links in a dict owned by this instance. Nothing is persisted."""

    def __init__(self, links: Optional[Dict[str, str]] = None):
        self._links: Dict[str, str] = dict(links or {})
        self._lock = threading.Lock()

    def insert(self, name: str, url: str) -> None:
        with self._lock:
            if name in self._links:
                raise LinkExists(f"The command name '{name}' already exists")
            self._links[name] = url

    def update(self, name: str, url: str) -> None:
        with self._lock:
            if name not in self._links:
                raise LinkNotFound(f"The command name '{name}' was not found")
            self._links[name] = url

    def delete(self, name: str) -> None:
        with self._lock:
            if self._links.pop(name, None) is None:
                raise LinkNotFound(f"The command name '{name}' was not found")

    def get(self, name: str) -> Optional[str]:
        return self._links.get(name)

    def list(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._links)


# ==============================================================================
# 4. Backend Selection
# ==============================================================================

def get_link_store() -> LinkStore:
    """
    Builds the store configured by `GOLINKS_STORE_BACKEND`.

    Raises:
        ImproperlyConfigured: If the backend name is unknown.
    """
    backend = getattr(settings, "GOLINKS_STORE_BACKEND", "database")

    if backend == "database":
        return DatabaseLinkStore()
    if backend == "json":
        return JsonFileLinkStore(getattr(settings, "GOLINKS_JSON_FILE", "commands.json"))
    raise ImproperlyConfigured(f"Unknown GOLINKS_STORE_BACKEND '{backend}'")
