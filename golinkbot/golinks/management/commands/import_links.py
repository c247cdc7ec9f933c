# golinkbot/golinks/management/commands/import_links.py

"""
Imports links from a JSON array file into the configured store.

The file uses the same shape as the JSON file backend,
`[{"name": "meet", "url": "https://meet.google.com"}, ...]`, which makes this
the migration path from a file-backed deployment to the database.

Usage:
    python manage.py import_links commands.json
"""

# Standard library imports
import json
import logging

# Django imports
from django.core.management.base import BaseCommand, CommandError

# Local application imports
from golinks.exceptions import LinkExists
from golinks.stores import get_link_store
from golinks.validators import validate_url

LOGGER = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Import go-links from a JSON array of {name, url} objects."

    def add_arguments(self, parser):
        parser.add_argument("path", help="Path to the JSON file to import.")

    def handle(self, *args, **options):
        path = options["path"]
        try:
            with open(path, "r", encoding="utf-8") as fh:
                entries = json.load(fh)
        except (OSError, ValueError) as e:
            raise CommandError(f"Could not read {path}: {e}")

        if not isinstance(entries, list):
            raise CommandError(f"{path} must contain a JSON array of links.")

        store = get_link_store()
        imported = skipped = invalid = 0

        for entry in entries:
            name = entry.get("name") if isinstance(entry, dict) else None
            url = entry.get("url") if isinstance(entry, dict) else None
            if not name or not validate_url(url or ""):
                invalid += 1
                self.stderr.write(f"Invalid entry skipped: {entry!r}")
                continue
            try:
                store.insert(name, url)
            except LinkExists:
                skipped += 1
                continue
            imported += 1

        LOGGER.info(f"Imported {imported} links from {path} ({skipped} existing, {invalid} invalid)")
        self.stdout.write(self.style.SUCCESS(
            f"Imported {imported} links ({skipped} already existed, {invalid} invalid)."
        ))
