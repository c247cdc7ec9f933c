# golinkbot/golinks/models.py

"""
Database Models for the go-links app.

A single table backs the database store: one row per named shortcut URL.
The table keeps the historical name `url` so existing deployments can point
the app at their database unchanged.
"""

# Django imports
from django.db import models


class Link(models.Model):
    """
    A named shortcut URL ("go-link").

    Attributes:
        name (str): The unique shortcut name users type after `/go`.
        url (str): The http(s) target of the shortcut.
        created_at (datetime): When the link was first added.
        updated_at (datetime): When the link was last edited.
    """
    name = models.TextField(unique=True, help_text="Shortcut name, e.g. 'eng-wiki'")
    url = models.TextField(help_text="Target URL, must start with http:// or https://")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "url"
        verbose_name = "Link"
        verbose_name_plural = "Links"
        ordering = ['name']

    def __str__(self) -> str:
        return f"{self.name} -> {self.url}"

