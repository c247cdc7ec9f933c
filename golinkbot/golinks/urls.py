# golinkbot/golinks/urls.py

"""
URL Configuration for the go-links Slack endpoints.

Slack posts to the exact URLs configured for each slash command, so the
patterns carry no trailing slash.
"""

from django.urls import path
from . import views

app_name = 'golinks'

urlpatterns = [
    path("", views.index, name="index"),

    # /command/go, /command/add, /command/edit, /command/delete, /command/list
    path("command/<slug:name>", views.slash_command, name="slash_command"),

    path("interaction", views.interactions, name="interactions"),
    path("event", views.events, name="events"),
]
