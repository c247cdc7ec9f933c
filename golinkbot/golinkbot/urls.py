# golinkbot/golinkbot/urls.py

"""
Root URL Configuration for the golinkbot project.

- `/admin/`: the Django admin, used to manage links directly.
- everything else: the Slack endpoints of the `golinks` app
  (`/command/<name>`, `/interaction`, `/event`).
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('golinks.urls')),
]
