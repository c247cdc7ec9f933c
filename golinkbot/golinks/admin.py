# golinkbot/golinks/admin.py

"""
Admin Panel Configuration for the go-links app.

Lets workspace admins browse, search and fix links without going through
Slack. Edits made here bypass the slash command validation, so the form
re-checks the URL.
"""

# Django imports
from django import forms
from django.contrib import admin

# Local application imports
from .models import Link
from .resolver import OTHERS_GROUP, group_of
from .validators import validate_url


class LinkAdminForm(forms.ModelForm):
    class Meta:
        model = Link
        fields = ('name', 'url')

    def clean_name(self) -> str:
        name = self.cleaned_data['name'].strip()
        if not name or len(name.split()) != 1:
            raise forms.ValidationError("Names must be a single word, e.g. 'eng-wiki'.")
        return name

    def clean_url(self) -> str:
        url = self.cleaned_data['url'].strip()
        if not validate_url(url):
            raise forms.ValidationError("URLs must start with http:// or https://.")
        return url


@admin.register(Link)
class LinkAdmin(admin.ModelAdmin):
    """
    Admin configuration for the Link model.

    Shows the group each link is listed under by `/list`.
    """
    form = LinkAdminForm
    list_display = ('name', 'url', 'group', 'updated_at')
    search_fields = ('name', 'url')
    ordering = ('name',)
    readonly_fields = ('created_at', 'updated_at')

    def group(self, obj: Link) -> str:
        return group_of(obj.name) or OTHERS_GROUP
    group.short_description = 'Group'
