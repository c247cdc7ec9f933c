# golinkbot/golinks/utils.py

"""
Security Utilities for the go-links Slack endpoints.

Every webhook Slack sends is signed with the app's signing secret. The view
decorator here checks that signature, so forged or replayed requests never
reach the command handlers.
"""

# Standard library imports
import hashlib
import hmac
import logging
import time
from functools import wraps

# Django imports
from django.conf import settings
from django.http import HttpRequest, HttpResponseForbidden

logger = logging.getLogger(__name__)

# Requests older than this many seconds are rejected as possible replays.
SIGNATURE_MAX_AGE_SECONDS = 60 * 5


def compute_slack_signature(signing_secret: str, timestamp: str, body: bytes) -> str:
    """Returns the `v0=` signature Slack sends in `X-Slack-Signature` for this body."""
    sig_basestring = f"v0:{timestamp}:".encode('utf-8') + body
    return "v0=" + hmac.new(
        key=signing_secret.encode('utf-8'),
        msg=sig_basestring,
        digestmod=hashlib.sha256
    ).hexdigest()


def slack_verification_required(view_func):
    """
    A Django view decorator to verify that an incoming request is from Slack.

    It follows Slack's request signing protocol:
    1.  **Timestamp Check:** `X-Slack-Request-Timestamp` must be within five
        minutes of the current time.
    2.  **Signature Generation:** HMAC-SHA256 over `v0:{timestamp}:{raw body}`
        keyed with `SLACK_SIGNING_SECRET`.
    3.  **HMAC Comparison:** constant-time comparison against `X-Slack-Signature`.

    A failed check returns `HttpResponseForbidden` (403). Setting
    `SLACK_VERIFY_REQUESTS = False` skips the check for local development.
    """
    @wraps(view_func)
    def wrapper(request: HttpRequest, *args, **kwargs):
        if not getattr(settings, "SLACK_VERIFY_REQUESTS", True):
            return view_func(request, *args, **kwargs)

        try:
            slack_signature = request.headers.get("X-Slack-Signature")
            timestamp = request.headers.get("X-Slack-Request-Timestamp")

            if not slack_signature or not timestamp:
                logger.warning("Missing Slack signature or timestamp headers.")
                return HttpResponseForbidden("Missing required Slack headers.")

            if abs(time.time() - int(timestamp)) > SIGNATURE_MAX_AGE_SECONDS:
                logger.warning("Slack request timestamp is too old.")
                return HttpResponseForbidden("Request timestamp is too old.")

            signing_secret = getattr(settings, "SLACK_SIGNING_SECRET", None)
            if not signing_secret:
                logger.error("SLACK_SIGNING_SECRET is not configured.")
                return HttpResponseForbidden("Server configuration error.")

            expected = compute_slack_signature(signing_secret, timestamp, request.body)
            if hmac.compare_digest(expected, slack_signature):
                return view_func(request, *args, **kwargs)

            logger.warning("Slack signature verification failed. Mismatch.")
            return HttpResponseForbidden("Slack signature verification failed.")

        except (ValueError, TypeError) as e:
            logger.error(f"Error during Slack verification: {e}")
            return HttpResponseForbidden("Invalid request format.")

    return wrapper
