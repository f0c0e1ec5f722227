"""Domain-level exceptions for notifications."""

from __future__ import annotations

from huddle.domain.common.exceptions import HuddleError


class NotificationError(HuddleError):
    """Base class for notification errors."""


class NotificationNotFoundOrForbidden(NotificationError):
    reason = "not_found_or_forbidden"
    message = "Notification not found or access denied."
