"""Notification domain exports."""

from .exceptions import NotificationNotFoundOrForbidden  # noqa: F401
from .models import FRIENDS_LINK, Notification, NotificationType, room_link  # noqa: F401
from .service import NotificationService  # noqa: F401
