"""Room message domain exports."""

from .exceptions import MessageError, MessageNotFound, NotMessageAuthor, NotRoomMember  # noqa: F401
from .models import Message  # noqa: F401
from .service import MessageService  # noqa: F401
