"""Identity domain exports."""

from .exceptions import UserNotFound  # noqa: F401
from .models import User, UserSnapshot  # noqa: F401
from .schemas import UserPublic  # noqa: F401
from .service import IdentityService  # noqa: F401
