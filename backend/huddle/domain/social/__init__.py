"""Social domain exports."""

from . import audit, policy  # noqa: F401
from .models import RequestResolution  # noqa: F401
from .schemas import FriendshipUpdate  # noqa: F401
from .service import RelationshipService  # noqa: F401
