from .exceptions import HuddleError  # noqa: F401
from .schemas import CamelModel  # noqa: F401
