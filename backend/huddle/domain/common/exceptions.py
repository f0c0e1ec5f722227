"""Base error type shared by the domain packages."""

from __future__ import annotations


class HuddleError(Exception):
	"""Domain failure carrying a stable machine-readable ``reason``.

	``reason`` is the snake_case kind clients switch on; ``message`` is the
	human-readable text shown in a toast or banner.
	"""

	reason: str = "unknown"
	message: str = "Something went wrong."

	def __init__(self, message: str | None = None, *, reason: str | None = None) -> None:
		if reason:
			self.reason = reason
		if message:
			self.message = message
		super().__init__(self.message)

	def to_dict(self) -> dict[str, str]:
		return {"detail": self.reason, "message": self.message}
