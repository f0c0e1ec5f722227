"""Outcome labels for the friend-request state machine."""

from __future__ import annotations

from enum import Enum


class RequestResolution(str, Enum):
	"""How a pending request between two users was closed."""

	ACCEPTED = "accepted"
	DECLINED = "declined"
	CANCELLED = "cancelled"


RESOLUTION_MESSAGES = {
	RequestResolution.ACCEPTED: "Friend request accepted.",
	RequestResolution.DECLINED: "Friend request declined.",
	RequestResolution.CANCELLED: "Friend request canceled.",
}
