"""Domain-level exceptions for friend requests & friendships."""

from __future__ import annotations

from huddle.domain.common.exceptions import HuddleError


class SocialError(HuddleError):
	"""Base class for social feature errors."""


class RequestConflict(SocialError):
	"""The users' current relationship state does not allow the operation."""

	reason = "conflict"


class SelfRequest(RequestConflict):
	reason = "self_request"
	message = "You cannot send a friend request to yourself."


class AlreadyFriends(RequestConflict):
	reason = "already_friends"
	message = "You are already friends."


class AlreadyRequested(RequestConflict):
	reason = "already_requested"
	message = "Friend request already sent."


class ReciprocalPending(RequestConflict):
	reason = "reciprocal_pending"
	message = "This user has already sent you a friend request. Please check your pending requests."


class NoPendingRequest(RequestConflict):
	reason = "no_pending_request"
	message = "No pending friend request found from this user."


class NoActiveRequest(RequestConflict):
	reason = "no_active_request"
	message = "No active friend request found to manage."


class NotFriends(RequestConflict):
	reason = "not_friends"
	message = "This user is not in your friends list."
