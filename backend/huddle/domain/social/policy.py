"""Guard checks and edge mutations for friend requests & friendships.

Everything here operates on two in-memory ``User`` models and never touches
storage; the service wraps these calls in a store transaction.
"""

from __future__ import annotations

from huddle.domain.identity.exceptions import UserNotFound
from huddle.domain.identity.models import User, UserSnapshot, add_edge, drop_edge
from huddle.domain.social.exceptions import (
	AlreadyFriends,
	AlreadyRequested,
	NoActiveRequest,
	NoPendingRequest,
	NotFriends,
	ReciprocalPending,
	SelfRequest,
)
from huddle.domain.social.models import RequestResolution


def guard_not_self(user_id: str, target_id: str) -> None:
	if str(user_id) == str(target_id):
		raise SelfRequest()


def require_pair(snapshot: UserSnapshot, user_id: str, other_id: str) -> tuple[User, User]:
	user = snapshot.get(user_id)
	other = snapshot.get(other_id)
	if user is None or other is None:
		raise UserNotFound()
	return user, other


def ensure_can_send(requester: User, recipient: User) -> None:
	if requester.is_friend(recipient.id):
		raise AlreadyFriends()
	if requester.has_sent_to(recipient.id):
		raise AlreadyRequested()
	if requester.has_pending_from(recipient.id):
		raise ReciprocalPending(
			f"{recipient.username} has already sent you a friend request. Please check your pending requests."
		)


def apply_send(requester: User, recipient: User) -> None:
	add_edge(requester.sent_requests, recipient.id)
	add_edge(recipient.pending_received, requester.id)


def _clear_pending(user_a: User, user_b: User) -> None:
	"""Remove the pending edge between two users in both directions."""
	drop_edge(user_a.sent_requests, user_b.id)
	drop_edge(user_a.pending_received, user_b.id)
	drop_edge(user_b.sent_requests, user_a.id)
	drop_edge(user_b.pending_received, user_a.id)


def apply_accept(requester: User, recipient: User) -> None:
	if not recipient.has_pending_from(requester.id):
		raise NoPendingRequest()
	add_edge(recipient.friend_ids, requester.id)
	add_edge(requester.friend_ids, recipient.id)
	_clear_pending(requester, recipient)


def apply_decline_or_cancel(actor: User, other: User) -> RequestResolution:
	"""Close a pending request between ``actor`` and ``other``.

	A request the actor received is declined, one the actor sent is
	cancelled. Both sides of the edge are removed either way.
	"""
	if actor.has_pending_from(other.id):
		resolution = RequestResolution.DECLINED
	elif actor.has_sent_to(other.id):
		resolution = RequestResolution.CANCELLED
	else:
		raise NoActiveRequest()
	_clear_pending(actor, other)
	return resolution


def apply_remove(actor: User, other: User) -> None:
	if not actor.is_friend(other.id):
		raise NotFriends()
	drop_edge(actor.friend_ids, other.id)
	drop_edge(other.friend_ids, actor.id)
