"""Central registry for Prometheus metrics used across the backend."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNTER = Counter(
	"huddle_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"huddle_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0),
)

FRIEND_REQUESTS_SENT = Counter(
	"huddle_friend_requests_sent_total",
	"Friend requests sent",
)

FRIEND_REQUEST_REJECTS = Counter(
	"huddle_friend_request_rejects_total",
	"Rejected friend request sends",
	["reason"],
)

FRIEND_REQUESTS_RESOLVED = Counter(
	"huddle_friend_requests_resolved_total",
	"Pending friend requests resolved",
	["outcome"],
)

FRIENDSHIPS_REMOVED = Counter(
	"huddle_friendships_removed_total",
	"Friendships removed",
)

ROOM_INVITES = Counter(
	"huddle_room_invites_total",
	"Private room invites",
	["result"],
)

ROOMS_CREATED = Counter(
	"huddle_rooms_created_total",
	"Rooms created",
	["kind"],
)

NOTIFICATIONS_CREATED = Counter(
	"huddle_notifications_created_total",
	"Notifications appended",
	["type"],
)

MESSAGES_POSTED = Counter(
	"huddle_messages_posted_total",
	"Messages appended to rooms",
	["kind"],
)

STORE_RESETS = Counter(
	"huddle_store_resets_total",
	"Documents re-initialised to the empty default",
	["entity", "cause"],
)

STORE_WRITE_FAILURES = Counter(
	"huddle_store_write_failures_total",
	"Document writes that raised",
	["entity"],
)


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)


def inc_friend_request_sent() -> None:
	FRIEND_REQUESTS_SENT.inc()


def inc_friend_request_reject(reason: str) -> None:
	FRIEND_REQUEST_REJECTS.labels(reason=reason).inc()


def inc_friend_request_resolved(outcome: str) -> None:
	FRIEND_REQUESTS_RESOLVED.labels(outcome=outcome).inc()


def inc_friendship_removed() -> None:
	FRIENDSHIPS_REMOVED.inc()


def inc_room_invite(result: str) -> None:
	ROOM_INVITES.labels(result=result).inc()


def inc_room_created(kind: str) -> None:
	ROOMS_CREATED.labels(kind=kind).inc()


def inc_notification_created(kind: str) -> None:
	NOTIFICATIONS_CREATED.labels(type=kind).inc()


def inc_message_posted(kind: str) -> None:
	MESSAGES_POSTED.labels(kind=kind).inc()


def inc_store_reset(entity: str, cause: str) -> None:
	STORE_RESETS.labels(entity=entity, cause=cause).inc()


def inc_store_write_failure(entity: str) -> None:
	STORE_WRITE_FAILURES.labels(entity=entity).inc()
