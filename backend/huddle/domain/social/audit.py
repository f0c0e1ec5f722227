"""Audit helpers for friend requests & friendships."""

from __future__ import annotations

import logging
from typing import Dict

from huddle.obs import metrics as obs_metrics

_audit_logger = logging.getLogger("huddle.audit.social")


def log_friend_event(event: str, fields: Dict[str, str]) -> None:
	_audit_logger.info(event, extra={"event": event, **fields})


def inc_request_sent() -> None:
	obs_metrics.inc_friend_request_sent()


def inc_send_reject(reason: str) -> None:
	obs_metrics.inc_friend_request_reject(reason)


def inc_request_resolved(outcome: str) -> None:
	obs_metrics.inc_friend_request_resolved(outcome)


def inc_friend_removed() -> None:
	obs_metrics.inc_friendship_removed()
