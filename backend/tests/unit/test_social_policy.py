import pytest

from huddle.domain.identity.exceptions import UserNotFound
from huddle.domain.identity.models import User, UserSnapshot
from huddle.domain.social import policy
from huddle.domain.social.exceptions import (
    AlreadyFriends,
    AlreadyRequested,
    NoActiveRequest,
    NoPendingRequest,
    NotFriends,
    ReciprocalPending,
    RequestConflict,
    SelfRequest,
)
from huddle.domain.social.models import RequestResolution


def _pair():
    return User(id="u1", username="alice"), User(id="u2", username="bob")


def test_guard_not_self():
    with pytest.raises(SelfRequest):
        policy.guard_not_self("u1", "u1")
    policy.guard_not_self("u1", "u2")


def test_require_pair_missing_user(make_user):
    snapshot = UserSnapshot([make_user("u1")])
    with pytest.raises(UserNotFound):
        policy.require_pair(snapshot, "u1", "ghost")


def test_send_checks_run_in_order():
    alice, bob = _pair()
    alice.friend_ids.append("u2")
    alice.sent_requests.append("u2")
    with pytest.raises(AlreadyFriends):
        policy.ensure_can_send(alice, bob)

    alice.friend_ids.clear()
    with pytest.raises(AlreadyRequested):
        policy.ensure_can_send(alice, bob)


def test_reciprocal_pending_names_the_other_user():
    alice, bob = _pair()
    alice.pending_received.append("u2")
    with pytest.raises(ReciprocalPending) as exc_info:
        policy.ensure_can_send(alice, bob)
    assert "bob has already sent you a friend request" in exc_info.value.message
    assert isinstance(exc_info.value, RequestConflict)


def test_apply_send_adds_directed_edges_once():
    alice, bob = _pair()
    policy.apply_send(alice, bob)
    policy.apply_send(alice, bob)
    assert alice.sent_requests == ["u2"]
    assert bob.pending_received == ["u1"]
    assert alice.friend_ids == [] and bob.friend_ids == []


def test_apply_accept_requires_pending():
    alice, bob = _pair()
    with pytest.raises(NoPendingRequest):
        policy.apply_accept(alice, bob)


def test_apply_accept_clears_both_directions():
    alice, bob = _pair()
    policy.apply_send(alice, bob)
    # Stale reverse edge left behind by an older data file.
    bob.sent_requests.append("u1")
    alice.pending_received.append("u2")
    policy.apply_accept(alice, bob)
    assert alice.friend_ids == ["u2"]
    assert bob.friend_ids == ["u1"]
    for user in (alice, bob):
        assert user.sent_requests == []
        assert user.pending_received == []


def test_decline_and_cancel_resolution():
    alice, bob = _pair()
    policy.apply_send(alice, bob)
    assert policy.apply_decline_or_cancel(bob, alice) is RequestResolution.DECLINED
    assert alice.sent_requests == [] and bob.pending_received == []

    policy.apply_send(alice, bob)
    assert policy.apply_decline_or_cancel(alice, bob) is RequestResolution.CANCELLED

    with pytest.raises(NoActiveRequest):
        policy.apply_decline_or_cancel(alice, bob)


def test_apply_remove():
    alice, bob = _pair()
    alice.friend_ids.append("u2")
    bob.friend_ids.append("u1")
    policy.apply_remove(alice, bob)
    assert alice.friend_ids == [] and bob.friend_ids == []
    with pytest.raises(NotFriends):
        policy.apply_remove(alice, bob)


def test_apply_remove_cleans_half_edge():
    alice, bob = _pair()
    alice.friend_ids.append("u2")
    policy.apply_remove(alice, bob)
    assert alice.friend_ids == []
    with pytest.raises(NotFriends):
        policy.apply_remove(bob, alice)


@pytest.mark.parametrize(
    "error",
    [SelfRequest, AlreadyFriends, AlreadyRequested, ReciprocalPending, NoPendingRequest, NoActiveRequest, NotFriends],
)
def test_state_conflicts_share_a_base(error):
    assert issubclass(error, RequestConflict)
    assert error().reason != RequestConflict.reason
