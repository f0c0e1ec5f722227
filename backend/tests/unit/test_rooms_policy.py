import pytest

from huddle.domain.identity.models import User
from huddle.domain.rooms import policy
from huddle.domain.rooms.exceptions import (
    AlreadyMember,
    NotAuthorized,
    NotDirectMessageRoom,
    NotMember,
    RoomIsPrivate,
    RoomIsPublic,
)
from huddle.domain.rooms.models import Room


def _private(owner="u1"):
    return Room(id="r1", name="Secret", is_private=True, members=[owner], owner_id=owner)


def test_invite_checks_run_in_order():
    public = Room(id="r0", name="Lobby", is_private=False, members=["u1"], owner_id="u1")
    with pytest.raises(RoomIsPublic):
        policy.ensure_can_invite(public, "u1", None, "u1")
    with pytest.raises(NotAuthorized):
        policy.ensure_can_invite(_private(), "u2", User(id="u2", username="bob"), "u1")
    with pytest.raises(AlreadyMember):
        policy.ensure_can_invite(_private(), "u1", None, "u1")


def test_admin_and_owner_can_manage_members():
    room = _private()
    assert policy.can_manage_members(room, "u1", None)
    assert policy.can_manage_members(room, "u9", User(id="u9", username="root", is_admin=True))
    assert not policy.can_manage_members(room, "u9", User(id="u9", username="eve"))
    ownerless = Room(id="r2", name="Orphan", is_private=True)
    assert not policy.can_manage_members(ownerless, "u1", None)


def test_join_and_visibility():
    room = _private()
    with pytest.raises(RoomIsPrivate):
        policy.ensure_can_join(room)
    assert policy.is_visible_to(room, "u1")
    assert not policy.is_visible_to(room, "u2")


def test_leave_dm_guards():
    with pytest.raises(NotDirectMessageRoom):
        policy.ensure_can_leave_dm(_private(), "u1")
    dm = Room(id="dm_u1_u2", name="DM", is_private=True, members=["u1", "u2"])
    with pytest.raises(NotMember):
        policy.ensure_can_leave_dm(dm, "u3")
    policy.ensure_can_leave_dm(dm, "u1")


def test_room_record_round_trip_drops_duplicate_members():
    room = Room.from_record({"id": "r1", "name": "x", "isPrivate": True, "members": ["u1", "u1", "u2"]})
    assert room.members == ["u1", "u2"]
    assert "ownerId" not in room.to_record()
