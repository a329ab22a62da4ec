"""Unit tests for the access decision functions and output masking."""

from typing import List, Optional
from uuid import UUID, uuid4

import pytest
from pydantic import BaseModel

from lorekeeper.core.access_control import (
    HIDDEN_SENTINEL,
    Caller,
    can_create,
    can_manage_user,
    can_modify,
    can_view,
    can_view_account,
    embed,
    mask,
)
from lorekeeper.core.shared_models import UserRole, Visibility

OWNER = Caller(id=uuid4())
STRANGER = Caller(id=uuid4())
MODERATOR = Caller(id=uuid4(), role=UserRole.MODERATOR)
ADMIN = Caller(id=uuid4(), role=UserRole.ADMIN)


class Summary(BaseModel):
    id: UUID
    name: str
    owner_id: Optional[UUID] = None
    visibility: Visibility = Visibility.PUBLIC


class Card(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    level: int = 1
    owner_id: Optional[UUID] = None
    visibility: Visibility = Visibility.PUBLIC
    race: Optional[Summary] = None
    tags: List[Summary] = []


def _card(visibility: Visibility, owner: Optional[Caller] = OWNER, **kwargs) -> Card:
    kwargs.setdefault("description", "A ranger")
    return Card(
        id=uuid4(),
        name="Aria",
        owner_id=owner.id if owner else None,
        visibility=visibility,
        **kwargs,
    )


class TestCanView:
    @pytest.mark.parametrize("visibility", [Visibility.PUBLIC, Visibility.HIDDEN])
    def test_open_rows_visible_to_anyone(self, visibility):
        assert can_view(None, _card(visibility))
        assert can_view(STRANGER, _card(visibility))

    @pytest.mark.parametrize(
        "caller, expected",
        [(None, False), (STRANGER, False), (OWNER, True), (MODERATOR, True), (ADMIN, True)],
    )
    def test_private(self, caller, expected):
        assert can_view(caller, _card(Visibility.PRIVATE)) is expected

    def test_system_owned_private_only_for_privileged(self):
        card = _card(Visibility.PRIVATE, owner=None)

        assert not can_view(OWNER, card)
        assert can_view(MODERATOR, card)


class TestCanModify:
    @pytest.mark.parametrize(
        "caller, expected",
        [(None, False), (STRANGER, False), (OWNER, True), (MODERATOR, True), (ADMIN, True)],
    )
    def test_modify(self, caller, expected):
        assert can_modify(caller, _card(Visibility.PUBLIC)) is expected

    def test_system_owned(self):
        card = _card(Visibility.PUBLIC, owner=None)

        assert not can_modify(OWNER, card)
        assert can_modify(MODERATOR, card)


class TestCanCreate:
    def test_anonymous(self):
        assert not can_create(None)

    def test_self(self):
        assert can_create(OWNER)
        assert can_create(OWNER, OWNER.id)

    def test_other_owner_needs_privilege(self):
        assert not can_create(OWNER, STRANGER.id)
        assert can_create(MODERATOR, STRANGER.id)


class TestMask:
    def test_hidden_masked_for_stranger(self):
        card = _card(Visibility.HIDDEN)

        masked = mask(card, STRANGER)

        assert masked.name == HIDDEN_SENTINEL
        assert masked.description == HIDDEN_SENTINEL
        assert masked.id == card.id
        assert masked.owner_id == card.owner_id
        assert masked.visibility == Visibility.HIDDEN
        assert masked.level == 1

    @pytest.mark.parametrize("caller", [OWNER, MODERATOR, ADMIN])
    def test_hidden_plain_for_owner_and_privileged(self, caller):
        card = _card(Visibility.HIDDEN)

        assert mask(card, caller) is card

    def test_public_untouched(self):
        card = _card(Visibility.PUBLIC)

        assert mask(card, None) is card

    def test_null_description_is_masked(self):
        card = _card(Visibility.HIDDEN, description=None)

        assert mask(card, None).description == HIDDEN_SENTINEL

    def test_null_description_kept_for_owner(self):
        card = _card(Visibility.HIDDEN, description=None)

        assert mask(card, OWNER).description is None

    def test_idempotent(self):
        card = _card(Visibility.HIDDEN)

        once = mask(card, STRANGER)

        assert mask(once, STRANGER) == once

    def test_recurses_into_embedded(self):
        race = Summary(id=uuid4(), name="Elf")
        card = _card(Visibility.HIDDEN, race=race, tags=[Summary(id=uuid4(), name="Fire")])

        masked = mask(card, STRANGER)

        assert masked.race.name == HIDDEN_SENTINEL
        assert masked.tags[0].name == HIDDEN_SENTINEL
        assert race.name == "Elf"


class TestEmbed:
    def test_unviewable_reference_is_placeholder(self):
        summary = Summary(
            id=uuid4(), name="Secret", owner_id=OWNER.id, visibility=Visibility.PRIVATE
        )

        rendered = embed(summary, STRANGER)

        assert rendered.id == summary.id
        assert rendered.name == HIDDEN_SENTINEL

    def test_viewable_reference_is_plain(self):
        summary = Summary(id=uuid4(), name="Elf")

        assert embed(summary, None).name == "Elf"


class TestUserManagement:
    def test_nobody_manages_themselves(self):
        assert not can_manage_user(ADMIN, ADMIN.id, UserRole.ADMIN)

    @pytest.mark.parametrize(
        "caller, target_role, expected",
        [
            (ADMIN, UserRole.USER, True),
            (ADMIN, UserRole.MODERATOR, True),
            (ADMIN, UserRole.ADMIN, False),
            (MODERATOR, UserRole.USER, True),
            (MODERATOR, UserRole.MODERATOR, False),
            (OWNER, UserRole.USER, False),
            (None, UserRole.USER, False),
        ],
    )
    def test_matrix(self, caller, target_role, expected):
        assert can_manage_user(caller, uuid4(), target_role) is expected

    def test_account_view(self):
        assert can_view_account(OWNER, OWNER.id, UserRole.USER)
        assert not can_view_account(OWNER, STRANGER.id, UserRole.USER)
        assert can_view_account(MODERATOR, OWNER.id, UserRole.USER)
        assert not can_view_account(MODERATOR, ADMIN.id, UserRole.ADMIN)
        assert can_view_account(ADMIN, MODERATOR.id, UserRole.MODERATOR)
        assert not can_view_account(None, OWNER.id, UserRole.USER)
