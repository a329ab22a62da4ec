"""Unit tests for UserService: projections, role management and bans."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from lorekeeper import schemas
from lorekeeper.adapters.list_cache.fake import FakeListCache
from lorekeeper.core.access_control import Caller
from lorekeeper.core.exceptions import PermissionException, ValidationException
from lorekeeper.core.shared_models import UserRole
from lorekeeper.domains.resources.tests.conftest import _at, _ctx, _settings
from lorekeeper.domains.users.exceptions import (
    BanStateConflictError,
    EmailAlreadyExistsError,
    UserNotFoundError,
)
from lorekeeper.domains.users.fakes.repository import FakeUserRepository
from lorekeeper.domains.users.service import UserService
from lorekeeper.models import User
from lorekeeper.schemas.pagination import ListQuery


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_service(cache=None):
    repo = FakeUserRepository()
    if cache is None:
        cache = FakeListCache()
    service = UserService(user_repo=repo, list_cache=cache, settings=_settings())
    return service, repo


def _user(repo, name: str, role: UserRole = UserRole.USER, minute: int = 0, **fields) -> User:
    return repo.seed(
        User(
            id=uuid4(),
            email=f"{name.lower()}@example.com",
            name=name,
            role=role.value,
            created_at=_at(minute),
            **fields,
        )
    )


def _as(user: User) -> Caller:
    return Caller(id=user.id, role=UserRole(user.role))


def _seed_roles(repo):
    admin = _user(repo, "Admin", UserRole.ADMIN, minute=1)
    moderator = _user(repo, "Mod", UserRole.MODERATOR, minute=2)
    alice = _user(repo, "Alice", minute=3)
    bob = _user(repo, "Bob", minute=4)
    return admin, moderator, alice, bob


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


class TestGet:
    @pytest.mark.asyncio
    async def test_me_returns_full_projection(self, db):
        service, repo = _build_service()
        alice = _user(repo, "Alice")

        result = await service.get_me(db, ctx=_ctx(_as(alice)))

        assert isinstance(result, schemas.User)
        assert result.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_me_requires_authentication(self, db):
        service, _ = _build_service()

        with pytest.raises(PermissionException):
            await service.get_me(db, ctx=_ctx())

    @pytest.mark.asyncio
    async def test_other_user_gets_public_projection(self, db):
        service, repo = _build_service()
        _, _, alice, bob = _seed_roles(repo)

        result = await service.get_by_id(db, bob.id, ctx=_ctx(_as(alice)))

        assert type(result) is schemas.PublicUser
        assert "email" not in result.model_dump()

    @pytest.mark.asyncio
    async def test_moderator_sees_full_projection_of_users_only(self, db):
        service, repo = _build_service()
        admin, moderator, alice, _ = _seed_roles(repo)

        of_user = await service.get_by_id(db, alice.id, ctx=_ctx(_as(moderator)))
        of_admin = await service.get_by_id(db, admin.id, ctx=_ctx(_as(moderator)))

        assert type(of_user) is schemas.User
        assert type(of_admin) is schemas.PublicUser

    @pytest.mark.asyncio
    async def test_missing_user(self, db):
        service, _ = _build_service()

        with pytest.raises(UserNotFoundError) as exc_info:
            await service.get_by_id(db, uuid4(), ctx=_ctx())
        assert exc_info.value.message == "User not found"


class TestList:
    @pytest.mark.asyncio
    async def test_anonymous_lists_nobody(self, db):
        service, repo = _build_service()
        _seed_roles(repo)

        page = await service.list(db, ListQuery(), ctx=_ctx())

        assert page.items == []

    @pytest.mark.asyncio
    async def test_user_lists_only_self(self, db):
        service, repo = _build_service()
        _, _, alice, _ = _seed_roles(repo)

        page = await service.list(db, ListQuery(), ctx=_ctx(_as(alice)))

        assert [u.id for u in page.items] == [alice.id]

    @pytest.mark.asyncio
    async def test_moderator_lists_users_and_self(self, db):
        service, repo = _build_service()
        _, moderator, _, _ = _seed_roles(repo)

        page = await service.list(db, ListQuery(), ctx=_ctx(_as(moderator)))

        assert [u.name for u in page.items] == ["Bob", "Alice", "Mod"]

    @pytest.mark.asyncio
    async def test_admin_lists_everyone_with_filters(self, db):
        service, repo = _build_service()
        admin, _, _, _ = _seed_roles(repo)
        _user(repo, "Banned", minute=5, is_banned=True)

        everyone = await service.list(db, ListQuery(limit=2), ctx=_ctx(_as(admin)))
        banned = await service.list(
            db, ListQuery(), ctx=_ctx(_as(admin)), filters=schemas.UserFilters(is_banned=True)
        )
        moderators = await service.list(
            db,
            ListQuery(),
            ctx=_ctx(_as(admin)),
            filters=schemas.UserFilters(role=UserRole.MODERATOR),
        )

        assert everyone.pagination.has_next is True
        assert [u.name for u in banned.items] == ["Banned"]
        assert [u.name for u in moderators.items] == ["Mod"]

    @pytest.mark.asyncio
    async def test_sort_by_email(self, db):
        service, repo = _build_service()
        admin, _, _, _ = _seed_roles(repo)

        page = await service.list(db, ListQuery(sort_by="email"), ctx=_ctx(_as(admin)))

        assert [u.email for u in page.items][0] == "mod@example.com"


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


class TestUpdate:
    @pytest.mark.asyncio
    async def test_self_updates_profile(self, db):
        service, repo = _build_service()
        alice = _user(repo, "Alice")

        result = await service.update(
            db, alice.id, schemas.UserUpdate(bio="Hello"), ctx=_ctx(_as(alice))
        )

        assert result.bio == "Hello"

    @pytest.mark.asyncio
    async def test_self_cannot_change_role(self, db):
        service, repo = _build_service()
        alice = _user(repo, "Alice")

        with pytest.raises(PermissionException):
            await service.update(
                db, alice.id, schemas.UserUpdate(role=UserRole.ADMIN), ctx=_ctx(_as(alice))
            )
        assert alice.role == UserRole.USER.value

    @pytest.mark.asyncio
    async def test_stranger_cannot_update(self, db):
        service, repo = _build_service()
        _, _, alice, bob = _seed_roles(repo)

        with pytest.raises(PermissionException):
            await service.update(db, bob.id, schemas.UserUpdate(name="X"), ctx=_ctx(_as(alice)))

    @pytest.mark.asyncio
    async def test_admin_promotes_user(self, db):
        service, repo = _build_service()
        admin, _, alice, _ = _seed_roles(repo)

        result = await service.update(
            db, alice.id, schemas.UserUpdate(role=UserRole.MODERATOR), ctx=_ctx(_as(admin))
        )

        assert result.role == UserRole.MODERATOR
        assert alice.role == "MODERATOR"

    @pytest.mark.asyncio
    async def test_moderator_cannot_promote(self, db):
        service, repo = _build_service()
        _, moderator, alice, _ = _seed_roles(repo)

        with pytest.raises(PermissionException):
            await service.update(
                db, alice.id, schemas.UserUpdate(role=UserRole.ADMIN), ctx=_ctx(_as(moderator))
            )

    @pytest.mark.asyncio
    async def test_moderator_verifies_email(self, db):
        service, repo = _build_service()
        _, moderator, alice, _ = _seed_roles(repo)

        result = await service.update(
            db, alice.id, schemas.UserUpdate(is_email_verified=True), ctx=_ctx(_as(moderator))
        )

        assert result.is_email_verified is True

    @pytest.mark.asyncio
    async def test_email_taken(self, db):
        service, repo = _build_service()
        _, _, alice, _ = _seed_roles(repo)

        with pytest.raises(EmailAlreadyExistsError):
            await service.update(
                db, alice.id, schemas.UserUpdate(email="BOB@example.com"), ctx=_ctx(_as(alice))
            )

    @pytest.mark.asyncio
    async def test_null_name_rejected(self, db):
        service, repo = _build_service()
        alice = _user(repo, "Alice")

        with pytest.raises(ValidationException):
            await service.update(
                db, alice.id, schemas.UserUpdate(name=None), ctx=_ctx(_as(alice))
            )


# ---------------------------------------------------------------------------
# ban / unban
# ---------------------------------------------------------------------------


class TestBan:
    @pytest.mark.asyncio
    async def test_moderator_bans_user(self, db):
        service, repo = _build_service()
        _, moderator, alice, _ = _seed_roles(repo)
        until = datetime(2030, 1, 1, tzinfo=timezone.utc)

        result = await service.ban(
            db,
            alice.id,
            schemas.BanRequest(ban_reason="spam", banned_until=until),
            ctx=_ctx(_as(moderator)),
        )

        assert result.is_banned is True
        assert result.ban_reason == "spam"
        assert result.banned_until == until
        assert result.banned_by_id == moderator.id

    @pytest.mark.asyncio
    async def test_moderator_cannot_ban_admin(self, db):
        service, repo = _build_service()
        admin, moderator, _, _ = _seed_roles(repo)

        with pytest.raises(PermissionException):
            await service.ban(db, admin.id, schemas.BanRequest(), ctx=_ctx(_as(moderator)))

    @pytest.mark.asyncio
    async def test_nobody_bans_themselves(self, db):
        service, repo = _build_service()
        admin, _, _, _ = _seed_roles(repo)

        with pytest.raises(PermissionException):
            await service.ban(db, admin.id, schemas.BanRequest(), ctx=_ctx(_as(admin)))

    @pytest.mark.asyncio
    async def test_double_ban_conflicts(self, db):
        service, repo = _build_service()
        admin, _, _, _ = _seed_roles(repo)
        banned = _user(repo, "Banned", is_banned=True)

        with pytest.raises(BanStateConflictError):
            await service.ban(db, banned.id, schemas.BanRequest(), ctx=_ctx(_as(admin)))

    @pytest.mark.asyncio
    async def test_unban_clears_ban_fields(self, db):
        service, repo = _build_service()
        admin, _, _, _ = _seed_roles(repo)
        banned = _user(repo, "Banned", is_banned=True, ban_reason="spam", banned_by_id=admin.id)

        result = await service.unban(db, banned.id, ctx=_ctx(_as(admin)))

        assert result.is_banned is False
        assert result.ban_reason is None
        assert result.banned_by_id is None

    @pytest.mark.asyncio
    async def test_unban_of_unbanned_conflicts(self, db):
        service, repo = _build_service()
        admin, _, alice, _ = _seed_roles(repo)

        with pytest.raises(BanStateConflictError):
            await service.unban(db, alice.id, ctx=_ctx(_as(admin)))


# ---------------------------------------------------------------------------
# delete / stats
# ---------------------------------------------------------------------------


class TestDelete:
    @pytest.mark.asyncio
    async def test_self_deletes(self, db):
        service, repo = _build_service()
        alice = _user(repo, "Alice")

        await service.delete(db, alice.id, ctx=_ctx(_as(alice)))

        assert alice.id not in repo._store

    @pytest.mark.asyncio
    async def test_user_cannot_delete_other(self, db):
        service, repo = _build_service()
        _, _, alice, bob = _seed_roles(repo)

        with pytest.raises(PermissionException):
            await service.delete(db, bob.id, ctx=_ctx(_as(alice)))
        assert bob.id in repo._store

    @pytest.mark.asyncio
    async def test_delete_drops_every_cached_list(self, db):
        cache = FakeListCache()
        cache.entries["tags:list:abc"] = "page"
        service, repo = _build_service(cache)
        alice = _user(repo, "Alice")

        await service.delete(db, alice.id, ctx=_ctx(_as(alice)))

        assert cache.invalidated == [""]
        assert cache.entries == {}

    @pytest.mark.asyncio
    async def test_refused_delete_keeps_cache(self, db):
        cache = FakeListCache()
        service, repo = _build_service(cache)
        _, _, alice, bob = _seed_roles(repo)

        with pytest.raises(PermissionException):
            await service.delete(db, bob.id, ctx=_ctx(_as(alice)))
        assert cache.invalidated == []


class TestStats:
    @pytest.mark.asyncio
    async def test_counts_by_role(self, db):
        service, repo = _build_service()
        admin, _, _, _ = _seed_roles(repo)

        stats = await service.get_stats(db, ctx=_ctx(_as(admin)))

        assert stats.total == 4
        assert stats.by_role == {"USER": 2, "MODERATOR": 1, "ADMIN": 1}

    @pytest.mark.asyncio
    async def test_user_forbidden(self, db):
        service, repo = _build_service()
        alice = _user(repo, "Alice")

        with pytest.raises(PermissionException):
            await service.get_stats(db, ctx=_ctx(_as(alice)))
    @pytest.mark.asyncio
    async def test_new_counter_covers_thirty_days(self, db):
        service, repo = _build_service()
        admin = _user(repo, "Admin", UserRole.ADMIN)
        now = datetime.now(timezone.utc)
        _user(repo, "Fresh").created_at = now - timedelta(days=29)
        _user(repo, "Stale").created_at = now - timedelta(days=31)

        stats = await service.get_stats(db, ctx=_ctx(_as(admin)))

        assert stats.new_last_30_days == 1
