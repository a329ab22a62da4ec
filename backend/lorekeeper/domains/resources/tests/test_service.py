"""Unit tests for the shared ResourceService template.

Exercised through TagService and PerkService with in-memory fakes; no DB.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from lorekeeper import schemas
from lorekeeper.adapters.list_cache.fake import FakeListCache
from lorekeeper.adapters.list_cache.in_memory import InMemoryListCache
from lorekeeper.core.access_control import HIDDEN_SENTINEL
from lorekeeper.core.exceptions import (
    PermissionException,
    ResourceInUseException,
    ValidationException,
)
from lorekeeper.core.pagination import INVALID_CURSOR
from lorekeeper.core.shared_models import SortDirection, Visibility
from lorekeeper.domains.perks.definition import PERKS
from lorekeeper.domains.perks.service import PerkService
from lorekeeper.domains.resources.exceptions import (
    NameAlreadyExistsError,
    ReferenceNotFoundError,
    ResourceForbiddenError,
    ResourceNotFoundError,
    ResourceReferencedError,
)
from lorekeeper.domains.resources.fakes.repository import FakeResourceRepository
from lorekeeper.domains.resources.tests.conftest import (
    ADMIN,
    MODERATOR,
    OTHER,
    OTHER_ID,
    OWNER,
    OWNER_ID,
    _at,
    _ctx,
    _row,
    _settings,
)
from lorekeeper.domains.tags.definition import TAGS
from lorekeeper.domains.tags.service import TagService
from lorekeeper.models import Image, Perk, Tag
from lorekeeper.schemas.pagination import ListQuery
from lorekeeper.schemas.stats import ResourceStats


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_service():
    repo = FakeResourceRepository(TAGS)
    cache = FakeListCache()
    service = TagService(repo=repo, list_cache=cache, settings=_settings())
    return service, repo, cache


def _build_perk_service():
    repo = FakeResourceRepository(PERKS)
    service = PerkService(repo=repo, list_cache=FakeListCache(), settings=_settings())
    return service, repo


class _PausingRepository(FakeResourceRepository):
    """Fake whose list query holds its result until ``release`` is set."""

    def __init__(self, definition):
        super().__init__(definition)
        self.fetched = asyncio.Event()
        self.release = asyncio.Event()

    async def find_many(self, db, plan):
        rows = await super().find_many(db, plan)
        self.fetched.set()
        await self.release.wait()
        return rows


def _tag(name="Fire", visibility=Visibility.PUBLIC, owner_id=OWNER_ID, minute=0):
    return _row(
        Tag,
        name=name,
        description=f"{name} tag",
        visibility=visibility,
        owner_id=owner_id,
        created_at=_at(minute),
        updated_at=_at(minute),
    )


# ---------------------------------------------------------------------------
# get_by_id
# ---------------------------------------------------------------------------


class TestGetById:
    @pytest.mark.asyncio
    async def test_public_visible_to_anonymous(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag())

        result = await service.get_by_id(db, tag.id, ctx=_ctx())

        assert result.id == tag.id
        assert result.name == "Fire"

    @pytest.mark.asyncio
    async def test_missing_is_not_found(self, db):
        service, _, _ = _build_service()

        with pytest.raises(ResourceNotFoundError) as exc_info:
            await service.get_by_id(db, uuid4(), ctx=_ctx(OWNER))
        assert exc_info.value.message == "Tag not found"

    @pytest.mark.asyncio
    async def test_private_is_not_found_for_stranger(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag(visibility=Visibility.PRIVATE))

        with pytest.raises(ResourceNotFoundError):
            await service.get_by_id(db, tag.id, ctx=_ctx(OTHER))
        with pytest.raises(ResourceNotFoundError):
            await service.get_by_id(db, tag.id, ctx=_ctx())

    @pytest.mark.asyncio
    async def test_private_visible_to_owner_and_moderator(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag(visibility=Visibility.PRIVATE))

        assert (await service.get_by_id(db, tag.id, ctx=_ctx(OWNER))).name == "Fire"
        assert (await service.get_by_id(db, tag.id, ctx=_ctx(MODERATOR))).name == "Fire"

    @pytest.mark.asyncio
    async def test_hidden_masked_for_stranger(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag(visibility=Visibility.HIDDEN))

        result = await service.get_by_id(db, tag.id, ctx=_ctx(OTHER))

        assert result.name == HIDDEN_SENTINEL
        assert result.description == HIDDEN_SENTINEL
        assert result.id == tag.id
        assert result.owner_id == OWNER_ID
        assert result.visibility == Visibility.HIDDEN

    @pytest.mark.asyncio
    async def test_hidden_unmasked_for_owner_and_admin(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag(visibility=Visibility.HIDDEN))

        assert (await service.get_by_id(db, tag.id, ctx=_ctx(OWNER))).name == "Fire"
        assert (await service.get_by_id(db, tag.id, ctx=_ctx(ADMIN))).name == "Fire"


# ---------------------------------------------------------------------------
# list: security filter and masking
# ---------------------------------------------------------------------------


class TestListVisibility:
    @pytest.mark.asyncio
    async def test_private_rows_only_for_owner(self, db):
        service, repo, _ = _build_service()
        repo.seed(_tag("Public", minute=1))
        repo.seed(_tag("Secret", visibility=Visibility.PRIVATE, minute=2))

        anonymous = await service.list(db, ListQuery(), ctx=_ctx())
        stranger = await service.list(db, ListQuery(), ctx=_ctx(OTHER))
        owner = await service.list(db, ListQuery(), ctx=_ctx(OWNER))
        admin = await service.list(db, ListQuery(), ctx=_ctx(ADMIN))

        assert [t.name for t in anonymous.items] == ["Public"]
        assert [t.name for t in stranger.items] == ["Public"]
        assert [t.name for t in owner.items] == ["Secret", "Public"]
        assert len(admin.items) == 2

    @pytest.mark.asyncio
    async def test_hidden_rows_listed_masked(self, db):
        service, repo, _ = _build_service()
        repo.seed(_tag("Shadow", visibility=Visibility.HIDDEN))

        page = await service.list(db, ListQuery(), ctx=_ctx(OTHER))

        assert len(page.items) == 1
        assert page.items[0].name == HIDDEN_SENTINEL

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, db):
        service, repo, _ = _build_service()
        repo.seed(_tag("Fireball", minute=1))
        repo.seed(_tag("Ice", minute=2))

        page = await service.list(db, ListQuery(search="FIRE"), ctx=_ctx(OWNER))

        assert [t.name for t in page.items] == ["Fireball"]

    @pytest.mark.asyncio
    async def test_owner_filter(self, db):
        service, repo, _ = _build_service()
        repo.seed(_tag("Mine", minute=1))
        repo.seed(_tag("Theirs", owner_id=OTHER_ID, minute=2))

        page = await service.list(db, ListQuery(owner_id=OTHER_ID), ctx=_ctx(OWNER))

        assert [t.name for t in page.items] == ["Theirs"]


# ---------------------------------------------------------------------------
# list: cursor pagination
# ---------------------------------------------------------------------------


class TestListPagination:
    @pytest.mark.asyncio
    async def test_walks_pages_without_gaps_or_duplicates(self, db):
        service, repo, _ = _build_service()
        for i in range(1, 6):
            repo.seed(_tag(f"T{i}", minute=i))

        first = await service.list(db, ListQuery(limit=2), ctx=_ctx(OWNER))
        second = await service.list(
            db, ListQuery(limit=2, cursor=first.pagination.next_cursor), ctx=_ctx(OWNER)
        )
        third = await service.list(
            db, ListQuery(limit=2, cursor=second.pagination.next_cursor), ctx=_ctx(OWNER)
        )

        assert [t.name for t in first.items] == ["T5", "T4"]
        assert [t.name for t in second.items] == ["T3", "T2"]
        assert [t.name for t in third.items] == ["T1"]
        assert first.pagination.has_next is True
        assert first.pagination.has_prev is False
        assert first.pagination.prev_cursor is None
        assert second.pagination.has_prev is True
        assert second.pagination.prev_cursor == first.pagination.next_cursor
        assert third.pagination.has_next is False
        assert third.pagination.next_cursor is None

    @pytest.mark.asyncio
    async def test_ties_in_sort_field_are_broken_by_id(self, db):
        service, repo, _ = _build_service()
        for name in ("A", "B", "C"):
            repo.seed(_tag(name, minute=0))

        first = await service.list(
            db, ListQuery(limit=2, sort_dir=SortDirection.ASC), ctx=_ctx(OWNER)
        )
        rest = await service.list(
            db,
            ListQuery(limit=2, sort_dir=SortDirection.ASC, cursor=first.pagination.next_cursor),
            ctx=_ctx(OWNER),
        )

        seen = [t.id for t in first.items] + [t.id for t in rest.items]
        assert len(seen) == 3
        assert len(set(seen)) == 3
        assert seen == sorted(seen)

    @pytest.mark.asyncio
    async def test_sort_by_name_ascending(self, db):
        service, repo, _ = _build_service()
        for i, name in enumerate(("Cobalt", "Amber", "Basalt")):
            repo.seed(_tag(name, minute=i))

        page = await service.list(
            db, ListQuery(sort_by="name", sort_dir=SortDirection.ASC), ctx=_ctx(OWNER)
        )

        assert [t.name for t in page.items] == ["Amber", "Basalt", "Cobalt"]

    @pytest.mark.asyncio
    async def test_unknown_sort_field_rejected(self, db):
        service, _, _ = _build_service()

        with pytest.raises(ValidationException) as exc_info:
            await service.list(db, ListQuery(sort_by="password"), ctx=_ctx(OWNER))
        assert "Invalid sortBy 'password'" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_garbage_cursor_rejected(self, db):
        service, _, _ = _build_service()

        with pytest.raises(ValidationException) as exc_info:
            await service.list(db, ListQuery(cursor="not-a-cursor"), ctx=_ctx(OWNER))
        assert exc_info.value.message == INVALID_CURSOR

    @pytest.mark.asyncio
    async def test_cursor_from_other_sort_field_rejected(self, db):
        service, repo, _ = _build_service()
        for i in range(3):
            repo.seed(_tag(f"T{i}", minute=i))
        by_name = await service.list(db, ListQuery(limit=1, sort_by="name"), ctx=_ctx(OWNER))

        with pytest.raises(ValidationException):
            await service.list(
                db,
                ListQuery(limit=1, sort_by="createdAt", cursor=by_name.pagination.next_cursor),
                ctx=_ctx(OWNER),
            )


# ---------------------------------------------------------------------------
# list: anonymous cache
# ---------------------------------------------------------------------------


class TestListCache:
    @pytest.mark.asyncio
    async def test_anonymous_pages_are_cached(self, db):
        service, repo, cache = _build_service()
        repo.seed(_tag())

        first = await service.list(db, ListQuery(), ctx=_ctx())
        second = await service.list(db, ListQuery(), ctx=_ctx())

        assert second is first
        assert len(cache.hits) == 1
        assert sum(1 for c in repo._calls if c[0] == "find_many") == 1

    @pytest.mark.asyncio
    async def test_authenticated_pages_bypass_cache(self, db):
        service, repo, cache = _build_service()
        repo.seed(_tag())

        await service.list(db, ListQuery(), ctx=_ctx(OWNER))
        await service.list(db, ListQuery(), ctx=_ctx(OWNER))

        assert cache.entries == {}
        assert sum(1 for c in repo._calls if c[0] == "find_many") == 2

    @pytest.mark.asyncio
    async def test_write_invalidates_cached_pages(self, db):
        service, repo, cache = _build_service()
        repo.seed(_tag("Old"))
        before = await service.list(db, ListQuery(), ctx=_ctx())

        await service.create(db, schemas.TagCreate(name="New"), ctx=_ctx(OWNER))
        after = await service.list(db, ListQuery(), ctx=_ctx())

        assert cache.invalidated == ["tags:list"]
        assert len(before.items) == 1
        assert len(after.items) == 2

    @pytest.mark.asyncio
    async def test_write_during_anonymous_list_is_not_cached(self, db):
        repo = _PausingRepository(TAGS)
        cache = InMemoryListCache()
        service = TagService(repo=repo, list_cache=cache, settings=_settings())
        secret = repo.seed(_tag("Secret"))

        in_flight = asyncio.create_task(service.list(db, ListQuery(), ctx=_ctx()))
        await repo.fetched.wait()
        await service.update(
            db, secret.id, schemas.TagUpdate(visibility=Visibility.PRIVATE), ctx=_ctx(OWNER)
        )
        repo.release.set()
        await in_flight

        after = await service.list(db, ListQuery(), ctx=_ctx())

        assert after.items == []
        assert sum(1 for c in repo._calls if c[0] == "find_many") == 2

    @pytest.mark.asyncio
    async def test_stale_page_is_dropped(self, db):
        repo = _PausingRepository(TAGS)
        cache = FakeListCache()
        service = TagService(repo=repo, list_cache=cache, settings=_settings())
        repo.seed(_tag("Old"))

        in_flight = asyncio.create_task(service.list(db, ListQuery(), ctx=_ctx()))
        await repo.fetched.wait()
        await service.create(db, schemas.TagCreate(name="New"), ctx=_ctx(OWNER))
        repo.release.set()
        await in_flight

        assert len(cache.stale) == 1
        assert cache.entries == {}


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


class TestCreate:
    @pytest.mark.asyncio
    async def test_owner_defaults_to_caller(self, db):
        service, repo, _ = _build_service()

        result = await service.create(db, schemas.TagCreate(name="Fire"), ctx=_ctx(OTHER))

        assert result.owner_id == OTHER_ID
        assert result.visibility == Visibility.PUBLIC
        assert len(repo._store) == 1
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_anonymous_rejected(self, db):
        service, _, _ = _build_service()

        with pytest.raises(PermissionException) as exc_info:
            await service.create(db, schemas.TagCreate(name="Fire"), ctx=_ctx())
        assert exc_info.value.message == "Authentication required to create a tag"

    @pytest.mark.asyncio
    async def test_user_cannot_create_for_someone_else(self, db):
        service, repo, _ = _build_service()

        with pytest.raises(PermissionException):
            await service.create(
                db, schemas.TagCreate(name="Fire", owner_id=OWNER_ID), ctx=_ctx(OTHER)
            )
        assert repo._store == {}

    @pytest.mark.asyncio
    async def test_moderator_can_assign_owner(self, db):
        service, _, _ = _build_service()

        result = await service.create(
            db, schemas.TagCreate(name="Fire", owner_id=OWNER_ID), ctx=_ctx(MODERATOR)
        )

        assert result.owner_id == OWNER_ID

    @pytest.mark.asyncio
    async def test_duplicate_name_conflicts_case_insensitively(self, db):
        service, repo, _ = _build_service()
        repo.seed(_tag("Fire"))

        with pytest.raises(NameAlreadyExistsError):
            await service.create(db, schemas.TagCreate(name="fire"), ctx=_ctx(OWNER))
        db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_relations_resolved_in_request_order(self, db):
        service, repo = _build_perk_service()
        a = repo.seed_related(_row(Tag, name="A"))
        b = repo.seed_related(_row(Tag, name="B"))

        await service.create(
            db, schemas.PerkCreate(name="Brave", tag_ids=[b.id, a.id, b.id]), ctx=_ctx(OWNER)
        )

        call = next(c for c in repo._calls if c[0] == "create")
        assert [t.name for t in call[2]["tags"]] == ["B", "A"]
        assert "tag_ids" not in call[1]

    @pytest.mark.asyncio
    async def test_missing_relation_rejected(self, db):
        service, _ = _build_perk_service()
        missing = uuid4()

        with pytest.raises(ReferenceNotFoundError) as exc_info:
            await service.create(
                db, schemas.PerkCreate(name="Brave", tag_ids=[missing]), ctx=_ctx(OWNER)
            )
        assert exc_info.value.message == f"Tag not found: {missing}"

    @pytest.mark.asyncio
    async def test_private_relation_of_someone_else_rejected(self, db):
        service, repo = _build_perk_service()
        secret = repo.seed_related(
            _row(Tag, name="Secret", owner_id=OTHER_ID, visibility=Visibility.PRIVATE)
        )

        with pytest.raises(ReferenceNotFoundError):
            await service.create(
                db, schemas.PerkCreate(name="Brave", tag_ids=[secret.id]), ctx=_ctx(OWNER)
            )

    @pytest.mark.asyncio
    async def test_missing_image_reference_rejected(self, db):
        service, _ = _build_perk_service()

        with pytest.raises(ReferenceNotFoundError) as exc_info:
            await service.create(
                db, schemas.PerkCreate(name="Brave", image_id=uuid4()), ctx=_ctx(OWNER)
            )
        assert exc_info.value.label == "Image"

    @pytest.mark.asyncio
    async def test_viewable_image_reference_accepted(self, db):
        service, repo = _build_perk_service()
        image = repo.seed_related(_row(Image, description="icon", mime_type="image/png"))

        result = await service.create(
            db, schemas.PerkCreate(name="Brave", image_id=image.id), ctx=_ctx(OWNER)
        )

        assert result.image_id == image.id


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


class TestUpdate:
    @pytest.mark.asyncio
    async def test_owner_updates(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag())

        result = await service.update(
            db, tag.id, schemas.TagUpdate(description="Hot"), ctx=_ctx(OWNER)
        )

        assert result.description == "Hot"
        assert result.name == "Fire"

    @pytest.mark.asyncio
    async def test_stranger_forbidden_on_viewable(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag())

        with pytest.raises(ResourceForbiddenError) as exc_info:
            await service.update(db, tag.id, schemas.TagUpdate(name="Ice"), ctx=_ctx(OTHER))
        assert exc_info.value.message == "You do not have permission to update this tag"

    @pytest.mark.asyncio
    async def test_stranger_not_found_on_private(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag(visibility=Visibility.PRIVATE))

        with pytest.raises(ResourceNotFoundError):
            await service.update(db, tag.id, schemas.TagUpdate(name="Ice"), ctx=_ctx(OTHER))

    @pytest.mark.asyncio
    async def test_anonymous_forbidden(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag())

        with pytest.raises(ResourceForbiddenError):
            await service.update(db, tag.id, schemas.TagUpdate(name="Ice"), ctx=_ctx())

    @pytest.mark.asyncio
    async def test_moderator_updates_system_owned(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag(owner_id=None))

        result = await service.update(
            db, tag.id, schemas.TagUpdate(name="Ice"), ctx=_ctx(MODERATOR)
        )

        assert result.name == "Ice"
        assert result.owner_id is None

    @pytest.mark.asyncio
    async def test_owner_cannot_be_changed(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag())
        body = schemas.TagUpdate.model_validate({"name": "Ice", "ownerId": str(OTHER_ID)})

        result = await service.update(db, tag.id, body, ctx=_ctx(ADMIN))

        assert result.owner_id == OWNER_ID

    @pytest.mark.asyncio
    async def test_rename_onto_taken_name_conflicts(self, db):
        service, repo, _ = _build_service()
        repo.seed(_tag("Ice"))
        tag = repo.seed(_tag("Fire"))

        with pytest.raises(NameAlreadyExistsError):
            await service.update(db, tag.id, schemas.TagUpdate(name="ICE"), ctx=_ctx(OWNER))

    @pytest.mark.asyncio
    async def test_rename_to_own_name_allowed(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag("Fire"))

        result = await service.update(db, tag.id, schemas.TagUpdate(name="FIRE"), ctx=_ctx(OWNER))

        assert result.name == "FIRE"

    @pytest.mark.asyncio
    async def test_null_name_rejected(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag())

        with pytest.raises(ValidationException):
            await service.update(db, tag.id, schemas.TagUpdate(name=None), ctx=_ctx(OWNER))

    @pytest.mark.asyncio
    async def test_null_description_clears(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag())

        result = await service.update(
            db, tag.id, schemas.TagUpdate(description=None), ctx=_ctx(OWNER)
        )

        assert result.description is None

    @pytest.mark.asyncio
    async def test_empty_relation_list_clears_and_omitted_keeps(self, db):
        service, repo = _build_perk_service()
        perk = repo.seed(_row(Perk, name="Brave", required_level=1))

        await service.update(db, perk.id, schemas.PerkUpdate(tag_ids=[]), ctx=_ctx(OWNER))
        await service.update(db, perk.id, schemas.PerkUpdate(name="Bold"), ctx=_ctx(OWNER))

        updates = [c for c in repo._calls if c[0] == "update"]
        assert updates[0][3] == {"tags": []}
        assert updates[1][3] == {}


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


class TestDelete:
    @pytest.mark.asyncio
    async def test_owner_deletes(self, db):
        service, repo, cache = _build_service()
        tag = repo.seed(_tag())

        await service.delete(db, tag.id, ctx=_ctx(OWNER))

        assert tag.id not in repo._store
        assert cache.invalidated == ["tags:list"]

    @pytest.mark.asyncio
    async def test_referenced_resource_not_deleted(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag())
        repo.seed_references(tag.id, {"characters": 3})

        with pytest.raises(ResourceReferencedError) as exc_info:
            await service.delete(db, tag.id, ctx=_ctx(OWNER))
        assert exc_info.value.code == "RESOURCE_IN_USE"
        assert exc_info.value.count == 3
        assert tag.id in repo._store

    @pytest.mark.asyncio
    async def test_foreign_key_violation_surfaces_as_in_use(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag())
        repo.seed_in_use(tag.id)

        with pytest.raises(ResourceInUseException):
            await service.delete(db, tag.id, ctx=_ctx(OWNER))
        db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stranger_forbidden(self, db):
        service, repo, _ = _build_service()
        tag = repo.seed(_tag())

        with pytest.raises(ResourceForbiddenError):
            await service.delete(db, tag.id, ctx=_ctx(OTHER))
        assert tag.id in repo._store


# ---------------------------------------------------------------------------
# get_stats
# ---------------------------------------------------------------------------


class TestStats:
    @pytest.mark.asyncio
    async def test_user_forbidden(self, db):
        service, _, _ = _build_service()

        with pytest.raises(PermissionException):
            await service.get_stats(db, ctx=_ctx(OWNER))
        with pytest.raises(PermissionException):
            await service.get_stats(db, ctx=_ctx())

    @pytest.mark.asyncio
    async def test_counts_every_visibility(self, db):
        service, repo, _ = _build_service()
        repo.seed(_tag("A"))
        repo.seed(_tag("B", visibility=Visibility.PRIVATE))
        repo.seed(_tag("C", visibility=Visibility.HIDDEN))

        stats = await service.get_stats(db, ctx=_ctx(MODERATOR))

        assert isinstance(stats, ResourceStats)
        assert (stats.total, stats.public, stats.private, stats.hidden) == (3, 1, 1, 1)

    @pytest.mark.asyncio
    async def test_passes_configured_top_n(self, db):
        service, repo, _ = _build_service()

        await service.get_stats(db, ctx=_ctx(ADMIN))

        call = next(c for c in repo._calls if c[0] == "aggregate_stats")
        assert call[2] == 10

    @pytest.mark.asyncio
    async def test_new_counter_covers_thirty_days(self, db):
        service, repo, _ = _build_service()

        before = datetime.now(timezone.utc)
        await service.get_stats(db, ctx=_ctx(ADMIN))
        after = datetime.now(timezone.utc)

        since = next(c for c in repo._calls if c[0] == "aggregate_stats")[1]
        assert before - timedelta(days=30) <= since <= after - timedelta(days=30)

    @pytest.mark.asyncio
    async def test_row_older_than_thirty_days_not_new(self, db):
        service, repo, _ = _build_service()
        now = datetime.now(timezone.utc)
        repo.seed(_tag("Fresh")).created_at = now - timedelta(days=29)
        repo.seed(_tag("Stale")).created_at = now - timedelta(days=31)

        stats = await service.get_stats(db, ctx=_ctx(ADMIN))

        assert stats.new_last_30_days == 1
