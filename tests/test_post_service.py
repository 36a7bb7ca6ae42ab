"""
Tests for the authoring service.
"""
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from blogapi.errors import NotFoundError, StoreError, ValidationError
from blogapi.models.comment import Comment
from blogapi.models.post import Post
from blogapi.services.post_service import PostService, normalize_slug
from blogapi.static_posts import STATIC_POSTS


@pytest.fixture
def frozen(clock):
    return clock


@pytest.fixture
def service(db, frozen):
    return PostService(db, frozen)


class TestCreatePost:
    def test_defaults_to_draft(self, service, frozen):
        post = service.create_post({"title": "Test", "slug": "test-post"})
        assert post.id is not None
        assert post.status == "draft"
        assert post.created_at == frozen.now
        assert post.updated_at == frozen.now
        assert post.published_at is None
        assert post.scheduled_at is None
        assert post.author == "Germaine Washington"

    def test_create_published(self, service, frozen):
        post = service.create_post({"title": "Live", "slug": "live", "status": "published"})
        assert post.status == "published"
        assert post.published_at == frozen.now

    def test_create_scheduled_in_past_rejected(self, service, frozen, db):
        with pytest.raises(ValidationError, match="future"):
            service.create_post({
                "title": "Late",
                "slug": "late",
                "status": "scheduled",
                "scheduled_at": frozen.now - timedelta(minutes=5),
            })
        assert db.query(Post).count() == 0

    @pytest.mark.parametrize("field", ["title", "slug"])
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_required_fields(self, service, field, value):
        data = {"title": "Test", "slug": "test-post"}
        data[field] = value
        with pytest.raises(ValidationError, match=f"{field} is required"):
            service.create_post(data)

    def test_slug_collision(self, service, db):
        """The second create fails and the first post is unchanged."""
        first = service.create_post({"title": "First", "slug": "test-post", "content": "<p>one</p>"})
        with pytest.raises(ValidationError, match="already in use"):
            service.create_post({"title": "Second", "slug": "test-post"})

        db.expire_all()
        stored = db.query(Post).filter(Post.slug == "test-post").all()
        assert len(stored) == 1
        assert stored[0].id == first.id
        assert stored[0].title == "First"
        assert stored[0].content == "<p>one</p>"

    def test_slug_normalized(self, service):
        post = service.create_post({"title": "Test", "slug": "  Test-Post "})
        assert post.slug == "test-post"

    def test_tags_cleaned_in_order(self, service):
        post = service.create_post({"title": "T", "slug": "t", "tags": ["lsat", " ", "rc ", "lr"]})
        assert post.tags == ["lsat", "rc", "lr"]

    def test_unique_constraint_race_becomes_validation_error(self, service, monkeypatch):
        """A collision caught only by the database still surfaces as ValidationError."""
        service.create_post({"title": "First", "slug": "raced"})
        monkeypatch.setattr(service, "_ensure_slug_available", lambda slug, exclude_id=None: None)
        with pytest.raises(ValidationError, match="already in use"):
            service.create_post({"title": "Second", "slug": "raced"})


class TestNormalizeSlug:
    @pytest.mark.parametrize("slug", ["test-post", "7-rc-tips-rules", "a", "lsat2025"])
    def test_valid(self, slug):
        assert normalize_slug(slug) == slug

    @pytest.mark.parametrize("slug", ["two words", "under_score", "-leading", "trailing-", "double--dash", "émoji"])
    def test_invalid(self, slug):
        with pytest.raises(ValidationError):
            normalize_slug(slug)


class TestUpdatePost:
    def test_merges_fields(self, service, frozen):
        post = service.create_post({"title": "Test", "slug": "test-post", "excerpt": "old"})
        frozen.advance(minutes=10)
        updated = service.update_post(post.id, {"title": "New title"})
        assert updated.title == "New title"
        assert updated.excerpt == "old"
        assert updated.updated_at == frozen.now
        assert updated.created_at == frozen.now - timedelta(minutes=10)

    def test_missing_post(self, service):
        with pytest.raises(NotFoundError):
            service.update_post(999, {"title": "x"})

    def test_change_slug_to_taken_slug(self, service, db):
        service.create_post({"title": "A", "slug": "a"})
        b = service.create_post({"title": "B", "slug": "b"})
        with pytest.raises(ValidationError, match="already in use"):
            service.update_post(b.id, {"slug": "a", "title": "B2"})
        db.expire_all()
        stored = db.query(Post).filter(Post.id == b.id).one()
        assert stored.slug == "b"
        assert stored.title == "B"

    def test_keeping_own_slug_is_allowed(self, service):
        post = service.create_post({"title": "A", "slug": "a"})
        assert service.update_post(post.id, {"slug": "a", "title": "A2"}).title == "A2"

    def test_cannot_blank_title(self, service):
        post = service.create_post({"title": "A", "slug": "a"})
        with pytest.raises(ValidationError):
            service.update_post(post.id, {"title": "  "})

    def test_schedule_in_future_stays_scheduled(self, service, frozen):
        post = service.create_post({"title": "Test", "slug": "test-post"})
        when = frozen.now + timedelta(days=1)
        updated = service.update_post(post.id, {"status": "scheduled", "scheduled_at": when})
        assert updated.status == "scheduled"
        assert updated.scheduled_at == when

        # Time passing does not rewrite storage
        frozen.advance(days=2)
        assert service.get_post(post.id).status == "scheduled"

    def test_schedule_in_past_rejected_without_side_effects(self, service, frozen, db):
        post = service.create_post({"title": "Test", "slug": "test-post"})
        with pytest.raises(ValidationError, match="future"):
            service.update_post(post.id, {
                "title": "Changed",
                "status": "scheduled",
                "scheduled_at": frozen.now - timedelta(hours=1),
            })
        db.expire_all()
        stored = db.query(Post).filter(Post.id == post.id).one()
        assert stored.status == "draft"
        assert stored.title == "Test"

    def test_publish_then_unpublish(self, service, frozen):
        post = service.create_post({"title": "Test", "slug": "test-post"})
        published = service.update_post(post.id, {"status": "published"})
        assert published.published_at == frozen.now
        assert published.scheduled_at is None

        draft = service.update_post(post.id, {"status": "draft"})
        assert draft.status == "draft"
        assert draft.published_at is None

    def test_content_edit_leaves_status_alone(self, service, frozen):
        post = service.create_post({"title": "Test", "slug": "test-post", "status": "published"})
        first_published = post.published_at
        frozen.advance(hours=1)
        updated = service.update_post(post.id, {"content": "<p>edited</p>"})
        assert updated.status == "published"
        assert updated.published_at == first_published


class TestDeletePost:
    def test_delete_keeps_comments(self, service, db, frozen):
        post = service.create_post({"title": "Test", "slug": "test-post"})
        db.add(Comment(post_slug="test-post", author_name="Alice", comment="Nice!", created_at=frozen.now))
        db.commit()

        service.delete_post(post.id)

        assert db.query(Post).count() == 0
        assert db.query(Comment).filter(Comment.post_slug == "test-post").count() == 1

    def test_delete_missing(self, service):
        with pytest.raises(NotFoundError):
            service.delete_post(12345)


class TestListPosts:
    def test_includes_drafts_newest_first(self, service, frozen):
        service.create_post({"title": "Old", "slug": "old", "status": "published"})
        frozen.advance(hours=1)
        service.create_post({"title": "New", "slug": "new"})
        assert [p.slug for p in service.list_posts()] == ["new", "old"]

    def test_status_filter(self, service):
        service.create_post({"title": "A", "slug": "a", "status": "published"})
        service.create_post({"title": "B", "slug": "b"})
        assert [p.slug for p in service.list_posts("draft")] == ["b"]

    def test_bad_status_filter(self, service):
        with pytest.raises(ValidationError):
            service.list_posts("archived")


class TestPublishDue:
    def test_promotes_only_due_posts(self, service, frozen):
        due = service.create_post({
            "title": "Due", "slug": "due", "status": "scheduled",
            "scheduled_at": frozen.now + timedelta(hours=1),
        })
        later = service.create_post({
            "title": "Later", "slug": "later", "status": "scheduled",
            "scheduled_at": frozen.now + timedelta(days=3),
        })
        frozen.advance(hours=2)

        published = service.publish_due()

        assert [p.slug for p in published] == ["due"]
        assert service.get_post(due.id).status == "published"
        assert service.get_post(due.id).published_at == frozen.now - timedelta(hours=1)
        assert service.get_post(due.id).scheduled_at is None
        assert service.get_post(later.id).status == "scheduled"

    def test_nothing_due(self, service):
        assert service.publish_due() == []


class TestImportStaticPosts:
    def test_imports_bundle_as_published(self, service, db):
        created = service.import_static_posts()
        assert len(created) == len(STATIC_POSTS)
        post = db.query(Post).filter(Post.slug == "weaken-question-strategy").one()
        assert post.status == "published"
        assert post.published_at == datetime(2025, 6, 1)
        assert post.tags == ["logical-reasoning", "weaken", "lsat-prep"]

    def test_skips_existing_slugs(self, service):
        service.create_post({"title": "Mine", "slug": "weaken-question-strategy"})
        created = service.import_static_posts()
        assert len(created) == len(STATIC_POSTS) - 1
        assert service.import_static_posts() == []


class TestStoreFailures:
    def test_commit_failure_becomes_store_error(self, service, db, monkeypatch):
        def broken_commit():
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

        monkeypatch.setattr(db, "commit", broken_commit)
        with pytest.raises(StoreError):
            service.create_post({"title": "Test", "slug": "test-post"})


class TestFieldLengths:
    @pytest.mark.parametrize("field,limit", [
        ("title", 200),
        ("excerpt", 500),
        ("meta_description", 300),
        ("author", 100),
        ("featured_image", 500),
    ])
    def test_create_rejects_overlong_field(self, service, db, field, limit):
        data = {"title": "Test", "slug": "test-post", field: "x" * (limit + 1)}
        with pytest.raises(ValidationError, match=f"{limit} characters") as excinfo:
            service.create_post(data)
        assert excinfo.value.details == {"field": field, "max_length": limit}
        assert db.query(Post).count() == 0

    def test_create_accepts_field_at_limit(self, service):
        post = service.create_post({"title": "x" * 200, "slug": "test-post"})
        assert len(post.title) == 200

    def test_overlong_slug(self, service):
        with pytest.raises(ValidationError, match="200 characters"):
            service.create_post({"title": "Test", "slug": "a" * 201})

    def test_update_rejects_overlong_field_without_side_effects(self, service, db):
        post = service.create_post({"title": "Test", "slug": "test-post"})
        with pytest.raises(ValidationError, match="500 characters"):
            service.update_post(post.id, {"title": "Changed", "excerpt": "x" * 501})
        db.expire_all()
        stored = db.query(Post).filter(Post.id == post.id).one()
        assert stored.title == "Test"
        assert stored.excerpt == ""


class TestStrayScheduledAtOnUpdate:
    def test_schedule_time_on_draft_rejected(self, service, frozen, db):
        post = service.create_post({"title": "Test", "slug": "test-post"})
        with pytest.raises(ValidationError, match="scheduled_at") as excinfo:
            service.update_post(post.id, {"scheduled_at": frozen.now + timedelta(days=1)})
        assert excinfo.value.details["field"] == "scheduled_at"
        db.expire_all()
        stored = db.query(Post).filter(Post.id == post.id).one()
        assert stored.status == "draft"
        assert stored.scheduled_at is None

    def test_schedule_time_with_publish_rejected(self, service, frozen):
        with pytest.raises(ValidationError, match="scheduled_at"):
            service.create_post({
                "title": "Test", "slug": "test-post", "status": "published",
                "scheduled_at": frozen.now + timedelta(days=1),
            })

    def test_new_time_on_scheduled_post_reschedules(self, service, frozen):
        post = service.create_post({
            "title": "Test", "slug": "test-post", "status": "scheduled",
            "scheduled_at": frozen.now + timedelta(days=1),
        })
        later = frozen.now + timedelta(days=2)
        assert service.update_post(post.id, {"scheduled_at": later}).scheduled_at == later
