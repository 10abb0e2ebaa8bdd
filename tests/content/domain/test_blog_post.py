"""Domain tests for the BlogPost aggregate."""

from uuid import uuid4

import pytest
from protean.exceptions import ValidationError

from content.blog.post import BlogPost, PostStatus


def _post(**overrides):
    fields = {"title": "Hello", "slug": "hello", "content": "Body", "author_id": str(uuid4())}
    fields.update(overrides)
    return BlogPost.write(**fields)


class TestWriting:
    def test_new_posts_are_drafts(self):
        post = _post()
        assert post.status == PostStatus.DRAFT.value
        assert post.published_at is None
        assert not post.is_published

    def test_writing_straight_to_published_stamps_the_date(self):
        post = _post(status="PUBLISHED")
        assert post.is_published
        assert post.published_at is not None

    def test_tags(self):
        assert _post(tags=["style", "spring"]).tag_list == ["style", "spring"]

    def test_slug_must_be_url_safe(self):
        with pytest.raises(ValidationError):
            _post(slug="Hello World")

    def test_published_without_date_is_invalid(self):
        with pytest.raises(ValidationError):
            BlogPost(title="x", slug="x", content="x", author_id="a", status="PUBLISHED")


class TestStatus:
    def test_republishing_keeps_first_publish_date(self):
        post = _post(status="PUBLISHED")
        first_published = post.published_at

        post.change_status("ARCHIVED")
        post.change_status("PUBLISHED")

        assert post.published_at == first_published

    def test_unknown_status(self):
        with pytest.raises(ValidationError):
            _post().change_status("DELETED")

    def test_update_details_routes_status(self):
        post = _post()
        post.update_details(title="New title", status="PUBLISHED", tags=["a"])

        assert post.title == "New title"
        assert post.is_published
        assert post.tag_list == ["a"]

    def test_record_view(self):
        post = _post()
        post.record_view()
        post.record_view()
        assert post.views == 2
