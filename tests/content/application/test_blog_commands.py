"""Application tests for blog authoring and comments."""

import json
from uuid import uuid4

import pytest
from protean import current_domain

from content.blog.comment import BlogComment
from content.blog.management import AddComment, DeleteBlogPost, UpdateBlogPost
from content.blog.post import BlogPost
from content.blog.queries import category_counts, find_posts, post_query, tag_counts
from content.blog.views import record_post_view
from shared.errors import DuplicateResource, NotFoundError


def _comment(post, content="Love it", author_name="Reader"):
    return current_domain.process(
        AddComment(post_id=post.id, user_id=str(uuid4()), author_name=author_name, content=content),
        asynchronous=False,
    )


class TestAuthoring:
    def test_slug_is_derived_from_title(self, write_post):
        post = write_post("Spring Lookbook 2026!")
        assert post.slug == "spring-lookbook-2026"

    def test_duplicate_slug(self, write_post):
        write_post("Spring Lookbook")
        with pytest.raises(DuplicateResource, match="slug already exists"):
            write_post("Spring  Lookbook")

    def test_update_to_a_taken_slug(self, write_post):
        write_post("First", slug="first")
        second = write_post("Second", slug="second")

        with pytest.raises(DuplicateResource):
            current_domain.process(
                UpdateBlogPost(post_id=second.id, changes=json.dumps({"slug": "first"})), asynchronous=False
            )

    def test_publishing_a_draft(self, write_post):
        draft = write_post(status="DRAFT")
        assert draft.published_at is None

        current_domain.process(
            UpdateBlogPost(post_id=draft.id, changes=json.dumps({"status": "PUBLISHED"})), asynchronous=False
        )

        post = current_domain.repository_for(BlogPost).get(draft.id)
        assert post.is_published
        assert post.published_at is not None

    def test_delete_removes_comments(self, write_post):
        post = write_post()
        _comment(post)
        _comment(post, content="Me too")

        current_domain.process(DeleteBlogPost(post_id=post.id), asynchronous=False)

        assert current_domain.repository_for(BlogComment).for_post(post.id).all().total == 0
        with pytest.raises(NotFoundError, match="Blog post not found"):
            current_domain.repository_for(BlogPost).get_post(post.id)


class TestViewCounting:
    def test_view_on_a_stale_copy_is_counted(self, write_post):
        post = write_post(title="Linen Edit")
        stale = current_domain.repository_for(BlogPost).get(post.id)
        current_domain.process(
            UpdateBlogPost(post_id=post.id, changes=json.dumps({"title": "The Linen Edit"})), asynchronous=False
        )

        record_post_view(stale)

        stored = current_domain.repository_for(BlogPost).get(post.id)
        assert stored.views == 1
        assert stored.title == "The Linen Edit"
        assert stale.views == 1


class TestComments:
    def test_comment_on_published_post(self, write_post):
        post = write_post()
        comment = current_domain.repository_for(BlogComment).get(_comment(post))

        assert str(comment.post_id) == str(post.id)
        assert comment.author_name == "Reader"

    def test_drafts_cannot_be_commented(self, write_post):
        with pytest.raises(NotFoundError):
            _comment(write_post(status="DRAFT"))


class TestQueries:
    @pytest.fixture(autouse=True)
    def posts(self, write_post):
        write_post("Summer Dresses", category="Style", tags=["summer", "dresses"], is_featured=True)
        write_post("Winter Coats", category="Style", tags=["winter"])
        write_post("Care Guide", category="Guides", tags=["summer"])
        write_post("Unreleased", status="DRAFT", category="Style")

    def test_only_published_posts(self):
        assert {p.title for p in find_posts(post_query()).items} == {"Summer Dresses", "Winter Coats", "Care Guide"}

    def test_search_and_filters(self):
        def titles(**criteria):
            return [p.title for p in find_posts(post_query(**criteria)).items]

        assert titles(search="coats") == ["Winter Coats"]
        assert set(titles(tag="SUMMER")) == {"Summer Dresses", "Care Guide"}
        assert titles(featured=True) == ["Summer Dresses"]
        assert len(titles(category="style")) == 2

    def test_any_status(self):
        assert find_posts(post_query(status=None)).total == 4

    def test_sort_by_title(self):
        titles = [p.title for p in find_posts(post_query(), "title", "asc").items]
        assert titles == ["Care Guide", "Summer Dresses", "Winter Coats"]

    def test_categories_and_tags(self):
        assert category_counts() == [{"name": "Guides", "count": 1}, {"name": "Style", "count": 2}]
        assert tag_counts()[0] == {"name": "summer", "count": 2}
