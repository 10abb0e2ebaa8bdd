"""Shared BDD fixtures and step definitions for the content domain."""

import json
from uuid import uuid4

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then, when

from content.blog.management import AddComment, UpdateBlogPost
from content.blog.post import BlogPost
from content.blog.queries import find_posts, post_query
from shared.errors import DomainError


@pytest.fixture()
def outcome():
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a draft post titled "{title}"'), target_fixture="post")
def _(write_post, title):
    return write_post(title, status="DRAFT")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the post is published", target_fixture="post")
def _(post):
    current_domain.process(
        UpdateBlogPost(post_id=post.id, changes=json.dumps({"status": "PUBLISHED"})),
        asynchronous=False,
    )
    return current_domain.repository_for(BlogPost).get(post.id)


@when(parsers.cfparse('a reader comments "{text}"'))
def _(post, outcome, text):
    try:
        current_domain.process(
            AddComment(post_id=post.id, user_id=str(uuid4()), content=text),
            asynchronous=False,
        )
    except DomainError as exc:
        outcome["error"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the public blog lists {count:d} posts"))
def _(count):
    assert find_posts(post_query()).total == count


@then("the post has a publish date")
def _(post):
    assert post.published_at is not None


@then(parsers.cfparse('the comment is rejected with "{message}"'))
def _(outcome, message):
    assert outcome["error"].message == message
