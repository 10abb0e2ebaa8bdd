"""Domain tests for FeedPost and hashtag normalisation."""

import pytest
from protean.exceptions import ValidationError

from content.feed.post import FeedPost, normalize_hashtags


def test_normalize_hashtags():
    assert normalize_hashtags(["#Summer", "summer", " #Beach ", "", "#"]) == ["summer", "beach"]


def test_mirror_stores_normalised_hashtags():
    post = FeedPost.mirror(platform="instagram", platform_post_id="ig-1", hashtags=["#OOTD"])
    assert post.hashtag_list == ["ootd"]
    assert post.is_active
    assert post.likes == 0


def test_platform_is_validated():
    with pytest.raises(ValidationError):
        FeedPost.mirror(platform="myspace", platform_post_id="ms-1")


def test_update_details():
    post = FeedPost.mirror(platform="tiktok", platform_post_id="tt-1")
    post.update_details(likes=42, hashtags=["#Dance"])
    assert post.likes == 42
    assert post.hashtag_list == ["dance"]
