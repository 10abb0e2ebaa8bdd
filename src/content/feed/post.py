"""FeedPost aggregate: a social media post mirrored onto the storefront."""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Integer, String, Text

from content.domain import content


class Platform(Enum):
    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    FACEBOOK = "facebook"
    TIKTOK = "tiktok"


def normalize_hashtags(hashtags):
    """Lower-case, strip leading '#', drop blanks and repeats, keep order."""
    seen = []
    for tag in hashtags or []:
        cleaned = tag.strip().lstrip("#").lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


@content.aggregate
class FeedPost:
    title: String(max_length=255)
    content: Text()
    platform: String(required=True, choices=Platform)
    platform_post_id: String(required=True, max_length=255, unique=True)
    post_url: String(max_length=500)
    image_url: String(max_length=500)
    hashtags: Text()  # JSON array, normalised
    likes: Integer(default=0, min_value=0)
    posted_at: DateTime()
    is_active: Boolean(default=True)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def mirror(cls, platform, platform_post_id, hashtags=None, **fields):
        return cls(
            platform=platform,
            platform_post_id=platform_post_id,
            hashtags=json.dumps(normalize_hashtags(hashtags)),
            **fields,
        )

    @property
    def hashtag_list(self):
        return json.loads(self.hashtags) if self.hashtags else []

    def update_details(self, **changes):
        if "hashtags" in changes:
            changes["hashtags"] = json.dumps(normalize_hashtags(changes["hashtags"]))
        for field, value in changes.items():
            setattr(self, field, value)
        self.updated_at = datetime.now(UTC)
