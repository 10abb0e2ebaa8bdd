"""Shape content aggregates into camelCase JSON."""


def present_blog_post(post, include_content=True):
    data = {
        "id": str(post.id),
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt,
        "coverImageUrl": post.cover_image_url,
        "category": post.category,
        "tags": post.tag_list,
        "authorId": str(post.author_id),
        "status": post.status,
        "isFeatured": post.is_featured,
        "views": post.views,
        "publishedAt": post.published_at,
        "createdAt": post.created_at,
        "updatedAt": post.updated_at,
    }
    if include_content:
        data["content"] = post.content
    return data


def present_comment(comment):
    return {
        "id": str(comment.id),
        "postId": str(comment.post_id),
        "userId": str(comment.user_id),
        "authorName": comment.author_name,
        "content": comment.content,
        "createdAt": comment.created_at,
    }


def present_feed_post(post):
    return {
        "id": str(post.id),
        "title": post.title,
        "content": post.content,
        "platform": post.platform,
        "platformPostId": post.platform_post_id,
        "postUrl": post.post_url,
        "imageUrl": post.image_url,
        "hashtags": post.hashtag_list,
        "likes": post.likes,
        "postedAt": post.posted_at,
        "isActive": post.is_active,
        "createdAt": post.created_at,
        "updatedAt": post.updated_at,
    }
