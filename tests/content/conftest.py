from uuid import uuid4

import pytest


@pytest.fixture(scope="session")
def _content_domain():
    from content.domain import content

    return content


@pytest.fixture(autouse=True)
def run_around_tests(_content_domain):
    """Push domain context before each test, cleanup after."""
    from shared.db import reset_data

    ctx = _content_domain.domain_context()
    ctx.push()

    yield

    ctx.pop()
    reset_data(_content_domain)


@pytest.fixture()
def write_post():
    import json

    from protean import current_domain

    from content.blog.management import CreateBlogPost
    from content.blog.post import BlogPost

    def _write(title="Spring Lookbook", status="PUBLISHED", tags=None, **fields):
        post_id = current_domain.process(
            CreateBlogPost(
                title=title,
                content=fields.pop("content", "Ten outfits for the new season."),
                author_id=fields.pop("author_id", str(uuid4())),
                status=status,
                tags=json.dumps(tags or []),
                **fields,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(BlogPost).get(post_id)

    return _write


@pytest.fixture()
def account():
    """Register a user in the commerce domain, which owns every account.

    Returns bearer headers for the new user. Commerce data is wiped afterwards.
    """
    from commerce.account.registration import RegisterUser
    from commerce.domain import commerce
    from shared.auth import Role, hash_password, issue_access_token
    from shared.db import reset_data

    def _account(email, role=Role.USER.value):
        with commerce.domain_context():
            user_id = commerce.process(
                RegisterUser(email=email, password_hash=hash_password("secret-pass-1"), first_name="Reader", role=role),
                asynchronous=False,
            )
        token = issue_access_token(user_id, role, email)
        return {"Authorization": f"Bearer {token}"}

    yield _account

    reset_data(commerce)


@pytest.fixture()
def admin_headers(account):
    from shared.auth import Role

    return account("admin@example.com", Role.ADMIN.value)


@pytest.fixture()
def reader_headers(account):
    return account("reader@example.com")
