"""Storefront FastAPI application.

Serves the commerce and content domains over HTTP. Commands are processed
synchronously; each request runs inside the domain context its URL prefix
maps to.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import uuid

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the config overlay in each domain.toml.
from commerce.domain import commerce
from content.domain import content
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from shared import settings
from shared.api.envelope import ok
from shared.api.errors import register_exception_handlers
from shared.logging import add_context, clear_context, get_logger

# Import the API packages before init() so domain traversal finds them already
# loaded instead of executing a router module ahead of its package __init__.
from commerce.api import routers as commerce_routers  # noqa: E402
from content.api import routers as content_routers  # noqa: E402

commerce.init()
content.init()

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
# Longest prefixes first: content routes sit under the generic /api and /admin
_ROUTE_DOMAIN_MAP = {
    "/api/blog": content,
    "/api/feed": content,
    "/admin/blog": content,
    "/admin/feed": content,
    "/api": commerce,
    "/admin": commerce,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path == prefix or path.startswith(prefix + "/"):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Multi-tenant storefront backend: Commerce & Content domains",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context and bind request log context."""
    clear_context()
    add_context(
        request_id=request.headers.get("X-Request-ID") or str(uuid.uuid4()),
        method=request.method,
        path=request.url.path,
    )
    try:
        domain = _resolve_domain(request.url.path)
        if domain is not None:
            with domain.domain_context():
                return await call_next(request)
        # No domain match: health check, docs
        return await call_next(request)
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
for router in [*commerce_routers, *content_routers]:
    app.include_router(router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return ok(
        {
            "status": "ok",
            "domains": {
                "commerce": {"name": commerce.name},
                "content": {"name": content.name},
            },
        }
    )
