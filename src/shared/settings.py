"""Process-level settings read from the environment.

Persistence, brokers and event processing are configured per domain in
``domain.toml`` (selected by ``PROTEAN_ENV``). Everything here concerns the
HTTP edge and the application layer: tokens, pagination, payments and CORS.
"""

import os

JWT_SECRET = os.getenv("JWT_SECRET", "storefront-dev-secret-change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_TTL_MINUTES = int(os.getenv("ACCESS_TOKEN_TTL_MINUTES", "60"))

DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "20"))
MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "100"))

# Page size used when a query walks every matching record
QUERY_BATCH_SIZE = int(os.getenv("QUERY_BATCH_SIZE", "500"))

PAYMENT_GATEWAY = os.getenv("PAYMENT_GATEWAY", "fake")

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

PASSWORD_HASH_ITERATIONS = int(os.getenv("PASSWORD_HASH_ITERATIONS", "310000"))
