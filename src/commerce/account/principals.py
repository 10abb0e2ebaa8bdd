"""Resolve a verified access token to the account it names.

Tokens outlive changes to the account: a deactivated, deleted or demoted
user must not keep the access the token once granted. Every authenticated
request therefore re-reads the user, and the stored role wins over the
role claim.
"""

from commerce.account.user import User
from commerce.domain import commerce
from shared.auth import Principal, Role
from shared.errors import AuthenticationError
from shared.logging import get_logger

logger = get_logger(__name__)


def load_principal(claimed: Principal) -> Principal:
    # Accounts live in commerce; content requests read them from here too
    with commerce.domain_context():
        user = commerce.repository_for(User).find_by_id(claimed.user_id)

    if user is None:
        logger.info("Token for unknown user rejected", user_id=claimed.user_id)
        raise AuthenticationError("User not found")
    if not user.is_active:
        logger.info("Token for inactive user rejected", user_id=claimed.user_id)
        raise AuthenticationError("Account is disabled")

    return Principal(user_id=str(user.id), role=Role(user.role), email=user.email)
