"""Account registration and sign-in.

Passwords never travel inside commands: the API hashes them before
``RegisterUser`` is built, and sign-in checks them in ``authenticate``.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from commerce.account.user import User
from commerce.domain import commerce
from shared.auth import Role
from shared.errors import AuthenticationError, DuplicateResource
from shared.logging import get_logger

logger = get_logger(__name__)


@commerce.command(part_of="User")
class RegisterUser:
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    first_name: String(required=True, max_length=100)
    last_name: String(max_length=100)
    role: String(choices=Role, default=Role.USER.value)


@commerce.command(part_of="User")
class RecordLogin:
    user_id: Identifier(required=True)


@commerce.command_handler(part_of=User)
class AccountHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise DuplicateResource("Email already exists")

        user = User.register(
            email=command.email,
            password_hash=command.password_hash,
            first_name=command.first_name,
            last_name=command.last_name,
            role=command.role,
        )
        repo.add(user)

        logger.info("User registered", user_id=str(user.id), role=user.role)
        return str(user.id)

    @handle(RecordLogin)
    def record_login(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get_user(command.user_id)
        user.record_login()
        repo.add(user)


def authenticate(email: str, password: str) -> User:
    """Return the active user owning these credentials."""
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None or not user.check_password(password):
        raise AuthenticationError("Invalid credentials")
    if not user.is_active:
        raise AuthenticationError("Account is disabled")
    return user
