"""User aggregate: a registered shopper or administrator."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from commerce.domain import commerce
from shared.auth import Role, verify_password


def _is_valid_email(email: str) -> bool:
    if any(ch.isspace() for ch in email) or email.count("@") != 1:
        return False

    local_part, domain_part = email.split("@", 1)
    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False
    if not domain_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False
    if ".." in local_part or ".." in domain_part:
        return False
    return not any(label.startswith("-") or label.endswith("-") for label in domain_part.split("."))


@commerce.aggregate
class User:
    """A person who can sign in. Admins manage the catalog, orders and content."""

    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    first_name: String(required=True, max_length=100)
    last_name: String(max_length=100)
    role: String(choices=Role, default=Role.USER.value)
    is_active: Boolean(default=True)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    last_login_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _is_valid_email(self.email):
            raise ValidationError({"email": ["Invalid email address"]})

    @classmethod
    def register(cls, email, password_hash, first_name, last_name=None, role=Role.USER.value):
        return cls(
            email=email.strip().lower(),
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
        )

    @property
    def full_name(self):
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def check_password(self, password):
        return verify_password(password, self.password_hash)

    def record_login(self):
        self.last_login_at = datetime.now(UTC)

    def update_profile(self, **changes):
        """Change the fields a user may edit on their own account."""
        if changes.get("email"):
            changes["email"] = changes["email"].strip().lower()
        for field, value in changes.items():
            setattr(self, field, value)

    def change_role(self, role):
        self.role = Role(role).value

    def deactivate(self):
        self.is_active = False

    def activate(self):
        self.is_active = True
