"""Profile edits by users and account administration by admins.

Changes travel as a JSON object of snake_case fields, as in the other
update commands. Admins manage every account but their own access: they
cannot demote, deactivate or delete themselves.
"""

import json

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from commerce.account.user import User
from commerce.domain import commerce
from shared.auth import Role
from shared.errors import DuplicateResource, SelfLockout
from shared.logging import get_logger

logger = get_logger(__name__)

PROFILE_FIELDS = ("first_name", "last_name", "email")


@commerce.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    changes: Text(required=True)  # JSON object of profile fields


@commerce.command(part_of="User")
class UpdateUser:
    user_id: Identifier(required=True)
    admin_id: Identifier(required=True)
    changes: Text(required=True)  # profile fields plus role and is_active


@commerce.command(part_of="User")
class DeleteUser:
    user_id: Identifier(required=True)
    admin_id: Identifier(required=True)


def _check_email_free(email, user_id):
    existing = current_domain.repository_for(User).find_by_email(email)
    if existing is not None and str(existing.id) != str(user_id):
        raise DuplicateResource("Email already exists")


def _apply_profile(user, changes):
    profile = {field: changes[field] for field in PROFILE_FIELDS if field in changes}
    if profile.get("email"):
        _check_email_free(profile["email"], user.id)
    user.update_profile(**profile)


@commerce.command_handler(part_of=User)
class UserManagementHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get_user(command.user_id)
        changes = json.loads(command.changes)

        _apply_profile(user, changes)
        repo.add(user)

        logger.info("Profile updated", user_id=str(user.id), fields=sorted(changes))
        return str(user.id)

    @handle(UpdateUser)
    def update_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get_user(command.user_id)
        changes = json.loads(command.changes)
        acting_on_self = str(user.id) == str(command.admin_id)

        role = changes.get("role")
        is_active = changes.get("is_active")
        if acting_on_self and ((role is not None and role != Role.ADMIN.value) or is_active is False):
            raise SelfLockout()

        _apply_profile(user, changes)
        if role is not None:
            user.change_role(role)
        if is_active is True:
            user.activate()
        elif is_active is False:
            user.deactivate()
        repo.add(user)

        logger.info(
            "User updated by admin",
            user_id=str(user.id),
            admin_id=str(command.admin_id),
            fields=sorted(changes),
        )
        return str(user.id)

    @handle(DeleteUser)
    def delete_user(self, command):
        if str(command.user_id) == str(command.admin_id):
            raise SelfLockout()

        repo = current_domain.repository_for(User)
        user = repo.get_user(command.user_id)
        repo.delete_user(user)

        logger.info("User deleted", user_id=str(user.id), admin_id=str(command.admin_id))
