"""Application tests for registration, sign-in and account management."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from commerce.account.management import DeleteUser, UpdateProfile, UpdateUser
from commerce.account.principals import load_principal
from commerce.account.registration import RecordLogin, authenticate
from commerce.account.user import User
from shared.auth import Principal, Role
from shared.errors import AuthenticationError, DuplicateResource, NotFoundError, SelfLockout


class TestRegistration:
    def test_register(self, shopper):
        assert shopper.email == "shopper@example.com"
        assert shopper.check_password("secret-pass-1")

    def test_duplicate_email_is_rejected(self, register):
        register(email="dup@example.com")
        with pytest.raises(DuplicateResource, match="Email already exists"):
            register(email="DUP@example.com")


class TestAuthenticate:
    def test_valid_credentials(self, shopper):
        assert authenticate("shopper@example.com", "secret-pass-1").id == shopper.id

    def test_email_lookup_ignores_case(self, shopper):
        assert authenticate("Shopper@Example.com", "secret-pass-1").id == shopper.id

    def test_wrong_password(self, shopper):
        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            authenticate("shopper@example.com", "nope-nope-nope")

    def test_unknown_email(self):
        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            authenticate("ghost@example.com", "whatever-123")

    def test_disabled_account(self, shopper):
        shopper.is_active = False
        current_domain.repository_for(User).add(shopper)

        with pytest.raises(AuthenticationError, match="Account is disabled"):
            authenticate("shopper@example.com", "secret-pass-1")

    def test_record_login(self, shopper):
        current_domain.process(RecordLogin(user_id=shopper.id), asynchronous=False)
        assert current_domain.repository_for(User).get(shopper.id).last_login_at is not None



def _stored(user):
    return current_domain.repository_for(User).get(user.id)


class TestProfile:
    def test_update_names_and_email(self, shopper):
        changes = {"first_name": "Samantha", "email": "Sam@Example.com"}
        current_domain.process(UpdateProfile(user_id=shopper.id, changes=json.dumps(changes)), asynchronous=False)

        user = _stored(shopper)
        assert user.first_name == "Samantha"
        assert user.email == "sam@example.com"
        assert user.role == Role.USER.value

    def test_email_taken_by_someone_else(self, register, shopper):
        register(email="taken@example.com")
        with pytest.raises(DuplicateResource, match="Email already exists"):
            current_domain.process(
                UpdateProfile(user_id=shopper.id, changes=json.dumps({"email": "taken@example.com"})),
                asynchronous=False,
            )

    def test_keeping_own_email_is_fine(self, shopper):
        current_domain.process(
            UpdateProfile(user_id=shopper.id, changes=json.dumps({"email": shopper.email, "last_name": "Lee"})),
            asynchronous=False,
        )
        assert _stored(shopper).last_name == "Lee"

    def test_profile_cannot_change_role(self, shopper):
        current_domain.process(
            UpdateProfile(user_id=shopper.id, changes=json.dumps({"role": "ADMIN", "is_active": False})),
            asynchronous=False,
        )
        user = _stored(shopper)
        assert user.role == Role.USER.value
        assert user.is_active

    def test_malformed_email(self, shopper):
        with pytest.raises(ValidationError):
            current_domain.process(
                UpdateProfile(user_id=shopper.id, changes=json.dumps({"email": "not-an-email"})), asynchronous=False
            )


class TestAdministration:
    def test_promote_and_deactivate(self, admin, shopper):
        changes = {"role": "ADMIN", "is_active": False}
        current_domain.process(
            UpdateUser(user_id=shopper.id, admin_id=admin.id, changes=json.dumps(changes)), asynchronous=False
        )

        user = _stored(shopper)
        assert user.role == Role.ADMIN.value
        assert not user.is_active

    def test_reactivate(self, admin, shopper):
        shopper.deactivate()
        current_domain.repository_for(User).add(shopper)

        current_domain.process(
            UpdateUser(user_id=shopper.id, admin_id=admin.id, changes=json.dumps({"is_active": True})),
            asynchronous=False,
        )
        assert _stored(shopper).is_active

    def test_admin_cannot_demote_or_deactivate_self(self, admin):
        for changes in ({"role": "USER"}, {"is_active": False}):
            with pytest.raises(SelfLockout):
                current_domain.process(
                    UpdateUser(user_id=admin.id, admin_id=admin.id, changes=json.dumps(changes)), asynchronous=False
                )
        assert _stored(admin).role == Role.ADMIN.value

    def test_admin_can_rename_self(self, admin):
        current_domain.process(
            UpdateUser(user_id=admin.id, admin_id=admin.id, changes=json.dumps({"first_name": "Adeline"})),
            asynchronous=False,
        )
        assert _stored(admin).first_name == "Adeline"

    def test_delete(self, admin, shopper):
        current_domain.process(DeleteUser(user_id=shopper.id, admin_id=admin.id), asynchronous=False)

        with pytest.raises(NotFoundError, match="User not found"):
            current_domain.repository_for(User).get_user(shopper.id)

    def test_admin_cannot_delete_self(self, admin):
        with pytest.raises(SelfLockout):
            current_domain.process(DeleteUser(user_id=admin.id, admin_id=admin.id), asynchronous=False)


class TestLoadPrincipal:
    def test_role_and_email_come_from_the_stored_user(self, shopper):
        principal = load_principal(Principal(user_id=str(shopper.id), role=Role.ADMIN, email="old@example.com"))

        assert principal.role == Role.USER
        assert principal.email == shopper.email

    def test_inactive_user(self, shopper):
        shopper.deactivate()
        current_domain.repository_for(User).add(shopper)

        with pytest.raises(AuthenticationError, match="Account is disabled"):
            load_principal(Principal(user_id=str(shopper.id), role=Role.USER))

    def test_missing_user(self):
        with pytest.raises(AuthenticationError, match="User not found"):
            load_principal(Principal(user_id="2b1c9f64-0d8e-4f3a-9a51-6f0f3c1d7e20", role=Role.USER))
