"""AddressBook aggregate: a user's shipping and billing addresses.

Each user owns one address book. The book keeps exactly one default
address per type (SHIPPING, BILLING) whenever it holds any address of that
type, so default changes happen inside a single aggregate and therefore a
single transaction.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, String

from commerce.domain import commerce
from shared.errors import CannotDeleteOnlyDefault, NotFoundError

_POSTAL_CODE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 -]{1,10}[A-Za-z0-9]$")
_PHONE = re.compile(r"^\+?[0-9][0-9 ()-]{5,19}$")

REQUIRED_FIELDS = ("type", "first_name", "last_name", "address_line1", "city", "postal_code", "country")


class AddressType(Enum):
    SHIPPING = "SHIPPING"
    BILLING = "BILLING"


def address_errors(data: dict) -> dict:
    """Field errors for an address payload; empty when the payload is valid."""
    errors = {}
    for field in REQUIRED_FIELDS:
        if not data.get(field):
            errors[field] = ["This field is required"]

    address_type = data.get("type")
    if address_type and address_type not in [t.value for t in AddressType]:
        errors["type"] = ["Type must be SHIPPING or BILLING"]

    postal_code = data.get("postal_code")
    if postal_code and not _POSTAL_CODE.match(postal_code):
        errors["postal_code"] = ["Invalid postal code"]

    phone = data.get("phone")
    if phone and not _PHONE.match(phone):
        errors["phone"] = ["Invalid phone number"]

    return errors


@commerce.entity(part_of="AddressBook")
class Address:
    type = String(required=True, choices=AddressType)
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    company = String(max_length=100)
    address_line1 = String(required=True, max_length=255)
    address_line2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)
    is_default = Boolean(default=False)
    created_at = DateTime()

    @invariant.post
    def formats_must_be_valid(self):
        errors = address_errors(
            {
                "type": self.type,
                "first_name": self.first_name,
                "last_name": self.last_name,
                "address_line1": self.address_line1,
                "city": self.city,
                "postal_code": self.postal_code,
                "country": self.country,
                "phone": self.phone,
            }
        )
        if errors:
            raise ValidationError(errors)


@commerce.aggregate
class AddressBook:
    user_id = Identifier(required=True, unique=True)
    addresses = HasMany(Address)
    updated_at = DateTime()

    @invariant.post
    def one_default_per_type(self):
        for address_type in AddressType:
            of_type = [a for a in self.addresses if a.type == address_type.value]
            if of_type and len([a for a in of_type if a.is_default]) != 1:
                raise ValidationError(
                    {"addresses": [f"Exactly one {address_type.value.lower()} address must be the default"]}
                )

    @classmethod
    def create(cls, user_id):
        return cls(user_id=user_id, updated_at=datetime.now(UTC))

    def find(self, address_id):
        return next((a for a in self.addresses if str(a.id) == str(address_id)), None)

    def get_address(self, address_id):
        address = self.find(address_id)
        if address is None:
            raise NotFoundError("Address not found")
        return address

    def of_type(self, address_type):
        return [a for a in self.addresses if a.type == address_type]

    def default_for(self, address_type):
        return next((a for a in self.of_type(address_type) if a.is_default), None)

    def add_address(self, type, is_default=False, **fields):  # noqa: A002
        # The first address of a type is always its default
        if not self.of_type(type):
            is_default = True

        with atomic_change(self):
            if is_default:
                self._clear_default(type)

            address = Address(
                type=type,
                is_default=is_default,
                created_at=datetime.now(UTC),
                **fields,
            )
            self.add_addresses(address)

        self.updated_at = datetime.now(UTC)
        return address

    def update_address(self, address_id, **changes):
        address = self.get_address(address_id)
        with atomic_change(self):
            for field, value in changes.items():
                setattr(address, field, value)
        self.updated_at = datetime.now(UTC)
        return address

    def set_default(self, address_id):
        """Make the address its type's default, un-setting the previous one."""
        address = self.get_address(address_id)
        if address.is_default:
            return address

        with atomic_change(self):
            self._clear_default(address.type)
            address.is_default = True

        self.updated_at = datetime.now(UTC)
        return address

    def remove_address(self, address_id):
        address = self.get_address(address_id)
        others = [a for a in self.of_type(address.type) if str(a.id) != str(address.id)]

        if address.is_default and not others:
            raise CannotDeleteOnlyDefault()

        with atomic_change(self):
            self.remove_addresses(address)
            if address.is_default:
                successor = max(others, key=lambda a: a.created_at or datetime.min.replace(tzinfo=UTC))
                successor.is_default = True

        self.updated_at = datetime.now(UTC)

    def _clear_default(self, address_type):
        for existing in self.of_type(address_type):
            if existing.is_default:
                existing.is_default = False
