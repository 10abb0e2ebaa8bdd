"""Address book management: commands and handler.

Address fields travel as a JSON object because they are optional and
partial on update.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from commerce.address.address import AddressBook
from commerce.domain import commerce
from shared.errors import NotFoundError
from shared.logging import get_logger

logger = get_logger(__name__)

UNSET_DEFAULT_MESSAGE = "A default address stays default until another address is made the default"


@commerce.command(part_of="AddressBook")
class AddAddress:
    user_id = Identifier(required=True)
    type = String(required=True, max_length=20)
    fields = Text(required=True)  # JSON object of address fields
    is_default = Boolean(default=False)


@commerce.command(part_of="AddressBook")
class UpdateAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    changes = Text(required=True)  # JSON object of changed fields


@commerce.command(part_of="AddressBook")
class SetDefaultAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@commerce.command(part_of="AddressBook")
class RemoveAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


def _owned_book(user_id) -> AddressBook:
    book = current_domain.repository_for(AddressBook).for_user(user_id)
    if book is None:
        raise NotFoundError("Address not found")
    return book


@commerce.command_handler(part_of=AddressBook)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(AddressBook)
        book = repo.for_user_or_new(command.user_id)

        address = book.add_address(
            type=command.type,
            is_default=command.is_default,
            **json.loads(command.fields),
        )
        repo.add(book)

        logger.info(
            "Address added",
            user_id=str(command.user_id),
            address_id=str(address.id),
            type=address.type,
            is_default=address.is_default,
        )
        return str(address.id)

    @handle(UpdateAddress)
    def update_address(self, command):
        book = _owned_book(command.user_id)
        changes = json.loads(command.changes)

        # Default flag changes go through set_default so the old default is cleared
        make_default = changes.pop("is_default", None)
        if make_default is False and book.get_address(command.address_id).is_default:
            raise ValidationError({"is_default": [UNSET_DEFAULT_MESSAGE]})

        book.update_address(command.address_id, **changes)
        if make_default:
            book.set_default(command.address_id)

        current_domain.repository_for(AddressBook).add(book)
        return str(command.address_id)

    @handle(SetDefaultAddress)
    def set_default_address(self, command):
        book = _owned_book(command.user_id)
        address = book.set_default(command.address_id)
        current_domain.repository_for(AddressBook).add(book)

        logger.info("Default address changed", user_id=str(command.user_id), address_id=str(address.id))
        return str(address.id)

    @handle(RemoveAddress)
    def remove_address(self, command):
        book = _owned_book(command.user_id)
        book.remove_address(command.address_id)
        current_domain.repository_for(AddressBook).add(book)

        logger.info("Address removed", user_id=str(command.user_id), address_id=str(command.address_id))
