"""Discount administration: commands and handler."""

import json
from datetime import datetime

from protean import handle
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from commerce.discount.discount import Discount
from commerce.domain import commerce
from shared.errors import DuplicateResource
from shared.logging import get_logger

logger = get_logger(__name__)

_DATE_FIELDS = ("valid_from", "valid_to")


@commerce.command(part_of="Discount")
class CreateDiscount:
    code = String(required=True, max_length=50)
    description = String(max_length=255)
    type = String(required=True, max_length=20)
    value = Float(required=True)
    min_order_amount = Float()
    max_discount_amount = Float()
    usage_limit = Integer()
    valid_from = DateTime()
    valid_to = DateTime()
    is_active = Boolean(default=True)


@commerce.command(part_of="Discount")
class UpdateDiscount:
    discount_id = Identifier(required=True)
    changes = Text(required=True)  # JSON object; dates as ISO-8601 strings


@commerce.command(part_of="Discount")
class DeleteDiscount:
    discount_id = Identifier(required=True)


def _check_code_free(code, discount_id=None):
    existing = current_domain.repository_for(Discount).find_by_code(code)
    if existing is not None and str(existing.id) != str(discount_id):
        raise DuplicateResource("Discount code already exists")


@commerce.command_handler(part_of=Discount)
class ManageDiscountsHandler:
    @handle(CreateDiscount)
    def create_discount(self, command):
        _check_code_free(command.code)

        discount = Discount.create(
            code=command.code,
            type=command.type,
            value=command.value,
            description=command.description,
            min_order_amount=command.min_order_amount,
            max_discount_amount=command.max_discount_amount,
            usage_limit=command.usage_limit,
            valid_from=command.valid_from,
            valid_to=command.valid_to,
            is_active=command.is_active,
        )
        current_domain.repository_for(Discount).add(discount)

        logger.info("Discount created", discount_id=str(discount.id), code=discount.code)
        return str(discount.id)

    @handle(UpdateDiscount)
    def update_discount(self, command):
        repo = current_domain.repository_for(Discount)
        discount = repo.get_discount(command.discount_id)
        changes = json.loads(command.changes)

        for field in _DATE_FIELDS:
            if changes.get(field):
                changes[field] = datetime.fromisoformat(changes[field])
        if changes.get("code"):
            _check_code_free(changes["code"], discount.id)

        discount.update_details(**changes)
        repo.add(discount)
        return str(discount.id)

    @handle(DeleteDiscount)
    def delete_discount(self, command):
        repo = current_domain.repository_for(Discount)
        discount = repo.get_discount(command.discount_id)
        repo.delete_discount(discount)

        logger.info("Discount deleted", discount_id=str(discount.id), code=discount.code)
