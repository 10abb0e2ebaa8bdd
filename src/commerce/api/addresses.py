"""Address book endpoints for users, plus the admin overview."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from commerce.address.address import AddressBook, address_errors
from commerce.address.management import AddAddress, RemoveAddress, SetDefaultAddress, UpdateAddress
from commerce.api.presenters import present_address
from commerce.api.schemas import (
    AddressTypeParam,
    CreateAddressRequest,
    UpdateAddressRequest,
    ValidateAddressRequest,
)
from shared.api.dependencies import admin_principal, current_principal
from shared.api.envelope import created, ok, paginated
from shared.api.pagination import PageParams, page_params
from shared.auth import Principal
from shared.errors import NotFoundError
from shared.listing import fetch_page, sort_records

router = APIRouter(prefix="/api/addresses", tags=["addresses"])
admin_router = APIRouter(prefix="/admin/addresses", tags=["admin: addresses"])


def _book(user_id) -> AddressBook | None:
    return current_domain.repository_for(AddressBook).for_user(user_id)


def _owned_address(user_id, address_id):
    book = _book(user_id)
    if book is None:
        raise NotFoundError("Address not found")
    return book.get_address(address_id)


def _ordered(addresses):
    # Defaults first, then newest
    newest_first = sort_records(addresses, "created_at", "desc")
    return sorted(newest_first, key=lambda a: not a.is_default)


@router.get("")
async def list_addresses(
    type: AddressTypeParam | None = Query(None),  # noqa: A002
    is_default: bool | None = Query(None, alias="isDefault"),
    principal: Principal = Depends(current_principal),
):
    book = _book(principal.user_id)
    addresses = list(book.addresses) if book else []
    if type is not None:
        addresses = [a for a in addresses if a.type == type.value]
    if is_default is not None:
        addresses = [a for a in addresses if a.is_default == is_default]
    return ok({"addresses": [present_address(a) for a in _ordered(addresses)]})


@router.post("", status_code=201)
async def create_address(body: CreateAddressRequest, principal: Principal = Depends(current_principal)):
    fields = body.model_dump(exclude={"type", "is_default"})
    command = AddAddress(
        user_id=principal.user_id,
        type=body.type.value,
        fields=json.dumps(fields),
        is_default=body.is_default,
    )
    address_id = current_domain.process(command, asynchronous=False)
    return created(present_address(_owned_address(principal.user_id, address_id)), message="Address created")


@router.post("/validate")
async def validate_address(body: ValidateAddressRequest, principal: Principal = Depends(current_principal)):
    errors = address_errors(body.model_dump())
    return ok({"valid": not errors, "errors": errors})


@router.get("/{address_id}")
async def get_address(address_id: str, principal: Principal = Depends(current_principal)):
    return ok(present_address(_owned_address(principal.user_id, address_id)))


@router.put("/{address_id}")
async def update_address(
    address_id: str,
    body: UpdateAddressRequest,
    principal: Principal = Depends(current_principal),
):
    command = UpdateAddress(
        user_id=principal.user_id,
        address_id=address_id,
        changes=json.dumps(body.changes()),
    )
    current_domain.process(command, asynchronous=False)
    return ok(present_address(_owned_address(principal.user_id, address_id)), message="Address updated")


@router.patch("/{address_id}/default")
async def set_default_address(address_id: str, principal: Principal = Depends(current_principal)):
    command = SetDefaultAddress(user_id=principal.user_id, address_id=address_id)
    current_domain.process(command, asynchronous=False)
    return ok(present_address(_owned_address(principal.user_id, address_id)), message="Default address updated")


@router.delete("/{address_id}")
async def delete_address(address_id: str, principal: Principal = Depends(current_principal)):
    current_domain.process(RemoveAddress(user_id=principal.user_id, address_id=address_id), asynchronous=False)
    return ok(None, message="Address deleted")


# --- Admin ---


@admin_router.get("")
async def admin_list_addresses(
    user_id: str | None = Query(None, alias="userId"),
    type: AddressTypeParam | None = Query(None),  # noqa: A002
    page: PageParams = Depends(page_params),
    principal: Principal = Depends(admin_principal),
):
    repo = current_domain.repository_for(AddressBook)
    filters = {"type": type.value} if type is not None else {}
    if user_id:
        book = repo.for_user(user_id)
        if book is None:
            return paginated("addresses", [], page.meta(0))
        filters["address_book_id"] = str(book.id)

    listing = fetch_page(repo.address_query(**filters), "-created_at", page.offset, page.limit)
    owners = repo.owners_of(listing.items)
    items = [present_address(a, user_id=owners.get(str(a.address_book_id))) for a in listing.items]
    return paginated("addresses", items, page.meta(listing.total))
