"""The signed-in user's profile, and account administration for admins."""

import json
from typing import Literal

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from commerce.account.management import DeleteUser, UpdateProfile, UpdateUser
from commerce.account.user import User
from commerce.api.presenters import present_user
from commerce.api.schemas import RoleParam, UpdateProfileRequest, UpdateUserRequest
from shared.api.dependencies import admin_principal, current_principal
from shared.api.envelope import ok, paginated
from shared.api.pagination import PageParams, page_params
from shared.auth import Principal
from shared.listing import fetch_page, order_key, text_search

profile_router = APIRouter(prefix="/api/profile", tags=["profile"])
admin_router = APIRouter(prefix="/admin/users", tags=["admin: users"])

_SORT_FIELDS = {"createdAt": "created_at", "email": "email", "name": "first_name"}


def _changes(body) -> str:
    changes = body.changes()
    if not changes:
        raise ValidationError({"body": ["At least one field is required"]})
    return json.dumps(changes)


@profile_router.get("")
async def get_profile(principal: Principal = Depends(current_principal)):
    return ok(present_user(current_domain.repository_for(User).get_user(principal.user_id)))


@profile_router.put("")
async def update_profile(body: UpdateProfileRequest, principal: Principal = Depends(current_principal)):
    command = UpdateProfile(user_id=principal.user_id, changes=_changes(body))
    current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get_user(principal.user_id)
    return ok(present_user(user), message="Profile updated successfully")


# --- Admin ---


@admin_router.get("")
async def list_users(
    search: str | None = Query(None, description="Name or email contains"),
    role: RoleParam | None = Query(None),
    is_active: bool | None = Query(None, alias="isActive"),
    sort_by: Literal["createdAt", "email", "name"] = Query("createdAt", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    page: PageParams = Depends(page_params),
    principal: Principal = Depends(admin_principal),
):
    filters = {}
    if role is not None:
        filters["role"] = role.value
    if is_active is not None:
        filters["is_active"] = is_active

    query = current_domain.repository_for(User).matching(**filters)
    matches_text = text_search(search, "first_name", "last_name", "email")
    if matches_text is not None:
        query = query.filter(matches_text)

    listing = fetch_page(query, order_key(_SORT_FIELDS[sort_by], sort_order), page.offset, page.limit)
    return paginated("users", [present_user(u) for u in listing.items], page.meta(listing.total))


@admin_router.get("/{user_id}")
async def get_user(user_id: str, principal: Principal = Depends(admin_principal)):
    return ok(present_user(current_domain.repository_for(User).get_user(user_id)))


@admin_router.put("/{user_id}")
async def update_user(user_id: str, body: UpdateUserRequest, principal: Principal = Depends(admin_principal)):
    command = UpdateUser(user_id=user_id, admin_id=principal.user_id, changes=_changes(body))
    current_domain.process(command, asynchronous=False)
    return ok(present_user(current_domain.repository_for(User).get_user(user_id)), message="User updated")


@admin_router.delete("/{user_id}")
async def delete_user(user_id: str, principal: Principal = Depends(admin_principal)):
    current_domain.process(DeleteUser(user_id=user_id, admin_id=principal.user_id), asynchronous=False)
    return ok(None, message="User deleted")
