"""Shape aggregates into the camelCase JSON the API returns."""


def present_user(user):
    return {
        "id": str(user.id),
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "fullName": user.full_name,
        "role": user.role,
        "isActive": user.is_active,
        "createdAt": user.created_at,
        "lastLoginAt": user.last_login_at,
    }


def present_address(address, user_id=None):
    data = {
        "id": str(address.id),
        "type": address.type,
        "firstName": address.first_name,
        "lastName": address.last_name,
        "company": address.company,
        "addressLine1": address.address_line1,
        "addressLine2": address.address_line2,
        "city": address.city,
        "state": address.state,
        "postalCode": address.postal_code,
        "country": address.country,
        "phone": address.phone,
        "isDefault": address.is_default,
        "createdAt": address.created_at,
    }
    if user_id is not None:
        data["userId"] = str(user_id)
    return data


def present_category(category, children=None, product_count=None):
    data = {
        "id": str(category.id),
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "parentId": str(category.parent_id) if category.parent_id else None,
        "imageUrl": category.image_url,
        "isActive": category.is_active,
        "displayOrder": category.display_order,
        "createdAt": category.created_at,
        "updatedAt": category.updated_at,
    }
    if children is not None:
        data["children"] = children
    if product_count is not None:
        data["productCount"] = product_count
    return data


def present_variant(variant):
    return {
        "id": str(variant.id),
        "sku": variant.sku,
        "name": variant.name,
        "size": variant.size,
        "color": variant.color,
        "price": variant.price,
        "stock": variant.stock,
        "isActive": variant.is_active,
    }


def present_product(product, include_inactive_variants=False):
    variants = [v for v in product.variants if include_inactive_variants or v.is_active]
    return {
        "id": str(product.id),
        "name": product.name,
        "slug": product.slug,
        "sku": product.sku,
        "description": product.description,
        "price": product.price,
        "compareAtPrice": product.compare_at_price,
        "stock": product.stock,
        "categoryId": str(product.category_id) if product.category_id else None,
        "tags": product.tag_list,
        "imageUrl": product.image_url,
        "isActive": product.is_active,
        "isFeatured": product.is_featured,
        "viewCount": product.view_count,
        "variants": [present_variant(v) for v in variants],
        "createdAt": product.created_at,
        "updatedAt": product.updated_at,
    }


def present_cart_item(item, product):
    data = {
        "id": str(item.id),
        "productId": str(item.product_id),
        "variantId": str(item.variant_id) if item.variant_id else None,
        "quantity": item.quantity,
        "addedAt": item.added_at,
        "product": None,
        "variant": None,
    }
    if product is not None:
        data["product"] = {
            "id": str(product.id),
            "name": product.name,
            "slug": product.slug,
            "price": product.price,
            "stock": product.stock,
            "imageUrl": product.image_url,
            "isActive": product.is_active,
        }
        variant = product.find_variant(item.variant_id) if item.variant_id else None
        if variant is not None:
            data["variant"] = present_variant(variant)
        if product.is_purchasable(item.variant_id):
            data["lineTotal"] = round(product.unit_price(item.variant_id) * item.quantity, 2)
    return data


def present_cart(lines, summary):
    return {
        "items": [present_cart_item(item, product) for item, product in lines],
        "summary": {
            "totalItems": summary["total_items"],
            "totalAmount": summary["total_amount"],
        },
    }


def _present_order_address(address):
    if address is None:
        return None
    return {
        "firstName": address.first_name,
        "lastName": address.last_name,
        "company": address.company,
        "addressLine1": address.address_line1,
        "addressLine2": address.address_line2,
        "city": address.city,
        "state": address.state,
        "postalCode": address.postal_code,
        "country": address.country,
        "phone": address.phone,
    }


def present_order_item(item):
    return {
        "id": str(item.id),
        "productId": str(item.product_id),
        "variantId": str(item.variant_id) if item.variant_id else None,
        "sku": item.sku,
        "name": item.name,
        "unitPrice": item.unit_price,
        "quantity": item.quantity,
        "lineTotal": item.line_total,
    }


def present_order_summary(order):
    return {
        "id": str(order.id),
        "orderNumber": order.order_number,
        "userId": str(order.user_id),
        "status": order.status,
        "paymentStatus": order.payment_status,
        "paymentMethod": order.payment_method,
        "itemCount": sum(item.quantity for item in order.items),
        "subtotal": order.subtotal,
        "discountAmount": order.discount_amount,
        "total": order.total,
        "createdAt": order.created_at,
    }


def present_order(order):
    history = sorted(order.status_history, key=lambda entry: entry.changed_at)
    data = present_order_summary(order)
    data.update(
        {
            "items": [present_order_item(item) for item in order.items],
            "discountCode": order.discount_code,
            "shippingAddressId": str(order.shipping_address_id),
            "billingAddressId": str(order.billing_address_id),
            "shippingAddress": _present_order_address(order.shipping_address),
            "billingAddress": _present_order_address(order.billing_address),
            "notes": order.notes,
            "carrier": order.carrier,
            "trackingNumber": order.tracking_number,
            "estimatedDelivery": order.estimated_delivery,
            "cancellationReason": order.cancellation_reason,
            "paymentReference": order.payment_reference,
            "paidAt": order.paid_at,
            "statusHistory": [
                {"status": entry.status, "note": entry.note, "changedAt": entry.changed_at} for entry in history
            ],
            "updatedAt": order.updated_at,
        }
    )
    return data


def present_discount(discount):
    return {
        "id": str(discount.id),
        "code": discount.code,
        "description": discount.description,
        "type": discount.type,
        "value": discount.value,
        "minOrderAmount": discount.min_order_amount,
        "maxDiscountAmount": discount.max_discount_amount,
        "usageLimit": discount.usage_limit,
        "usedCount": discount.used_count,
        "validFrom": discount.valid_from,
        "validTo": discount.valid_to,
        "isActive": discount.is_active,
        "createdAt": discount.created_at,
    }
