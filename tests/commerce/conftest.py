import pytest

from shared.auth import Role, hash_password


@pytest.fixture(scope="session")
def _commerce_domain():
    from commerce.domain import commerce

    return commerce


@pytest.fixture(autouse=True)
def run_around_tests(_commerce_domain):
    """Push domain context before each test, cleanup after."""
    from shared.db import reset_data

    ctx = _commerce_domain.domain_context()
    ctx.push()

    yield

    ctx.pop()
    reset_data(_commerce_domain)


@pytest.fixture()
def register():
    """Register a user directly through the domain and return it."""
    from protean import current_domain

    from commerce.account.registration import RegisterUser
    from commerce.account.user import User

    def _register(email="shopper@example.com", password="secret-pass-1", first_name="Sam", role=Role.USER.value):
        user_id = current_domain.process(
            RegisterUser(
                email=email,
                password_hash=hash_password(password),
                first_name=first_name,
                role=role,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(User).get(user_id)

    return _register


@pytest.fixture()
def shopper(register):
    return register()


@pytest.fixture()
def admin(register):
    return register(email="admin@example.com", first_name="Ada", role=Role.ADMIN.value)


@pytest.fixture()
def make_product():
    from protean import current_domain

    from commerce.product.product import Product

    counter = {"n": 0}

    def _make(price=99.99, stock=10, variants=None, **fields):
        counter["n"] += 1
        n = counter["n"]
        product = Product.create(
            name=fields.pop("name", f"Product {n}"),
            slug=fields.pop("slug", f"product-{n}"),
            sku=fields.pop("sku", f"SKU-{n:04d}"),
            price=price,
            stock=stock,
            **fields,
        )
        for variant in variants or []:
            product.add_variant(**variant)
        current_domain.repository_for(Product).add(product)
        return current_domain.repository_for(Product).get(product.id)

    return _make


@pytest.fixture()
def address_fields():
    return {
        "first_name": "Sam",
        "last_name": "Shopper",
        "address_line1": "1 Main Street",
        "city": "Springfield",
        "postal_code": "12345",
        "country": "US",
        "phone": "+1 555 0100",
    }


@pytest.fixture()
def auth_headers():
    from shared.auth import issue_access_token

    def _headers(user):
        token = issue_access_token(user.id, user.role, user.email)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def add_address(address_fields):
    import json

    from protean import current_domain

    from commerce.address.management import AddAddress

    def _add(user, type="SHIPPING", is_default=False, **overrides):  # noqa: A002
        return current_domain.process(
            AddAddress(
                user_id=user.id,
                type=type,
                fields=json.dumps({**address_fields, **overrides}),
                is_default=is_default,
            ),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def add_to_cart():
    from protean import current_domain

    from commerce.cart.items import AddCartItem

    def _add(user, product, quantity=1, variant_id=None):
        return current_domain.process(
            AddCartItem(user_id=user.id, product_id=product.id, variant_id=variant_id, quantity=quantity),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def checkout(add_address):
    """Place an order for ``user`` using a freshly added address."""
    from protean import current_domain

    from commerce.order.checkout import PlaceOrder

    def _checkout(user, discount_code=None, payment_method="CARD"):
        address_id = add_address(user)
        return current_domain.process(
            PlaceOrder(
                user_id=user.id,
                shipping_address_id=address_id,
                billing_address_id=address_id,
                payment_method=payment_method,
                discount_code=discount_code,
            ),
            asynchronous=False,
        )

    return _checkout
