import pytest


@pytest.fixture()
def user_headers(shopper, auth_headers):
    return auth_headers(shopper)


@pytest.fixture()
def admin_headers(admin, auth_headers):
    return auth_headers(admin)


@pytest.fixture()
def address_payload():
    return {
        "type": "SHIPPING",
        "firstName": "Sam",
        "lastName": "Shopper",
        "addressLine1": "1 Main Street",
        "city": "Springfield",
        "postalCode": "12345",
        "country": "US",
    }
