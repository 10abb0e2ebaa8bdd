"""BDD tests for cart merging, checkout and cancellation."""

from pytest_bdd import scenarios

scenarios("features/checkout.feature")
