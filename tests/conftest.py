import pytest

from catalog_diff.classifier import determine_change_type
from catalog_diff.models import ATTRIBUTES, PRICE, PRODUCTS, SUB_ATTRIBUTES, ChangeRecord
from catalog_diff.normalizer import normalize_row


class FakeCatalogLookup:
    """
    In-memory stand-in for the menu item service.

    Args:
        menus (dict): Maps (category_id, location_id) to the list of items returned.
        failing (set): (category_id, location_id) pairs that raise instead of returning.
    """

    def __init__(self, menus=None, failing=None):
        self.menus = menus or {}
        self.failing = failing or set()
        self.calls = []

    async def lookup(self, category_id, location_id):
        self.calls.append((category_id, location_id))
        if (category_id, location_id) in self.failing:
            raise RuntimeError(f"service unavailable for {category_id}/{location_id}")
        return list(self.menus.get((category_id, location_id), []))


@pytest.fixture
def fake_lookup():
    """Factory fixture for FakeCatalogLookup instances."""
    def _make(menus=None, failing=None):
        return FakeCatalogLookup(menus=menus, failing=failing)
    return _make


@pytest.fixture
def products_spec():
    return PRODUCTS


@pytest.fixture
def price_spec():
    return PRICE


@pytest.fixture
def attributes_spec():
    return ATTRIBUTES


@pytest.fixture
def sub_attributes_spec():
    return SUB_ATTRIBUTES


@pytest.fixture
def make_record():
    """
    Build a classified ChangeRecord straight from a flat row.

    The change type is decided by the classifier unless `change_type` is given.
    """
    def _make(row, spec=PRODUCTS, change_type=None):
        before, after = normalize_row(row, spec)
        return ChangeRecord(
            before=before,
            after=after,
            change_type=change_type or determine_change_type(before, after, spec),
        )
    return _make


@pytest.fixture
def product_rows():
    """One row of each change kind for the products report."""
    return [
        ["", "", "", "443: Bar", "137: Cocktails", "9001: Mojito"],                          # added
        ["443: Bar", "137: Cocktails", "9002: Daiquiri", "", "", ""],                        # removed
        ["443: Bar", "137: Cocktails", "9003: Negroni", "555: Patio", "137: Cocktails", "9003: Negroni"],  # moved
        ["443: Bar", "138: Beer", "9100: Lager", "443: Bar", "138: Beer", "9101: Pilsner"],  # modified
    ]
