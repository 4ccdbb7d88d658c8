import pytest
from fastapi.testclient import TestClient

from offers.main import app
from offers.schemas import InventoryOffer


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def inventory():
    """Catalog records as the checkout path sees them."""
    return [
        InventoryOffer(id="inv-1", category="Attar", item="Oud Royale", size="12ml",
                       quantity=10, mrp=100, offer="180 for 2"),
        InventoryOffer(id="inv-2", category="Perfume", item="Rose Mist", size="50ml",
                       quantity=3, mrp=200, offer="50% off"),
        InventoryOffer(id="inv-3", category="Perfume", item="Musk Noir", size="100ml",
                       quantity=5, mrp=500, offer=""),
    ]
