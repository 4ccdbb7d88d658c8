from offers.errors import CatalogUnavailable


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Offer Pricing Engine API is running."


def test_parse_endpoint(client):
    resp = client.post("/offers/parse", json={"offer": "180 for 2"})
    assert resp.status_code == 200
    assert resp.json() == {"kind": "bundle", "group_price": 180, "group_size": 2, "original": "180 for 2"}

    resp = client.post("/offers/parse", json={"offer": "buy 3 get 1 free"})
    assert resp.json()["kind"] == "unrecognized"


def test_quote_endpoint(client):
    resp = client.post("/offers/quote", json={"quantity": 5, "unit_price": 100, "offer": "180 for 2"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["pricing"]["final_total"] == 460
    assert body["pricing"]["savings"] == 40
    assert body["nudge"]["show"] is True
    assert body["nudge"]["units_needed"] == 1
    assert body["description"] == "₹90/each when you buy 2 (Save ₹20)"


def test_quote_rejects_negative_quantity(client):
    resp = client.post("/offers/quote", json={"quantity": -1, "unit_price": 100, "offer": "50%"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "invalid_precondition"


def test_cart_totals(client):
    resp = client.post("/cart/totals", json={"lines": [
        {"product_id": "oud", "quantity": 5, "unit_price": 100, "offer": "180 for 2"},
        {"product_id": "musk", "quantity": 1, "unit_price": 450},
    ]})
    assert resp.status_code == 200
    body = resp.json()
    assert body["subtotal"] == 950
    assert body["grand_total"] == 910
    assert body["total_savings"] == 40
    assert body["offer_lines_count"] == 1
    assert len(body["lines"]) == 2


def test_checkout_reprices_from_catalog(client, inventory, monkeypatch):
    monkeypatch.setattr("offers.catalog.fetch_inventory_offers", lambda category=None: inventory)
    resp = client.post("/cart/checkout", json={"lines": [
        {"inventory_id": "inv-1", "quantity": 5},
        {"inventory_id": "inv-2", "quantity": 3},
        {"inventory_id": "inv-3", "quantity": 1},
    ]})
    assert resp.status_code == 200
    body = resp.json()
    assert body["grand_total"] == 460 + 300 + 500
    assert body["total_savings"] == 340
    assert body["lines"][0]["variant"] == "12ml"
    assert body["lines"][0]["unit_price"] == 100


def test_checkout_unknown_item(client, inventory, monkeypatch):
    monkeypatch.setattr("offers.catalog.fetch_inventory_offers", lambda category=None: inventory)
    resp = client.post("/cart/checkout", json={"lines": [{"inventory_id": "nope", "quantity": 1}]})
    assert resp.status_code == 404


def test_checkout_insufficient_stock(client, inventory, monkeypatch):
    monkeypatch.setattr("offers.catalog.fetch_inventory_offers", lambda category=None: inventory)
    resp = client.post("/cart/checkout", json={"lines": [{"inventory_id": "inv-2", "quantity": 4}]})
    assert resp.status_code == 409
    assert "Rose Mist - 50ml" in resp.json()["detail"]


def test_checkout_catalog_down(client, monkeypatch):
    def unavailable(category=None):
        raise CatalogUnavailable("connection refused")

    monkeypatch.setattr("offers.catalog.fetch_inventory_offers", unavailable)
    resp = client.post("/cart/checkout", json={"lines": [{"inventory_id": "inv-1", "quantity": 1}]})
    assert resp.status_code == 502
    assert resp.json()["error"] == "catalog_unavailable"


def test_checkout_counts_stock_across_duplicate_lines(client, inventory, monkeypatch):
    monkeypatch.setattr("offers.catalog.fetch_inventory_offers", lambda category=None: inventory)
    resp = client.post("/cart/checkout", json={"lines": [
        {"inventory_id": "inv-2", "quantity": 3},
        {"inventory_id": "inv-2", "quantity": 3},
    ]})
    assert resp.status_code == 409
    assert "Rose Mist - 50ml" in resp.json()["detail"]


def test_checkout_allows_split_lines_within_stock(client, inventory, monkeypatch):
    monkeypatch.setattr("offers.catalog.fetch_inventory_offers", lambda category=None: inventory)
    resp = client.post("/cart/checkout", json={"lines": [
        {"inventory_id": "inv-2", "quantity": 1},
        {"inventory_id": "inv-2", "quantity": 2},
    ]})
    assert resp.status_code == 200
    assert resp.json()["grand_total"] == 100 + 200
