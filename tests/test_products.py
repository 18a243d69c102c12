# tests/test_products.py
from fastapi.testclient import TestClient
from catalog.main import create_app
from catalog.database import ProductStore
from catalog.faults import FaultInjector

GUEUZE = {
    "id": 67,
    "categoryId": 5,
    "category": {"id": 5, "name": "Belgian And French Origin Ales"},
    "name": "Belgian-Style Gueuze Lambic",
    "shortName": "Gueuze",
    "description": "Old lambic blended with young lambic.",
    "ibuMin": "11",
    "ibuMax": "23",
    "abvMin": "6.8",
    "abvMax": "8.6",
    "srmMin": "6",
    "srmMax": "13",
    "ogMin": "1.044",
    "fgMin": "1",
    "fgMax": "1.01",
}

NEW_PRODUCT = {"name": "B", "shortName": "b", "category": 1, "description": "d"}

def make_client(products=None):
    store = ProductStore(products if products is not None else [{"id": 1, "name": "A"}, dict(GUEUZE)])
    app = create_app(store=store, injector=FaultInjector.disabled())
    return TestClient(app), store

def test_root_returns_empty_200():
    client, _ = make_client()
    r = client.get("/")
    assert r.status_code == 200
    assert r.content == b""

def test_list_products_returns_summaries():
    client, _ = make_client()
    r = client.get("/products")
    assert r.status_code == 200
    assert r.json() == [
        {"id": 1, "categoryId": None, "name": "A", "shortName": None, "details": "/products/1"},
        {"id": 67, "categoryId": 5, "name": "Belgian-Style Gueuze Lambic",
         "shortName": "Gueuze", "details": "/products/67"},
    ]

def test_list_products_empty_collection():
    client, _ = make_client([])
    r = client.get("/products")
    assert r.status_code == 200
    assert r.json() == []

def test_get_product_returns_record_unchanged():
    client, _ = make_client()
    r = client.get("/products/67")
    assert r.status_code == 200
    assert r.json() == GUEUZE

def test_get_missing_product_is_404():
    client, _ = make_client()
    for pid in ("2", "999", "abc"):
        r = client.get(f"/products/{pid}")
        assert r.status_code == 404
        assert r.json() == {"message": "Product not found!"}

def test_create_product_assigns_next_id():
    client, store = make_client([{"id": 1, "name": "A"}])
    r = client.post("/products", json=NEW_PRODUCT)
    assert r.status_code == 201
    assert r.json() == {**NEW_PRODUCT, "id": 2}
    assert store.get(2)["name"] == "B"
    assert client.get("/products/2").json() == {**NEW_PRODUCT, "id": 2}

def test_create_product_without_description():
    client, _ = make_client()
    r = client.post("/products", json={"name": "B", "shortName": "b", "category": 1})
    assert r.status_code == 201
    assert r.json()["id"] == 68

def test_create_product_ignores_client_id():
    client, _ = make_client()
    r = client.post("/products", json={**NEW_PRODUCT, "id": 1})
    assert r.status_code == 201
    assert r.json()["id"] == 68

def test_create_product_missing_fields():
    client, store = make_client()
    r = client.post("/products", json={"name": "B", "description": "d"})
    assert r.status_code == 400
    assert r.json() == {"message": "Missing fields: shortName, category"}

    r = client.post("/products", json={})
    assert r.status_code == 400
    assert r.json() == {"message": "Missing fields: name, shortName, category"}

    # empty values are rejected like absent ones
    r = client.post("/products", json={"name": "", "shortName": "b", "category": 1})
    assert r.status_code == 400
    assert r.json() == {"message": "Missing fields: name"}
    assert len(store) == 2

def test_repeated_creates_never_reuse_ids():
    client, _ = make_client()
    ids = []
    for i in range(5):
        r = client.post("/products", json={**NEW_PRODUCT, "name": f"B{i}"})
        assert r.status_code == 201
        ids.append(r.json()["id"])
    assert ids == [68, 69, 70, 71, 72]
    assert len(client.get("/products").json()) == 7

def test_create_on_empty_collection_starts_at_one():
    client, _ = make_client([])
    r = client.post("/products", json=NEW_PRODUCT)
    assert r.status_code == 201
    assert r.json()["id"] == 1

def test_update_product_partial():
    client, _ = make_client()
    r = client.put("/products/1", json={"name": "A2"})
    assert r.status_code == 200
    assert r.json() == {"id": 1, "name": "A2"}

    r = client.put("/products/67", json={"ibuMin": "12", "category": {"id": 6, "name": "Other"}})
    assert r.status_code == 200
    body = r.json()
    assert body["ibuMin"] == "12"
    assert body["category"] == {"id": 6, "name": "Other"}
    assert body["ibuMax"] == GUEUZE["ibuMax"]
    assert body["name"] == GUEUZE["name"]
    assert client.get("/products/67").json() == body

def test_update_keeps_position_and_id():
    client, _ = make_client()
    r = client.put("/products/1", json={"id": 500, "shortName": "a"})
    assert r.status_code == 200
    assert r.json() == {"id": 1, "name": "A", "shortName": "a"}
    listing = client.get("/products").json()
    assert [p["id"] for p in listing] == [1, 67]
    assert listing[0]["shortName"] == "a"

def test_update_with_null_overwrites_value():
    client, _ = make_client()
    r = client.put("/products/67", json={"description": None})
    assert r.status_code == 200
    assert r.json()["description"] is None

def test_update_missing_product_is_404():
    client, _ = make_client()
    r = client.put("/products/2", json={"name": "X"})
    assert r.status_code == 404
    assert r.json() == {"message": "Product not found!"}

def test_non_object_body_is_rejected():
    client, _ = make_client()
    r = client.post("/products", json=["name"])
    assert r.status_code == 422
    assert r.json() == {"message": "Request body must be a JSON object"}

def test_create_without_body_reports_missing_fields():
    client, store = make_client()
    for r in (
        client.post("/products"),
        client.post("/products", data={"name": "x"}),
        client.post("/products", content=b"name=x", headers={"Content-Type": "text/plain"}),
    ):
        assert r.status_code == 400
        assert r.json() == {"message": "Missing fields: name, shortName, category"}
    assert len(store) == 2

def test_update_without_body_leaves_record_unchanged():
    client, _ = make_client()
    r = client.put("/products/67")
    assert r.status_code == 200
    assert r.json() == GUEUZE
    r = client.put("/products/1", data={"name": "Z"})
    assert r.status_code == 200
    assert r.json() == {"id": 1, "name": "A"}

def test_update_without_body_on_missing_product_is_404():
    client, _ = make_client()
    r = client.put("/products/2")
    assert r.status_code == 404
    assert r.json() == {"message": "Product not found!"}

def test_malformed_json_body_is_400():
    client, _ = make_client()
    r = client.post("/products", content=b"{name:", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"message": "Malformed JSON body"}
