# tests/test_fault_injection.py
from fastapi.testclient import TestClient
from catalog.config import Settings
from catalog.main import create_app
from catalog.database import ProductStore
from catalog.faults import FaultInjector

def make_client(injector, settings=None):
    store = ProductStore([{"id": 1, "name": "A", "shortName": "a", "categoryId": 2}])
    return TestClient(create_app(settings=settings, store=store, injector=injector))

def test_threshold_follows_rate():
    assert FaultInjector().threshold == 0.9
    assert FaultInjector(rate=0.25).threshold == 0.75

def test_should_fail_above_threshold_only():
    draws = iter([0.95, 0.9, 0.1])
    injector = FaultInjector(random_fn=lambda: next(draws))
    assert injector.should_fail("/products") is True
    assert injector.should_fail("/products") is False
    assert injector.should_fail("/products") is False

def test_disabled_or_zero_rate_never_draws():
    def explode():
        raise AssertionError("random source should not be consulted")
    assert FaultInjector(enabled=False, random_fn=explode).should_fail("/products") is False
    assert FaultInjector(rate=0, random_fn=explode).should_fail("/products") is False

def test_exempt_paths():
    injector = FaultInjector(random_fn=lambda: 1.0)
    assert not injector.is_exempt("/")
    assert injector.is_exempt("/doc")
    assert injector.is_exempt("/doc/index.html")
    assert not injector.is_exempt("/docs-old")
    assert not injector.is_exempt("/products")
    assert FaultInjector(exempt_paths=["/"]).is_exempt("/")

def test_injected_fault_short_circuits_every_product_route():
    client = make_client(FaultInjector(random_fn=lambda: 0.99))
    assert client.get("/products").status_code == 500
    assert client.get("/products/1").status_code == 500
    r = client.post("/products", json={"name": "B", "shortName": "b", "category": 1})
    assert r.status_code == 500
    assert r.text == "Internal Server Error"
    assert client.put("/products/1", json={"name": "Z"}).status_code == 500

    # nothing reached the store
    client.app.state.injector.enabled = False
    assert client.get("/products/1").json()["name"] == "A"
    assert len(client.get("/products").json()) == 1

def test_no_fault_below_threshold():
    client = make_client(FaultInjector(random_fn=lambda: 0.5))
    assert client.get("/products").status_code == 200
    assert client.get("/products/1").status_code == 200

def test_fault_replaces_not_found():
    client = make_client(FaultInjector(random_fn=lambda: 0.99))
    assert client.get("/products/404").status_code == 500

def test_docs_are_never_failed_but_root_is(tmp_path):
    (tmp_path / "index.html").write_text("<h1>docs</h1>", encoding="utf-8")
    settings = Settings(DOC_DIR=tmp_path)
    client = make_client(FaultInjector(random_fn=lambda: 0.99), settings=settings)
    r = client.get("/")
    assert r.status_code == 500
    assert r.text == "Internal Server Error"
    r = client.get("/doc/index.html")
    assert r.status_code == 200
    assert "docs" in r.text
    assert client.get("/doc/missing.html").status_code == 404

def test_root_passes_below_threshold():
    client = make_client(FaultInjector(random_fn=lambda: 0.9))
    assert client.get("/").status_code == 200

def test_faults_enabled_from_settings():
    settings = Settings(FAULT_RATE=1.0)
    app = create_app(settings=settings, store=ProductStore([]))
    assert app.state.injector.enabled is True
    assert app.state.injector.rate == 1.0
    settings = Settings(FAULT_INJECTION_ENABLED=False)
    app = create_app(settings=settings, store=ProductStore([]))
    assert app.state.injector.enabled is False
