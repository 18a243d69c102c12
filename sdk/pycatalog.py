# sdk/pycatalog.py
import requests
import httpx
from typing import Optional, Dict, Any, List


class CatalogAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _error_message(r) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text or ""
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or body)
    return str(body)


# Safe to resend: replaying these cannot add a second product
IDEMPOTENT_METHODS = {"GET", "HEAD", "PUT"}


class CatalogClient:
    """
    Thin client for the catalog API.

    The server fails about one request in ten with a 500 on purpose, so GET and
    PUT calls are retried `retries` times on a 500 before CatalogAPIError is
    raised. POST is sent once: a 500 after the product was stored would
    otherwise create a duplicate.
    """

    def __init__(self, base_url: str = "http://localhost:8085", timeout: int = 10,
                 retries: int = 3, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retries = retries
        # anything with a requests-style .request() works here (e.g. a TestClient)
        self.session = session if session is not None else requests.Session()

    def _request(self, method: str, path: str, **kwargs):
        retries = self.retries if method.upper() in IDEMPOTENT_METHODS else 0
        attempts = 0
        while True:
            r = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
            if r.status_code == 500 and attempts < retries:
                attempts += 1
                continue
            if r.status_code >= 400:
                raise CatalogAPIError(r.status_code, _error_message(r))
            return r

    def ping(self) -> bool:
        return self._request("GET", "/").status_code == 200

    def list_products(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/products").json()

    def get_product(self, product_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/products/{product_id}").json()

    def create_product(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/products", json=payload).json()

    def update_product(self, product_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/products/{product_id}", json=changes).json()

    # Async fetch (example)
    async def get_product_async(self, product_id: int) -> Dict[str, Any]:
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout) as client:
            for attempt in range(self.retries + 1):
                r = await client.get(f"/products/{product_id}")
                if r.status_code != 500 or attempt == self.retries:
                    break
            if r.status_code >= 400:
                raise CatalogAPIError(r.status_code, _error_message(r))
            return r.json()


if __name__ == "__main__":
    import argparse
    import json
    from rich import print

    parser = argparse.ArgumentParser(description="brewcatalog CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:8085", help="Catalog API base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    cp = subparsers.add_parser("create-product", help="Add a new product")
    cp.add_argument("--name", required=True, help="Long name")
    cp.add_argument("--short-name", required=True, help="Short name")
    cp.add_argument("--category-id", type=int, required=True, help="Category ID")
    cp.add_argument("--category-name", default="", help="Category name")
    cp.add_argument("--description", default="", help="Description")

    up = subparsers.add_parser("update-product", help="Modify product fields")
    up.add_argument("--product-id", type=int, required=True, help="ID of the product")
    up.add_argument("--set", dest="fields", action="append", default=[], metavar="KEY=VALUE",
                    help="Field to change (repeatable); VALUE is parsed as JSON when possible")

    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url)

    if args.command == "list-products":
        print(c.list_products())

    elif args.command == "get-product":
        print(c.get_product(args.product_id))

    elif args.command == "create-product":
        print(c.create_product({
            "name": args.name,
            "shortName": args.short_name,
            "categoryId": args.category_id,
            "category": {"id": args.category_id, "name": args.category_name},
            "description": args.description,
        }))

    elif args.command == "update-product":
        changes = {}
        for item in args.fields:
            key, _, raw = item.partition("=")
            try:
                changes[key] = json.loads(raw)
            except ValueError:
                changes[key] = raw
        print(c.update_product(args.product_id, changes))
