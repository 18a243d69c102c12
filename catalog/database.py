import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

from .core import parse_product_id

logger = logging.getLogger(__name__)

# This file holds the in-memory product store and its JSON loader.
# There is no locking: ids and list positions are only consistent while
# requests run one at a time on a single event loop.


class ProductStore:
    def __init__(self, products: Optional[List[Dict[str, Any]]] = None):
        self._products: List[Dict[str, Any]] = [self._normalize(p) for p in (products or [])]

    @staticmethod
    def _normalize(product: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(product)
        if "id" in record:
            pid = parse_product_id(record["id"])
            if pid is None:
                raise ValueError(f"product id must be an integer, got {record['id']!r}")
            record["id"] = pid
        return record

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ProductStore":
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{path} must contain a JSON array of products")
        store = cls(data)
        logger.info("Loaded %d products from %s", len(store), path)
        return store

    def __len__(self) -> int:
        return len(self._products)

    def all(self) -> List[Dict[str, Any]]:
        return list(self._products)

    def _index_of(self, product_id: int) -> Optional[int]:
        for i, p in enumerate(self._products):
            if p.get("id") == product_id:
                return i
        return None

    def get(self, product_id: int) -> Optional[Dict[str, Any]]:
        idx = self._index_of(product_id)
        if idx is None:
            return None
        return self._products[idx]

    def next_id(self) -> int:
        ids = [p["id"] for p in self._products if isinstance(p.get("id"), int)]
        return max(ids) + 1 if ids else 1

    def add(self, product: Dict[str, Any]) -> Dict[str, Any]:
        self._products.append(product)
        return product

    def replace(self, product_id: int, product: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Overwrite the product at its current list position."""
        idx = self._index_of(product_id)
        if idx is None:
            return None
        self._products[idx] = product
        return product
