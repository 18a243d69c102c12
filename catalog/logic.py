import logging
from typing import Dict, Any, List
from fastapi import HTTPException

from .core import (
    PRODUCT_NOT_FOUND, parse_product_id, missing_create_fields,
    merge_product, _make_summary
)
from .database import ProductStore

logger = logging.getLogger(__name__)

# This file contains the core logic for the product endpoints.

def _find_or_404(store: ProductStore, raw_id: Any) -> Dict[str, Any]:
    pid = parse_product_id(raw_id)
    product = store.get(pid) if pid is not None else None
    if product is None:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return product

async def list_products_logic(store: ProductStore) -> List[Dict[str, Any]]:
    return [_make_summary(p) for p in store.all()]

async def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    return _find_or_404(store, product_id)

async def create_product_logic(store: ProductStore, body: Dict[str, Any]) -> Dict[str, Any]:
    missing = missing_create_fields(body)
    if missing:
        raise HTTPException(status_code=400, detail=f"Missing fields: {', '.join(missing)}")

    pid = store.next_id()
    product = {**body, "id": pid}
    store.add(product)
    logger.info("Created product %s", pid)
    return product

async def update_product_logic(store: ProductStore, product_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    existing = _find_or_404(store, product_id)
    updated = merge_product(existing, changes)
    store.replace(existing["id"], updated)
    logger.info("Updated product %s (%s)", existing["id"], ", ".join(sorted(changes)) or "no fields")
    return updated
