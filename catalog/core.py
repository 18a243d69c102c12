from typing import Optional, Dict, Any, List

# Fields a new product must carry, in the order they are reported.
REQUIRED_CREATE_FIELDS = ("name", "shortName", "category")

PRODUCT_NOT_FOUND = "Product not found!"

def parse_product_id(raw: Any) -> Optional[int]:
    """
    Normalize an id coming from the URL (or the data file) to an int.
    Returns None when the value is not an integral number.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except (ValueError, TypeError):
        return None

def _make_summary(product: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": product.get("id"),
        "categoryId": product.get("categoryId"),
        "name": product.get("name"),
        "shortName": product.get("shortName"),
        "details": f"/products/{product.get('id')}"
    }

def missing_create_fields(body: Dict[str, Any]) -> List[str]:
    # empty strings / nulls count as missing, same as an absent key
    return [f for f in REQUIRED_CREATE_FIELDS if not body.get(f)]

def merge_product(existing: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge; `id` is never taken from the changes."""
    merged = {**existing}
    for key, value in changes.items():
        if key == "id":
            continue
        merged[key] = value
    return merged
