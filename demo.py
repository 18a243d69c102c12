#!/usr/bin/env python
from sdk.pycatalog import CatalogClient, CatalogAPIError

def main():
    c = CatalogClient(base_url="http://127.0.0.1:8085")

    # -----------------------------
    # List products
    # -----------------------------
    print("Listing products...")
    products = c.list_products()
    for p in products:
        print(f"  {p['id']:>4}  {p['shortName']:<20} {p['details']}")

    # -----------------------------
    # Get one product
    # -----------------------------
    first_id = products[0]["id"]
    print(f"\nFetching product {first_id}...")
    print(c.get_product(first_id))

    # -----------------------------
    # Missing product
    # -----------------------------
    print("\nFetching a product that does not exist...")
    try:
        c.get_product(999999)
    except CatalogAPIError as e:
        print(f"  {e}")

    # -----------------------------
    # Create product
    # -----------------------------
    print("\nAdding a product...")
    created = c.create_product({
        "name": "Baltic-Style Porter",
        "shortName": "Baltic Porter",
        "categoryId": 9,
        "category": {"id": 9, "name": "Other Lager"},
        "description": "A smooth, cold-fermented and cold-lagered beer brewed with lager yeast.",
        "abvMin": "7.5",
        "abvMax": "9.5",
    })
    print(created)

    # -----------------------------
    # Incomplete create
    # -----------------------------
    print("\nAdding a product without shortName and category...")
    try:
        c.create_product({"name": "Nameless"})
    except CatalogAPIError as e:
        print(f"  {e}")

    # -----------------------------
    # Update product
    # -----------------------------
    print(f"\nUpdating product {created['id']}...")
    print(c.update_product(created["id"], {"ibuMin": "35", "ibuMax": "40"}))

if __name__ == "__main__":
    main()
