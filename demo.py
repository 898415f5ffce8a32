#!/usr/bin/env python
from rich import print

from sdk.productclient import ProductClient


def main():
    c = ProductClient(base_url="http://127.0.0.1:3000", api_key="your-secret-api-key-123")

    # -----------------------------
    # Seeded catalog
    # -----------------------------
    print("Listing products...")
    print(c.list_products())

    # -----------------------------
    # Create
    # -----------------------------
    print("\nCreating a product...")
    created = c.create_product("Tablet", 300, "electronics", description="10-inch")["data"]
    print(created)

    # -----------------------------
    # Filtered list + search
    # -----------------------------
    print("\nElectronics in stock, 2 per page...")
    print(c.list_products(category="electronics", in_stock=True, limit=2))

    print("\nSearching for 'inch'...")
    print(c.search_products("inch"))

    # -----------------------------
    # Update
    # -----------------------------
    print("\nDropping the tablet price...")
    print(c.update_product(created["id"], "Tablet", 249.99, "electronics"))

    # -----------------------------
    # Stats
    # -----------------------------
    print("\nCatalog stats...")
    print(c.get_stats())

    # -----------------------------
    # Delete (twice: the second one is a 404 envelope)
    # -----------------------------
    print("\nDeleting the tablet...")
    print(c.delete_product(created["id"]))
    print(c.delete_product(created["id"]))


if __name__ == "__main__":
    main()
