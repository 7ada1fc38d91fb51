"""Catalogue management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load sample products
"""

import argparse
import sys

SAMPLE_PRODUCTS = [
    {"name": "Espresso Machine", "price": 249.0, "description": "15-bar pump, steam wand"},
    {"name": "Burr Grinder", "price": 129.5, "description": "40 grind settings"},
    {"name": "Pour-Over Kettle", "price": 59.99, "description": "Gooseneck, 1L"},
]


def _catalogue():
    from catalogue.domain import catalogue

    catalogue.init()
    return catalogue


def setup_database():
    from catalogue.utils.db import setup_db

    domain = _catalogue()
    print("Creating catalogue database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from catalogue.utils.db import drop_db

    domain = _catalogue()
    print("Dropping catalogue database schema...")
    drop_db(domain)
    print("Done.")


def seed_products():
    from catalogue.product.product import Product

    domain = _catalogue()
    with domain.domain_context():
        repo = domain.repository_for(Product)
        for product in SAMPLE_PRODUCTS:
            product_id = repo.create(**product)
            print(f"  {product['name']} -> {product_id}")
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Catalogue database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Insert sample products")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_products()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
