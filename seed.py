"""
Demo catalog and admin account.

Run directly to seed the configured database:

    python seed.py            # insert demo products if the catalog is empty
    python seed.py --reset    # drop existing products first
"""
import argparse
import logging
import os

from auth import hash_password
from database import create_document, db
from schemas import Category as CategorySchema, Product as ProductSchema, User as UserSchema

logger = logging.getLogger(__name__)

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@aaro.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

DEMO_CATEGORIES = [
    {"name": "Phones", "slug": "phone", "description": "Flagship and midrange smartphones"},
    {"name": "Laptops", "slug": "laptop", "description": "Ultrabooks, 2-in-1s and workstations"},
]

DEMO_PRODUCTS = [
    {
        "name": "iPhone 15 Pro",
        "brand": "Apple",
        "category": "phone",
        "price": 999,
        "originalPrice": 1099,
        "rating": 4.8,
        "reviewCount": 1240,
        "description": "Titanium design, A17 Pro chip, and advanced camera system.",
        "specifications": ["6.1\" OLED", "A17 Pro", "48MP Main", "256GB"],
        "isFeatured": True,
    },
    {
        "name": "Galaxy S24 Ultra",
        "brand": "Samsung",
        "category": "phone",
        "price": 1299,
        "originalPrice": 1399,
        "rating": 4.7,
        "reviewCount": 850,
        "description": "AI-powered flagship with S Pen and 200MP camera.",
        "specifications": ["6.8\" AMOLED", "SD 8 Gen 3", "200MP Main", "512GB"],
        "isFeatured": True,
    },
    {
        "name": "Xiaomi 14 Ultra",
        "brand": "Xiaomi",
        "category": "phone",
        "price": 1099,
        "originalPrice": 1199,
        "rating": 4.6,
        "reviewCount": 420,
        "description": "Leica optics and professional-grade camera capabilities.",
        "specifications": ["6.73\" LTPO AMOLED", "SD 8 Gen 3", "Leica Quad Camera", "512GB"],
        "isFeatured": True,
    },
    {
        "name": "OnePlus 12",
        "brand": "OnePlus",
        "category": "phone",
        "price": 799,
        "originalPrice": 899,
        "rating": 4.5,
        "reviewCount": 310,
        "description": "Smooth Beyond Belief with Hasselblad Camera.",
        "specifications": ["6.82\" 120Hz AMOLED", "SD 8 Gen 3", "50MP Main", "256GB"],
        "isTrending": True,
    },
    {
        "name": "HP Spectre x360",
        "brand": "HP",
        "category": "laptop",
        "price": 1249,
        "originalPrice": 1449,
        "rating": 4.5,
        "reviewCount": 340,
        "description": "Premium 2-in-1 with stunning OLED display.",
        "specifications": ["14\" 2.8K OLED", "Intel Core Ultra 7", "16GB RAM", "1TB SSD"],
        "isFeatured": True,
    },
    {
        "name": "MacBook Air M3",
        "brand": "Apple",
        "category": "laptop",
        "price": 1099,
        "originalPrice": 1199,
        "rating": 4.9,
        "reviewCount": 920,
        "description": "Lean, mean, M3 machine with incredible battery.",
        "specifications": ["13.6\" Liquid Retina", "Apple M3 Chip", "8GB Unified", "256GB SSD"],
        "isTrending": True,
    },
]


def seed_admin() -> bool:
    if db["user"].count_documents({"role": "admin"}) > 0:
        logger.info("An admin user already exists")
        return False
    if db["user"].find_one({"email": ADMIN_EMAIL}):
        logger.info("User %s already exists", ADMIN_EMAIL)
        return False
    admin = UserSchema(
        name="Admin User",
        email=ADMIN_EMAIL,
        password_hash=hash_password(ADMIN_PASSWORD),
        role="admin",
    )
    create_document("user", admin)
    logger.info("Admin user %s created", ADMIN_EMAIL)
    return True


def seed_database(reset: bool = False) -> dict:
    """Insert the demo catalog when it is empty. Returns what was inserted."""
    if reset:
        removed = db["product"].delete_many({}).deleted_count
        logger.info("Cleared %d existing products", removed)

    inserted = {"products": 0, "categories": 0, "admin": False}
    if db["product"].count_documents({}) > 0:
        return inserted

    inserted["admin"] = seed_admin()

    for p in DEMO_PRODUCTS:
        create_document("product", ProductSchema(**p))
        inserted["products"] += 1

    for c in DEMO_CATEGORIES:
        if db["category"].find_one({"slug": c["slug"]}):
            continue
        count = db["product"].count_documents({"category": c["slug"]})
        create_document("category", CategorySchema(**c, product_count=count))
        inserted["categories"] += 1

    logger.info("Seeded %(products)d products and %(categories)d categories", inserted)
    return inserted


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the storefront database")
    parser.add_argument("--reset", action="store_true", help="remove existing products first")
    args = parser.parse_args()
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    if db is None:
        parser.exit(1, "MONGODB_URI is not set\n")
    seed_database(reset=args.reset)
