"""
MongoDB initialization for the Full Stack Toolkit.

Creates the users and products collections with schema validation, builds
their indexes and inserts sample data. Meant to run once against an empty
database: a second run fails when the unique indexes on username/email
reject the sample users, instead of duplicating documents.

    python seed.py
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Dict, List

from bson.decimal128 import Decimal128
from pymongo import ASCENDING, TEXT
from pymongo.errors import CollectionInvalid, OperationFailure, PyMongoError

from database import connect, database_name
from schemas import PRODUCT_VALIDATOR, USER_VALIDATOR, Product, User

logger = logging.getLogger(__name__)

USERS = "users"
PRODUCTS = "products"

# bcrypt hash for 'password'
SAMPLE_PASSWORD_HASH = "$2a$10$N9qo8uLOickgx2ZMRZoMye"


def sample_users(now: datetime) -> List[dict]:
    users = [
        User(username="admin", email="admin@fullstack.local", password=SAMPLE_PASSWORD_HASH,
             firstName="Admin", lastName="User", active=True, createdAt=now, updatedAt=now),
        User(username="testuser", email="test@fullstack.local", password=SAMPLE_PASSWORD_HASH,
             firstName="Test", lastName="User", active=True, createdAt=now, updatedAt=now),
        User(username="demo", email="demo@fullstack.local", password=SAMPLE_PASSWORD_HASH,
             firstName="Demo", lastName="User", active=False, createdAt=now, updatedAt=now),
    ]
    return [u.model_dump(exclude_none=True) for u in users]


def sample_products(now: datetime) -> List[dict]:
    products = [
        Product(name="Laptop Computer", description="High-performance laptop for developers",
                price="1299.99", category="Electronics", inStock=True,
                tags=["computer", "laptop", "technology"], createdAt=now, updatedAt=now),
        Product(name="Coffee Mug", description="Ceramic coffee mug with company logo",
                price="12.99", category="Accessories", inStock=True,
                tags=["mug", "coffee", "ceramic"], createdAt=now, updatedAt=now),
    ]
    docs = []
    for p in products:
        doc = p.model_dump(exclude_none=True)
        # the validator requires bsonType "decimal"
        doc["price"] = Decimal128(doc["price"])
        docs.append(doc)
    return docs


NAMESPACE_EXISTS = 48


def _create_collection(db, name: str, validator: dict) -> None:
    try:
        db.create_collection(name, check_exists=False, validator=validator)
    except CollectionInvalid:
        logger.warning(f"Collection {name} already exists")
    except OperationFailure as e:
        if e.code != NAMESPACE_EXISTS:
            raise
        logger.warning(f"Collection {name} already exists")


def create_collections(db) -> None:
    # An existing collection does not stop the run: re-seeding must fail on
    # the unique username/email indexes when the sample users are inserted.
    _create_collection(db, USERS, USER_VALIDATOR)
    _create_collection(db, PRODUCTS, PRODUCT_VALIDATOR)
    logger.info(f"Collections ready: {USERS}, {PRODUCTS}")


def create_indexes(db) -> None:
    users = db[USERS]
    users.create_index([("username", ASCENDING)], unique=True)
    users.create_index([("email", ASCENDING)], unique=True)
    users.create_index([("active", ASCENDING)])
    users.create_index([("createdAt", ASCENDING)])

    products = db[PRODUCTS]
    products.create_index([("name", TEXT), ("description", TEXT)])
    products.create_index([("category", ASCENDING)])
    products.create_index([("price", ASCENDING)])


def insert_sample_data(db) -> Dict[str, int]:
    now = datetime.now(timezone.utc)
    users = db[USERS].insert_many(sample_users(now))
    products = db[PRODUCTS].insert_many(sample_products(now))
    counts = {USERS: len(users.inserted_ids), PRODUCTS: len(products.inserted_ids)}
    logger.info(f"Sample data inserted: {counts}")
    return counts


def seed_database(db) -> Dict[str, int]:
    """Run the full bootstrap against ``db``; returns inserted document counts."""
    create_collections(db)
    create_indexes(db)
    return insert_sample_data(db)


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    client, db = connect()
    try:
        seed_database(db)
    except PyMongoError:
        logger.exception(f"Seeding database '{database_name}' failed")
        return 1
    finally:
        client.close()
    logger.info(f"Database '{database_name}' initialized successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
