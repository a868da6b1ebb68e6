"""
Tests for the database bootstrap script.
"""

from unittest.mock import MagicMock, call, patch

import mongomock
import pytest
from bson.decimal128 import Decimal128
from pymongo import ASCENDING, TEXT
from pymongo.errors import BulkWriteError, OperationFailure

import seed
from schemas import PRODUCT_VALIDATOR, USER_VALIDATOR


def insert_result(docs):
    return MagicMock(inserted_ids=[i for i, _ in enumerate(docs)])


@pytest.fixture
def collections():
    cols = {seed.USERS: MagicMock(), seed.PRODUCTS: MagicMock()}
    for col in cols.values():
        col.insert_many.side_effect = insert_result
    return cols


@pytest.fixture
def db(collections):
    database = MagicMock()
    database.__getitem__.side_effect = collections.__getitem__
    return database


class TestSeedDatabase:
    def test_inserts_three_users_and_two_products(self, db, collections):
        counts = seed.seed_database(db)

        assert counts == {"users": 3, "products": 2}
        users = collections["users"].insert_many.call_args.args[0]
        products = collections["products"].insert_many.call_args.args[0]
        assert [u["username"] for u in users] == ["admin", "testuser", "demo"]
        assert [p["name"] for p in products] == ["Laptop Computer", "Coffee Mug"]

    def test_collections_created_with_validators(self, db):
        seed.seed_database(db)
        assert db.create_collection.call_args_list == [
            call("users", check_exists=False, validator=USER_VALIDATOR),
            call("products", check_exists=False, validator=PRODUCT_VALIDATOR),
        ]

    def test_indexes(self, db, collections):
        seed.seed_database(db)

        assert collections["users"].create_index.call_args_list == [
            call([("username", ASCENDING)], unique=True),
            call([("email", ASCENDING)], unique=True),
            call([("active", ASCENDING)]),
            call([("createdAt", ASCENDING)]),
        ]
        assert collections["products"].create_index.call_args_list == [
            call([("name", TEXT), ("description", TEXT)]),
            call([("category", ASCENDING)]),
            call([("price", ASCENDING)]),
        ]

    def test_existing_collection_does_not_stop_seeding(self, db, collections):
        db.create_collection.side_effect = OperationFailure("Collection already exists", code=48)

        seed.seed_database(db)

        collections["users"].insert_many.assert_called_once()

    def test_other_create_failures_propagate(self, db, collections):
        db.create_collection.side_effect = OperationFailure("not authorized", code=13)

        with pytest.raises(OperationFailure):
            seed.seed_database(db)

        collections["users"].insert_many.assert_not_called()


@pytest.fixture
def mongo_db():
    database = mongomock.MongoClient()["fullstack_dev"]
    create = database.create_collection
    # mongomock does not accept collection options such as validators
    database.create_collection = lambda name, **options: create(name)
    return database


class TestReseed:
    def test_first_run_on_empty_database(self, mongo_db):
        assert seed.seed_database(mongo_db) == {"users": 3, "products": 2}
        assert mongo_db["users"].count_documents({}) == 3
        assert mongo_db["products"].count_documents({}) == 2

    def test_second_run_rejected_by_unique_index(self, mongo_db):
        seed.seed_database(mongo_db)

        with pytest.raises(BulkWriteError):
            seed.seed_database(mongo_db)

        assert mongo_db["users"].count_documents({}) == 3
        assert mongo_db["products"].count_documents({}) == 2


class TestSampleData:
    def test_users(self, db, collections):
        seed.seed_database(db)
        users = collections["users"].insert_many.call_args.args[0]

        assert {u["email"] for u in users} == {
            "admin@fullstack.local", "test@fullstack.local", "demo@fullstack.local",
        }
        assert [u["active"] for u in users] == [True, True, False]
        assert all(u["password"] == seed.SAMPLE_PASSWORD_HASH for u in users)
        assert all(u["createdAt"] == u["updatedAt"] for u in users)

    def test_product_prices_stored_as_decimal128(self, db, collections):
        seed.seed_database(db)
        products = collections["products"].insert_many.call_args.args[0]

        assert products[0]["price"] == Decimal128("1299.99")
        assert products[1]["price"] == Decimal128("12.99")
        assert products[0]["tags"] == ["computer", "laptop", "technology"]
        assert all(p["inStock"] for p in products)


class TestMain:
    def test_success(self, db):
        client = MagicMock()
        with patch("seed.connect", return_value=(client, db)):
            assert seed.main() == 0
        client.close.assert_called_once_with()

    def test_failure_exits_nonzero(self, mongo_db):
        client = MagicMock()
        seed.seed_database(mongo_db)
        with patch("seed.connect", return_value=(client, mongo_db)):
            assert seed.main() == 1
        client.close.assert_called_once_with()
