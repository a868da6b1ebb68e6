"""
Database Helper Functions

MongoDB helper functions used by the backend and the seed script.
Connection settings come from environment variables (a local .env file is
loaded when present):

- DATABASE_URL  -> MongoDB connection string
- DATABASE_NAME -> database name (defaults to "fullstack_dev")
"""

import os
from datetime import datetime, timezone
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel
from pymongo import MongoClient

# Load environment variables from .env file
load_dotenv()

DEFAULT_DATABASE_NAME = "fullstack_dev"
DEFAULT_DATABASE_URL = "mongodb://localhost:27017"

database_url = os.getenv("DATABASE_URL")
database_name = os.getenv("DATABASE_NAME", DEFAULT_DATABASE_NAME)

_client = None
db = None

if database_url:
    _client = MongoClient(database_url)
    db = _client[database_name]


def connect(url: Optional[str] = None, name: Optional[str] = None):
    """Open a client and return (client, database) for the given settings."""
    client = MongoClient(url or database_url or DEFAULT_DATABASE_URL)
    return client, client[name or database_name]


def _require_db():
    if db is None:
        raise RuntimeError("Database not available. Check DATABASE_URL and DATABASE_NAME environment variables.")
    return db


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Helper functions for common database operations
def create_document(collection_name: str, data: Union[BaseModel, dict]) -> str:
    """Insert a single document stamped with createdAt/updatedAt; returns the new id."""
    database = _require_db()

    # Convert Pydantic model to dict if needed
    if isinstance(data, BaseModel):
        data_dict = data.model_dump(exclude_none=True)
    else:
        data_dict = data.copy()

    now = utcnow()
    data_dict["createdAt"] = now
    data_dict["updatedAt"] = now

    result = database[collection_name].insert_one(data_dict)
    return str(result.inserted_id)
