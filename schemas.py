"""
Database Schemas

MongoDB collection schemas for the toolkit, written as Pydantic models.
Field names are the stored (camelCase) document keys.

- User    -> "users" collection
- Product -> "products" collection

Each collection also has a store-native $jsonSchema validator, applied when
the seed script creates the collection.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^\S+@\S+\.\S+$"


class User(BaseModel):
    """
    Users collection schema
    Collection name: "users"
    """
    username: str = Field(..., min_length=3, max_length=50, description="Unique username")
    email: str = Field(..., pattern=EMAIL_PATTERN, description="Unique email address")
    password: str = Field(..., min_length=6, description="Password hash (bcrypt)")
    firstName: Optional[str] = Field(None, max_length=100, description="First name")
    lastName: Optional[str] = Field(None, max_length=100, description="Last name")
    active: bool = Field(True, description="Whether user is active")
    createdAt: Optional[datetime] = Field(None, description="Creation timestamp")
    updatedAt: Optional[datetime] = Field(None, description="Last update timestamp")


class Product(BaseModel):
    """
    Products collection schema
    Collection name: "products"
    """
    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    description: Optional[str] = Field(None, max_length=1000, description="Product description")
    price: Decimal = Field(..., ge=0, description="Price, stored as Decimal128")
    category: Optional[str] = Field(None, description="Product category")
    inStock: Optional[bool] = Field(None, description="Stock availability")
    tags: List[str] = Field(default_factory=list, description="Product tags")
    createdAt: Optional[datetime] = Field(None, description="Creation timestamp")
    updatedAt: Optional[datetime] = Field(None, description="Last update timestamp")


USER_VALIDATOR = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["username", "email", "password"],
        "properties": {
            "username": {
                "bsonType": "string",
                "minLength": 3,
                "maxLength": 50,
                "description": "Username must be a string between 3 and 50 characters",
            },
            "email": {
                "bsonType": "string",
                "pattern": EMAIL_PATTERN,
                "description": "Email must be a valid email address",
            },
            "password": {
                "bsonType": "string",
                "minLength": 6,
                "description": "Password must be at least 6 characters",
            },
            "firstName": {
                "bsonType": "string",
                "maxLength": 100,
                "description": "First name must not exceed 100 characters",
            },
            "lastName": {
                "bsonType": "string",
                "maxLength": 100,
                "description": "Last name must not exceed 100 characters",
            },
            "active": {"bsonType": "bool", "description": "Active status must be a boolean"},
            "createdAt": {"bsonType": "date", "description": "Creation timestamp"},
            "updatedAt": {"bsonType": "date", "description": "Last update timestamp"},
        },
    }
}

PRODUCT_VALIDATOR = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["name", "price"],
        "properties": {
            "name": {
                "bsonType": "string",
                "minLength": 1,
                "maxLength": 200,
                "description": "Product name is required",
            },
            "description": {
                "bsonType": "string",
                "maxLength": 1000,
                "description": "Product description",
            },
            "price": {
                "bsonType": "decimal",
                "minimum": 0,
                "description": "Price must be a positive number",
            },
            "category": {"bsonType": "string", "description": "Product category"},
            "inStock": {"bsonType": "bool", "description": "Stock availability"},
            "tags": {
                "bsonType": "array",
                "items": {"bsonType": "string"},
                "description": "Product tags",
            },
        },
    }
}
