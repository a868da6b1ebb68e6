import os
import re
import secrets
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from passlib.context import CryptContext
from pydantic import BaseModel, Field
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

# Database
import database
from database import create_document
from schemas import EMAIL_PATTERN

app = FastAPI(title="Full Stack Toolkit API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

USERS = "users"


# ------------------ Schemas ------------------

class UserUpdate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    firstName: Optional[str] = Field(None, max_length=100)
    lastName: Optional[str] = Field(None, max_length=100)
    active: Optional[bool] = None


class UserIn(UserUpdate):
    password: Optional[str] = Field(None, min_length=6)
    active: bool = True


class UserOut(BaseModel):
    id: str
    username: str
    email: str
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    active: bool = True
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


# ------------------ Helpers ------------------

def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def users_collection():
    if database.db is None:
        raise HTTPException(status_code=500, detail="Database not configured")
    return database.db[USERS]


def parse_id(user_id: str) -> ObjectId:
    if not ObjectId.is_valid(user_id):
        raise HTTPException(status_code=400, detail="Invalid user id")
    return ObjectId(user_id)


def to_user_out(doc: dict) -> UserOut:
    d = {k: v for k, v in doc.items() if k not in ("_id", "password")}
    return UserOut(id=str(doc["_id"]), **d)


def found_or_404(doc: Optional[dict], user_id: str) -> UserOut:
    if not doc:
        raise HTTPException(status_code=404, detail=f"User not found with id: {user_id}")
    return to_user_out(doc)


def set_user_fields(user_id: str, fields: dict) -> UserOut:
    fields["updatedAt"] = datetime.now(timezone.utc)
    try:
        doc = users_collection().find_one_and_update(
            {"_id": parse_id(user_id)},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Username or email already exists")
    return found_or_404(doc, user_id)


# ------------------ Routes ------------------

@app.get("/")
def read_root():
    return {"message": "Full Stack Toolkit backend running"}


@app.get("/test")
def test_database():
    """Report database connectivity for quick environment checks."""
    response = {
        "backend": "running",
        "database": "not configured",
        "database_url": "set" if os.getenv("DATABASE_URL") else "not set",
        "database_name": None,
        "connection_status": "Not Connected",
        "collections": [],
    }
    db = database.db
    if db is None:
        return response

    response["database_name"] = db.name
    try:
        response["collections"] = db.list_collection_names()[:10]
    except PyMongoError as e:
        response["database"] = f"error: {str(e)[:50]}"
        return response
    response["database"] = "connected"
    response["connection_status"] = "Connected"
    return response


# ------------------ Users ------------------

@app.get("/api/users", response_model=List[UserOut])
def list_users():
    return [to_user_out(d) for d in users_collection().find()]


@app.get("/api/users/active", response_model=List[UserOut])
def list_active_users():
    return [to_user_out(d) for d in users_collection().find({"active": True})]


@app.get("/api/users/search", response_model=List[UserOut])
def search_users(first_name: str = Query(..., alias="firstName")):
    pattern = {"$regex": re.escape(first_name), "$options": "i"}
    docs = users_collection().find({"firstName": pattern})
    return [to_user_out(d) for d in docs]


@app.get("/api/users/count", response_model=int)
def count_users(active: bool):
    return users_collection().count_documents({"active": active})


@app.get("/api/users/username/{username}", response_model=UserOut)
def get_user_by_username(username: str):
    return found_or_404(users_collection().find_one({"username": username}), username)


@app.get("/api/users/email/{email}", response_model=UserOut)
def get_user_by_email(email: str):
    return found_or_404(users_collection().find_one({"email": email}), email)


@app.get("/api/users/{user_id}", response_model=UserOut)
def get_user(user_id: str):
    return found_or_404(users_collection().find_one({"_id": parse_id(user_id)}), user_id)


@app.post("/api/users", response_model=UserOut, status_code=201)
def create_user(payload: UserIn):
    users = users_collection()
    if users.find_one({"username": payload.username}):
        raise HTTPException(status_code=400, detail="Username already exists")
    if users.find_one({"email": payload.email}):
        raise HTTPException(status_code=400, detail="Email already exists")

    doc = payload.model_dump(exclude_none=True)
    # The users validator requires a password; the UI form does not collect one.
    doc["password"] = hash_password(payload.password or secrets.token_urlsafe(16))
    try:
        new_id = create_document(USERS, doc)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Username or email already exists")
    return to_user_out(users.find_one({"_id": ObjectId(new_id)}))


@app.put("/api/users/{user_id}", response_model=UserOut)
def update_user(user_id: str, payload: UserUpdate):
    return set_user_fields(user_id, payload.model_dump(exclude_none=True))


@app.delete("/api/users/{user_id}", status_code=204)
def delete_user(user_id: str):
    res = users_collection().delete_one({"_id": parse_id(user_id)})
    if res.deleted_count == 0:
        raise HTTPException(status_code=404, detail=f"User not found with id: {user_id}")
    return Response(status_code=204)


@app.patch("/api/users/{user_id}/activate", response_model=UserOut)
def activate_user(user_id: str):
    return set_user_fields(user_id, {"active": True})


@app.patch("/api/users/{user_id}/deactivate", response_model=UserOut)
def deactivate_user(user_id: str):
    return set_user_fields(user_id, {"active": False})


def run():
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    run()
