import logging
from typing import Any

from fastapi.concurrency import run_in_threadpool
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from qaforum.config import database
from qaforum.models.base_models import ErrorResponse
from qaforum.models.user_models import SafeUser, User, UserCredentials
from qaforum.utils.converter_utils import to_safe_user
from qaforum.utils.crypto_utils import hash_password, verify_password

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"
INVALID_CREDENTIALS = "Invalid username or password"


def _users():
    return database.get_collection(database.USERS)


async def save_user(user: User) -> SafeUser | ErrorResponse:
    """Store a new user, hashing the password on the way in."""
    doc = user.model_dump(exclude={"id"})
    doc["password"] = await run_in_threadpool(hash_password, user.password)
    try:
        result = await _users().insert_one(doc)
    except PyMongoError:
        logger.exception("Error when saving user %s", user.username)
        return ErrorResponse(error="Error when saving a user")
    doc["_id"] = result.inserted_id
    return to_safe_user(doc)


async def get_user_by_username(username: str) -> SafeUser | ErrorResponse:
    try:
        doc = await _users().find_one({"username": username})
    except PyMongoError:
        logger.exception("Error when retrieving user %s", username)
        return ErrorResponse(error="Error when retrieving user")
    if not doc:
        return ErrorResponse(error=USER_NOT_FOUND)
    return to_safe_user(doc)


async def login_user(credentials: UserCredentials) -> SafeUser | ErrorResponse:
    """Check a username/password pair against the stored hash."""
    try:
        doc = await _users().find_one({"username": credentials.username})
    except PyMongoError:
        logger.exception("Error during login for %s", credentials.username)
        return ErrorResponse(error="Error during login")
    if not doc:
        return ErrorResponse(error=INVALID_CREDENTIALS)
    # bcrypt is CPU bound; keep it off the event loop
    if not await run_in_threadpool(verify_password, credentials.password, doc.get("password", "")):
        return ErrorResponse(error=INVALID_CREDENTIALS)
    return to_safe_user(doc)


async def delete_user_by_username(username: str) -> SafeUser | ErrorResponse:
    try:
        doc = await _users().find_one_and_delete({"username": username})
    except PyMongoError:
        logger.exception("Error when deleting user %s", username)
        return ErrorResponse(error="Error when deleting user")
    if not doc:
        return ErrorResponse(error=USER_NOT_FOUND)
    return to_safe_user(doc)


async def update_user(username: str, updates: dict[str, Any]) -> SafeUser | ErrorResponse:
    updates = dict(updates)
    if "password" in updates:
        updates["password"] = await run_in_threadpool(hash_password, updates["password"])
    try:
        doc = await _users().find_one_and_update(
            {"username": username},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
    except PyMongoError:
        logger.exception("Error when updating user %s", username)
        return ErrorResponse(error="Error when updating user")
    if not doc:
        return ErrorResponse(error=USER_NOT_FOUND)
    return to_safe_user(doc)
