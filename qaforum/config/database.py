import logging

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING

from qaforum.config.settings import settings

logger = logging.getLogger(__name__)

USERS = "users"
MESSAGES = "messages"
QUESTIONS = "questions"
ANSWERS = "answers"
COMMENTS = "comments"
TAGS = "tags"

client = AsyncIOMotorClient(settings.MONGO_URI, tz_aware=True)
db = client[settings.DB_NAME]


def get_collection(name: str):
    """Look up a collection on the current database handle.

    Resolved on every call so the handle can be swapped out (tests bind an
    in-memory database here).
    """
    return db[name]


async def ensure_indexes():
    await get_collection(USERS).create_index([("username", ASCENDING)], unique=True)
    await get_collection(TAGS).create_index([("name", ASCENDING)], unique=True)
    logger.info("Indexes ensured on %s", settings.DB_NAME)


def close_client():
    client.close()
    logger.info("MongoDB client closed")
