import logging

from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from qaforum.config import database
from qaforum.models.base_models import ErrorResponse
from qaforum.models.message_models import Message

logger = logging.getLogger(__name__)


def _messages():
    return database.get_collection(database.MESSAGES)


async def save_message(message: Message) -> Message | ErrorResponse:
    doc = message.model_dump(exclude={"id"})
    try:
        result = await _messages().insert_one(doc)
    except PyMongoError:
        logger.exception("Error when saving message from %s", message.msgFrom)
        return ErrorResponse(error="Error when saving a message")
    return message.model_copy(update={"id": str(result.inserted_id)})


async def get_messages() -> list[Message]:
    """All messages, oldest first. A failed read yields an empty list."""
    try:
        docs = await _messages().find({}, sort=[("msgDateTime", ASCENDING)]).to_list(None)
    except PyMongoError:
        logger.exception("Error when fetching messages")
        return []
    return [Message.model_validate(doc) for doc in docs]
