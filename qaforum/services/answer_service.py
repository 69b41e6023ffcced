import logging

from bson import ObjectId
from pymongo.errors import PyMongoError

from qaforum.config import database
from qaforum.models.base_models import ErrorResponse
from qaforum.models.question_models import Answer
from qaforum.services.question_service import QUESTION_NOT_FOUND

logger = logging.getLogger(__name__)


async def add_answer(qid: str, answer: Answer) -> Answer | ErrorResponse:
    """Store an answer and link it to its question."""
    questions = database.get_collection(database.QUESTIONS)
    oid = ObjectId(qid)
    doc = answer.model_dump(exclude={"id", "comments"})
    doc["comments"] = []
    try:
        if not await questions.find_one({"_id": oid}, {"_id": 1}):
            return ErrorResponse(error=QUESTION_NOT_FOUND)
        result = await database.get_collection(database.ANSWERS).insert_one(doc)
        await questions.update_one({"_id": oid}, {"$push": {"answers": result.inserted_id}})
    except PyMongoError:
        logger.exception("Error when adding answer to question %s", qid)
        return ErrorResponse(error="Error when adding answer")
    doc["_id"] = result.inserted_id
    return Answer.model_validate(doc)
