import logging
from typing import Literal

from bson import ObjectId
from pymongo.errors import PyMongoError

from qaforum.config import database
from qaforum.models.base_models import ErrorResponse
from qaforum.models.question_models import Comment

logger = logging.getLogger(__name__)

PARENT_COLLECTIONS = {"question": database.QUESTIONS, "answer": database.ANSWERS}
PARENT_NOT_FOUND = {"question": "Question not found", "answer": "Answer not found"}


async def add_comment(
    parent_id: str, parent_type: Literal["question", "answer"], comment: Comment
) -> Comment | ErrorResponse:
    """Store a comment and append it to the question or answer it belongs to."""
    parents = database.get_collection(PARENT_COLLECTIONS[parent_type])
    oid = ObjectId(parent_id)
    doc = comment.model_dump(exclude={"id"})
    try:
        if not await parents.find_one({"_id": oid}, {"_id": 1}):
            return ErrorResponse(error=PARENT_NOT_FOUND[parent_type])
        result = await database.get_collection(database.COMMENTS).insert_one(doc)
        await parents.update_one({"_id": oid}, {"$push": {"comments": result.inserted_id}})
    except PyMongoError:
        logger.exception("Error when adding comment to %s %s", parent_type, parent_id)
        return ErrorResponse(error="Error when adding comment")
    doc["_id"] = result.inserted_id
    return Comment.model_validate(doc)
