import logging

from pymongo.errors import PyMongoError

from qaforum.config import database
from qaforum.models.base_models import ErrorResponse
from qaforum.models.question_models import Tag, TagCount

logger = logging.getLogger(__name__)


def tag_not_found(name: str) -> str:
    return f"Tag with name: {name} not found"


async def get_tags_with_question_number() -> list[TagCount] | ErrorResponse:
    try:
        tags = await database.get_collection(database.TAGS).find().to_list(None)
        counts = await database.get_collection(database.QUESTIONS).aggregate(
            [
                {"$unwind": "$tags"},
                {"$group": {"_id": "$tags", "count": {"$sum": 1}}},
            ]
        ).to_list(None)
    except PyMongoError:
        logger.exception("Error when fetching tag counts")
        return ErrorResponse(error="Error when fetching tag with number of questions")
    count_map = {item["_id"]: item["count"] for item in counts}
    return [TagCount(name=tag["name"], qcnt=count_map.get(tag["_id"], 0)) for tag in tags]


async def get_tag_by_name(name: str) -> Tag | ErrorResponse:
    try:
        doc = await database.get_collection(database.TAGS).find_one({"name": name})
    except PyMongoError:
        logger.exception("Error when fetching tag %s", name)
        return ErrorResponse(error=f"Error when fetching tag: {name}")
    if not doc:
        return ErrorResponse(error=tag_not_found(name))
    return Tag.model_validate(doc)
