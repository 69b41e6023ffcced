import logging
from typing import Any, Literal

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from qaforum.config import database
from qaforum.models.base_models import ErrorResponse
from qaforum.models.question_models import Answer, Question, Tag, VoteResponse
from qaforum.utils.question_utils import filter_questions_by_search, order_questions

logger = logging.getLogger(__name__)

QUESTION_NOT_FOUND = "Question not found"


async def fetch_in_order(collection: str, ids: list[ObjectId]) -> list[dict[str, Any]]:
    """Load documents by id, keeping the order of ``ids``."""
    if not ids:
        return []
    docs = await database.get_collection(collection).find({"_id": {"$in": ids}}).to_list(None)
    by_id = {doc["_id"]: doc for doc in docs}
    return [by_id[i] for i in ids if i in by_id]


async def populate_answer(doc: dict[str, Any]) -> Answer:
    comments = await fetch_in_order(database.COMMENTS, doc.get("comments", []))
    return Answer.model_validate({**doc, "comments": comments})


async def populate_question(doc: dict[str, Any]) -> Question:
    tags = await fetch_in_order(database.TAGS, doc.get("tags", []))
    answers = [
        await populate_answer(answer)
        for answer in await fetch_in_order(database.ANSWERS, doc.get("answers", []))
    ]
    comments = await fetch_in_order(database.COMMENTS, doc.get("comments", []))
    return Question.model_validate({**doc, "tags": tags, "answers": answers, "comments": comments})


async def find_or_create_tag(tag: Tag) -> ObjectId:
    doc = await database.get_collection(database.TAGS).find_one_and_update(
        {"name": tag.name},
        {"$setOnInsert": {"name": tag.name, "description": tag.description}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return doc["_id"]


async def save_question(question: Question) -> Question | ErrorResponse:
    """Store a question, creating any tags it names that do not exist yet."""
    try:
        tag_ids: list[ObjectId] = []
        for tag in question.tags:
            tag_id = await find_or_create_tag(tag)
            if tag_id not in tag_ids:
                tag_ids.append(tag_id)
        doc = {
            "title": question.title,
            "text": question.text,
            "tags": tag_ids,
            "askedBy": question.askedBy,
            "askDateTime": question.askDateTime,
            "answers": [],
            "views": [],
            "upVotes": [],
            "downVotes": [],
            "comments": [],
        }
        result = await database.get_collection(database.QUESTIONS).insert_one(doc)
        doc["_id"] = result.inserted_id
        return await populate_question(doc)
    except PyMongoError:
        logger.exception("Error when saving question from %s", question.askedBy)
        return ErrorResponse(error="Error when saving question")


async def get_questions_by_order(order: str, search: str = "") -> list[Question] | ErrorResponse:
    try:
        docs = await database.get_collection(database.QUESTIONS).find().to_list(None)
        questions = [await populate_question(doc) for doc in docs]
    except PyMongoError:
        logger.exception("Error when fetching questions")
        return ErrorResponse(error="Error when fetching questions")
    return order_questions(filter_questions_by_search(questions, search), order)


async def fetch_and_increment_views(qid: str, username: str) -> Question | ErrorResponse:
    """Return a question after recording ``username`` among its viewers."""
    try:
        doc = await database.get_collection(database.QUESTIONS).find_one_and_update(
            {"_id": ObjectId(qid)},
            {"$addToSet": {"views": username}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return ErrorResponse(error=QUESTION_NOT_FOUND)
        return await populate_question(doc)
    except PyMongoError:
        logger.exception("Error when fetching question %s", qid)
        return ErrorResponse(error="Error when fetching question")


async def add_vote_to_question(
    qid: str, username: str, vote: Literal["upvote", "downvote"]
) -> VoteResponse | ErrorResponse:
    """Toggle a user's vote. Voting one way clears any vote the other way."""
    if vote == "upvote":
        own, other, label = "upVotes", "downVotes", "Upvote"
    else:
        own, other, label = "downVotes", "upVotes", "Downvote"
    questions = database.get_collection(database.QUESTIONS)
    oid = ObjectId(qid)
    projection = {"upVotes": 1, "downVotes": 1}
    try:
        doc = await questions.find_one_and_update(
            {"_id": oid, own: username},
            {"$pull": {own: username}},
            projection=projection,
            return_document=ReturnDocument.AFTER,
        )
        msg = f"{label} cancelled successfully"
        if not doc:
            doc = await questions.find_one_and_update(
                {"_id": oid},
                {"$addToSet": {own: username}, "$pull": {other: username}},
                projection=projection,
                return_document=ReturnDocument.AFTER,
            )
            msg = f"Question {vote}d successfully"
    except PyMongoError:
        logger.exception("Error when adding %s to question %s", vote, qid)
        return ErrorResponse(error=f"Error when adding {vote} to question")
    if not doc:
        return ErrorResponse(error=QUESTION_NOT_FOUND)
    return VoteResponse(msg=msg, upVotes=doc.get("upVotes", []), downVotes=doc.get("downVotes", []))
