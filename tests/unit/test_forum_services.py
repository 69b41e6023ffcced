"""
Unit tests for the question, answer, comment and tag services.
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from qaforum.config import database
from qaforum.models.base_models import ErrorResponse
from qaforum.models.question_models import Answer, Comment, Question, Tag, TagCount, VoteResponse
from qaforum.services import answer_service, comment_service, question_service, tag_service

pytestmark = pytest.mark.asyncio

BASE = datetime(2024, 6, 1, tzinfo=timezone.utc)


def make_question(title="How do I sort a dict?", tags=("python",), day=0):
    return Question(
        title=title,
        text=f"{title} details",
        tags=[Tag(name=name, description=f"{name} questions") for name in tags],
        askedBy="asker",
        askDateTime=BASE + timedelta(days=day),
    )


def make_answer(text="Use sorted()", day=1):
    return Answer(text=text, ansBy="answerer", ansDateTime=BASE + timedelta(days=day))


def make_comment(text="Nice one"):
    return Comment(text=text, commentBy="commenter", commentDateTime=BASE)


class TestSaveQuestion:

    async def test_creates_missing_tags(self, mongo_db):
        saved = await question_service.save_question(make_question(tags=("python", "dict")))

        assert isinstance(saved, Question)
        assert saved.id is not None
        assert [t.name for t in saved.tags] == ["python", "dict"]
        assert await mongo_db[database.TAGS].count_documents({}) == 2

    async def test_reuses_existing_tags(self, mongo_db):
        first = await question_service.save_question(make_question(tags=("python",)))
        second = await question_service.save_question(make_question(tags=("python",)))

        assert first.tags[0].id == second.tags[0].id
        assert await mongo_db[database.TAGS].count_documents({}) == 1

    async def test_starts_without_answers_views_or_votes(self, mongo_db):
        saved = await question_service.save_question(make_question())
        assert saved.answers == [] and saved.views == [] and saved.upVotes == [] and saved.downVotes == []

    async def test_database_error(self, broken_collection):
        broken_collection.find_one_and_update = AsyncMock(side_effect=PyMongoError("Database error"))

        result = await question_service.save_question(make_question())

        assert result == ErrorResponse(error="Error when saving question")


class TestGetQuestionsByOrder:

    async def test_newest_with_search(self, mongo_db):
        await question_service.save_question(make_question("Old python", ("python",), day=0))
        await question_service.save_question(make_question("New python", ("python",), day=2))
        await question_service.save_question(make_question("Some java", ("java",), day=1))

        result = await question_service.get_questions_by_order("newest", "[python]")

        assert [q.title for q in result] == ["New python", "Old python"]

    async def test_populates_answers(self, mongo_db):
        question = await question_service.save_question(make_question())
        await answer_service.add_answer(question.id, make_answer())

        result = await question_service.get_questions_by_order("newest")

        assert result[0].answers[0].text == "Use sorted()"

    async def test_database_error(self, broken_collection):
        broken_collection.find.side_effect = PyMongoError("Database error")

        result = await question_service.get_questions_by_order("newest")

        assert result == ErrorResponse(error="Error when fetching questions")


class TestFetchAndIncrementViews:

    async def test_records_each_viewer_once(self, mongo_db):
        question = await question_service.save_question(make_question())

        await question_service.fetch_and_increment_views(question.id, "viewer")
        result = await question_service.fetch_and_increment_views(question.id, "viewer")

        assert result.views == ["viewer"]

    async def test_not_found(self, mongo_db):
        result = await question_service.fetch_and_increment_views(str(ObjectId()), "viewer")
        assert result == ErrorResponse(error="Question not found")


class TestVotes:

    async def test_upvote_then_cancel(self, mongo_db):
        question = await question_service.save_question(make_question())

        first = await question_service.add_vote_to_question(question.id, "voter", "upvote")
        second = await question_service.add_vote_to_question(question.id, "voter", "upvote")

        assert first == VoteResponse(msg="Question upvoted successfully", upVotes=["voter"], downVotes=[])
        assert second == VoteResponse(msg="Upvote cancelled successfully", upVotes=[], downVotes=[])

    async def test_downvote_clears_upvote(self, mongo_db):
        question = await question_service.save_question(make_question())
        await question_service.add_vote_to_question(question.id, "voter", "upvote")

        result = await question_service.add_vote_to_question(question.id, "voter", "downvote")

        assert result.msg == "Question downvoted successfully"
        assert result.upVotes == []
        assert result.downVotes == ["voter"]

    async def test_unknown_question(self, mongo_db):
        result = await question_service.add_vote_to_question(str(ObjectId()), "voter", "upvote")
        assert result == ErrorResponse(error="Question not found")


class TestAddAnswer:

    async def test_links_answer_to_question(self, mongo_db):
        question = await question_service.save_question(make_question())

        answer = await answer_service.add_answer(question.id, make_answer())

        assert isinstance(answer, Answer)
        stored = await mongo_db[database.QUESTIONS].find_one({"_id": ObjectId(question.id)})
        assert stored["answers"] == [ObjectId(answer.id)]

    async def test_unknown_question(self, mongo_db):
        result = await answer_service.add_answer(str(ObjectId()), make_answer())

        assert result == ErrorResponse(error="Question not found")
        assert await mongo_db[database.ANSWERS].count_documents({}) == 0

    async def test_database_error(self, broken_collection):
        broken_collection.find_one = AsyncMock(side_effect=PyMongoError("Database error"))

        result = await answer_service.add_answer(str(ObjectId()), make_answer())

        assert result == ErrorResponse(error="Error when adding answer")


class TestAddComment:

    async def test_comment_on_question(self, mongo_db):
        question = await question_service.save_question(make_question())

        comment = await comment_service.add_comment(question.id, "question", make_comment())

        assert isinstance(comment, Comment)
        views = await question_service.fetch_and_increment_views(question.id, "viewer")
        assert [c.text for c in views.comments] == ["Nice one"]

    async def test_comment_on_answer(self, mongo_db):
        question = await question_service.save_question(make_question())
        answer = await answer_service.add_answer(question.id, make_answer())

        await comment_service.add_comment(answer.id, "answer", make_comment("Agreed"))

        views = await question_service.fetch_and_increment_views(question.id, "viewer")
        assert [c.text for c in views.answers[0].comments] == ["Agreed"]

    async def test_unknown_parent(self, mongo_db):
        result = await comment_service.add_comment(str(ObjectId()), "answer", make_comment())
        assert result == ErrorResponse(error="Answer not found")

    async def test_database_error(self, broken_collection):
        broken_collection.find_one = AsyncMock(side_effect=PyMongoError("Database error"))

        result = await comment_service.add_comment(str(ObjectId()), "question", make_comment())

        assert result == ErrorResponse(error="Error when adding comment")


class TestTags:

    async def test_tags_with_question_number(self, mongo_db):
        await question_service.save_question(make_question(tags=("python", "dict")))
        await question_service.save_question(make_question(tags=("python",)))
        await mongo_db[database.TAGS].insert_one({"name": "unused", "description": ""})

        result = await tag_service.get_tags_with_question_number()

        assert sorted(result, key=lambda t: t.name) == [
            TagCount(name="dict", qcnt=1),
            TagCount(name="python", qcnt=2),
            TagCount(name="unused", qcnt=0),
        ]

    async def test_get_tag_by_name(self, mongo_db):
        await question_service.save_question(make_question(tags=("python",)))

        tag = await tag_service.get_tag_by_name("python")

        assert tag.name == "python"
        assert tag.description == "python questions"

    async def test_get_tag_by_name_not_found(self, mongo_db):
        result = await tag_service.get_tag_by_name("cobol")
        assert result == ErrorResponse(error="Tag with name: cobol not found")

    async def test_tags_database_error(self, broken_collection):
        broken_collection.find.side_effect = PyMongoError("Database error")

        result = await tag_service.get_tags_with_question_number()

        assert result == ErrorResponse(error="Error when fetching tag with number of questions")
