from typing import Literal

from pydantic import BaseModel, Field

from qaforum.models.base_models import MongoModel, NonBlankStr, ObjectIdText, UTCDateTime


class Tag(MongoModel):
    name: NonBlankStr
    description: str = ""


class TagCount(BaseModel):
    name: str
    qcnt: int


class Comment(MongoModel):
    text: NonBlankStr
    commentBy: NonBlankStr
    commentDateTime: UTCDateTime


class Answer(MongoModel):
    text: NonBlankStr
    ansBy: NonBlankStr
    ansDateTime: UTCDateTime
    comments: list[Comment] = []


class Question(MongoModel):
    title: NonBlankStr
    text: NonBlankStr
    tags: list[Tag] = Field(min_length=1)
    askedBy: NonBlankStr
    askDateTime: UTCDateTime
    answers: list[Answer] = []
    views: list[str] = []
    upVotes: list[str] = []
    downVotes: list[str] = []
    comments: list[Comment] = []


class VoteRequest(BaseModel):
    qid: ObjectIdText
    username: NonBlankStr


class VoteResponse(BaseModel):
    msg: str
    upVotes: list[str]
    downVotes: list[str]


class AddAnswerRequest(BaseModel):
    qid: ObjectIdText
    ans: Answer


class AddCommentRequest(BaseModel):
    id: ObjectIdText
    type: Literal["question", "answer"]
    comment: Comment
