from bson import ObjectId
from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse

from qaforum.models.base_models import ErrorResponse
from qaforum.models.question_models import Question, VoteRequest
from qaforum.services import question_service
from qaforum.utils.question_utils import ORDERS
from qaforum.utils.validation_utils import read_json, validate
from qaforum.utils.websocket_utils import NotificationChannel


def question_router(channel: NotificationChannel) -> APIRouter:
    router = APIRouter(prefix="/question", tags=["Question"])

    def error_response(result: ErrorResponse) -> JSONResponse:
        status = 404 if result.error == question_service.QUESTION_NOT_FOUND else 500
        return JSONResponse(status_code=status, content=jsonable_encoder(result))

    @router.get("/getQuestion")
    async def get_questions_by_filter(order: str = "newest", search: str = ""):
        if order not in ORDERS:
            return PlainTextResponse("Invalid order", status_code=400)
        result = await question_service.get_questions_by_order(order, search)
        if isinstance(result, ErrorResponse):
            return error_response(result)
        return jsonable_encoder(result)

    @router.get("/getQuestionById/{qid}")
    async def get_question_by_id(qid: str, username: str | None = None):
        if not ObjectId.is_valid(qid):
            return PlainTextResponse("Invalid ID format", status_code=400)
        if not username or not username.strip():
            return PlainTextResponse("Invalid username requesting question.", status_code=400)
        result = await question_service.fetch_and_increment_views(qid, username)
        if isinstance(result, ErrorResponse):
            return error_response(result)
        question = jsonable_encoder(result)
        channel.emit("viewsUpdate", question)
        return question

    @router.post("/addQuestion")
    async def add_question(request: Request):
        body = validate(Question, await read_json(request), "Invalid question body")
        if not body.ok:
            return PlainTextResponse(body.error, status_code=400)
        result = await question_service.save_question(body.value)
        if isinstance(result, ErrorResponse):
            return error_response(result)
        question = jsonable_encoder(result)
        channel.emit("questionUpdate", question)
        return question

    async def vote(request: Request, kind: str):
        body = validate(VoteRequest, await read_json(request), "Invalid request")
        if not body.ok:
            return PlainTextResponse(body.error, status_code=400)
        result = await question_service.add_vote_to_question(body.value.qid, body.value.username, kind)
        if isinstance(result, ErrorResponse):
            return error_response(result)
        channel.emit(
            "voteUpdate",
            {"qid": body.value.qid, "upVotes": result.upVotes, "downVotes": result.downVotes},
        )
        return jsonable_encoder(result)

    @router.post("/upvoteQuestion")
    async def upvote_question(request: Request):
        return await vote(request, "upvote")

    @router.post("/downvoteQuestion")
    async def downvote_question(request: Request):
        return await vote(request, "downvote")

    return router
