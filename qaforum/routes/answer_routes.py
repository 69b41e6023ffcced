from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse

from qaforum.models.base_models import ErrorResponse
from qaforum.models.question_models import AddAnswerRequest
from qaforum.services import answer_service
from qaforum.services.question_service import QUESTION_NOT_FOUND
from qaforum.utils.validation_utils import read_json, validate
from qaforum.utils.websocket_utils import NotificationChannel


def answer_router(channel: NotificationChannel) -> APIRouter:
    router = APIRouter(prefix="/answer", tags=["Answer"])

    @router.post("/addAnswer")
    async def add_answer(request: Request):
        body = validate(AddAnswerRequest, await read_json(request), "Invalid answer")
        if not body.ok:
            return PlainTextResponse(body.error, status_code=400)
        result = await answer_service.add_answer(body.value.qid, body.value.ans)
        if isinstance(result, ErrorResponse):
            status = 404 if result.error == QUESTION_NOT_FOUND else 500
            return JSONResponse(status_code=status, content=jsonable_encoder(result))
        answer = jsonable_encoder(result)
        channel.emit("answerUpdate", {"qid": body.value.qid, "answer": answer})
        return answer

    return router
