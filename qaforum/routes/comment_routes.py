from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse

from qaforum.models.base_models import ErrorResponse
from qaforum.models.question_models import AddCommentRequest
from qaforum.services import comment_service
from qaforum.utils.validation_utils import read_json, validate
from qaforum.utils.websocket_utils import NotificationChannel


def comment_router(channel: NotificationChannel) -> APIRouter:
    router = APIRouter(prefix="/comment", tags=["Comment"])

    @router.post("/addComment")
    async def add_comment(request: Request):
        body = validate(AddCommentRequest, await read_json(request), "Invalid comment")
        if not body.ok:
            return PlainTextResponse(body.error, status_code=400)
        req = body.value
        result = await comment_service.add_comment(req.id, req.type, req.comment)
        if isinstance(result, ErrorResponse):
            status = 404 if result.error == comment_service.PARENT_NOT_FOUND[req.type] else 500
            return JSONResponse(status_code=status, content=jsonable_encoder(result))
        comment = jsonable_encoder(result)
        channel.emit("commentUpdate", {"id": req.id, "type": req.type, "comment": comment})
        return comment

    return router
