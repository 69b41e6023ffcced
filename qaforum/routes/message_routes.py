from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse

from qaforum.models.base_models import ErrorResponse
from qaforum.models.message_models import AddMessageRequest, Message
from qaforum.services import message_service
from qaforum.utils.validation_utils import read_json, validate
from qaforum.utils.websocket_utils import NotificationChannel


def message_router(channel: NotificationChannel) -> APIRouter:
    router = APIRouter(prefix="/messaging", tags=["Messaging"])

    @router.post("/addMessage")
    async def add_message(request: Request):
        body = validate(AddMessageRequest, await read_json(request), "Invalid request")
        if not body.ok:
            return PlainTextResponse(body.error, status_code=400)

        # an unparsable msgDateTime fails here like any other bad field
        message = validate(Message, body.value.messageToAdd, "Invalid message")
        if not message.ok:
            return PlainTextResponse(message.error, status_code=400)

        result = await message_service.save_message(message.value)
        if isinstance(result, ErrorResponse):
            return JSONResponse(status_code=500, content=jsonable_encoder(result))

        saved = jsonable_encoder(result)
        channel.emit("messageUpdate", {"msg": saved})
        return saved

    @router.get("/getMessages")
    async def get_messages():
        return jsonable_encoder(await message_service.get_messages())

    return router
