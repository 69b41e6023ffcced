from typing import Any

from pydantic import BaseModel

from qaforum.models.base_models import MongoModel, NonBlankStr, UTCDateTime


class AddMessageRequest(BaseModel):
    messageToAdd: dict[str, Any]


class Message(MongoModel):
    msg: NonBlankStr
    msgFrom: NonBlankStr
    msgDateTime: UTCDateTime
