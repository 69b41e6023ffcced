from datetime import datetime, timezone
from typing import Annotated, Any

from bson import ObjectId
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, StrictStr


def _as_utc(value: datetime) -> datetime:
    # Mongo hands back naive datetimes unless the client is tz aware
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _stringify_id(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    return value


def _non_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


def _object_id(value: str) -> str:
    if not ObjectId.is_valid(value):
        raise ValueError("not a valid ObjectId")
    return value


UTCDateTime = Annotated[datetime, AfterValidator(_as_utc)]
ObjectIdStr = Annotated[str, BeforeValidator(_stringify_id)]
NonBlankStr = Annotated[StrictStr, AfterValidator(_non_blank)]
ObjectIdText = Annotated[StrictStr, AfterValidator(_object_id)]


class MongoModel(BaseModel):
    """Base for anything read back from a collection; exposes ``_id`` as a string."""

    model_config = ConfigDict(populate_by_name=True)

    id: ObjectIdStr | None = Field(default=None, alias="_id")


class ErrorResponse(BaseModel):
    error: str
