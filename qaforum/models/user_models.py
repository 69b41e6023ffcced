from pydantic import BaseModel

from qaforum.models.base_models import MongoModel, NonBlankStr, UTCDateTime


class UserCredentials(BaseModel):
    username: NonBlankStr
    password: NonBlankStr


class User(MongoModel):
    username: str
    password: str
    dateJoined: UTCDateTime


class SafeUser(MongoModel):
    username: str
    dateJoined: UTCDateTime
