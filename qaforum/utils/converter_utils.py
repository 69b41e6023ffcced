from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from qaforum.models.user_models import SafeUser


def to_safe_user(user: BaseModel | Mapping[str, Any]) -> SafeUser:
    """Build the public view of a user record.

    Accepts a stored document or any user model (``User`` or an existing
    ``SafeUser``) and returns a new ``SafeUser`` without the password field.
    The input is never modified.
    """
    if isinstance(user, BaseModel):
        data = user.model_dump(by_alias=True)
    else:
        data = dict(user)
    data.pop("password", None)
    return SafeUser.model_validate(data)
