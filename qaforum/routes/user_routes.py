from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse

from qaforum.models.base_models import ErrorResponse
from qaforum.models.user_models import User, UserCredentials
from qaforum.services import user_service
from qaforum.utils.validation_utils import read_json, validate

INVALID_USER_BODY = "Invalid user body"


def user_router() -> APIRouter:
    router = APIRouter(prefix="/user", tags=["User"])

    def respond(result, error_status: int):
        if isinstance(result, ErrorResponse):
            return JSONResponse(status_code=error_status, content=jsonable_encoder(result))
        return jsonable_encoder(result)

    # ✅ SIGNUP
    @router.post("/signup")
    async def create_user(request: Request):
        body = validate(UserCredentials, await read_json(request), INVALID_USER_BODY)
        if not body.ok:
            return PlainTextResponse(body.error, status_code=400)
        user = User(
            username=body.value.username,
            password=body.value.password,
            dateJoined=datetime.now(timezone.utc),
        )
        return respond(await user_service.save_user(user), 400)

    # ✅ LOGIN
    @router.post("/login")
    async def user_login(request: Request):
        body = validate(UserCredentials, await read_json(request), INVALID_USER_BODY)
        if not body.ok:
            return PlainTextResponse(body.error, status_code=400)
        return respond(await user_service.login_user(body.value), 401)

    @router.get("/getUser/{username}")
    async def get_user(username: str):
        if not username.strip():
            return JSONResponse(status_code=400, content={"error": "Username is required"})
        return respond(await user_service.get_user_by_username(username), 404)

    @router.delete("/deleteUser/{username}")
    async def delete_user(username: str):
        if not username.strip():
            return PlainTextResponse(INVALID_USER_BODY, status_code=400)
        return respond(await user_service.delete_user_by_username(username), 404)

    # ✅ RESET PASSWORD
    @router.patch("/resetPassword")
    async def reset_password(request: Request):
        body = validate(UserCredentials, await read_json(request), INVALID_USER_BODY)
        if not body.ok:
            return PlainTextResponse(body.error, status_code=400)
        result = await user_service.update_user(body.value.username, {"password": body.value.password})
        return respond(result, 404)

    return router
