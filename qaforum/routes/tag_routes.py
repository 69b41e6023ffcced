from fastapi import APIRouter
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from qaforum.models.base_models import ErrorResponse
from qaforum.services import tag_service


def tag_router() -> APIRouter:
    router = APIRouter(prefix="/tag", tags=["Tag"])

    @router.get("/getTagsWithQuestionNumber")
    async def get_tags_with_question_number():
        result = await tag_service.get_tags_with_question_number()
        if isinstance(result, ErrorResponse):
            return JSONResponse(status_code=500, content=jsonable_encoder(result))
        return jsonable_encoder(result)

    @router.get("/getTagByName/{name}")
    async def get_tag_by_name(name: str):
        result = await tag_service.get_tag_by_name(name)
        if isinstance(result, ErrorResponse):
            status = 404 if result.error == tag_service.tag_not_found(name) else 500
            return JSONResponse(status_code=status, content=jsonable_encoder(result))
        return jsonable_encoder(result)

    return router
