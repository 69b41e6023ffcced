import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from pymongo.errors import PyMongoError

from qaforum.config.database import close_client, ensure_indexes
from qaforum.config.settings import settings
from qaforum.middleware.cors import setup_cors
from qaforum.routes.answer_routes import answer_router
from qaforum.routes.comment_routes import comment_router
from qaforum.routes.message_routes import message_router
from qaforum.routes.question_routes import question_router
from qaforum.routes.tag_routes import tag_router
from qaforum.routes.user_routes import user_router
from qaforum.routes.websocket_routes import websocket_router
from qaforum.utils.websocket_utils import NotificationChannel

logger = logging.getLogger(__name__)


def create_app(channel: NotificationChannel | None = None) -> FastAPI:
    """Build the API. Every router that publishes events shares ``channel``."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if channel is None:
        channel = NotificationChannel()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            await ensure_indexes()
        except PyMongoError:
            logger.exception("MongoDB connection error")
        logger.info("Server is running on port %s", settings.PORT)
        yield
        await channel.close()
        close_client()
        logger.info("Server closed.")

    app = FastAPI(title="Fake Stack Overflow", version="1.0", lifespan=lifespan)

    # Setup CORS
    setup_cors(app)

    app.include_router(question_router(channel))
    app.include_router(tag_router())
    app.include_router(answer_router(channel))
    app.include_router(comment_router(channel))
    app.include_router(message_router(channel))
    app.include_router(user_router())
    app.include_router(websocket_router(channel))

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "hello world"

    return app


app = create_app()


def run():
    uvicorn.run("qaforum.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
