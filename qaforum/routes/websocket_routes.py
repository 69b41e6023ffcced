from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from qaforum.utils.websocket_utils import NotificationChannel


def websocket_router(channel: NotificationChannel) -> APIRouter:
    router = APIRouter(tags=["WebSocket"])

    @router.websocket("/socket")
    async def notification_socket(websocket: WebSocket):
        await channel.connect(websocket)
        try:
            # clients only listen; anything they send is ignored
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            pass
        finally:
            channel.disconnect(websocket)

    return router
