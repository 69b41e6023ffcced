import asyncio
import json
import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationChannel:
    """Fans out named events to every connected WebSocket client.

    Delivery is best effort: there is no replay for late subscribers and a
    socket that fails a send is dropped.
    """

    def __init__(self):
        self._connections: set[WebSocket] = set()
        self._pending: set[asyncio.Task] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self._connections.add(websocket)
        logger.info("A user connected -> %s", websocket.client)

    def disconnect(self, websocket: WebSocket):
        self._connections.discard(websocket)
        logger.info("User disconnected")

    def emit(self, event: str, payload: Any) -> asyncio.Task:
        """Schedule ``publish`` without waiting on it."""
        task = asyncio.get_running_loop().create_task(self.publish(event, payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def publish(self, event: str, payload: Any):
        frame = json.dumps({"event": event, "data": payload})
        for conn in list(self._connections):
            try:
                await conn.send_text(frame)
            except Exception:
                logger.warning("Dropping subscriber %s after failed send", conn.client)
                self._connections.discard(conn)

    async def close(self):
        for conn in list(self._connections):
            try:
                await conn.close()
            except RuntimeError:
                pass
        self._connections.clear()
