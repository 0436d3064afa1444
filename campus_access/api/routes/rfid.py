# =======================================================================================
# campus_access/api/routes/rfid.py - Card Tap Endpoints
# =======================================================================================
import asyncio
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from sqlalchemy.engine import Connection
from ...models.schemas import AccessLogEntry, RFIDLogRequest, RFIDLogResponse
from ...services.access_control import AccessControlService
from ...services.event_stream import event_broadcaster
from ...utils.logger import get_logger
from ..dependencies import get_db_connection

router = APIRouter()
access_service = AccessControlService()
logger = get_logger("api.rfid")

@router.post("/rfid-log", response_model=RFIDLogResponse, response_model_exclude_none=True)
def handle_card_tap(request: RFIDLogRequest, conn: Connection = Depends(get_db_connection)):
    """
    Decide access for a tapped card.
    Denials are 200 responses with a reason; collaborator failures are 503.
    """
    return access_service.process_card_tap(conn, request.cardUID)

@router.websocket("/rfid-log/live")
async def live_access_feed(websocket: WebSocket):
    """Push every new access log entry to the connected dashboard."""
    loop = asyncio.get_running_loop()
    queue: "asyncio.Queue[AccessLogEntry]" = asyncio.Queue()

    def push(entry: AccessLogEntry) -> None:
        # publish() runs on a worker thread
        loop.call_soon_threadsafe(queue.put_nowait, entry)

    async def pump() -> None:
        while True:
            entry = await queue.get()
            await websocket.send_json(entry.model_dump(mode="json", exclude_none=True))

    event_broadcaster.subscribe(push)
    sender = None
    try:
        await websocket.accept()
        sender = asyncio.create_task(pump())
        while True:
            # only used to notice the client going away
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Live feed viewer disconnected")
    finally:
        event_broadcaster.unsubscribe(push)
        if sender is not None:
            sender.cancel()
