"""
Event Stream Endpoint（Server-Sent Events）

客戶端用 EventSource 連上 /api/elections/{id}/events，
收到 phase-changed / votes-changed 就重新取得快照；
keep-alive 沒有意義，只是避免 proxy 把閒置連線切掉
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
import logging

from core.election_manager import ElectionManager
from core.exceptions import ElectionNotFound
from core.registry import ElectionRegistry
from api.dependencies import get_app_settings, get_registry
from settings import Settings

router = APIRouter(prefix="/api/elections", tags=["events"])
logger = logging.getLogger(__name__)


def format_sse(event: str) -> str:
    """一個事件就是一個 SSE frame，data 只放標籤"""
    return f"event: {event}\ndata: {event}\n\n"


async def _stream(registry: ElectionRegistry, election_id: str, keep_alive: float):
    # 等到真的開始串流才訂閱，回應沒被送出就不會留下訂閱
    subscription = ElectionManager.subscribe(registry, election_id)
    try:
        async for event in subscription.events(keep_alive_interval=keep_alive):
            yield format_sse(event.value)
    finally:
        # 客戶端斷線時 generator 會被取消，這裡確保退訂
        subscription.close()
        if subscription.dropped:
            logger.info(
                f"Event stream for election {election_id} dropped "
                f"{subscription.dropped} events (slow client)"
            )
        logger.debug(
            f"Event stream for election {election_id} closed, "
            f"{registry.channel(election_id).subscriber_count} still listening"
        )


@router.get("/{election_id}/events")
async def stream_events(
    election_id: str,
    registry: ElectionRegistry = Depends(get_registry),
    settings: Settings = Depends(get_app_settings)
):
    """
    訂閱選舉通知

    返回：
        text/event-stream，事件為 phase-changed / votes-changed / keep-alive

    注意：
        選舉不存在時在開始串流前就回 404
    """
    try:
        registry.channel(election_id)
    except ElectionNotFound:
        raise HTTPException(status_code=404, detail="Election not found")

    return StreamingResponse(
        _stream(registry, election_id, settings.keep_alive_seconds),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
