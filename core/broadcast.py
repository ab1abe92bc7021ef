"""
通知廣播：每場選舉一個 BroadcastChannel

行為：
- 任意數量的訂閱者，每個人有自己的緩衝區（有上限，滿了丟最舊的）
- publish 永遠不會阻塞，沒有人在聽就直接丟掉（記 log，不是錯誤）
- 訂閱者只會收到訂閱之後發生的事件（at-most-once，不保存）
- publish 可以從任何執行緒呼叫，事件會交回訂閱者自己的 event loop
"""
import asyncio
import logging
import threading
from collections import deque
from typing import AsyncIterator, Optional

from models import ElectionEvent

logger = logging.getLogger(__name__)


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class Subscription:
    """
    單一訂閱者的接收端

    在 event loop 內建立時會記住該 loop，
    其他執行緒（例如 threadpool 裡的同步 route）發出的事件
    會透過 call_soon_threadsafe 交回這個 loop，避免訂閱者晚醒
    """

    def __init__(self, channel: "BroadcastChannel", capacity: int):
        self._channel = channel
        self._buffer = deque(maxlen=capacity)
        self._wakeup = asyncio.Event()
        self._loop = _running_loop()
        self.closed = False
        self.dropped = 0

    def _deliver(self, event: ElectionEvent) -> None:
        if len(self._buffer) == self._buffer.maxlen:
            self.dropped += 1
        self._buffer.append(event)
        self._wakeup.set()

    def notify(self, event: ElectionEvent) -> None:
        """
        把事件放進緩衝區並叫醒訂閱者（可以從任何執行緒呼叫，不會阻塞）
        """
        loop = self._loop
        if loop is None or loop is _running_loop():
            self._deliver(event)
            return
        try:
            loop.call_soon_threadsafe(self._deliver, event)
        except RuntimeError:
            # loop 已關閉，沒有人會再等待
            self._deliver(event)

    def get_nowait(self) -> Optional[ElectionEvent]:
        """取出緩衝區最舊的事件；沒有事件時回傳 None（不等待）"""
        try:
            return self._buffer.popleft()
        except IndexError:
            return None

    async def next_event(self, timeout: Optional[float] = None) -> Optional[ElectionEvent]:
        """
        等待下一個事件

        參數：
            timeout: 最多等幾秒；超時回傳 KEEP_ALIVE

        返回：
            下一個事件；訂閱已關閉且緩衝區為空時回傳 None

        注意：
            等待期間不持有任何選舉的鎖
        """
        while True:
            event = self.get_nowait()
            if event is not None:
                return event
            if self.closed:
                return None
            self._wakeup.clear()
            try:
                await asyncio.wait_for(self._wakeup.wait(), timeout=timeout)
            except asyncio.TimeoutError:
                return ElectionEvent.KEEP_ALIVE

    async def events(self, keep_alive_interval: Optional[float] = None) -> AsyncIterator[ElectionEvent]:
        """
        持續產生事件，閒置超過 keep_alive_interval 秒就送出 KEEP_ALIVE

        客戶端斷線時（generator 被取消或關閉）會自動退訂
        """
        try:
            while True:
                event = await self.next_event(timeout=keep_alive_interval)
                if event is None:
                    return
                yield event
        finally:
            self.close()

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._channel._unsubscribe(self)
        self._wakeup.set()

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()


class BroadcastChannel:
    """一場選舉的事件廣播（多生產者、多消費者）"""

    def __init__(self, election_id: str, capacity: int = 64):
        self.election_id = election_id
        self.capacity = capacity
        self._subscribers: set[Subscription] = set()
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self) -> Subscription:
        subscription = Subscription(self, self.capacity)
        with self._lock:
            self._subscribers.add(subscription)
        logger.debug(f"New subscriber for election {self.election_id}")
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            self._subscribers.discard(subscription)
        logger.debug(f"Subscriber left election {self.election_id}")

    def publish(self, event: ElectionEvent) -> int:
        """
        送出事件給所有目前的訂閱者

        返回：
            收到事件的訂閱者數量（0 代表沒人在聽，事件直接丟掉）
        """
        with self._lock:
            subscribers = list(self._subscribers)

        if not subscribers:
            logger.debug(
                f"Event {event.value} for election {self.election_id} was published "
                f"but nobody is listening"
            )
            return 0

        for subscription in subscribers:
            subscription.notify(event)
        return len(subscribers)
