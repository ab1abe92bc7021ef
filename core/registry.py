"""
Election Registry：記憶體內所有選舉的集中存放處

每個 election_id 底下放三樣東西（建立時一起產生，之後不再替換）：
- ElectionProcess：選舉狀態
- threading.Lock：這場選舉的獨佔鎖
- BroadcastChannel：這場選舉的通知廣播

Registry 在應用啟動時建立一次，透過 FastAPI dependency 傳給每個請求，
不使用全域單例
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, TypeVar
import logging
import threading

from core.broadcast import BroadcastChannel
from core.election_process import ElectionProcess
from core.exceptions import ElectionNotFound, RegistryFull
from services.naming_service import generate_election_id

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RegistryEntry:
    process: ElectionProcess
    channel: BroadcastChannel
    lock: threading.Lock = field(default_factory=threading.Lock)


class ElectionRegistry:
    """選舉的 keyed store（thread-safe）"""

    def __init__(self, id_length: int = 16, max_elections: int = 10000, channel_capacity: int = 64):
        self.id_length = id_length
        self.max_elections = max_elections
        self.channel_capacity = channel_capacity
        self._entries: Dict[str, RegistryEntry] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "ElectionRegistry":
        return cls(
            id_length=settings.election_id_length,
            max_elections=settings.max_elections,
            channel_capacity=settings.channel_capacity,
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, election_id: str) -> bool:
        with self._lock:
            return election_id in self._entries

    def create_election(self, elected_role: str, raw_nominees: Iterable[str]) -> str:
        """
        建立新選舉並放進 Registry

        流程：
        1. 生成隨機 ID（碰撞時重新生成）
        2. 建立 ElectionProcess 和 BroadcastChannel
        3. 一起放進 Registry

        返回：
            新選舉的 ID

        異常：
            RegistryFull: 已達 max_elections 上限
        """
        nominees = list(raw_nominees)

        with self._lock:
            if len(self._entries) >= self.max_elections:
                raise RegistryFull(
                    f"Registry already holds {len(self._entries)} elections"
                )

            election_id = generate_election_id(self.id_length)
            while election_id in self._entries:
                logger.warning(f"Election id collision detected, regenerating: {election_id}")
                election_id = generate_election_id(self.id_length)

            process = ElectionProcess.create(election_id, elected_role, nominees)
            self._entries[election_id] = RegistryEntry(
                process=process,
                channel=BroadcastChannel(election_id, self.channel_capacity),
            )

        logger.info(
            f"Created election {election_id} for role {elected_role!r} "
            f"with {len(process.nominees)} nominees"
        )
        return election_id

    def entry(self, election_id: str) -> RegistryEntry:
        """
        取得 Registry entry

        注意：
            呼叫者不應該在鎖外直接讀寫 entry.process，請用 with_election()

        異常：
            ElectionNotFound: ID 不存在
        """
        with self._lock:
            entry = self._entries.get(election_id)
        if entry is None:
            raise ElectionNotFound(election_id)
        return entry

    def channel(self, election_id: str) -> BroadcastChannel:
        return self.entry(election_id).channel

    def with_election(self, election_id: str, op: Callable[[ElectionProcess], T]) -> T:
        """
        在這場選舉的獨佔鎖內執行 op(process)，回傳 op 的結果

        修改 ElectionProcess 一定要持有 entry.lock；
        鎖只在 op 執行期間持有，op 不可以做 I/O 或等待

        core.locks.with_election_lock 是同一把 entry.lock 的 context manager 版本，
        需要在同一個臨界區內先檢查再修改時使用（例如 guarded 階段轉換），
        兩者互斥，不會同時持有

        異常：
            ElectionNotFound: ID 不存在
        """
        entry = self.entry(election_id)
        with entry.lock:
            return op(entry.process)
