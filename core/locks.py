"""
並發控制工具

每場選舉有自己的一把 threading.Lock（放在 RegistryEntry 裡），
所有讀寫 ElectionProcess 的操作都在鎖內完成，鎖外只發通知

鎖的範圍永遠是「一個邏輯操作」，絕對不能跨越 await 或網路回應
"""
from contextlib import contextmanager
from typing import Iterator

from core.election_process import ElectionProcess
from core.registry import ElectionRegistry


@contextmanager
def with_election_lock(registry: ElectionRegistry, election_id: str) -> Iterator[ElectionProcess]:
    """
    鎖定一場選舉（與 ElectionRegistry.with_election 同一把鎖）

    使用場景：
    - 同一個鎖內要做好幾步檢查與修改時（例如先比對階段再推進）

    範例：
        with with_election_lock(registry, election_id) as process:
            if process.phase != expected:
                raise PhaseConflict(expected, process.phase)
            process.advance()

    異常：
        ElectionNotFound: 選舉不存在

    注意：
        - with 區塊內不可以 await，也不可以發通知
        - 離開區塊後不要再保留 process 的參考
    """
    entry = registry.entry(election_id)
    with entry.lock:
        yield entry.process
