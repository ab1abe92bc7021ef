"""
Election Manager：選舉對外的操作介面

職責：
1. 建立選舉
2. 查詢選舉快照
3. 投票（不檢查階段，last-writer-wins）
4. 階段轉換（guarded：客戶端必須說出它以為的目前階段）
5. 訂閱通知

原則：
- 鎖內只做計算，鎖外才發通知
- 輸入驗證（方向、階段標籤、候選人 ID）在碰到狀態之前完成
- 沒人訂閱不是錯誤，變更已經成功了
"""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple
import logging

from models import ElectionEvent, ElectionPhase, TransitionDirection
from core.broadcast import Subscription
from core.election_process import ElectionProcess
from core.exceptions import InvalidDirection, PhaseConflict, UnknownNominee
from core.locks import with_election_lock
from core.registry import ElectionRegistry
from services import tally_service
from services.phase_service import (
    is_vote_phase,
    parse_phase,
    phase_description,
    phase_title,
    round_number_for,
)

logger = logging.getLogger(__name__)


@dataclass
class ElectionSnapshot:
    """某一瞬間的選舉狀態（鎖外可以安全使用的複本）"""
    election_id: str
    phase: ElectionPhase
    title: str
    description: Tuple[str, ...]
    elected_role: str
    round_number: int
    nominees: List[Tuple[int, str]]
    voters: List[str]
    vote_count: int
    results_visible: bool
    results: List[Dict[str, object]] = field(default_factory=list)
    max_votes: int = 1
    winners: List[str] = field(default_factory=list)


def _snapshot(process: ElectionProcess) -> ElectionSnapshot:
    # 投票階段只公布誰投過票，結果等到 Tally 階段才揭曉
    results_visible = not is_vote_phase(process.phase)
    snapshot = ElectionSnapshot(
        election_id=process.id,
        phase=process.phase,
        title=phase_title(process.phase),
        description=phase_description(process.phase),
        elected_role=process.elected_role,
        round_number=round_number_for(process.phase),
        nominees=process.sorted_nominees(),
        voters=process.voters(),
        vote_count=process.vote_count(),
        results_visible=results_visible,
    )
    if results_visible:
        results = process.tally()
        snapshot.results = tally_service.tally_table(results)
        snapshot.max_votes = tally_service.max_count(results)
        snapshot.winners = tally_service.winners(results)
    return snapshot


def parse_direction(direction: str) -> TransitionDirection:
    """
    解析 step 方向

    異常：
        InvalidDirection: 不是 next / prev / reset
    """
    try:
        return TransitionDirection(direction)
    except ValueError:
        raise InvalidDirection(direction) from None


class ElectionManager:
    """選舉操作的進入點（所有方法都是 static，第一個參數是 registry）"""

    @staticmethod
    def create_election(registry: ElectionRegistry, elected_role: str, raw_nominees: List[str]) -> str:
        """
        建立新選舉

        返回：
            選舉 ID

        異常：
            RegistryFull: Registry 已滿
        """
        return registry.create_election(elected_role, raw_nominees)

    @staticmethod
    def get_snapshot(registry: ElectionRegistry, election_id: str) -> ElectionSnapshot:
        """
        取得選舉快照（在鎖內一次算完，保證階段和票數一致）

        異常：
            ElectionNotFound: 選舉不存在
        """
        return registry.with_election(election_id, _snapshot)

    @staticmethod
    def get_voters(registry: ElectionRegistry, election_id: str) -> List[str]:
        return registry.with_election(election_id, lambda process: process.voters())

    @staticmethod
    def cast_vote(registry: ElectionRegistry, election_id: str, voter_name: str, nominee_id: int) -> bool:
        """
        投票

        流程：
        1. 在鎖內確認候選人 ID 存在，再寫入目前這一輪
        2. 鎖外發出 VOTES_CHANGED

        注意：
            - 不檢查客戶端以為的階段（同一人重投直接覆蓋）
            - 非投票階段的票會被默默丟掉，這不是錯誤

        返回：
            True 如果票有被記錄

        異常：
            ElectionNotFound: 選舉不存在
            UnknownNominee: 候選人 ID 不存在
        """
        with with_election_lock(registry, election_id) as process:
            if not process.has_nominee(nominee_id):
                raise UnknownNominee(nominee_id)
            stored = process.cast_vote(voter_name, nominee_id)

        registry.channel(election_id).publish(ElectionEvent.VOTES_CHANGED)
        return stored

    @staticmethod
    def request_transition(
        registry: ElectionRegistry,
        election_id: str,
        expected_phase_label: str,
        direction: str,
    ) -> ElectionPhase:
        """
        Guarded 階段轉換

        前置條件：
        1. direction 必須是 next / prev / reset
        2. expected_phase_label 必須是正規階段名稱
        3. expected 必須等於選舉目前的階段

        流程：
        1. 驗證輸入（還沒碰到選舉狀態）
        2. 鎖內比對階段，不符就拒絕（不做任何修改）
        3. 鎖內執行轉換
        4. 鎖外發出 PHASE_CHANGED（reset 也一樣，客戶端收到後重新整理整個畫面）

        返回：
            轉換後的階段

        異常：
            InvalidDirection / UnknownPhase: 輸入格式錯誤
            ElectionNotFound: 選舉不存在
            PhaseConflict: 客戶端的畫面已經過期，需要重新整理
        """
        action = parse_direction(direction)
        expected = parse_phase(expected_phase_label)

        with with_election_lock(registry, election_id) as process:
            if process.phase != expected:
                logger.warning(
                    f"Phase conflict in election {election_id}: "
                    f"client expected {expected.value}, actual {process.phase.value}"
                )
                raise PhaseConflict(expected, process.phase)

            if action == TransitionDirection.NEXT:
                process.advance()
            elif action == TransitionDirection.PREV:
                process.rewind()
            else:
                process.reset_current_round()
            phase = process.phase

        logger.info(
            f"Election {election_id}: {action.value} from {expected.value} -> {phase.value}"
        )

        registry.channel(election_id).publish(ElectionEvent.PHASE_CHANGED)
        return phase

    @staticmethod
    def subscribe(registry: ElectionRegistry, election_id: str) -> Subscription:
        """
        訂閱選舉通知

        異常：
            ElectionNotFound: 選舉不存在
        """
        return registry.channel(election_id).subscribe()
