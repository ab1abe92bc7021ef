"""
Election Process：一場選舉的可變狀態

狀態：
- phase: 目前階段
- nominees: 候選人名冊 {ID: 名稱}，建立後不再變動
- first_round / second_round: {投票者: 候選人 ID}

這一層不處理並發，也不知道「客戶端以為的階段」，
呼叫者必須透過 ElectionRegistry.with_election() 取得獨佔存取
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple
import logging

from models import ElectionPhase
from services.naming_service import normalize_nominees
from services.phase_service import (
    initial_phase,
    next_phase,
    prev_phase,
    round_number_for,
)
from services import tally_service

logger = logging.getLogger(__name__)


@dataclass
class ElectionProcess:
    id: str
    elected_role: str
    nominees: Dict[int, str]
    phase: ElectionPhase = field(default_factory=initial_phase)
    first_round: Dict[str, int] = field(default_factory=dict)
    second_round: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def create(cls, id: str, elected_role: str, raw_nominee_names: Iterable[str]) -> "ElectionProcess":
        """
        建立新選舉

        候選人名冊經過 normalize_nominees 整理（去空白行、排序、去重、編號），
        階段從 FirstVote 開始，兩輪都是空的
        """
        return cls(
            id=id,
            elected_role=elected_role,
            nominees=normalize_nominees(raw_nominee_names),
        )

    # ============ 查詢 ============

    def current_round_for(self, phase: ElectionPhase) -> Dict[str, int]:
        """FirstVote/FirstTally 對應第 1 輪，其他階段對應第 2 輪"""
        if round_number_for(phase) == 1:
            return self.first_round
        return self.second_round

    @property
    def current_round(self) -> Dict[str, int]:
        return self.current_round_for(self.phase)

    def has_nominee(self, nominee_id: int) -> bool:
        return nominee_id in self.nominees

    def sorted_nominees(self) -> List[Tuple[int, str]]:
        return sorted(self.nominees.items())

    def voters(self) -> List[str]:
        return tally_service.voters(self.current_round)

    def vote_count(self) -> int:
        """
        目前這一輪有幾個人投票

        SafetyRound 不收票，固定回傳 0
        """
        if self.phase == ElectionPhase.SAFETY_ROUND:
            return 0
        return len(self.current_round)

    def tally(self) -> List[tally_service.TallyEntry]:
        return tally_service.accumulate(self.current_round, self.nominees)

    # ============ 變更 ============

    def cast_vote(self, voter_name: str, nominee_id: int) -> bool:
        """
        記錄一張票（同一個人重投會覆蓋）

        只有 FirstVote / SecondVote 會寫入，其他階段直接忽略（不是錯誤）

        返回：
            True 如果票有被記錄
        """
        if self.phase == ElectionPhase.FIRST_VOTE:
            self.first_round[voter_name] = nominee_id
        elif self.phase == ElectionPhase.SECOND_VOTE:
            self.second_round[voter_name] = nominee_id
        else:
            logger.debug(f"Dropped vote from {voter_name} in election {self.id} (phase={self.phase.value})")
            return False
        return True

    def advance(self) -> None:
        self.phase = next_phase(self.phase)

    def rewind(self) -> None:
        self.phase = prev_phase(self.phase)

    def reset_current_round(self) -> None:
        """清空目前投票階段的票；非投票階段不做任何事"""
        if self.phase == ElectionPhase.FIRST_VOTE:
            self.first_round.clear()
        elif self.phase == ElectionPhase.SECOND_VOTE:
            self.second_round.clear()
