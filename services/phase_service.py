"""
階段服務：選舉階段的導航規則與顯示資訊

選舉流程：
- FirstVote: 第一輪投票
- FirstTally: 公布第一輪結果，大家說明自己的選擇
- SecondVote: 第二輪投票
- SecondTally: 公布第二輪結果
- SafetyRound: 確認決定是否「夠安全可以試試看」（沿用第二輪的票）
"""
from typing import Tuple

from models import ElectionPhase
from core.exceptions import UnknownPhase


_TITLES = {
    ElectionPhase.FIRST_VOTE: "First Vote",
    ElectionPhase.FIRST_TALLY: "Results of First Vote",
    ElectionPhase.SECOND_VOTE: "Second Vote",
    ElectionPhase.SECOND_TALLY: "Results of Second Vote",
    ElectionPhase.SAFETY_ROUND: "Safety Round",
}

_DESCRIPTIONS = {
    ElectionPhase.FIRST_VOTE: ("Please vote for your preferred candidate.",),
    ElectionPhase.FIRST_TALLY: (
        "The results of the first vote are in!",
        "Everyone can now explain their vote.",
    ),
    ElectionPhase.SECOND_VOTE: ("Please vote for your preferred candidate.",),
    ElectionPhase.SECOND_TALLY: ("The results of the second vote are in!",),
    ElectionPhase.SAFETY_ROUND: ("Is this decision safe enough to try?",),
}


def initial_phase() -> ElectionPhase:
    return ElectionPhase.FIRST_VOTE


def next_phase(phase: ElectionPhase) -> ElectionPhase:
    """
    下一個階段

    規則：
    - 依照固定順序前進
    - SafetyRound 是終點，再 next 還是 SafetyRound

    範例：
        next_phase(FIRST_VOTE) -> FIRST_TALLY
        next_phase(SAFETY_ROUND) -> SAFETY_ROUND
    """
    if phase == ElectionPhase.FIRST_VOTE:
        return ElectionPhase.FIRST_TALLY
    elif phase == ElectionPhase.FIRST_TALLY:
        return ElectionPhase.SECOND_VOTE
    elif phase == ElectionPhase.SECOND_VOTE:
        return ElectionPhase.SECOND_TALLY
    else:  # SECOND_TALLY, SAFETY_ROUND
        return ElectionPhase.SAFETY_ROUND


def prev_phase(phase: ElectionPhase) -> ElectionPhase:
    """
    上一個階段（next_phase 的反向）

    FirstVote 是起點，再 prev 還是 FirstVote
    """
    if phase == ElectionPhase.SAFETY_ROUND:
        return ElectionPhase.SECOND_TALLY
    elif phase == ElectionPhase.SECOND_TALLY:
        return ElectionPhase.SECOND_VOTE
    elif phase == ElectionPhase.SECOND_VOTE:
        return ElectionPhase.FIRST_TALLY
    else:  # FIRST_TALLY, FIRST_VOTE
        return ElectionPhase.FIRST_VOTE


def phase_title(phase: ElectionPhase) -> str:
    return _TITLES[phase]


def phase_description(phase: ElectionPhase) -> Tuple[str, ...]:
    """階段說明，每個元素是一個段落"""
    return _DESCRIPTIONS[phase]


def parse_phase(label: str) -> ElectionPhase:
    """
    把客戶端送來的標籤轉成 ElectionPhase

    只接受正規名稱（例如 "FirstVote"），不做大小寫轉換

    異常：
        UnknownPhase: 標籤不符合任何階段
    """
    try:
        return ElectionPhase(label)
    except ValueError:
        raise UnknownPhase(label) from None


def is_vote_phase(phase: ElectionPhase) -> bool:
    """只有投票階段可以寫入或清空票"""
    return phase in (ElectionPhase.FIRST_VOTE, ElectionPhase.SECOND_VOTE)


def round_number_for(phase: ElectionPhase) -> int:
    """
    階段對應到哪一輪的票

    - FirstVote, FirstTally: 第 1 輪
    - SecondVote, SecondTally, SafetyRound: 第 2 輪

    注意：SafetyRound 顯示的是第 2 輪的結果，不是新的一輪
    """
    if phase in (ElectionPhase.FIRST_VOTE, ElectionPhase.FIRST_TALLY):
        return 1
    return 2
