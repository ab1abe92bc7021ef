"""
領域型別：選舉階段與通知事件

這裡只放「資料長什麼樣子」，階段的導航規則放在 services/phase_service.py
"""
import enum


class ElectionPhase(str, enum.Enum):
    """
    選舉流程的五個階段（有固定順序）

    FirstVote -> FirstTally -> SecondVote -> SecondTally -> SafetyRound

    值就是正規標籤，客戶端送來的 expected_phase 必須完全相符
    """
    FIRST_VOTE = "FirstVote"
    FIRST_TALLY = "FirstTally"
    SECOND_VOTE = "SecondVote"
    SECOND_TALLY = "SecondTally"
    SAFETY_ROUND = "SafetyRound"


class TransitionDirection(str, enum.Enum):
    """Step 操作的方向"""
    NEXT = "next"
    PREV = "prev"
    RESET = "reset"


class ElectionEvent(str, enum.Enum):
    """
    推播給訂閱者的事件（只有標籤，沒有 payload）

    KEEP_ALIVE 沒有領域意義，只是讓中間的 proxy 不要斷線
    """
    PHASE_CHANGED = "phase-changed"
    VOTES_CHANGED = "votes-changed"
    KEEP_ALIVE = "keep-alive"
