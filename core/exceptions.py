"""
自定義異常類別

集中管理所有業務邏輯異常，方便 API 層統一處理
"""


class ElectionException(Exception):
    """所有選舉異常的基類"""
    pass


# ============ Registry 相關異常 ============

class ElectionNotFound(ElectionException):
    """選舉不存在"""
    def __init__(self, election_id):
        self.election_id = election_id
        super().__init__(f"Election {election_id} not found")


class RegistryFull(ElectionException):
    """Registry 已經放不下新的選舉"""
    pass


# ============ 階段相關異常 ============

class UnknownPhase(ElectionException):
    """階段標籤不是任何一個正規名稱"""
    def __init__(self, label):
        self.label = label
        super().__init__(f"Unknown phase {label!r}")


class InvalidDirection(ElectionException):
    """Step 方向不是 next / prev / reset"""
    def __init__(self, direction):
        self.direction = direction
        super().__init__(f"Invalid direction {direction!r}")


class PhaseConflict(ElectionException):
    """
    客戶端以為的階段和實際階段不一致

    通常代表另一個客戶端已經先推進了流程，呼叫者要重新取得狀態
    """
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected phase {expected.value}, but election is in {actual.value}"
        )


# ============ 投票相關異常 ============

class UnknownNominee(ElectionException):
    """投票指向不存在的候選人 ID"""
    def __init__(self, nominee_id):
        self.nominee_id = nominee_id
        super().__init__(f"Nominee {nominee_id} not found")
