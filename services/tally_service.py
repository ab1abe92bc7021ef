"""
計票服務：把一輪的原始投票整理成排序好的結果

純計算邏輯，不改變任何選舉狀態
"""
from collections import Counter
from typing import Dict, List, Mapping, Tuple

from core.exceptions import UnknownNominee


# (候選人名稱, 票數)
TallyEntry = Tuple[str, int]


def vote_label(registry: Mapping[int, str], nominee_id: int) -> str:
    """
    取得候選人的顯示名稱

    異常：
        UnknownNominee: ID 不在候選人名冊中（正常情況下 API 層已經擋掉，
        發生代表內部狀態不一致）
    """
    try:
        return registry[nominee_id]
    except KeyError:
        raise UnknownNominee(nominee_id) from None


def accumulate(round_votes: Mapping[str, int], registry: Mapping[int, str]) -> List[TallyEntry]:
    """
    計算一輪的累計票數

    排序規則：
    1. 票數多的在前
    2. 票數相同時，名稱「大」的在前（字典序遞減）

    範例：
        registry = {0: "Amy", 1: "Bo"}
        round_votes = {"v1": 0, "v2": 1}
        -> [("Bo", 1), ("Amy", 1)]

    參數：
        round_votes: {投票者: 候選人 ID}
        registry: {候選人 ID: 名稱}

    返回：
        [(名稱, 票數), ...]，結果跟 round_votes 的插入順序無關
    """
    counts = Counter(round_votes.values())

    results = [
        (vote_label(registry, nominee_id), count)
        for nominee_id, count in counts.items()
        if count > 0
    ]
    results.sort(key=lambda entry: (entry[1], entry[0]), reverse=True)
    return results


def max_count(results: List[TallyEntry]) -> int:
    """
    最高票數

    沒有任何票時回傳 1（不是 0），前端用它當分母畫長條圖
    """
    if not results:
        return 1
    return max(count for _, count in results)


def winners(results: List[TallyEntry]) -> List[str]:
    """
    所有最高票的候選人（平手時全部列出，不自動裁決）

    順序與 accumulate 的結果相同
    """
    top = max_count(results)
    return [name for name, count in results if count == top]


def voters(round_votes: Mapping[str, int]) -> List[str]:
    """已投票的人（字典序遞增），用在公布結果前的名單"""
    return sorted(round_votes)


def vote_share(count: int, results: List[TallyEntry]) -> int:
    """票數佔最高票的百分比（0-100），用來決定長條長度"""
    return count * 100 // max_count(results)


def tally_table(results: List[TallyEntry]) -> List[Dict[str, object]]:
    """把結果轉成 API 使用的 dict 列表"""
    return [
        {"name": name, "count": count, "share": vote_share(count, results)}
        for name, count in results
    ]
