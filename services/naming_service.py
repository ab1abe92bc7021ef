"""
命名服務：生成 Election ID 和整理候選人名冊

純計算邏輯，不涉及狀態轉換
"""
import secrets
import string
from typing import Dict, Iterable

ID_ALPHABET = string.ascii_letters + string.digits


def generate_election_id(length: int = 16) -> str:
    """
    生成隨機的選舉 ID

    範例：aZ3kP0qLm9XwB2cD

    注意：
    - 不檢查唯一性（由呼叫者負責）
    - 62^16 ≈ 4.7e28 種可能，碰撞機率可忽略
    - 使用 secrets，每次呼叫互相獨立
    """
    return ''.join(secrets.choice(ID_ALPHABET) for _ in range(length))


def split_nominee_text(text: str) -> list[str]:
    """
    把表單輸入的多行文字拆成名單（一行一個候選人）

    只去掉行尾的 \\r，空白行留給 normalize_nominees 處理
    """
    return [line.rstrip("\r") for line in text.split("\n")]


def normalize_nominees(raw_names: Iterable[str]) -> Dict[int, str]:
    """
    整理候選人名冊

    邏輯：
    - 丟掉空字串
    - 排序、去重
    - 依排序後的順序從 0 開始編號

    範例：
        ["B", "A", "A", ""] -> {0: "A", 1: "B"}

    注意：
        同樣的輸入永遠得到同樣的 ID 對應
    """
    names = sorted({name for name in raw_names if name})
    return {index: name for index, name in enumerate(names)}
