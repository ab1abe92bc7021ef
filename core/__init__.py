"""
核心業務邏輯層

這個 package 包含所有核心業務邏輯，包括：
- ElectionProcess：單一選舉的狀態與階段規則
- Registry：所有選舉的集中存放處（每場選舉一把鎖、一個廣播）
- Manager：對外操作介面與 guarded 階段轉換
- Broadcast：變更通知的 fan-out
- Locks：並發控制工具
"""
