"""
服務層

這個 package 包含純計算邏輯，不負責狀態轉換：
- PhaseService：階段導航與顯示資訊
- TallyService：計票與排序
- NamingService：ID 生成與候選人名冊整理
"""
