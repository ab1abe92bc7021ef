"""
API 層：FastAPI routers，只負責把 HTTP 轉成 ElectionManager 呼叫
"""
