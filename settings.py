from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    log_level: str = "INFO"

    # 選舉 ID：52 + 10 個字元的字母表，16 碼 ≈ 95 bits
    election_id_length: int = 16
    max_elections: int = 10000

    # 每個訂閱者的事件緩衝區大小（滿了就丟掉最舊的）
    channel_capacity: int = 64

    # SSE keep-alive 間隔（秒），避免反向代理判定連線閒置
    keep_alive_seconds: float = 600.0

    class Config:
        env_file = ".env"
        env_prefix = "ELECTION_"


@lru_cache()
def get_settings():
    return Settings()
