"""
FastAPI Dependencies

Registry 在 lifespan 建立一次，存在 app.state 上，透過 Depends 傳給 route
"""
from fastapi import Request

from core.registry import ElectionRegistry
from settings import Settings, get_settings


def get_registry(request: Request) -> ElectionRegistry:
    """
    FastAPI dependency：提供共用的 ElectionRegistry

    使用方式：
        @router.get("/endpoint")
        def endpoint(registry: ElectionRegistry = Depends(get_registry)):
            ...

    測試時可以用 app.dependency_overrides 換成獨立的 Registry
    """
    return request.app.state.registry


def get_app_settings() -> Settings:
    return get_settings()
