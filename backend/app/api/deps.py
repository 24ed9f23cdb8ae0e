"""
API dependencies
Provides the DI container to endpoints; tests override get_container.
"""
from functools import lru_cache

from src.container import Container


@lru_cache(maxsize=1)
def get_container() -> Container:
    """Process-wide container backed by the SQL product store"""
    from backend.app.db.session import AsyncSessionLocal

    return Container.create_from_session_factory(AsyncSessionLocal)
