from tasklist.services import (
    confirmation_service,
    persistence,
    task_store,
    task_views,
)


__all__ = [
    "confirmation_service",
    "persistence",
    "task_store",
    "task_views",
]
