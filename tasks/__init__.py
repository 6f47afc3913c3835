# Tasks package - Celery background tasks
from .vision import analyze_above_fold_task, CallbackTask

__all__ = [
    "analyze_above_fold_task",
    "CallbackTask",
]
