"""
Celery background tasks for CRO Vision Analyzer
Runs the above-the-fold vision pipeline in background workers
"""

import asyncio
import logging

from celery import Task

from core.celery import celery_app
from analyzer.pipeline import analyze_above_fold

logger = logging.getLogger(__name__)


class CallbackTask(Task):
    """
    Custom Celery task class with logging callbacks.
    """

    def on_success(self, retval, task_id, args, kwargs):
        """Called when task succeeds"""
        logger.info(f"✅ Task {task_id} completed successfully")

    def on_failure(self, exc, task_id, args, kwargs, einfo):
        """Called when task fails"""
        logger.error(f"❌ Task {task_id} failed: {str(exc)}")


@celery_app.task(base=CallbackTask, name="tasks.analyze_above_fold")
def analyze_above_fold_task(desktop_image_base64: str, mobile_image_base64: str) -> dict:
    """
    Background vision analysis of a desktop/mobile screenshot pair.

    Returns:
        dict: the VisionAnalysisResult document (camelCase keys)

    Raises:
        VisionAnalysisError: propagated so the task is marked FAILURE
    """
    result = asyncio.run(
        analyze_above_fold(desktop_image_base64, mobile_image_base64)
    )
    return result.to_dict()
