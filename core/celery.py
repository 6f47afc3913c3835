"""
Celery application configuration for CRO Vision Analyzer
Handles background vision analysis with Redis as broker
"""

import logging

from celery import Celery
from celery.signals import (
    task_failure,
    task_postrun,
    task_prerun,
    worker_ready,
    worker_shutdown,
)

from config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Create Celery application
celery_app = Celery(
    "cro_vision_analyzer",
    broker=settings.celery_broker,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["tasks.vision"],
)

# Celery Configuration
celery_app.conf.update(
    # Task Settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # Task Execution
    task_acks_late=True,  # Acknowledge task after completion (ensures no lost tasks)
    task_reject_on_worker_lost=True,  # Re-queue if worker crashes
    task_track_started=True,  # Report STARTED while the vision call runs
    # Task Time Limits
    task_time_limit=settings.TASK_TIME_LIMIT,
    task_soft_time_limit=settings.TASK_SOFT_TIME_LIMIT,
    # Result Backend Settings
    result_expires=settings.CELERY_RESULT_EXPIRES,
    result_extended=True,
    # Worker Settings
    worker_prefetch_multiplier=settings.WORKER_PREFETCH_MULTIPLIER,
    worker_max_tasks_per_child=settings.WORKER_MAX_TASKS_PER_CHILD,
    # Optimization
    broker_connection_retry_on_startup=True,
    result_compression="gzip",
)


# Celery Signals for Logging and Monitoring
@worker_ready.connect
def worker_ready_handler(sender=None, **kwargs):
    """Called when worker starts"""
    logger.info("🚀 Celery worker is ready and waiting for tasks")

@worker_shutdown.connect
def worker_shutdown_handler(sender=None, **kwargs):
    """Called when worker shuts down"""
    logger.info("🛑 Celery worker is shutting down")

@task_prerun.connect
def task_prerun_handler(sender=None, task_id=None, task=None, args=None, **kwargs):
    """Called before task execution"""
    logger.info(f"⏳ Starting task: {task.name} [ID: {task_id}]")

@task_postrun.connect
def task_postrun_handler(
    sender=None, task_id=None, task=None, retval=None, state=None, **kwargs
):
    """Called after task execution"""
    logger.info(f"✅ Completed task: {task.name} [ID: {task_id}] [State: {state}]")

@task_failure.connect
def task_failure_handler(
    sender=None, task_id=None, exception=None, traceback=None, **kwargs
):
    """Called when task fails"""
    logger.error(
        f"❌ Task failed: {sender.name} [ID: {task_id}] [Error: {str(exception)}]"
    )

if __name__ == "__main__":
    # Start worker with: celery -A core.celery worker --loglevel=info
    celery_app.start()
