import asyncio
import logging

from fastapi import APIRouter, HTTPException

from config import get_settings
from models import VisionAnalysisRequest, VisionAnalysisResponse, VisionTaskResponse
from analyzer.errors import VisionAnalysisError
from analyzer.pipeline import analyze_above_fold

logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

MISSING_IMAGES_DETAIL = "Both desktop and mobile above-fold images are required."


def _require_images(request: VisionAnalysisRequest) -> None:
    if not request.desktop_image_base64 or not request.mobile_image_base64:
        raise HTTPException(status_code=400, detail=MISSING_IMAGES_DETAIL)


@router.get("/")
async def root():
    return {
        "service": "CRO Vision Analyzer",
        "status": "running",
        "endpoints": {
            "vision": "/vision (POST)",
            "vision_async": "/vision/async (POST)",
            "vision_status": "/vision/status/{task_id} (GET)",
        },
    }


@router.get("/health")
async def health():
    return {"status": "healthy"}


@router.get("/vision")
async def vision_usage():
    return {
        "status": "ok",
        "message": "POST a JSON payload with { desktopImageBase64, mobileImageBase64 } to run vision analysis.",
        "example": {
            "desktopImageBase64": "<base64 PNG of the desktop viewport>",
            "mobileImageBase64": "<base64 PNG of the mobile viewport>",
        },
    }


@router.post("/vision", response_model=VisionAnalysisResponse)
async def analyze_vision(request: VisionAnalysisRequest):
    """
    Runs the above-the-fold vision analysis on a desktop/mobile screenshot pair.

    The whole pipeline (including rate-limit retries) runs under the
    VISION_REQUEST_TIMEOUT wall-clock limit.
    """
    _require_images(request)
    timeout = get_settings().VISION_REQUEST_TIMEOUT

    try:
        result = await asyncio.wait_for(
            analyze_above_fold(
                request.desktop_image_base64, request.mobile_image_base64
            ),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        logger.error(f"⏱️ Vision analysis exceeded {timeout}s")
        raise HTTPException(
            status_code=504,
            detail=f"Vision analysis exceeded {timeout:g} seconds.",
        )
    except VisionAnalysisError as e:
        logger.error(f"❌ Vision-only analysis failed: {e.message}")
        raise HTTPException(status_code=502, detail=e.message)
    except Exception as e:
        logger.exception("❌ Unexpected vision analysis failure")
        raise HTTPException(
            status_code=500, detail=str(e) or "Vision analysis failed"
        )

    return {"analysis": result.to_dict()}


@router.post("/vision/async", response_model=VisionTaskResponse)
async def analyze_vision_async(request: VisionAnalysisRequest):
    """
    Submit a vision analysis for background processing.
    Returns immediately with a task_id for status polling.
    """
    _require_images(request)

    try:
        from tasks.vision import analyze_above_fold_task

        task = analyze_above_fold_task.delay(
            request.desktop_image_base64, request.mobile_image_base64
        )
    except Exception as e:
        logger.error(f"❌ Failed to submit vision task: {e}")
        raise HTTPException(
            status_code=500, detail=f"Failed to submit vision task: {str(e)}"
        )

    return {
        "task_id": task.id,
        "status": "PENDING",
        "message": "Vision analysis task submitted successfully",
        "poll_url": f"/vision/status/{task.id}",
    }


@router.get("/vision/status/{task_id}")
async def get_vision_task_status(task_id: str):
    """
    Check the status of a background vision task.

    Returns:
        - PENDING: Task is waiting in queue (or unknown)
        - STARTED: Task is being processed
        - SUCCESS: Task completed successfully (includes result)
        - FAILURE: Task failed (includes error details)
    """
    try:
        from celery.result import AsyncResult
        from core.celery import celery_app

        task = AsyncResult(task_id, app=celery_app)
        response = {
            "task_id": task_id,
            "status": task.state,
        }

        if task.state == "PENDING":
            response["message"] = "Task is waiting in queue"
        elif task.state == "STARTED":
            response["message"] = "Task is being processed"
        elif task.state == "SUCCESS":
            response["message"] = "Task completed successfully"
            response["result"] = task.result
        elif task.state == "FAILURE":
            response["message"] = "Task failed"
            response["error"] = str(task.info)
        else:
            response["message"] = f"Unknown state: {task.state}"

        return response

    except Exception as e:
        raise HTTPException(
            status_code=500, detail=f"Failed to get task status: {str(e)}"
        )
