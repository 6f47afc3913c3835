from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Models
class VisionAnalysisRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    desktop_image_base64: Optional[str] = None
    mobile_image_base64: Optional[str] = None


class VisionAnalysisResponse(BaseModel):
    analysis: Dict[str, Any]


class VisionTaskResponse(BaseModel):
    task_id: str
    status: str
    message: str
    poll_url: str
