from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class PromptsRequest(BaseModel):
    # loosely typed on purpose: malformed entries are filtered, not rejected
    prompts: Optional[Any] = None


class PromptsResponse(BaseModel):
    success: bool = True
    prompts: List[Dict[str, Any]]
