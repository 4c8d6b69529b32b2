from pydantic import BaseModel
from typing import Optional

class DisputePatch(BaseModel):
    status: Optional[str] = None
    resolution: Optional[str] = None
    resolvedBy: Optional[str] = None

class DisputeResolveIn(BaseModel):
    resolution: str = ""
    resolvedBy: str = ""
