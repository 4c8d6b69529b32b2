from pydantic import BaseModel
from typing import Optional

class ScannerCountIn(BaseModel):
    userId: Optional[str] = None
