from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

CALL_STATUS_PATTERN = "^(call connected|call not connected|switched off|call later)$"

class CallRecordCreate(BaseModel):
    user_id: str = Field(..., min_length=1)
    status: str = Field(..., pattern=CALL_STATUS_PATTERN)
    comment: str = ""
    complaint_tag: Optional[str] = None

class CallRecordResponse(BaseModel):
    id: int
    user_id: str
    status: str
    comment: str
    complaint_tag: Optional[str]
    timestamp: datetime
    created_by: int

    model_config = {"from_attributes": True}
