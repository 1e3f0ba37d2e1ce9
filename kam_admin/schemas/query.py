from pydantic import BaseModel, Field
from datetime import datetime

QUERY_STATUS_PATTERN = "^(open|in-progress|resolved)$"

class UserQueryCreate(BaseModel):
    user_id: str = Field(..., min_length=1)
    complaint_tag: str = Field(..., min_length=1)
    comment: str = ""

class UserQueryStatusUpdate(BaseModel):
    status: str = Field(..., pattern=QUERY_STATUS_PATTERN)

class UserQueryResponse(BaseModel):
    id: int
    user_id: str
    user_name: str
    complaint_tag: str
    comment: str
    status: str
    timestamp: datetime
    created_by: int

    model_config = {"from_attributes": True}

class QueryStatsResponse(BaseModel):
    total: int
    open: int
    in_progress: int
    resolved: int
