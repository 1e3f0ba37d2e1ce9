from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import List, Optional

class RetailerTagUpdate(BaseModel):
    retailers: List[str] = Field(..., min_length=1)

    @field_validator("retailers")
    @classmethod
    def clean_retailers(cls, value: List[str]) -> List[str]:
        cleaned = []
        for retailer in value:
            retailer = retailer.strip()
            if retailer and retailer not in cleaned:
                cleaned.append(retailer)
        if not cleaned:
            raise ValueError("Please select at least one retailer")
        return cleaned

class RetailerTagResponse(BaseModel):
    id: int
    user_id: str
    user_name: str
    retailers: List[str]
    timestamp: datetime
    created_by: int

    model_config = {"from_attributes": True}

class RetailerCount(BaseModel):
    retailer: str
    count: int

class RetailerTaggingStats(BaseModel):
    total_users: int
    tagged_users: int
    untagged_users: int
    top_retailer: Optional[RetailerCount] = None

class ComplaintTagCreate(BaseModel):
    tag_name: str = Field(..., min_length=1, max_length=200)

    @field_validator("tag_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Tag name must not be blank")
        return value

class ComplaintTagResponse(BaseModel):
    id: int
    tag_name: str
    created_by: Optional[int]
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
