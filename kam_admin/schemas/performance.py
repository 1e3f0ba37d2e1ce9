from pydantic import BaseModel, Field
from typing import List, Optional


class PerformanceRecordData(BaseModel):
    """One validated spreadsheet row with ProRatedAch already derived."""

    user_id: str
    date: str  # dd/mm/yyyy
    name: str
    poc: str
    potential: float
    last_30_days: float
    pro_rated_ach: float
    short_fall: float

    model_config = {"frozen": True, "from_attributes": True}


class ImportPreviewResponse(BaseModel):
    total_rows: int
    records: List[PerformanceRecordData]


class ImportResultResponse(BaseModel):
    imported: int
    message: str


class PerformanceTableFilter(BaseModel):
    search: Optional[str] = None
    poc: Optional[str] = None
    performance: str = Field("all", pattern="^(all|underperforming|good)$")
    sort_field: str = Field(
        "pro_rated_ach",
        pattern="^(user_id|date|name|poc|potential|last_30_days|pro_rated_ach|short_fall)$",
    )
    sort_direction: str = Field("asc", pattern="^(asc|desc)$")


class PerformanceTableStats(BaseModel):
    total: int
    underperforming: int
    avg_pro_rated_ach: float


class PerformanceTableResponse(BaseModel):
    stats: PerformanceTableStats
    pocs: List[str]
    records: List[PerformanceRecordData]
