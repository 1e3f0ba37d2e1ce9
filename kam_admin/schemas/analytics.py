from pydantic import BaseModel
from datetime import date
from typing import List
from .performance import PerformanceRecordData
from .call_record import CallRecordResponse
from .query import UserQueryResponse
from .tag import RetailerCount, RetailerTagResponse

class DashboardSummary(BaseModel):
    active_accounts: int
    underperforming: int
    calls_completed: int
    connected_calls: int
    success_rate: float  # percent, one decimal
    pending_reviews: int
    untagged_users: int
    new_queries: int
    lowest_performers: List[PerformanceRecordData]

class TagCount(BaseModel):
    tag: str
    count: int

class RetailerPerformance(BaseModel):
    retailer: str
    avg_performance: float
    users: int

class TimelinePoint(BaseModel):
    date: date
    count: int

class AffectedUser(BaseModel):
    record: PerformanceRecordData
    complaints: List[str]
    sources: List[str]  # "Calls", "Queries"

class AnalyticsResponse(BaseModel):
    total_complaints: int
    total_queries: int
    open_queries: int
    complaint_tags: List[TagCount]
    retailer_counts: List[RetailerCount]
    users_tagged: int
    retailer_performance: List[RetailerPerformance]
    timeline: List[TimelinePoint]
    affected_users: List[AffectedUser]

class UserActivityResponse(BaseModel):
    record: PerformanceRecordData
    call_records: List[CallRecordResponse]
    user_queries: List[UserQueryResponse]
    retailer_tags: List[RetailerTagResponse]
    total_activities: int

class UserCoverageStats(BaseModel):
    total_users: int
    users_with_calls: int
    users_with_queries: int
    users_with_tags: int
