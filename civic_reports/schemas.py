"""
Pydantic schemas for API validation
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from civic_reports.models.report import ReportStatus


# ============ Report Schemas ============

class ReportSubmission(BaseModel):
    """Anonymous report submission as received from the form.

    Title and description are checked by the submission service so that an
    empty value is rejected before anything else happens.
    """
    title: str = Field("", max_length=200)
    description: str = Field("", max_length=5000)
    include_location: bool = False
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    reporter_name: Optional[str] = Field(None, max_length=255)
    reporter_email: Optional[str] = Field(None, max_length=255)
    reporter_phone: Optional[str] = Field(None, max_length=50)
    captcha_token: str = ""
    captcha_answer: str = ""


class PublicReport(BaseModel):
    """Public-safe view of a report. Never carries reporter contact fields."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    tracking_code: str
    title: str
    description: str
    photo_url: Optional[str]
    has_location: bool
    latitude: Optional[float]
    longitude: Optional[float]
    neighborhood: Optional[str]
    status: ReportStatus
    admin_note: Optional[str]
    created_at: datetime
    updated_at: datetime


class ReportResponse(PublicReport):
    """Privileged view of a report with reporter contact fields"""
    reporter_name: Optional[str]
    reporter_email: Optional[str]
    reporter_phone: Optional[str]


class ReportListResponse(BaseModel):
    """Schema for paginated report list"""
    items: List[ReportResponse]
    total: int
    page: int
    size: int
    pages: int


class SubmissionResponse(BaseModel):
    """Returned to the citizen after a successful submission"""
    tracking_code: str
    status: ReportStatus


class ReportUpdate(BaseModel):
    """Schema for updating a report"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    admin_note: Optional[str] = None

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> str:
        # Only runs when the field is sent; omitting it leaves the value alone
        if v is None or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("admin_note")
    @classmethod
    def blank_note_is_none(cls, v: Optional[str]) -> Optional[str]:
        return (v or "").strip() or None


class ChangeStatusRequest(BaseModel):
    """Schema for changing report status"""
    status: ReportStatus
    note: Optional[str] = None


class EventResponse(BaseModel):
    """Schema for audit event response"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    report_id: int
    event_type: str
    description: Optional[str]
    payload: Optional[dict]
    created_by: Optional[str]
    created_at: datetime


# ============ Statistics Schemas ============

class NeighborhoodCount(BaseModel):
    name: str
    value: int


class DailyCount(BaseModel):
    date: str
    count: int


class StatisticsResponse(BaseModel):
    """Aggregate public statistics"""
    total: int
    new: int
    in_progress: int
    resolved: int
    with_location: int
    with_photo: int
    resolution_rate: int
    avg_resolution_hours: int
    by_neighborhood: List[NeighborhoodCount]
    daily: List[DailyCount]
    avg_rating: Optional[float] = None


class CostCategory(BaseModel):
    count: int = 0
    min: int = 0
    max: int = 0


class CostEstimateResponse(BaseModel):
    """Repair cost estimate for unresolved reports, in ALL"""
    total_min: int
    total_max: int
    by_category: Dict[str, CostCategory]


class CaptchaChallenge(BaseModel):
    question: str
    token: str


# ============ Admin Schemas ============

class AdminCreate(BaseModel):
    """Schema for creating an admin"""
    email: EmailStr
    full_name: Optional[str] = Field(None, max_length=255)
    is_super_admin: bool = False
    password: str = Field(..., min_length=8, max_length=128)


class AdminUpdate(BaseModel):
    """Schema for updating an admin"""
    full_name: Optional[str] = Field(None, max_length=255)
    is_super_admin: Optional[bool] = None


class AdminResponse(BaseModel):
    """Schema for admin response"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: Optional[str]
    is_super_admin: bool
    created_by: Optional[int]
    created_at: datetime


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
