"""Pydantic schemas for API request/response validation"""

import datetime as dt
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from finny.domain.models import BillStatus, EmploymentMode, Frequency


# Session


class RegisterRequest(BaseModel):
    """Request body for POST /auth/register"""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=8, max_length=72)
    name: Optional[str] = None


class LoginRequest(BaseModel):
    """Request body for POST /auth/login"""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SessionUpdateRequest(BaseModel):
    name: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    user_id: str
    email: str
    name: Optional[str] = None


# User


class UserResponse(BaseModel):
    """Response for GET /user"""

    id: str
    name: Optional[str] = None
    email: str
    bio: Optional[str] = None
    income: float
    income_frequency: Frequency
    employment_mode: EmploymentMode
    created_at: dt.datetime


class ProfileUpdateRequest(BaseModel):
    """Request body for PUT /user/profile; omitted fields are kept"""

    name: Optional[str] = None
    bio: Optional[str] = None


class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserResponse


class IncomeSettingsRequest(BaseModel):
    """Request body for PUT /user/income"""

    income: float = Field(..., ge=0, description="Declared income amount per income_frequency")
    employment_mode: EmploymentMode
    income_frequency: Frequency = Frequency.MONTHLY


class IncomeSettingsResponse(BaseModel):
    id: str
    income: float
    income_frequency: Frequency
    employment_mode: EmploymentMode


class ExperienceUpdateRequest(BaseModel):
    """Request body for PUT /user/experience"""

    experience: int = Field(..., ge=0)
    level: int = Field(..., ge=1)


class ExperienceResponse(BaseModel):
    experience: int
    level: int
    next_level_experience: int
    streak: int
    message: Optional[str] = None


# Income and expenses


class IncomeCreate(BaseModel):
    """Request body for POST /income"""

    source: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    frequency: Frequency = Frequency.MONTHLY
    description: Optional[str] = None
    date: dt.date


class IncomeUpdate(BaseModel):
    """Request body for PUT /income/{id}; omitted fields are kept"""

    source: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, gt=0)
    frequency: Optional[Frequency] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None


class IncomeResponse(BaseModel):
    id: str
    source: str
    amount: float
    frequency: Frequency
    monthly_amount: float
    description: Optional[str] = None
    date: dt.date
    created_at: dt.datetime


class ExpenseCreate(BaseModel):
    """Request body for POST /expenses"""

    category: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    frequency: Frequency = Frequency.MONTHLY
    description: Optional[str] = None


class ExpenseUpdate(BaseModel):
    category: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, gt=0)
    frequency: Optional[Frequency] = None
    description: Optional[str] = None


class ExpenseResponse(BaseModel):
    id: str
    category: str
    amount: float
    frequency: Frequency
    monthly_amount: float
    description: Optional[str] = None
    date: dt.date
    created_at: dt.datetime


class DeleteResponse(BaseModel):
    success: bool = True


# Bills


class BillPaymentSchema(BaseModel):
    """Single payment in a bill's history"""

    id: str
    amount: float
    payment_date: dt.date
    notes: Optional[str] = None
    method: Optional[str] = None


class BillCreate(BaseModel):
    """Request body for POST /bills"""

    name: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    due_date: dt.date
    category: str = Field(..., min_length=1)
    frequency: Frequency
    description: Optional[str] = None
    reminder_days: int = Field(3, ge=0)
    auto_pay: bool = False
    payment_url: Optional[str] = None
    is_recurring: bool = True


class BillUpdate(BaseModel):
    """Request body for PUT /bills/{id}; omitted fields are kept"""

    name: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, ge=0)
    due_date: Optional[dt.date] = None
    category: Optional[str] = None
    frequency: Optional[Frequency] = None
    description: Optional[str] = None
    reminder_days: Optional[int] = Field(None, ge=0)
    auto_pay: Optional[bool] = None
    payment_url: Optional[str] = None
    is_recurring: Optional[bool] = None
    is_paid: Optional[bool] = None
    is_pinned: Optional[bool] = None
    status: Optional[BillStatus] = None


class BillResponse(BaseModel):
    id: str
    name: str
    amount: float
    category: str
    description: Optional[str] = None
    due_date: dt.date
    next_due_date: Optional[dt.date] = None
    is_recurring: bool
    frequency: Frequency
    reminder_days: int
    is_paid: bool
    last_paid: Optional[dt.datetime] = None
    status: BillStatus
    auto_pay: bool
    payment_url: Optional[str] = None
    is_pinned: bool
    days_until_due: int
    is_due_soon: bool
    payment_history: List[BillPaymentSchema] = []


class PaymentCreate(BaseModel):
    """Request body for POST /bills/payment"""

    bill_id: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    payment_date: dt.date
    notes: Optional[str] = None
    method: Optional[str] = None


class PaymentResponse(BaseModel):
    payment: BillPaymentSchema
    bill: BillResponse
    on_time: bool
    experience: ExperienceResponse


# Dashboard


class CalculationsSchema(BaseModel):
    total_monthly_income: float
    total_annual_income: float
    total_monthly_expenses: float
    monthly_balance: float
    tax_bracket: float
    tax_amount: float
    after_tax_income: float


class GamificationSchema(BaseModel):
    level: int
    experience: int
    next_level_experience: int
    streak: int
    health_score: int


class DashboardResponse(BaseModel):
    """Response for GET /dashboard"""

    employment_mode: EmploymentMode
    calculations: CalculationsSchema
    category_totals: Dict[str, float]
    gamification: GamificationSchema


class AchievementSchema(BaseModel):
    name: str
    description: str
    kind: str
    earned: bool
    progress: float
    goal: float
    reward: int


class AchievementsResponse(BaseModel):
    streak: int
    achievements: List[AchievementSchema]
