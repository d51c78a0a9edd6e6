'''
Pydantic models for the finance dashboard: the raw store records it reads,
and the series it hands back to the presentation layer.
'''
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union, Annotated
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    AliasChoices,
    BeforeValidator,
    PlainSerializer,
    computed_field,
    field_validator,
)

from ..database.db_enums import PayrollStatus

UNKNOWN_LABEL = "Unknown"

# Amounts stay Decimal in Python and leave the API as plain JSON numbers.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Store ids are UUIDs; the dashboard compares them as text, like the "all" selector.
Identifier = Annotated[str, BeforeValidator(lambda v: str(v) if isinstance(v, UUID) else v)]

# Dates arrive as whatever the store holds; parsing happens at bucketing time.
RawDate = Optional[Union[datetime, date, str]]


def _display_name(name: Optional[str], surname: Optional[str]) -> str:
    full_name = f"{name or ''} {surname or ''}".strip()
    return full_name or UNKNOWN_LABEL


# --- 1. Store Records (Input) ---

class Teacher(BaseModel):
    """A teacher row as read from the store."""
    id: Identifier
    name: Optional[str] = None
    surname: Optional[str] = None
    is_active: Optional[bool] = True

    model_config = ConfigDict(from_attributes=True)

    @property
    def display_name(self) -> str:
        return _display_name(self.name, self.surname)

class Student(BaseModel):
    """
    A student row as read from the store.
    The store names the class column 'class', which is accepted on input.
    """
    id: Identifier
    name: Optional[str] = None
    surname: Optional[str] = None
    class_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("class_name", "class"),
    )
    is_active: Optional[bool] = True

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @property
    def display_name(self) -> str:
        return _display_name(self.name, self.surname)

class SchoolClass(BaseModel):
    """A class row. The only link between students and teachers."""
    id: Identifier
    class_name: Optional[str] = None
    teacher_id: Optional[Identifier] = None
    teacher_name: Optional[str] = None
    is_active: Optional[bool] = True

    model_config = ConfigDict(from_attributes=True)

class Payment(BaseModel):
    """A single payment received from (or on behalf of) a student."""
    id: Identifier
    student_id: Optional[Identifier] = None
    amount: Optional[Decimal] = Field(default=None, ge=0)
    term: Optional[str] = None
    payment_for: Optional[str] = None
    payment_date: RawDate = None
    payment_method: Optional[str] = None
    receipt_number: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def amount_value(self) -> Decimal:
        """The amount with a missing value read as zero."""
        return self.amount if self.amount is not None else Decimal(0)

class PayrollEntry(BaseModel):
    """
    A payroll line for one teacher over one period.
    If `total_amount` is set it is authoritative; otherwise the payable total
    is derived from base, bonus and deductions.
    """
    id: Identifier
    teacher_id: Identifier
    period_start: RawDate = None
    period_end: RawDate = None
    hours_worked: Optional[Decimal] = None
    hourly_rate: Optional[Decimal] = None
    base_amount: Optional[Decimal] = None
    bonus: Optional[Decimal] = None
    deductions: Optional[Decimal] = None
    total_amount: Optional[Decimal] = None
    payment_status: PayrollStatus = PayrollStatus.PENDING
    payment_date: RawDate = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("payment_status", mode="before")
    @classmethod
    def _default_status(cls, value):
        # The store leaves the status NULL on rows that were never reviewed.
        return PayrollStatus.PENDING if value is None else value

class SubscriptionPlan(BaseModel):
    """A fixed subscription offer from the plan catalog."""
    code: str
    label: str
    price: Money

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def payment_for(self) -> str:
        """The payment description recorded when this plan is sold."""
        return f"{self.label} Subscription"

class FinanceSnapshot(BaseModel):
    """
    One fresh read of every collection the dashboard needs.
    Each aggregation pass works on exactly one snapshot.
    """
    teachers: list[Teacher] = Field(default_factory=list)
    students: list[Student] = Field(default_factory=list)
    classes: list[SchoolClass] = Field(default_factory=list)
    payments: list[Payment] = Field(default_factory=list)
    payrolls: list[PayrollEntry] = Field(default_factory=list)


# --- 2. API Input Models ---

class FinanceDashboardRequest(BaseModel):
    """
    Validates the request body for computing a dashboard from a supplied
    snapshot instead of the database.
    """
    snapshot: FinanceSnapshot
    teacher_id: str = "all"
    student_id: str = "all"


# --- 3. Dashboard Output Models ---

class FinanceTotals(BaseModel):
    revenue: Money
    payroll: Money
    net: Money

class MonthlyTrendPoint(BaseModel):
    month_key: str  # "YYYY-MM", the sort key
    month: str      # "Jan 2025", the chart label
    revenue: Money
    payroll: Money

class BreakdownSlice(BaseModel):
    name: str
    value: Money

class StudentOption(BaseModel):
    id: Identifier
    name: str
    class_name: Optional[str] = None

class PaymentRow(BaseModel):
    """One filtered payment, reconciled against its student and plan."""
    id: Identifier
    payment_date: Optional[date] = None
    student_id: Optional[Identifier] = None
    student_name: str
    class_name: Optional[str] = None
    plan: str
    amount: Money
    payment_method: Optional[str] = None

class PayrollRow(BaseModel):
    """One filtered payroll entry with its teacher and payable total."""
    id: Identifier
    teacher_id: Identifier
    teacher_name: str
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    hours_worked: Money = Decimal(0)
    base_amount: Money = Decimal(0)
    bonus: Money = Decimal(0)
    deductions: Money = Decimal(0)
    total: Money
    payment_status: PayrollStatus

class FinanceDashboard(BaseModel):
    """Everything the finance page charts, for one pair of filters."""
    teacher_id: str
    student_id: str
    totals: FinanceTotals
    classes_covered: int
    monthly_trend: list[MonthlyTrendPoint]
    plan_mix: list[BreakdownSlice]
    teacher_payouts: list[BreakdownSlice]
    top_students: list[BreakdownSlice]
    payroll_status_counts: dict[PayrollStatus, int]
    student_options: list[StudentOption]
    payment_rows: list[PaymentRow] = Field(default_factory=list)
    payroll_rows: list[PayrollRow] = Field(default_factory=list)
