"""
Core Ledger Records

Transactions, workers, weekly labor payments, plugins and material
estimates. These are flat records linked only by string ids.

DESIGN DECISION: Records are validated when they are built, not when
they are stored. A LaborPayment whose total does not match its hours and
rates cannot be constructed, so the storage layer never has to recompute
it.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import Field, model_validator

from buildledger.ids import generate_id
from buildledger.models.base import IsoDate, LedgerModel, utc_now

# Overtime is paid at time-and-a-half unless a rate is given.
OVERTIME_MULTIPLIER = 1.5

# Allowed drift between a stored total and hours x rates.
TOTAL_TOLERANCE = 0.01


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Direction of money flow."""
    INCOME = "income"
    EXPENSE = "expense"


class TransactionCategory(str, Enum):
    """
    Ledger categories for transactions.

    These are the coarse buckets used on the dashboard. The detailed
    expense categories live in the reference data.
    """
    MATERIALS = "materials"
    LABOR = "labor"
    EQUIPMENT = "equipment"
    OTHER = "other"
    INCOME = "income"


class PeriodFilter(str, Enum):
    """Reporting period for dashboard summaries."""
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


# =============================================================================
# RECORDS
# =============================================================================

class Transaction(LedgerModel):
    """A single income or expense entry."""

    id: str = Field(
        default_factory=generate_id,
        description="Opaque record id"
    )
    type: TransactionType = Field(
        ...,
        description="Income or expense"
    )
    amount: float = Field(
        ...,
        ge=0,
        description="Amount in the ledger currency"
    )
    category: TransactionCategory = Field(
        ...,
        description="Ledger category"
    )
    description: str = Field(
        default="",
        max_length=500,
        description="Free-text description"
    )
    date: IsoDate = Field(
        ...,
        description="Date the money moved"
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        description="When the entry was recorded"
    )


class Worker(LedgerModel):
    """A worker on the payroll."""

    id: str = Field(default_factory=generate_id)
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Worker name"
    )
    hourly_rate: float = Field(
        ...,
        ge=0,
        description="Default hourly rate"
    )
    created_at: datetime = Field(default_factory=utc_now)


class LaborPayment(LedgerModel):
    """
    One worker's pay for one week.

    CRITICAL: total_amount must equal
    regular_hours * hourly_rate + overtime_hours * overtime_rate.
    The storage layer trusts this value and copies it into the companion
    expense transaction when the payment is marked paid.
    """

    id: str = Field(default_factory=generate_id)
    worker_id: str = Field(
        ...,
        min_length=1,
        description="Id of the Worker being paid"
    )
    worker_name: str = Field(
        ...,
        min_length=1,
        description="Copy of the worker's name at the time of payment"
    )
    days_worked: float = Field(default=0, ge=0)
    regular_hours: float = Field(default=0, ge=0)
    overtime_hours: float = Field(default=0, ge=0)
    hourly_rate: float = Field(..., ge=0)
    overtime_rate: Optional[float] = Field(
        default=None,
        ge=0,
        description="Overtime rate; defaults to 1.5x the hourly rate"
    )
    total_amount: float = Field(..., ge=0)
    week_start: IsoDate = Field(
        ...,
        description="Monday of the week this payment covers"
    )
    is_paid: bool = False
    notes: str = Field(default="", max_length=1000)
    created_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode='after')
    def validate_amounts(self) -> 'LaborPayment':
        """Fill the default overtime rate and check the total."""
        if self.overtime_rate is None:
            self.overtime_rate = self.hourly_rate * OVERTIME_MULTIPLIER

        expected = (
            self.regular_hours * self.hourly_rate
            + self.overtime_hours * self.overtime_rate
        )
        if abs(self.total_amount - expected) > TOTAL_TOLERANCE:
            raise ValueError(
                f"Total amount {self.total_amount} does not match "
                f"hours and rates ({expected})"
            )

        if self.week_start.weekday() != 0:
            raise ValueError("Week start must be a Monday")

        return self

    @property
    def total_hours(self) -> float:
        return self.regular_hours + self.overtime_hours


class Plugin(LedgerModel):
    """An optional feature module the user can install and enable."""

    id: str = Field(..., min_length=1)
    name: str
    description: str = ""
    version: str = "1.0.0"
    icon: str = ""
    is_installed: bool = False
    is_enabled: bool = False
    author: str = ""


class MaterialEstimate(LedgerModel):
    """Saved material quantities for a building outline."""

    id: str = Field(default_factory=generate_id)
    name: str = Field(
        ...,
        min_length=1,
        description="Project name the estimate was made for"
    )
    area: float = Field(..., gt=0, description="Floor area in sq ft")
    floors: int = Field(default=1, ge=1)
    cement: int = Field(..., ge=0, description="Bags")
    sand: int = Field(..., ge=0, description="Cubic feet")
    bricks: int = Field(..., ge=0, description="Pieces")
    steel: int = Field(..., ge=0, description="Kilograms")
    aggregate: int = Field(..., ge=0, description="Cubic feet")
    created_at: datetime = Field(default_factory=utc_now)


class CurrencySettings(LedgerModel):
    """User's currency display preferences."""

    default_currency: str = "BDT"
    display_currency: str = "BDT"
    show_both_currencies: bool = False
    secondary_currency: str = "USD"


# =============================================================================
# SUMMARY MODELS
# =============================================================================

class WeekSummary(LedgerModel):
    """Payroll totals for one week."""

    week_start: date
    week_end: date
    total_payroll: float = 0
    paid_amount: float = 0
    unpaid_amount: float = 0
    payments: list[LaborPayment] = Field(default_factory=list)


class FinancialSummary(LedgerModel):
    """Income, expenses and profit over a set of transactions."""

    total_income: float = 0
    total_expenses: float = 0
    net_profit: float = 0
    category_breakdown: dict[TransactionCategory, float] = Field(
        default_factory=dict
    )
