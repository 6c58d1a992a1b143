"""
Budget Models

A budget is a list of estimated line items for a project plus the
actual spend recorded against each. Totals are always the sums over the
items; ``buildledger.budgets.recalculate_budget`` keeps them that way.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from buildledger.ids import generate_id
from buildledger.models.base import IsoDate, LedgerModel, utc_now


class BudgetStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BudgetAlertType(str, Enum):
    OVER_BUDGET = "over-budget"
    APPROACHING_LIMIT = "approaching-limit"
    ON_TRACK = "on-track"


class AlertSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"


class BudgetItemInput(LedgerModel):
    """A budget line before it is assigned an id."""

    category_id: str = Field(
        ...,
        min_length=1,
        description="Expense category id from the reference data"
    )
    subcategory_id: Optional[str] = None
    description: str = Field(..., min_length=1, max_length=300)
    estimated_amount: float = Field(..., ge=0)
    notes: Optional[str] = None


class BudgetItem(BudgetItemInput):
    """A budget line with recorded spend."""

    id: str = Field(default_factory=generate_id)
    actual_amount: float = Field(default=0, ge=0)


class Budget(LedgerModel):
    """Project budget."""

    id: str = Field(default_factory=generate_id)
    name: str = Field(..., min_length=1)
    name_bn: Optional[str] = None
    description: Optional[str] = None

    project_name: str = Field(..., min_length=1)
    project_address: Optional[str] = None
    start_date: Optional[IsoDate] = None
    end_date: Optional[IsoDate] = None

    items: list[BudgetItem] = Field(default_factory=list)

    total_estimated: float = 0
    total_actual: float = 0
    variance: float = Field(
        default=0,
        description="total_actual - total_estimated (positive = overspent)"
    )
    variance_percent: float = 0

    status: BudgetStatus = BudgetStatus.DRAFT
    currency: str = "BDT"

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class BudgetAlert(LedgerModel):
    """A message about budget health."""

    type: BudgetAlertType
    message: str
    message_bn: str
    severity: AlertSeverity


class CategoryBudget(LedgerModel):
    """Budget totals rolled up to one expense category."""

    category_id: str
    category_name: str
    estimated: float = 0
    actual: float = 0
    variance: float = 0
