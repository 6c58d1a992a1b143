"""
Budget Planner

Pure functions over Budget models. Every item mutation goes through
``recalculate_budget``, so a budget's totals always equal the sums over
its items.
"""

from datetime import date
from typing import Iterable, Optional, Union

from pydantic import BaseModel

from buildledger.formatting import csv_text, format_currency, format_plain_number
from buildledger.models.base import LedgerModel, utc_now
from buildledger.models.budget import (
    AlertSeverity,
    Budget,
    BudgetAlert,
    BudgetAlertType,
    BudgetItem,
    BudgetItemInput,
    BudgetStatus,
    CategoryBudget,
)
from buildledger.reference.categories import get_category

ItemLike = Union[BudgetItemInput, dict]

# Overall spend above this share of the estimate is "approaching".
APPROACHING_LIMIT_RATIO = 0.9

# A single item above this share of its estimate gets its own alert.
ITEM_OVERRUN_RATIO = 1.2


class FormattedBudget(LedgerModel):
    formatted_total_estimated: str
    formatted_total_actual: str
    formatted_variance: str
    formatted_variance_percent: str
    status: str
    status_bn: str


class BudgetReport(LedgerModel):
    summary: str
    category_breakdown: str
    alerts: str


def create_budget(
    name: str,
    project_name: str,
    *,
    name_bn: Optional[str] = None,
    description: Optional[str] = None,
    project_address: Optional[str] = None,
    start_date: Optional[Union[str, date]] = None,
    end_date: Optional[Union[str, date]] = None,
    currency: Optional[str] = None,
) -> Budget:
    """An empty draft budget."""
    now = utc_now()
    return Budget(
        name=name,
        name_bn=name_bn,
        description=description,
        project_name=project_name,
        project_address=project_address,
        start_date=start_date,
        end_date=end_date,
        currency=currency or "BDT",
        status=BudgetStatus.DRAFT,
        created_at=now,
        updated_at=now,
    )


def recalculate_budget(budget: Budget) -> Budget:
    total_estimated = sum(item.estimated_amount for item in budget.items)
    total_actual = sum(item.actual_amount for item in budget.items)
    variance = total_actual - total_estimated
    variance_percent = variance / total_estimated * 100 if total_estimated > 0 else 0

    return budget.model_copy(update={
        "total_estimated": total_estimated,
        "total_actual": total_actual,
        "variance": variance,
        "variance_percent": variance_percent,
        "updated_at": utc_now(),
    })


def _with_items(budget: Budget, items: list[BudgetItem]) -> Budget:
    return recalculate_budget(budget.model_copy(update={"items": items}))


def add_budget_item(budget: Budget, item: ItemLike) -> Budget:
    """Append a line with no spend recorded yet."""
    data = item.model_dump() if isinstance(item, BaseModel) else dict(item)
    data.pop("id", None)
    data.pop("actual_amount", None)
    data.pop("actualAmount", None)
    new_item = BudgetItem.model_validate(data)
    return _with_items(budget, list(budget.items) + [new_item])


def update_budget_item_actual(budget: Budget, item_id: str, actual_amount: float) -> Budget:
    items = [
        item.model_copy(update={"actual_amount": actual_amount}) if item.id == item_id else item
        for item in budget.items
    ]
    return _with_items(budget, items)


def update_budget_item(
    budget: Budget,
    item_id: str,
    *,
    estimated_amount: Optional[float] = None,
    description: Optional[str] = None,
    notes: Optional[str] = None,
) -> Budget:
    """Change a line's estimate, description or notes. None leaves a field as is."""
    changes = {
        key: value
        for key, value in (
            ("estimated_amount", estimated_amount),
            ("description", description),
            ("notes", notes),
        )
        if value is not None
    }
    items = [
        item.model_copy(update=changes) if item.id == item_id else item
        for item in budget.items
    ]
    return _with_items(budget, items)


def remove_budget_item(budget: Budget, item_id: str) -> Budget:
    return _with_items(budget, [item for item in budget.items if item.id != item_id])


def set_budget_status(budget: Budget, status: BudgetStatus) -> Budget:
    return budget.model_copy(update={
        "status": BudgetStatus(status),
        "updated_at": utc_now(),
    })


def get_budget_by_category(budget: Budget) -> list[CategoryBudget]:
    """Roll items up per expense category, in first-seen order."""
    totals: dict[str, list[float]] = {}
    for item in budget.items:
        estimated_actual = totals.setdefault(item.category_id, [0.0, 0.0])
        estimated_actual[0] += item.estimated_amount
        estimated_actual[1] += item.actual_amount

    result = []
    for category_id, (estimated, actual) in totals.items():
        category = get_category(category_id)
        result.append(CategoryBudget(
            category_id=category_id,
            category_name=category.name if category else category_id,
            estimated=estimated,
            actual=actual,
            variance=actual - estimated,
        ))
    return result


def format_budget(budget: Budget) -> FormattedBudget:
    code = budget.currency
    over = budget.variance > 0
    return FormattedBudget(
        formatted_total_estimated=format_currency(budget.total_estimated, code),
        formatted_total_actual=format_currency(budget.total_actual, code),
        formatted_variance=format_currency(abs(budget.variance), code),
        formatted_variance_percent=f"{abs(budget.variance_percent):.1f}%",
        status="Over Budget" if over else "Under Budget",
        status_bn="বাজেট অতিক্রম" if over else "বাজেটের মধ্যে",
    )


def check_budget_alerts(budget: Budget) -> list[BudgetAlert]:
    """
    Overall health first, then one warning per badly overrun item.

    The overall alert is exactly one of: over budget, approaching the
    limit (over 90% spent), or on track.
    """
    if budget.total_actual > budget.total_estimated:
        alerts = [BudgetAlert(
            type=BudgetAlertType.OVER_BUDGET,
            message="Total expenses have exceeded the budget!",
            message_bn="মোট খরচ বাজেট অতিক্রম করেছে!",
            severity=AlertSeverity.ERROR,
        )]
    elif budget.total_actual > budget.total_estimated * APPROACHING_LIMIT_RATIO:
        alerts = [BudgetAlert(
            type=BudgetAlertType.APPROACHING_LIMIT,
            message="Expenses are approaching the budget limit (90%)",
            message_bn="খরচ বাজেট সীমার কাছাকাছি (৯০%)",
            severity=AlertSeverity.WARNING,
        )]
    else:
        alerts = [BudgetAlert(
            type=BudgetAlertType.ON_TRACK,
            message="Budget is on track",
            message_bn="বাজেট ঠিক আছে",
            severity=AlertSeverity.SUCCESS,
        )]

    for item in budget.items:
        if item.actual_amount > item.estimated_amount * ITEM_OVERRUN_RATIO:
            category = get_category(item.category_id)
            name = category.name if category else item.category_id
            name_bn = category.name_bn if category else item.category_id
            alerts.append(BudgetAlert(
                type=BudgetAlertType.OVER_BUDGET,
                message=f"{name}: Significantly over budget",
                message_bn=f"{name_bn}: উল্লেখযোগ্যভাবে বাজেট অতিক্রম",
                severity=AlertSeverity.WARNING,
            ))

    return alerts


def generate_budget_report(budget: Budget) -> BudgetReport:
    formatted = format_budget(budget)

    summary = "\n".join([
        f"Budget Report: {budget.name}",
        f"Project: {budget.project_name}",
        "",
        f"Total Estimated: {formatted.formatted_total_estimated}",
        f"Total Actual: {formatted.formatted_total_actual}",
        f"Variance: {formatted.formatted_variance} ({formatted.formatted_variance_percent})",
        f"Status: {formatted.status}",
    ])

    category_breakdown = "\n".join(
        f"{cat.category_name}: {format_currency(cat.estimated, budget.currency)} estimated, "
        f"{format_currency(cat.actual, budget.currency)} actual"
        for cat in get_budget_by_category(budget)
    )

    alerts = "\n".join(
        f"[{alert.severity.value.upper()}] {alert.message}"
        for alert in check_budget_alerts(budget)
    )

    return BudgetReport(summary=summary, category_breakdown=category_breakdown, alerts=alerts)


def export_budget_to_csv(budget: Budget) -> str:
    lines = [
        "Budget Report",
        f"Name,{csv_text(budget.name)}",
        f"Project,{csv_text(budget.project_name)}",
        f"Status,{budget.status.value}",
        "",
        "Category,Description,Estimated,Actual,Variance",
    ]
    for item in budget.items:
        category = get_category(item.category_id)
        lines.append(",".join([
            csv_text(category.name if category else item.category_id),
            csv_text(item.description),
            format_plain_number(item.estimated_amount),
            format_plain_number(item.actual_amount),
            format_plain_number(item.actual_amount - item.estimated_amount),
        ]))

    lines += [
        "",
        "Summary",
        f"Total Estimated,{format_plain_number(budget.total_estimated)}",
        f"Total Actual,{format_plain_number(budget.total_actual)}",
        f"Variance,{format_plain_number(budget.variance)}",
    ]
    return "\n".join(lines) + "\n"


def apply_items(budget: Budget, items: Iterable[ItemLike]) -> Budget:
    """Add several lines, one ``add_budget_item`` at a time."""
    for item in items:
        budget = add_budget_item(budget, item)
    return budget
