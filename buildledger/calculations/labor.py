"""
Weekly payroll arithmetic.

Weeks start on Monday. A payment's total is
regular_hours x hourly_rate + overtime_hours x overtime_rate, with the
overtime rate defaulting to 1.5x the hourly rate.
"""

from datetime import date, timedelta
from typing import Iterable, Optional, Union

from buildledger.formatting import format_plain_number
from buildledger.models.records import (
    OVERTIME_MULTIPLIER,
    LaborPayment,
    WeekSummary,
    Worker,
)

DateLike = Union[str, date]


def _to_date(value: DateLike) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.split("T", 1)[0])


def get_week_start(d: Optional[DateLike] = None) -> str:
    """Monday of the week containing ``d`` (today by default), as ISO date."""
    d = _to_date(d) if d is not None else date.today()
    return (d - timedelta(days=d.weekday())).isoformat()


def get_week_end(week_start: DateLike) -> str:
    """Sunday closing the week that starts on ``week_start``."""
    return (_to_date(week_start) + timedelta(days=6)).isoformat()


def default_overtime_rate(hourly_rate: float) -> float:
    return hourly_rate * OVERTIME_MULTIPLIER


def calculate_labor_amount(
    regular_hours: float,
    hourly_rate: float,
    overtime_hours: float = 0,
    overtime_rate: Optional[float] = None,
) -> float:
    if overtime_rate is None:
        overtime_rate = default_overtime_rate(hourly_rate)
    return regular_hours * hourly_rate + overtime_hours * overtime_rate


def calculate_work_amount(
    days: Optional[float] = None,
    hours_per_day: Optional[float] = None,
    hourly_rate: Optional[float] = None,
    quantity: Optional[float] = None,
    unit_price: Optional[float] = None,
) -> float:
    """
    Price a piece of work.

    Days x hours x rate wins when all three are given (and non-zero);
    otherwise quantity x unit price; otherwise 0.
    """
    if days and hours_per_day and hourly_rate:
        return days * hours_per_day * hourly_rate
    if quantity and unit_price:
        return quantity * unit_price
    return 0


def work_formula_text(
    days: Optional[float] = None,
    hours_per_day: Optional[float] = None,
    hourly_rate: Optional[float] = None,
) -> str:
    if not (days and hours_per_day and hourly_rate):
        return ""
    return "×".join(format_plain_number(v) for v in (days, hours_per_day, hourly_rate))


def create_labor_payment(
    worker: Worker,
    week_start: DateLike,
    days_worked: float,
    regular_hours: float,
    overtime_hours: float = 0,
    hourly_rate: Optional[float] = None,
    overtime_rate: Optional[float] = None,
    is_paid: bool = False,
    notes: str = "",
) -> LaborPayment:
    """
    Build a payment for a worker with a correctly computed total.

    The worker's own hourly rate is used unless one is given. A
    ``week_start`` that is not a Monday is snapped back to its Monday.
    """
    rate = worker.hourly_rate if hourly_rate is None else hourly_rate
    ot_rate = default_overtime_rate(rate) if overtime_rate is None else overtime_rate

    return LaborPayment(
        worker_id=worker.id,
        worker_name=worker.name,
        days_worked=days_worked,
        regular_hours=regular_hours,
        overtime_hours=overtime_hours,
        hourly_rate=rate,
        overtime_rate=ot_rate,
        total_amount=calculate_labor_amount(regular_hours, rate, overtime_hours, ot_rate),
        week_start=get_week_start(week_start),
        is_paid=is_paid,
        notes=notes,
    )


def summarize_week(payments: Iterable[LaborPayment], week_start: DateLike) -> WeekSummary:
    """Payroll totals for the payments that belong to one week."""
    start = _to_date(get_week_start(week_start))
    week = [p for p in payments if p.week_start == start]

    total = sum(p.total_amount for p in week)
    paid = sum(p.total_amount for p in week if p.is_paid)

    return WeekSummary(
        week_start=start,
        week_end=start + timedelta(days=6),
        total_payroll=total,
        paid_amount=paid,
        unpaid_amount=total - paid,
        payments=week,
    )
