"""
Budget Package

Project budgets: estimated vs actual spend per line, variance, alerts,
reports and templates.
"""

from buildledger.budgets.planner import (
    APPROACHING_LIMIT_RATIO,
    ITEM_OVERRUN_RATIO,
    BudgetReport,
    FormattedBudget,
    add_budget_item,
    apply_items,
    check_budget_alerts,
    create_budget,
    export_budget_to_csv,
    format_budget,
    generate_budget_report,
    get_budget_by_category,
    recalculate_budget,
    remove_budget_item,
    set_budget_status,
    update_budget_item,
    update_budget_item_actual,
)
from buildledger.budgets.templates import (
    BUDGET_TEMPLATES,
    BudgetTemplate,
    create_budget_from_template,
    get_budget_template,
)

__all__ = [
    # Planner
    "APPROACHING_LIMIT_RATIO",
    "ITEM_OVERRUN_RATIO",
    "BudgetReport",
    "FormattedBudget",
    "add_budget_item",
    "apply_items",
    "check_budget_alerts",
    "create_budget",
    "export_budget_to_csv",
    "format_budget",
    "generate_budget_report",
    "get_budget_by_category",
    "recalculate_budget",
    "remove_budget_item",
    "set_budget_status",
    "update_budget_item",
    "update_budget_item_actual",
    # Templates
    "BUDGET_TEMPLATES",
    "BudgetTemplate",
    "create_budget_from_template",
    "get_budget_template",
]
