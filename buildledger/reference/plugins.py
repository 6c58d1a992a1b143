"""Default plugin catalog shown before the user has saved any plugin state."""

from buildledger.models.records import Plugin

_AUTHOR = "BuildLedger Team"

_CATALOG = (
    ("invoice-generator", "Invoice Generator", "Create and send professional invoices to clients", "file-text"),
    ("project-tracker", "Project Tracker", "Track expenses and income by construction project", "folder"),
    ("tax-calculator", "Tax Calculator", "Estimate taxes and generate tax reports", "percent"),
    ("receipt-scanner", "Receipt Scanner", "Scan receipts and auto-create expense entries", "camera"),
    ("budget-planner", "Budget Planner", "Set budgets and get alerts when exceeding limits", "pie-chart"),
    ("export-reports", "Export Reports", "Export financial data to PDF or Excel", "download"),
)


def get_default_plugins() -> list[Plugin]:
    """Fresh, uninstalled copies of the catalog; callers may mutate them."""
    return [
        Plugin(
            id=plugin_id,
            name=name,
            description=description,
            version="1.0.0",
            icon=icon,
            is_installed=False,
            is_enabled=False,
            author=_AUTHOR,
        )
        for plugin_id, name, description, icon in _CATALOG
    ]


DEFAULT_PLUGIN_IDS = tuple(plugin_id for plugin_id, *_ in _CATALOG)
