"""
Data Models Package

This package contains all Pydantic models used in BuildLedger.
All data flowing through the system must conform to these schemas.
"""

from buildledger.models.base import IsoDate, LedgerModel, ReferenceModel, utc_now
from buildledger.models.records import (
    OVERTIME_MULTIPLIER,
    CurrencySettings,
    FinancialSummary,
    LaborPayment,
    MaterialEstimate,
    PeriodFilter,
    Plugin,
    Transaction,
    TransactionCategory,
    TransactionType,
    WeekSummary,
    Worker,
)
from buildledger.models.invoice import (
    Invoice,
    InvoiceItem,
    InvoiceItemInput,
    InvoiceStatus,
    Party,
    ProjectInfo,
)
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
from buildledger.models.backup import BackupData, DeviceInfo
from buildledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Base
    "IsoDate",
    "LedgerModel",
    "ReferenceModel",
    "utc_now",
    # Ledger records
    "OVERTIME_MULTIPLIER",
    "CurrencySettings",
    "FinancialSummary",
    "LaborPayment",
    "MaterialEstimate",
    "PeriodFilter",
    "Plugin",
    "Transaction",
    "TransactionCategory",
    "TransactionType",
    "WeekSummary",
    "Worker",
    # Invoices
    "Invoice",
    "InvoiceItem",
    "InvoiceItemInput",
    "InvoiceStatus",
    "Party",
    "ProjectInfo",
    # Budgets
    "AlertSeverity",
    "Budget",
    "BudgetAlert",
    "BudgetAlertType",
    "BudgetItem",
    "BudgetItemInput",
    "BudgetStatus",
    "CategoryBudget",
    # Backup
    "BackupData",
    "DeviceInfo",
    # Audit
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
