"""
Backup Package

Full-ledger snapshots (JSON) and spreadsheet exports (CSV, Excel HTML).
"""

from buildledger.backup.exporters import (
    create_excel_table,
    export_all_to_csv,
    export_complete_report_to_excel,
    export_financial_summary_to_excel,
    export_invoices_to_csv,
    export_labor_payments_to_csv,
    export_transactions_to_csv,
    export_transactions_to_excel,
    export_workers_to_csv,
    parse_records,
)
from buildledger.backup.manager import (
    BackupError,
    BackupManager,
    BackupSummary,
    InvalidBackupError,
    export_backup_to_json,
    generate_backup_filename,
    get_backup_summary,
    import_backup_from_json,
    validate_backup,
)

__all__ = [
    # Manager
    "BackupError",
    "BackupManager",
    "BackupSummary",
    "InvalidBackupError",
    "export_backup_to_json",
    "generate_backup_filename",
    "get_backup_summary",
    "import_backup_from_json",
    "validate_backup",
    # Exporters
    "create_excel_table",
    "export_all_to_csv",
    "export_complete_report_to_excel",
    "export_financial_summary_to_excel",
    "export_invoices_to_csv",
    "export_labor_payments_to_csv",
    "export_transactions_to_csv",
    "export_transactions_to_excel",
    "export_workers_to_csv",
    "parse_records",
]
