"""
Backup Document Model

A backup is a full snapshot of every collection plus currency settings.

DESIGN DECISION: Collections are kept as raw JSON dicts, not parsed
records. A restore must write back exactly what was read, including
records from older app versions that no longer match today's models.
"""

from typing import Any, Optional

from pydantic import Field

from buildledger.models.base import LedgerModel


def _default_currency_settings() -> dict[str, Any]:
    # Imported lazily: reference data depends on the models package.
    from buildledger.reference.currency import DEFAULT_CURRENCY_SETTINGS
    return DEFAULT_CURRENCY_SETTINGS.to_record()


class DeviceInfo(LedgerModel):
    platform: Optional[str] = None
    version: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None


class BackupData(LedgerModel):
    """Full snapshot of the ledger."""

    version: str = Field(..., description="Backup document format version")
    created_at: str = Field(..., description="ISO timestamp of the snapshot")
    app_name: str
    app_version: str = ""

    transactions: list[dict[str, Any]] = Field(default_factory=list)
    labor_payments: list[dict[str, Any]] = Field(default_factory=list)
    workers: list[dict[str, Any]] = Field(default_factory=list)
    plugins: list[dict[str, Any]] = Field(default_factory=list)
    invoices: list[dict[str, Any]] = Field(default_factory=list)

    currency_settings: dict[str, Any] = Field(
        default_factory=_default_currency_settings
    )
    device_info: Optional[DeviceInfo] = None
