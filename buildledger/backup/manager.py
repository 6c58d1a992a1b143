"""
Backup Manager

DESIGN DECISION: A backup is a full snapshot, and a restore is a full
overwrite. There is no merge. Collections are carried as raw JSON
dicts so a restore writes back exactly what the backup read.

Failure policy:
- create_backup reads every key concurrently. If any read fails the
  whole backup fails; a partial bundle is never returned.
- restore_backup rejects a structurally invalid bundle before touching
  storage, then writes every key concurrently.
- validate_backup and import_backup_from_json never raise.
"""

import asyncio
import json
from datetime import date
from typing import Any, Optional, Union

import structlog

from buildledger.audit.logger import AuditLogger
from buildledger.config import Settings, get_settings
from buildledger.formatting import format_date
from buildledger.models.audit import AuditEventBuilder
from buildledger.models.backup import BackupData, DeviceInfo
from buildledger.models.base import LedgerModel, utc_now
from buildledger.reference.currency import DEFAULT_CURRENCY_SETTINGS
from buildledger.reference.plugins import get_default_plugins
from buildledger.services.repository import Collection
from buildledger.services.storage.interface import KeyValueStore, StorageError

logger = structlog.get_logger(__name__)

BundleLike = Union[BackupData, dict[str, Any]]

# Bundle field -> storage collection, in the order they are read.
BACKUP_COLLECTIONS: dict[str, Collection] = {
    "transactions": Collection.TRANSACTIONS,
    "laborPayments": Collection.LABOR_PAYMENTS,
    "workers": Collection.WORKERS,
    "plugins": Collection.PLUGINS,
    "invoices": Collection.INVOICES,
}

REQUIRED_FIELDS = (
    "version",
    "createdAt",
    "appName",
    "transactions",
    "laborPayments",
    "workers",
    "plugins",
)

REQUIRED_LISTS = ("transactions", "laborPayments", "workers", "plugins")


class BackupError(Exception):
    """A backup could not be created or restored."""
    pass


class InvalidBackupError(BackupError):
    """The bundle failed structural validation."""
    pass


class BackupSummary(LedgerModel):
    total_transactions: int
    total_labor_payments: int
    total_workers: int
    total_invoices: int
    created_date: str
    app_version: str


def _as_dict(bundle: BundleLike) -> Any:
    if isinstance(bundle, BackupData):
        return bundle.to_record()
    return bundle


def validate_backup(bundle: Any) -> bool:
    """
    Structural check only: required fields exist and the four core
    collections are lists. Individual records are not inspected.
    """
    data = _as_dict(bundle)
    if not isinstance(data, dict):
        return False
    if any(field not in data for field in REQUIRED_FIELDS):
        return False
    return all(isinstance(data[field], list) for field in REQUIRED_LISTS)


def export_backup_to_json(bundle: BundleLike) -> str:
    """Pretty-printed JSON, Bengali text kept readable."""
    return json.dumps(_as_dict(bundle), indent=2, ensure_ascii=False)


def import_backup_from_json(text: str) -> Optional[dict[str, Any]]:
    """Parse and validate a backup file. Returns None if it is unusable."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        return None
    return data if validate_backup(data) else None


def generate_backup_filename(today: Optional[date] = None, app_slug: Optional[str] = None) -> str:
    """``<app-slug>-backup-<YYYY-MM-DD>.json``"""
    today = today or date.today()
    app_slug = app_slug or get_settings().app.app_slug
    return f"{app_slug}-backup-{today.isoformat()}.json"


def get_backup_summary(bundle: BundleLike) -> BackupSummary:
    data = _as_dict(bundle)
    return BackupSummary(
        total_transactions=len(data.get("transactions") or []),
        total_labor_payments=len(data.get("laborPayments") or []),
        total_workers=len(data.get("workers") or []),
        total_invoices=len(data.get("invoices") or []),
        created_date=format_date(data["createdAt"]),
        app_version=data.get("appVersion", ""),
    )


class BackupManager:
    """
    Snapshot and restore the whole ledger.

    Usage:
        manager = BackupManager(store)
        bundle = await manager.create_backup()
        await manager.restore_backup(bundle)
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings: Optional[Settings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        settings = settings or get_settings()
        self._storage_settings = settings.storage
        self._app_settings = settings.app
        self._audit = audit_logger or AuditLogger(
            store,
            key=self._key(Collection.AUDIT_LOG),
            max_events=self._storage_settings.audit_log_max_events,
        )

    def _key(self, collection: Collection) -> str:
        return f"{self._storage_settings.key_prefix}{collection.value}"

    async def _read_json(self, collection: Collection) -> Any:
        raw = await self._store.get(self._key(collection))
        return json.loads(raw) if raw else None

    async def create_backup(self, device_info: Optional[DeviceInfo] = None) -> BackupData:
        """
        Read every collection and the currency settings into one bundle.

        A plugins key that was never written is backed up as the default
        catalog, which is what the app shows for it.

        Raises:
            BackupError: If any key cannot be read, decoded or validated
        """
        collections = list(BACKUP_COLLECTIONS.items())
        try:
            values = await asyncio.gather(
                *(self._read_json(collection) for _, collection in collections),
                self._read_json(Collection.CURRENCY_SETTINGS),
            )
            *collection_values, currency_settings = values
            raw = dict(zip(BACKUP_COLLECTIONS, collection_values))
            data: dict[str, Any] = {
                field: [] if value is None else value for field, value in raw.items()
            }
            if raw["plugins"] is None:
                data["plugins"] = [p.to_record() for p in get_default_plugins()]

            bundle = BackupData(
                version=self._app_settings.backup_format_version,
                created_at=utc_now().isoformat(),
                app_name=self._app_settings.app_name,
                app_version=self._app_settings.app_version,
                transactions=data["transactions"],
                labor_payments=data["laborPayments"],
                workers=data["workers"],
                plugins=data["plugins"],
                invoices=data["invoices"],
                currency_settings=currency_settings or DEFAULT_CURRENCY_SETTINGS.to_record(),
                device_info=device_info,
            )
        except (StorageError, ValueError) as e:
            # pydantic's ValidationError is a ValueError
            logger.error("backup_create_failed", error=str(e))
            await self._audit.log(AuditEventBuilder.backup_failed("create", str(e)))
            raise BackupError(f"Failed to create backup: {e}") from e

        await self._audit.log(AuditEventBuilder.backup_created(
            {field: len(data[field]) for field in BACKUP_COLLECTIONS}
        ))
        return bundle

    async def restore_backup(self, bundle: BundleLike) -> None:
        """
        Overwrite every collection with the bundle's contents.

        Missing invoices restore as an empty list and missing currency
        settings as the defaults.

        Raises:
            InvalidBackupError: If the bundle fails validate_backup
            BackupError: If any key cannot be written
        """
        data = _as_dict(bundle)
        if not validate_backup(data):
            await self._audit.log(AuditEventBuilder.backup_rejected("structural validation failed"))
            raise InvalidBackupError("Invalid backup file")

        writes = {
            self._key(collection): data.get(field) or []
            for field, collection in BACKUP_COLLECTIONS.items()
        }
        writes[self._key(Collection.CURRENCY_SETTINGS)] = (
            data.get("currencySettings") or DEFAULT_CURRENCY_SETTINGS.to_record()
        )

        try:
            await asyncio.gather(*(
                self._store.set(key, json.dumps(value, ensure_ascii=False))
                for key, value in writes.items()
            ))
        except (StorageError, TypeError, ValueError) as e:
            logger.error("backup_restore_failed", error=str(e))
            await self._audit.log(AuditEventBuilder.backup_failed("restore", str(e)))
            raise BackupError(f"Failed to restore backup: {e}") from e

        await self._audit.log(AuditEventBuilder.backup_restored(
            {field: len(data.get(field) or []) for field in BACKUP_COLLECTIONS},
            source_version=str(data.get("version")),
        ))

    def generate_backup_filename(self, today: Optional[date] = None) -> str:
        return generate_backup_filename(today, self._app_settings.app_slug)
