"""
Ledger Repository

DESIGN DECISION: Each entity type is one JSON array under one key.
Every operation reads the whole array, changes it in memory and writes
it back. This keeps the on-disk format identical to what the mobile app
writes, at the cost of rewriting a collection on every save.

Failure policy:
- Reads (``get_*``) degrade: a store failure or undecodable JSON is
  logged and an empty list is returned, so screens stay usable.
- Writes (``save_*``, ``delete_*``) fail loudly with StorageError.
  A write never starts from a collection it could not read, so a
  transient read error cannot wipe a collection.

Concurrency: each collection has its own asyncio.Lock, so at most one
read-modify-write runs per key. There is no transaction across
collections; a crash between saving a labor payment and its companion
expense leaves them out of step.
"""

import asyncio
import json
from collections import defaultdict
from enum import Enum
from typing import Any, Optional, TypeVar
from uuid import UUID

import structlog
from pydantic import ValidationError

from buildledger.audit.logger import AuditLogger
from buildledger.config.settings import StorageSettings
from buildledger.formatting import format_plain_number
from buildledger.models.audit import AuditEventBuilder
from buildledger.models.base import LedgerModel, utc_now
from buildledger.models.budget import Budget
from buildledger.models.invoice import Invoice
from buildledger.models.records import (
    CurrencySettings,
    LaborPayment,
    MaterialEstimate,
    Plugin,
    Transaction,
    TransactionCategory,
    TransactionType,
    Worker,
)
from buildledger.reference.currency import DEFAULT_CURRENCY_SETTINGS
from buildledger.reference.plugins import get_default_plugins
from buildledger.services.storage.interface import (
    CorruptDataError,
    KeyValueStore,
    NotFoundError,
    StorageError,
    StoreWriteError,
)

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=LedgerModel)

COMPANION_PREFIX = "labor_"


class Collection(str, Enum):
    """Storage key suffixes. The full key is ``<prefix><value>``."""
    TRANSACTIONS = "transactions"
    LABOR_PAYMENTS = "labor_payments"
    WORKERS = "workers"
    PLUGINS = "plugins"
    SETTINGS = "settings"
    MATERIAL_ESTIMATES = "material_estimates"
    INVOICES = "invoices"
    BUDGETS = "budgets"
    CURRENCY_SETTINGS = "currency_settings"
    AUDIT_LOG = "audit_log"


# New records go to the front of these collections (newest first).
PREPEND_COLLECTIONS = frozenset({
    Collection.TRANSACTIONS,
    Collection.LABOR_PAYMENTS,
    Collection.MATERIAL_ESTIMATES,
    Collection.INVOICES,
    Collection.BUDGETS,
})


def companion_transaction_id(payment_id: str) -> str:
    return f"{COMPANION_PREFIX}{payment_id}"


def build_companion_transaction(payment: LaborPayment) -> Transaction:
    """
    The labor expense that mirrors a paid payment.

    The id is derived from the payment id, so saving the same payment
    twice overwrites the expense instead of duplicating it.
    """
    description = (
        f"Salary: {payment.worker_name} "
        f"({format_plain_number(payment.days_worked)}d, "
        f"{format_plain_number(payment.total_hours)}hrs)"
    )
    return Transaction(
        id=companion_transaction_id(payment.id),
        type=TransactionType.EXPENSE,
        amount=payment.total_amount,
        category=TransactionCategory.LABOR,
        description=description,
        date=payment.week_start,
        created_at=utc_now(),
    )


class StorageItemSize(LedgerModel):
    key: str
    size: int


class StorageStats(LedgerModel):
    total_size: int = 0
    item_count: int = 0
    items: list[StorageItemSize] = []


class LedgerRepository:
    """
    CRUD over the ledger collections.

    Usage:
        repo = LedgerRepository(InMemoryKeyValueStore())
        await repo.save_transaction(txn)
        transactions = await repo.get_transactions()
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings: Optional[StorageSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._settings = settings or StorageSettings()
        self._audit = audit_logger or AuditLogger(
            store,
            key=self.key(Collection.AUDIT_LOG),
            max_events=self._settings.audit_log_max_events,
        )
        self._locks: defaultdict[Collection, asyncio.Lock] = defaultdict(asyncio.Lock)

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit

    def key(self, collection: Collection) -> str:
        return f"{self._settings.key_prefix}{collection.value}"

    def data_keys(self) -> list[str]:
        """Every key the ledger owns, except the append-only audit log."""
        return [
            self.key(collection)
            for collection in Collection
            if collection is not Collection.AUDIT_LOG
        ]

    # =========================================================================
    # Raw collection access
    # =========================================================================

    async def _read_raw(self, collection: Collection) -> list[dict[str, Any]]:
        """
        Read a collection as raw dicts.

        Raises:
            StorageError: If the store fails
            CorruptDataError: If the value is not a JSON array
        """
        key = self.key(collection)
        raw = await self._store.get(key)
        if not raw:
            if collection is Collection.PLUGINS:
                return [p.to_record() for p in get_default_plugins()]
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptDataError(f"{key} is not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise CorruptDataError(f"{key} does not hold a JSON array")
        return data

    async def _write_raw(
        self,
        collection: Collection,
        records: list[dict[str, Any]],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        key = self.key(collection)
        try:
            await self._store.set(key, json.dumps(records, ensure_ascii=False))
        except StorageError as e:
            logger.error(
                "collection_write_failed",
                entity_type=collection.value,
                key=key,
                error=str(e),
            )
            await self._audit.log(
                AuditEventBuilder.storage_error("write", key, str(e), correlation_id)
            )
            if isinstance(e, StoreWriteError):
                raise
            raise StoreWriteError(f"Failed to write {key}: {e}") from e

    async def _read_for_write(self, collection: Collection) -> list[dict[str, Any]]:
        try:
            return await self._read_raw(collection)
        except StorageError as e:
            logger.error(
                "collection_read_failed",
                entity_type=collection.value,
                key=self.key(collection),
                error=str(e),
            )
            raise

    async def _list(self, collection: Collection, model: type[ModelT]) -> list[ModelT]:
        """Read and parse a collection, degrading to [] on any failure."""
        try:
            records = await self._read_raw(collection)
        except StorageError as e:
            logger.error(
                "collection_read_failed",
                entity_type=collection.value,
                key=self.key(collection),
                error=str(e),
            )
            if collection is Collection.PLUGINS:
                return get_default_plugins()
            return []

        parsed = []
        for record in records:
            try:
                parsed.append(model.model_validate(record))
            except ValidationError as e:
                logger.warning(
                    "record_skipped",
                    entity_type=collection.value,
                    record_id=record.get("id") if isinstance(record, dict) else None,
                    error_count=e.error_count(),
                )
        return parsed

    async def _get_one(
        self,
        collection: Collection,
        model: type[ModelT],
        record_id: str,
    ) -> Optional[ModelT]:
        for record in await self._list(collection, model):
            if getattr(record, "id", None) == record_id:
                return record
        return None

    async def _upsert(
        self,
        collection: Collection,
        record: LedgerModel,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Replace the record with the same id, or insert it.

        Returns True if the record was new.
        """
        data = record.to_record()
        async with self._locks[collection]:
            records = await self._read_for_write(collection)
            for index, existing in enumerate(records):
                if isinstance(existing, dict) and existing.get("id") == data["id"]:
                    records[index] = data
                    created = False
                    break
            else:
                if collection in PREPEND_COLLECTIONS:
                    records.insert(0, data)
                else:
                    records.append(data)
                created = True

            await self._write_raw(collection, records, correlation_id)

        await self._audit.log(
            AuditEventBuilder.record_saved(
                collection.value, data["id"], created, correlation_id
            )
        )
        return created

    async def _remove(
        self,
        collection: Collection,
        record_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Filter a record out by id. Returns True if it was present."""
        async with self._locks[collection]:
            records = await self._read_for_write(collection)
            remaining = [
                r for r in records
                if not (isinstance(r, dict) and r.get("id") == record_id)
            ]
            found = len(remaining) != len(records)
            await self._write_raw(collection, remaining, correlation_id)

        await self._audit.log(
            AuditEventBuilder.record_deleted(
                collection.value, record_id, found, correlation_id
            )
        )
        return found

    # =========================================================================
    # Transactions
    # =========================================================================

    async def get_transactions(self) -> list[Transaction]:
        return await self._list(Collection.TRANSACTIONS, Transaction)

    async def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return await self._get_one(Collection.TRANSACTIONS, Transaction, transaction_id)

    async def save_transaction(
        self,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return await self._upsert(Collection.TRANSACTIONS, transaction, correlation_id)

    async def delete_transaction(
        self,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return await self._remove(Collection.TRANSACTIONS, transaction_id, correlation_id)

    # =========================================================================
    # Labor payments
    # =========================================================================

    async def get_labor_payments(self) -> list[LaborPayment]:
        return await self._list(Collection.LABOR_PAYMENTS, LaborPayment)

    async def get_labor_payment(self, payment_id: str) -> Optional[LaborPayment]:
        return await self._get_one(Collection.LABOR_PAYMENTS, LaborPayment, payment_id)

    async def save_labor_payment(
        self,
        payment: LaborPayment,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Save a payment and, if it is paid, its companion labor expense.

        The payment's total_amount is trusted as-is (the model already
        checked it against hours and rates). Saving an unpaid payment
        leaves an existing companion expense untouched.
        """
        created = await self._upsert(Collection.LABOR_PAYMENTS, payment, correlation_id)

        if payment.is_paid:
            companion = build_companion_transaction(payment)
            await self._upsert(Collection.TRANSACTIONS, companion, correlation_id)
            await self._audit.log(
                AuditEventBuilder.companion_transaction_saved(
                    payment.id, companion.id, companion.amount, correlation_id
                )
            )

        return created

    async def delete_labor_payment(
        self,
        payment_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Delete a payment and its companion expense, if any."""
        found = await self._remove(Collection.LABOR_PAYMENTS, payment_id, correlation_id)

        companion_id = companion_transaction_id(payment_id)
        if await self._remove(Collection.TRANSACTIONS, companion_id, correlation_id):
            await self._audit.log(
                AuditEventBuilder.companion_transaction_deleted(
                    payment_id, companion_id, correlation_id
                )
            )
        return found

    # =========================================================================
    # Workers
    # =========================================================================

    async def get_workers(self) -> list[Worker]:
        return await self._list(Collection.WORKERS, Worker)

    async def get_worker(self, worker_id: str) -> Optional[Worker]:
        return await self._get_one(Collection.WORKERS, Worker, worker_id)

    async def save_worker(
        self,
        worker: Worker,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return await self._upsert(Collection.WORKERS, worker, correlation_id)

    async def delete_worker(
        self,
        worker_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        # Payments keep their denormalized worker_name, so nothing cascades.
        return await self._remove(Collection.WORKERS, worker_id, correlation_id)

    # =========================================================================
    # Plugins
    # =========================================================================

    async def get_plugins(self) -> list[Plugin]:
        """Saved plugin state, or the default catalog if none is saved."""
        return await self._list(Collection.PLUGINS, Plugin)

    async def save_plugin(
        self,
        plugin: Plugin,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return await self._upsert(Collection.PLUGINS, plugin, correlation_id)

    async def _update_plugin(self, plugin_id: str, **changes: bool) -> Plugin:
        for plugin in await self.get_plugins():
            if plugin.id == plugin_id:
                updated = plugin.model_copy(update=changes)
                await self.save_plugin(updated)
                return updated
        raise NotFoundError(f"Plugin not found: {plugin_id}")

    async def set_plugin_installed(self, plugin_id: str, installed: bool) -> Plugin:
        """
        Install or uninstall a plugin.

        Uninstalling also disables it.
        """
        if installed:
            return await self._update_plugin(plugin_id, is_installed=True)
        return await self._update_plugin(plugin_id, is_installed=False, is_enabled=False)

    async def set_plugin_enabled(self, plugin_id: str, enabled: bool) -> Plugin:
        """
        Enable or disable a plugin.

        Raises:
            NotFoundError: Unknown plugin id
            ValueError: Enabling a plugin that is not installed
        """
        if enabled:
            for plugin in await self.get_plugins():
                if plugin.id == plugin_id and not plugin.is_installed:
                    raise ValueError(f"Plugin {plugin_id} must be installed first")
        return await self._update_plugin(plugin_id, is_enabled=enabled)

    # =========================================================================
    # Material estimates, invoices, budgets
    # =========================================================================

    async def get_material_estimates(self) -> list[MaterialEstimate]:
        return await self._list(Collection.MATERIAL_ESTIMATES, MaterialEstimate)

    async def get_material_estimate(self, estimate_id: str) -> Optional[MaterialEstimate]:
        return await self._get_one(
            Collection.MATERIAL_ESTIMATES, MaterialEstimate, estimate_id
        )

    async def save_material_estimate(
        self,
        estimate: MaterialEstimate,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return await self._upsert(Collection.MATERIAL_ESTIMATES, estimate, correlation_id)

    async def delete_material_estimate(
        self,
        estimate_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return await self._remove(Collection.MATERIAL_ESTIMATES, estimate_id, correlation_id)

    async def get_invoices(self) -> list[Invoice]:
        return await self._list(Collection.INVOICES, Invoice)

    async def get_invoice(self, invoice_id: str) -> Optional[Invoice]:
        return await self._get_one(Collection.INVOICES, Invoice, invoice_id)

    async def save_invoice(
        self,
        invoice: Invoice,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return await self._upsert(Collection.INVOICES, invoice, correlation_id)

    async def delete_invoice(
        self,
        invoice_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return await self._remove(Collection.INVOICES, invoice_id, correlation_id)

    async def get_budgets(self) -> list[Budget]:
        return await self._list(Collection.BUDGETS, Budget)

    async def get_budget(self, budget_id: str) -> Optional[Budget]:
        return await self._get_one(Collection.BUDGETS, Budget, budget_id)

    async def save_budget(
        self,
        budget: Budget,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return await self._upsert(Collection.BUDGETS, budget, correlation_id)

    async def delete_budget(
        self,
        budget_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return await self._remove(Collection.BUDGETS, budget_id, correlation_id)

    # =========================================================================
    # Currency settings
    # =========================================================================

    async def get_currency_settings(self) -> CurrencySettings:
        """Saved currency settings, or the defaults."""
        key = self.key(Collection.CURRENCY_SETTINGS)
        try:
            raw = await self._store.get(key)
            if raw:
                return CurrencySettings.model_validate_json(raw)
        except (StorageError, ValidationError) as e:
            logger.error("currency_settings_read_failed", key=key, error=str(e))
        return DEFAULT_CURRENCY_SETTINGS.model_copy()

    async def save_currency_settings(self, settings: CurrencySettings) -> None:
        key = self.key(Collection.CURRENCY_SETTINGS)
        async with self._locks[Collection.CURRENCY_SETTINGS]:
            try:
                await self._store.set(
                    key, json.dumps(settings.to_record(), ensure_ascii=False)
                )
            except StorageError as e:
                logger.error("currency_settings_write_failed", key=key, error=str(e))
                raise StoreWriteError(f"Failed to write {key}: {e}") from e

    # =========================================================================
    # Maintenance
    # =========================================================================

    async def clear_all_data(self) -> None:
        """
        Remove every ledger collection and setting.

        The audit log is kept and records the clear.

        Raises:
            StoreWriteError: If the store refuses the delete
        """
        keys = self.data_keys()
        try:
            await self._store.delete_many(keys)
        except StorageError as e:
            logger.error("clear_all_data_failed", error=str(e))
            raise StoreWriteError(f"Failed to clear data: {e}") from e
        await self._audit.log(AuditEventBuilder.data_cleared(keys))

    async def get_storage_stats(self) -> StorageStats:
        """Byte size of every stored key (UTF-8), largest first."""
        try:
            keys = await self._store.list_keys()
            values = await asyncio.gather(*(self._store.get(k) for k in keys))
        except StorageError as e:
            logger.error("storage_stats_failed", error=str(e))
            return StorageStats()

        items = [
            StorageItemSize(key=key, size=len(value.encode("utf-8")))
            for key, value in zip(keys, values)
            if value
        ]
        items.sort(key=lambda item: item.size, reverse=True)
        return StorageStats(
            total_size=sum(item.size for item in items),
            item_count=len(keys),
            items=items,
        )
