"""
Tests for the key-value stores and the ledger repository.

The repository is exercised against InMemoryKeyValueStore; the file
store gets its own tests against pytest's tmp_path.
"""

import asyncio
import json

import pytest

from buildledger.budgets import create_budget
from buildledger.calculations.labor import create_labor_payment
from buildledger.config import StorageSettings
from buildledger.invoices import create_invoice
from buildledger.models.invoice import Party
from buildledger.models.records import (
    CurrencySettings,
    MaterialEstimate,
    Transaction,
    TransactionCategory,
    TransactionType,
    Worker,
)
from buildledger.services.repository import (
    Collection,
    LedgerRepository,
    build_companion_transaction,
)
from buildledger.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    NotFoundError,
    StorageError,
    StoreReadError,
    StoreWriteError,
    create_store,
)
from buildledger.services.storage.file_store import filename_to_key, key_to_filename

PREFIX = "@buildledger_"


class FailingStore(InMemoryKeyValueStore):
    """In-memory store whose reads and/or writes can be switched off."""

    def __init__(self, initial=None, fail_reads=False, fail_writes=False):
        super().__init__(initial)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    async def get(self, key):
        if self.fail_reads:
            raise StoreReadError(f"cannot read {key}")
        return await super().get(key)

    async def set(self, key, value):
        if self.fail_writes:
            raise StoreWriteError(f"cannot write {key}")
        await super().set(key, value)


def make_transaction(amount=1000, **overrides):
    data = dict(
        type=TransactionType.EXPENSE,
        amount=amount,
        category=TransactionCategory.MATERIALS,
        description="Cement",
        date="2025-01-06",
    )
    data.update(overrides)
    return Transaction(**data)


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def repo(store):
    return LedgerRepository(store, StorageSettings(key_prefix=PREFIX))


@pytest.fixture
def worker():
    return Worker(name="Karim", hourly_rate=100)


class TestFileStore:
    """Tests for the JSON file store."""

    def test_filename_round_trip(self):
        name = key_to_filename("@buildledger_labor_payments")
        assert name == "%40buildledger_labor_payments.json"
        assert filename_to_key(name) == "@buildledger_labor_payments"
        assert filename_to_key("notes.txt") is None

    @pytest.mark.asyncio
    async def test_set_get_delete(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "data")
        assert await store.get("missing") is None

        await store.set("@bl_workers", '[{"name": "করিম"}]')
        assert await store.get("@bl_workers") == '[{"name": "করিম"}]'
        assert await store.list_keys() == ["@bl_workers"]

        await store.delete("@bl_workers")
        await store.delete("@bl_workers")
        assert await store.list_keys() == []

    @pytest.mark.asyncio
    async def test_delete_many_and_foreign_files(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        await store.set("a", "1")
        await store.set("b", "2")
        (tmp_path / "README.txt").write_text("not a key")

        await store.delete_many(["a", "b", "c"])
        assert await store.list_keys() == []

    @pytest.mark.asyncio
    async def test_no_temp_files_left(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        await store.set("k", "v")
        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]

    @pytest.mark.asyncio
    async def test_read_error_is_wrapped(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path, retry_attempts=1)
        (tmp_path / key_to_filename("dir")).mkdir()
        with pytest.raises(StoreReadError):
            await store.get("dir")

    @pytest.mark.asyncio
    async def test_undecodable_file_is_read_error(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        (tmp_path / key_to_filename("k")).write_bytes(b"\xff\xfe[]")
        with pytest.raises(StoreReadError):
            await store.get("k")

    def test_create_store_backends(self, tmp_path):
        assert isinstance(create_store(StorageSettings(backend="memory")), InMemoryKeyValueStore)
        file_store = create_store(StorageSettings(backend="file", data_dir=tmp_path))
        assert isinstance(file_store, JsonFileKeyValueStore)
        assert file_store.data_dir == tmp_path


class TestRepositoryCrud:
    """Tests for generic collection CRUD."""

    @pytest.mark.asyncio
    async def test_empty_collections(self, repo):
        assert await repo.get_transactions() == []
        assert await repo.get_workers() == []

    @pytest.mark.asyncio
    async def test_transactions_are_newest_first(self, repo):
        first, second = make_transaction(100), make_transaction(200)
        assert await repo.save_transaction(first) is True
        assert await repo.save_transaction(second) is True
        assert [t.id for t in await repo.get_transactions()] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_workers_are_appended(self, repo):
        a, b = Worker(name="A", hourly_rate=1), Worker(name="B", hourly_rate=2)
        await repo.save_worker(a)
        await repo.save_worker(b)
        assert [w.name for w in await repo.get_workers()] == ["A", "B"]

    @pytest.mark.asyncio
    async def test_save_replaces_in_place(self, repo):
        a, b = make_transaction(100), make_transaction(200)
        await repo.save_transaction(a)
        await repo.save_transaction(b)

        changed = a.model_copy(update={"amount": 150})
        assert await repo.save_transaction(changed) is False

        stored = await repo.get_transactions()
        assert [t.id for t in stored] == [b.id, a.id]
        assert stored[1].amount == 150

    @pytest.mark.asyncio
    async def test_delete(self, repo):
        txn = make_transaction()
        await repo.save_transaction(txn)
        assert await repo.delete_transaction(txn.id) is True
        assert await repo.delete_transaction(txn.id) is False
        assert await repo.get_transaction(txn.id) is None

    @pytest.mark.asyncio
    async def test_stored_json_is_camel_case(self, repo, store):
        await repo.save_worker(Worker(name="Karim", hourly_rate=150))
        raw = json.loads(await store.get(PREFIX + "workers"))
        assert raw[0]["hourlyRate"] == 150

    @pytest.mark.asyncio
    async def test_invalid_records_are_skipped(self, store, repo):
        good = make_transaction().to_record()
        await store.set(PREFIX + "transactions", json.dumps([good, {"id": "broken"}]))
        assert [t.id for t in await repo.get_transactions()] == [good["id"]]

    @pytest.mark.asyncio
    async def test_estimates(self, repo):
        estimate = MaterialEstimate(name="House", area=1000, cement=400, sand=816, bricks=8000, steel=4000, aggregate=608)
        await repo.save_material_estimate(estimate)
        assert (await repo.get_material_estimate(estimate.id)).sand == 816
        assert await repo.delete_material_estimate(estimate.id) is True
        assert await repo.get_material_estimates() == []

    @pytest.mark.asyncio
    async def test_invoices(self, repo):
        invoice = create_invoice(
            Party(name="Rahman Builders"),
            Party(name="Karim Ahmed"),
            [{"description": "Cement", "quantity": 10, "unit": "bags", "unitPrice": 520}],
        )
        assert await repo.save_invoice(invoice) is True
        assert (await repo.get_invoice(invoice.id)).total_amount == invoice.total_amount
        assert await repo.delete_invoice(invoice.id) is True
        assert await repo.get_invoice(invoice.id) is None

    @pytest.mark.asyncio
    async def test_budgets(self, repo):
        budget = create_budget("Ground floor", "Mirpur house")
        await repo.save_budget(budget)
        assert (await repo.get_budget(budget.id)).project_name == "Mirpur house"
        assert await repo.delete_budget(budget.id) is True
        assert await repo.get_budgets() == []

    @pytest.mark.asyncio
    async def test_workers(self, repo):
        worker = Worker(name="Karim", hourly_rate=150)
        await repo.save_worker(worker)
        assert (await repo.get_worker(worker.id)).name == "Karim"
        assert await repo.delete_worker(worker.id) is True
        assert await repo.get_worker(worker.id) is None

    @pytest.mark.asyncio
    async def test_concurrent_saves_lose_nothing(self, repo):
        txns = [make_transaction(i) for i in range(25)]
        await asyncio.gather(*(repo.save_transaction(t) for t in txns))
        assert len(await repo.get_transactions()) == 25


class TestRepositoryFailures:
    """Tests for the read-degrades / write-fails policy."""

    @pytest.mark.asyncio
    async def test_read_failure_degrades_to_empty(self):
        repo = LedgerRepository(FailingStore(fail_reads=True), StorageSettings(key_prefix=PREFIX))
        assert await repo.get_transactions() == []
        assert len(await repo.get_plugins()) == 6

    @pytest.mark.asyncio
    async def test_corrupt_json_degrades_to_empty(self, store, repo):
        await store.set(PREFIX + "workers", "{not json")
        assert await repo.get_workers() == []

    @pytest.mark.asyncio
    async def test_undecodable_file_degrades_to_empty(self, tmp_path):
        settings = StorageSettings(key_prefix=PREFIX)
        repo = LedgerRepository(JsonFileKeyValueStore(tmp_path, retry_attempts=1), settings)
        (tmp_path / key_to_filename(PREFIX + "transactions")).write_bytes(b"\xff\xfe[]")
        assert await repo.get_transactions() == []

    @pytest.mark.asyncio
    async def test_write_failure_raises(self):
        repo = LedgerRepository(FailingStore(fail_writes=True), StorageSettings(key_prefix=PREFIX))
        with pytest.raises(StoreWriteError):
            await repo.save_transaction(make_transaction())

    @pytest.mark.asyncio
    async def test_write_never_clobbers_corrupt_collection(self, store, repo):
        await store.set(PREFIX + "transactions", '{"oops": true}')
        with pytest.raises(StorageError):
            await repo.save_transaction(make_transaction())
        assert await store.get(PREFIX + "transactions") == '{"oops": true}'


class TestLaborPayments:
    """Tests for the paid-payment companion expense."""

    @pytest.mark.asyncio
    async def test_paid_payment_creates_companion(self, repo, worker):
        payment = create_labor_payment(worker, "2025-01-06", 5, 40, 4, is_paid=True)
        await repo.save_labor_payment(payment)

        companion = await repo.get_transaction(f"labor_{payment.id}")
        assert companion is not None
        assert companion.category == TransactionCategory.LABOR
        assert companion.type == TransactionType.EXPENSE
        assert companion.amount == payment.total_amount == 4600
        assert companion.description == "Salary: Karim (5d, 44hrs)"

    @pytest.mark.asyncio
    async def test_saving_twice_does_not_duplicate(self, repo, worker):
        payment = create_labor_payment(worker, "2025-01-06", 5, 40, is_paid=True)
        await repo.save_labor_payment(payment)
        await repo.save_labor_payment(payment)
        assert len(await repo.get_transactions()) == 1
        assert len(await repo.get_labor_payments()) == 1

    @pytest.mark.asyncio
    async def test_unpaid_payment_has_no_companion(self, repo, worker):
        payment = create_labor_payment(worker, "2025-01-06", 5, 40)
        await repo.save_labor_payment(payment)
        assert await repo.get_transactions() == []

    @pytest.mark.asyncio
    async def test_delete_removes_companion(self, repo, worker):
        payment = create_labor_payment(worker, "2025-01-06", 5, 40, is_paid=True)
        other = make_transaction()
        await repo.save_transaction(other)
        await repo.save_labor_payment(payment)

        assert await repo.delete_labor_payment(payment.id) is True
        assert [t.id for t in await repo.get_transactions()] == [other.id]

    def test_companion_uses_week_start(self, worker):
        payment = create_labor_payment(worker, "2025-01-09", 3, 24, is_paid=True)
        companion = build_companion_transaction(payment)
        assert companion.date.isoformat() == "2025-01-06"
        assert companion.id == f"labor_{payment.id}"


class TestPluginsAndSettings:
    """Tests for plugin toggles and currency settings."""

    @pytest.mark.asyncio
    async def test_default_catalog(self, repo):
        plugins = await repo.get_plugins()
        assert len(plugins) == 6
        assert not any(p.is_installed for p in plugins)

    @pytest.mark.asyncio
    async def test_install_enable_uninstall(self, repo):
        await repo.set_plugin_installed("tax-calculator", True)
        enabled = await repo.set_plugin_enabled("tax-calculator", True)
        assert enabled.is_enabled

        removed = await repo.set_plugin_installed("tax-calculator", False)
        assert not removed.is_installed
        assert not removed.is_enabled

        stored = {p.id: p for p in await repo.get_plugins()}
        assert stored["tax-calculator"].is_enabled is False

    @pytest.mark.asyncio
    async def test_enable_requires_install(self, repo):
        with pytest.raises(ValueError):
            await repo.set_plugin_enabled("budget-planner", True)

    @pytest.mark.asyncio
    async def test_unknown_plugin(self, repo):
        with pytest.raises(NotFoundError):
            await repo.set_plugin_installed("nope", True)

    @pytest.mark.asyncio
    async def test_currency_settings_default_and_save(self, repo):
        assert (await repo.get_currency_settings()).display_currency == "BDT"
        await repo.save_currency_settings(CurrencySettings(display_currency="USD", show_both_currencies=True))
        settings = await repo.get_currency_settings()
        assert settings.display_currency == "USD"
        assert settings.show_both_currencies is True


class TestMaintenance:
    """Tests for clearing data and storage statistics."""

    @pytest.mark.asyncio
    async def test_clear_all_keeps_audit_log(self, repo, store):
        await repo.save_transaction(make_transaction())
        await repo.save_worker(Worker(name="A", hourly_rate=1))
        await repo.clear_all_data()

        assert await repo.get_transactions() == []
        assert await store.list_keys() == [PREFIX + "audit_log"]
        events = await repo.audit_logger.get_recent_events()
        assert events[0]["event_type"] == "data_cleared"

    @pytest.mark.asyncio
    async def test_audit_log_is_capped(self, store):
        repo = LedgerRepository(store, StorageSettings(key_prefix=PREFIX, audit_log_max_events=50))
        worker = Worker(name="Karim", hourly_rate=100)
        for _ in range(200):
            await repo.save_worker(worker)

        stored = json.loads(await store.get(PREFIX + "audit_log"))
        assert len(stored) == 50
        assert len(await repo.get_workers()) == 1

    @pytest.mark.asyncio
    async def test_storage_stats(self):
        store = InMemoryKeyValueStore({"a": "x" * 10, "b": "ৎ", "c": ""})
        repo = LedgerRepository(store)
        stats = await repo.get_storage_stats()
        assert stats.item_count == 3
        assert [i.key for i in stats.items] == ["a", "b"]
        assert stats.items[1].size == 3
        assert stats.total_size == 13

    def test_data_keys_exclude_audit_log(self, repo):
        keys = repo.data_keys()
        assert len(keys) == len(Collection) - 1
        assert PREFIX + "audit_log" not in keys


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
