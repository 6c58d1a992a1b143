"""
Main Orchestrator for BuildLedger

This module ties together all the components and defines the
end-to-end flows for:
1. Payroll (worker lookup → payment → save → companion expense)
2. Material estimation (area → quantities → save → priced cost)

DESIGN DECISION: The orchestrator is the only place that combines the
pure calculation modules with storage. Calculations never touch the
store, and the repository never computes amounts. Every step of a flow
shares one correlation id in the audit trail.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union
from uuid import UUID

import structlog

from buildledger.audit import AuditLogger, create_correlation_id
from buildledger.backup import BackupManager
from buildledger.calculations.labor import create_labor_payment, summarize_week
from buildledger.calculations.materials import create_material_estimate, estimate_material_cost
from buildledger.config import Settings, get_settings
from buildledger.models.records import LaborPayment, MaterialEstimate, WeekSummary, Worker
from buildledger.reference.pricelist import MaterialCost
from buildledger.services.repository import Collection, LedgerRepository
from buildledger.services.storage import KeyValueStore, NotFoundError, create_store

logger = structlog.get_logger(__name__)


class PayrollFlow:
    """
    Orchestrates weekly labor payments.

    Flow:
    1. Lookup → Find the worker by name, or create one
    2. Compute → Build the payment with a checked total
    3. Save → Persist the payment
    4. Companion → If paid, the repository writes the labor expense
    """

    def __init__(self, repository: LedgerRepository):
        self._repo = repository

    async def find_or_create_worker(
        self,
        name: str,
        hourly_rate: float,
        correlation_id: Optional[UUID] = None,
    ) -> Worker:
        """Match on name ignoring case and surrounding spaces."""
        wanted = name.strip().casefold()
        for worker in await self._repo.get_workers():
            if worker.name.strip().casefold() == wanted:
                return worker

        worker = Worker(name=name.strip(), hourly_rate=hourly_rate)
        await self._repo.save_worker(worker, correlation_id)
        logger.info("worker_created", worker_id=worker.id)
        return worker

    async def record_payment(
        self,
        worker_name: str,
        hourly_rate: float,
        week_start: Union[str, date],
        days_worked: float,
        regular_hours: float,
        overtime_hours: float = 0,
        is_paid: bool = False,
        notes: str = "",
        correlation_id: Optional[UUID] = None,
    ) -> LaborPayment:
        """
        Record one worker's week.

        The hourly rate is used to create a new worker; an existing
        worker is paid at the given rate too, so a raise can be recorded
        without editing the worker first.
        """
        correlation_id = correlation_id or create_correlation_id()

        worker = await self.find_or_create_worker(worker_name, hourly_rate, correlation_id)
        payment = create_labor_payment(
            worker,
            week_start,
            days_worked=days_worked,
            regular_hours=regular_hours,
            overtime_hours=overtime_hours,
            hourly_rate=hourly_rate,
            is_paid=is_paid,
            notes=notes,
        )
        await self._repo.save_labor_payment(payment, correlation_id)
        return payment

    async def mark_paid(
        self,
        payment_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> LaborPayment:
        """
        Raises:
            NotFoundError: If no payment has this id
        """
        payment = await self._repo.get_labor_payment(payment_id)
        if payment is None:
            raise NotFoundError(f"Labor payment not found: {payment_id}")

        paid = payment.model_copy(update={"is_paid": True})
        await self._repo.save_labor_payment(paid, correlation_id or create_correlation_id())
        return paid

    async def week_summary(self, week_start: Union[str, date]) -> WeekSummary:
        return summarize_week(await self._repo.get_labor_payments(), week_start)


class EstimateFlow:
    """Estimate materials for a building and keep the estimate."""

    def __init__(self, repository: LedgerRepository):
        self._repo = repository

    async def estimate(
        self,
        name: str,
        area: float,
        floors: int = 1,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[MaterialEstimate, MaterialCost]:
        estimate = create_material_estimate(name, area, floors)
        await self._repo.save_material_estimate(estimate, correlation_id)
        return estimate, estimate_material_cost(estimate)


@dataclass
class AppComponents:
    store: KeyValueStore
    audit_logger: AuditLogger
    repository: LedgerRepository
    backups: BackupManager
    payroll: PayrollFlow
    estimates: EstimateFlow


def create_app_components(settings: Optional[Settings] = None) -> AppComponents:
    """
    Factory function to create all application components.

    All components share one store and one audit logger.
    """
    settings = settings or get_settings()
    storage_settings = settings.storage

    store = create_store(storage_settings)
    audit_logger = AuditLogger(
        store,
        key=f"{storage_settings.key_prefix}{Collection.AUDIT_LOG.value}",
        max_events=storage_settings.audit_log_max_events,
    )
    repository = LedgerRepository(store, storage_settings, audit_logger)

    return AppComponents(
        store=store,
        audit_logger=audit_logger,
        repository=repository,
        backups=BackupManager(store, settings, audit_logger),
        payroll=PayrollFlow(repository),
        estimates=EstimateFlow(repository),
    )
