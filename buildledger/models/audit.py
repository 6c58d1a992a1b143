"""
Audit Models for BuildLedger

Every change to persisted data is logged for audit purposes.
This provides:
1. Traceability of saves, deletes, backups and restores
2. Debugging information when a write fails
3. A way to explain side effects (why did this expense appear?)

DESIGN DECISION: Audit logs are append-only. Events are never modified; the
persisted log only drops its oldest events once it reaches its size cap.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from buildledger.models.base import utc_now


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Records
    RECORD_SAVED = "record_saved"
    RECORD_DELETED = "record_deleted"

    # Labor payment side effect
    COMPANION_TRANSACTION_SAVED = "companion_transaction_saved"
    COMPANION_TRANSACTION_DELETED = "companion_transaction_deleted"

    # Backup
    BACKUP_CREATED = "backup_created"
    BACKUP_RESTORED = "backup_restored"
    BACKUP_FAILED = "backup_failed"
    BACKUP_REJECTED = "backup_rejected"
    DATA_CLEARED = "data_cleared"

    # System events
    STORAGE_ERROR = "storage_error"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Collection name (e.g., 'transactions', 'labor_payments')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Id of the record this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Ties together events of one user action"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_saved("workers", worker.id)
        event = AuditEventBuilder.backup_failed("create", str(exc))
    """

    @staticmethod
    def record_saved(
        entity_type: str,
        entity_id: str,
        created: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        action = "created" if created else "updated"
        return AuditEvent(
            event_type=AuditEventType.RECORD_SAVED,
            entity_type=entity_type,
            entity_id=entity_id,
            correlation_id=correlation_id,
            description=f"{entity_type} record {action}",
            details={"created": created},
        )

    @staticmethod
    def record_deleted(
        entity_type: str,
        entity_id: str,
        found: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_DELETED,
            entity_type=entity_type,
            entity_id=entity_id,
            correlation_id=correlation_id,
            description=f"{entity_type} record deleted",
            details={"found": found},
        )

    @staticmethod
    def companion_transaction_saved(
        payment_id: str,
        transaction_id: str,
        amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMPANION_TRANSACTION_SAVED,
            entity_type="transactions",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Labor expense written for paid payment {payment_id}",
            details={"payment_id": payment_id, "amount": amount},
        )

    @staticmethod
    def companion_transaction_deleted(
        payment_id: str,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMPANION_TRANSACTION_DELETED,
            entity_type="transactions",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Labor expense removed with payment {payment_id}",
            details={"payment_id": payment_id},
        )

    @staticmethod
    def backup_created(counts: dict[str, int]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BACKUP_CREATED,
            entity_type="backup",
            description="Backup created",
            details={"counts": counts},
        )

    @staticmethod
    def backup_restored(counts: dict[str, int], source_version: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BACKUP_RESTORED,
            severity=AuditSeverity.WARNING,
            entity_type="backup",
            description="Backup restored over existing data",
            details={"counts": counts, "source_version": source_version},
        )

    @staticmethod
    def backup_failed(operation: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BACKUP_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="backup",
            description=f"Backup {operation} failed",
            error_message=error_message,
            details={"operation": operation},
        )

    @staticmethod
    def backup_rejected(reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BACKUP_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="backup",
            description="Backup rejected by structural validation",
            details={"reason": reason},
        )

    @staticmethod
    def data_cleared(keys: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_CLEARED,
            severity=AuditSeverity.WARNING,
            description=f"Cleared {len(keys)} storage keys",
            details={"keys": keys},
        )

    @staticmethod
    def storage_error(
        operation: str,
        key: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage {operation} failed for {key}",
            error_message=error_message,
            details={"operation": operation, "key": key},
            correlation_id=correlation_id,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
