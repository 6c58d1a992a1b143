"""
Audit Logger

DESIGN DECISION: Every change to persisted data is logged.
This provides:
1. Traceability of saves, deletes, backups and restores
2. Debugging capability when a write fails
3. An answer to "why did this labor expense appear?"

The audit logger:
- Is async so it fits between repository calls
- Gracefully handles failures (a failed audit write never fails the save)
- Supports correlation IDs to trace related events
"""

import asyncio
import json
import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from buildledger.config import get_settings
from buildledger.models.audit import AuditEvent, AuditEventBuilder
from buildledger.services.storage.interface import KeyValueStore, StorageError


def configure_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Configure structlog for local logging.

    Defaults come from AppSettings (BUILDLEDGER_LOG_LEVEL, BUILDLEDGER_LOG_JSON).
    """
    app = get_settings().app
    level = level or app.log_level
    json_output = app.log_json if json_output is None else json_output

    logging.basicConfig(format="%(message)s", level=getattr(logging, level))
    logging.getLogger().setLevel(getattr(logging, level))

    renderer = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The append-only ``audit_log`` collection, when a store is given.
       Only the newest ``max_events`` are kept there.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        key: Optional[str] = None,
        max_events: Optional[int] = None,
    ):
        """
        Initialize audit logger.

        Args:
            store: Key-value store for persistence.
                   If None, only logs locally.
            key: Storage key of the audit collection
            max_events: Newest events kept when persisting; older ones
                        are dropped. Defaults to StorageSettings.
        """
        self._store = store
        storage_settings = get_settings().storage
        self._key = key or f"{storage_settings.key_prefix}audit_log"
        self._max_events = max_events or storage_settings.audit_log_max_events
        self._lock = asyncio.Lock()
        self._logger = structlog.get_logger(__name__)

    @property
    def key(self) -> str:
        return self._key

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to the store if available.

        Returns True if the store write succeeded (or no store configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._store is None:
            return True

        try:
            async with self._lock:
                events = await self._read_events()
                events.append(log_dict)
                events = events[-self._max_events:]
                await self._store.set(
                    self._key, json.dumps(events, ensure_ascii=False)
                )
            return True
        except (StorageError, ValueError, TypeError) as e:
            # Log failure but don't raise
            self._logger.error(
                "audit_storage_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

    async def _read_events(self) -> list[dict]:
        raw = await self._store.get(self._key)
        if not raw:
            return []
        data = json.loads(raw)
        return data if isinstance(data, list) else []

    async def get_recent_events(self, limit: int = 100) -> list[dict]:
        """
        Get the most recent persisted audit events.

        Returns:
            Event dicts, newest first. Empty when there is no store or the
            collection cannot be read.
        """
        if self._store is None:
            return []
        try:
            events = await self._read_events()
        except (StorageError, ValueError) as e:
            self._logger.error("audit_read_failed", error=str(e))
            return []
        return list(reversed(events))[:limit]

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g., saving a paid labor
    payment) and pass it to every repository call of that action.
    """
    return uuid4()
