"""
Audit Logger

DESIGN DECISION: Every significant action in the system is logged.
This provides:
1. Traceability of every change to the transaction list
2. A trail of persistence failures, which the user never sees
3. Debugging capability for rejected input and failed logins

The audit logger:
- Writes structured JSON through structlog
- Keeps a bounded in-memory history for callers and tests
"""

import logging
import sys
from typing import Optional

import structlog

from budget_tracker.config import get_settings
from budget_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Route structlog output to stderr at the configured level.

    Args:
        level: Level name; defaults to the BUDGET_TRACKER_LOG_LEVEL setting
    """
    level_name = (level or get_settings().app.log_level).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric_level)
    logging.getLogger("budget_tracker").setLevel(numeric_level)


class AuditLogger:
    """
    Central audit logging service.

    Keeps the last events in memory (bounded) so callers and tests can
    inspect what happened without parsing log output.
    """

    def __init__(self, name: str = "budget_tracker", history_size: int = 200):
        self._logger = structlog.get_logger(name)
        self._history: list[AuditEvent] = []
        self._history_size = history_size

    @property
    def history(self) -> list[AuditEvent]:
        """Most recent events, oldest first."""
        return list(self._history)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at a level matching its severity."""
        self._history.append(event)
        if len(self._history) > self._history_size:
            del self._history[0]

        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_load_failed(self, key: str, error_message: str) -> None:
        """Log a read that fell back to the default value."""
        self.log(AuditEventBuilder.load_failed(key=key, error_message=error_message))

    def log_save_failed(self, key: str, error_message: str, attempts: int) -> None:
        """Log a write that failed after all retries."""
        self.log(AuditEventBuilder.save_failed(
            key=key,
            error_message=error_message,
            attempts=attempts,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
