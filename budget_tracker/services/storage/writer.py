"""
Retrying writes

Every owner of a persisted key writes through persist_with_retry so a
failing backend is retried and then logged, never raised into the UI flow.
"""

from typing import Optional

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from budget_tracker.audit import AuditLogger
from budget_tracker.config import get_settings
from budget_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageWriteError,
)


async def persist_with_retry(
    storage: KeyValueStorageInterface,
    key: str,
    value: str,
    audit_logger: AuditLogger,
    attempts: Optional[int] = None,
    wait_seconds: Optional[float] = None,
) -> bool:
    """
    Write `value` under `key`, retrying on StorageError.

    Returns True once a write succeeds, False after the last attempt fails
    (the failure is logged as save_failed).
    """
    settings = get_settings().storage
    attempts = attempts or settings.write_retry_attempts
    if wait_seconds is None:
        wait_seconds = settings.write_retry_wait_seconds

    try:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_fixed(wait_seconds),
            retry=retry_if_exception_type(StorageError),
            reraise=True,
        ):
            with attempt:
                if not await storage.write(key, value):
                    raise StorageWriteError(f"Backend refused write of '{key}'")
    except StorageError as e:
        audit_logger.log_save_failed(key=key, error_message=str(e), attempts=attempts)
        return False

    return True
