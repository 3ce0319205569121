# sync status: health of the background sync with the upstream scheduling system
#
# the sync_status document only keeps the latest error message, not a history,
# so at most one (synthetic) SyncError is ever reported

from datetime import datetime
from typing import Optional

from bloom.models.dashboard import SyncStatus, SyncError
from bloom.services.coercion import to_int, to_iso_timestamp


def normalize_sync_status(row: Optional[dict], as_of: datetime,
                          warnings: Optional[list[str]] = None) -> SyncStatus:
    """map a sync_status document to SyncStatus. no document means never synced, assumed healthy."""
    if row is None:
        return SyncStatus(
            isConnected=True,
            lastSuccessfulSync=None,
            lastSyncAttempt=None,
            syncErrors=[],
            pendingChanges=0,
        )

    errors = []
    message = row.get("last_error_message")
    if message:
        errors.append(SyncError(
            timestamp=to_iso_timestamp(row.get("updated_at")) or as_of.isoformat(),
            operation="sync",
            entity="all",
            error=str(message),
            isResolved=False,
        ))

    is_connected = row.get("is_connected")
    return SyncStatus(
        isConnected=True if is_connected is None else bool(is_connected),
        lastSuccessfulSync=to_iso_timestamp(row.get("last_successful_sync")),
        lastSyncAttempt=to_iso_timestamp(row.get("last_sync_attempt")),
        syncErrors=errors,
        pendingChanges=to_int(row.get("pending_changes"), field="pending_changes", warnings=warnings),
    )
