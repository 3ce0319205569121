# tests for sync status normalization
# unit tests for bloom/services/sync_status.py

from datetime import datetime

from bloom.services.sync_status import normalize_sync_status

AS_OF = datetime(2025, 6, 11, 11, 0)


class TestNormalizeSyncStatus:
    """sync_status document -> SyncStatus"""

    def test_no_row_is_healthy(self):
        status = normalize_sync_status(None, AS_OF)
        assert status.is_connected is True
        assert status.last_successful_sync is None
        assert status.last_sync_attempt is None
        assert status.sync_errors == []
        assert status.pending_changes == 0

    def test_error_message_synthesizes_one_error(self):
        status = normalize_sync_status({
            "is_connected": False,
            "last_successful_sync": datetime(2025, 6, 11, 8, 0),
            "last_sync_attempt": datetime(2025, 6, 11, 10, 55),
            "last_error_message": "Upstream rate limit exceeded",
            "pending_changes": 4,
            "updated_at": datetime(2025, 6, 11, 10, 55),
        }, AS_OF)
        assert status.is_connected is False
        assert status.last_successful_sync == "2025-06-11T08:00:00"
        assert status.last_sync_attempt == "2025-06-11T10:55:00"
        assert status.pending_changes == 4
        assert len(status.sync_errors) == 1
        error = status.sync_errors[0]
        assert error.error == "Upstream rate limit exceeded"
        assert error.operation == "sync"
        assert error.entity == "all"
        assert error.is_resolved is False
        assert error.timestamp == "2025-06-11T10:55:00"

    def test_error_without_updated_at_uses_as_of(self):
        status = normalize_sync_status({"last_error_message": "timeout"}, AS_OF)
        assert status.sync_errors[0].timestamp == AS_OF.isoformat()

    def test_empty_message_means_no_errors(self):
        status = normalize_sync_status({
            "is_connected": False,
            "last_error_message": "",
            "pending_changes": 2,
        }, AS_OF)
        assert status.sync_errors == []
        assert status.is_connected is False
        assert status.pending_changes == 2

    def test_missing_fields_default(self):
        status = normalize_sync_status({}, AS_OF)
        assert status.is_connected is True
        assert status.last_successful_sync is None
        assert status.pending_changes == 0

    def test_serialized_aliases(self):
        data = normalize_sync_status({"last_error_message": "x"}, AS_OF).model_dump(by_alias=True)
        assert set(data) == {"isConnected", "lastSuccessfulSync", "lastSyncAttempt", "syncErrors", "pendingChanges"}
        assert data["syncErrors"][0]["isResolved"] is False
