"""Unit tests for coordination data models."""

from flyfit_coordination.coordination.models import GuardMode, Outcome, PendingCall, QueueStats


class TestGuardMode:
    """Test GuardMode enum."""

    def test_values(self):
        """Test mode values."""
        assert GuardMode.DROP.value == "drop"
        assert GuardMode.QUEUE.value == "queue"
        assert GuardMode.LATEST.value == "latest"

    def test_from_string(self):
        """Test modes parse from strings."""
        assert GuardMode("latest") is GuardMode.LATEST

    def test_is_str(self):
        """Test modes compare equal to their string values."""
        assert GuardMode.DROP == "drop"


class TestOutcome:
    """Test Outcome enum."""

    def test_values(self):
        """Test outcome values used as metric labels."""
        assert {o.value for o in Outcome} == {
            "success",
            "failure",
            "aborted",
            "dropped",
            "superseded",
            "cancelled",
        }


class TestPendingCall:
    """Test PendingCall dataclass."""

    def test_futures_default_not_shared(self):
        """Test each pending call gets its own futures list."""
        first = PendingCall(args=(1,), kwargs={})
        second = PendingCall(args=(2,), kwargs={})

        first.futures.append(object())

        assert second.futures == []


class TestQueueStats:
    """Test QueueStats dataclass."""

    def test_to_dict(self):
        """Test conversion to dictionary."""
        stats = QueueStats(
            pending=2,
            draining=True,
            aborted=False,
            processed_total=10,
            failed_total=1,
            aborted_total=3,
        )

        assert stats.to_dict() == {
            "pending": 2,
            "draining": True,
            "aborted": False,
            "processed_total": 10,
            "failed_total": 1,
            "aborted_total": 3,
        }
