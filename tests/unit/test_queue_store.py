"""
Unit tests for the queue store.
"""

import pytest

from inline_queue.errors import NoQueueError
from inline_queue.observability.metrics import MetricsCollector
from inline_queue.store.queue_store import QueueStore
from inline_queue.types.job import JobRecord
from tests.jobs import (
    HighPriorityJob,
    JobThatDoesNotSpecifyAQueue,
    JobWithArguments,
    JobWithEmptyQueue,
    JobWithHooks,
    LowPriorityJob,
    MediumPriorityJob,
    Symbol,
)


class TestQueueStore:
    """Tests for QueueStore."""

    @pytest.fixture
    def store(self, metrics: MetricsCollector) -> QueueStore:
        """Create a store with hooks disabled."""
        return QueueStore(hooks_enabled=False, metrics=metrics)

    def test_enqueue_returns_true(self, store: QueueStore):
        """Test enqueue reports success."""
        assert store.enqueue(LowPriorityJob) is True

    def test_enqueue_appends_to_tail(self, store: QueueStore):
        """Test records are appended in FIFO order."""
        store.enqueue(JobWithArguments, 1)
        store.enqueue(JobWithArguments, 2)

        contents = store.contents("medium")

        assert store.size("medium") == 2
        assert contents[-1] == JobRecord(JobWithArguments, (2,))
        assert [record.args for record in contents] == [(1,), (2,)]

    def test_enqueue_normalizes_args(self, store: QueueStore):
        """Test stored args are normalized."""
        store.enqueue(JobWithArguments, 1, Symbol.TEST, {Symbol.SYMBOL: Symbol.SYMBOL})

        (record,) = store.contents("medium")

        assert record.args == (1, "test", {"symbol": "symbol"})

    def test_queue_selector_callable(self, store: QueueStore):
        """Test a callable queue selector is invoked."""
        assert store.queue_for(MediumPriorityJob) == "medium"

    def test_no_queue_raises(self, store: QueueStore):
        """Test a class without a queue cannot be enqueued."""
        with pytest.raises(NoQueueError) as exc_info:
            store.enqueue(JobThatDoesNotSpecifyAQueue)

        assert exc_info.value.job_class is JobThatDoesNotSpecifyAQueue
        assert store.size() == 0

    def test_empty_queue_name_raises(self, store: QueueStore):
        """Test a selector yielding nothing is treated as no queue."""
        with pytest.raises(NoQueueError):
            store.enqueue(JobWithEmptyQueue)

    def test_absent_queue_has_size_zero(self, store: QueueStore):
        """Test unknown queues report zero length and no contents."""
        assert store.size("nope") == 0
        assert store.contents("nope") == ()

    def test_pop_removes_head(self, store: QueueStore):
        """Test pop returns records head first."""
        store.enqueue(JobWithArguments, 1)
        store.enqueue(JobWithArguments, 2)

        assert store.pop("medium").args == (1,)
        assert store.pop("medium").args == (2,)
        assert store.pop("medium") is None

    def test_drained_queue_is_dropped(self, store: QueueStore):
        """Test a queue emptied by pop no longer shows up."""
        store.enqueue(LowPriorityJob)
        store.pop("low")

        assert store.queue_names() == []

    def test_size_without_name_is_total(self, store: QueueStore):
        """Test size() sums every queue."""
        store.enqueue(LowPriorityJob)
        store.enqueue(HighPriorityJob)
        store.enqueue(HighPriorityJob)

        assert store.size() == 3
        assert store.queue_names() == ["low", "high"]

    def test_contents_is_snapshot(self, store: QueueStore):
        """Test contents() is not affected by later writes."""
        store.enqueue(LowPriorityJob)
        contents = store.contents("low")

        store.enqueue(LowPriorityJob)

        assert len(contents) == 1

    def test_contents_does_not_share_stored_args(self, store: QueueStore):
        """Test mutating returned args leaves the stored record intact."""
        store.enqueue(JobWithArguments, {"a": 1}, [1, 2])

        record = store.contents("medium")[0]
        record.args[0]["a"] = 99
        record.args[1].append(3)

        assert store.contents("medium")[0].args == ({"a": 1}, [1, 2])

    def test_create_returns_detached_record(self, store: QueueStore):
        """Test the record returned by create() is a copy of the stored one."""
        record = store.create("medium", JobWithArguments, {"a": 1})

        record.args[0]["a"] = 99

        assert store.contents("medium")[0].args == ({"a": 1},)

    def test_enqueue_tuple_mapping_keys(self, store: QueueStore):
        """Test mapping arguments with tuple keys can be enqueued."""
        assert store.enqueue(JobWithArguments, {(1, 2): "point", (Symbol.TEST,): 1}) is True

        assert store.contents("medium")[0].args == ({(1, 2): "point", ("test",): 1},)

    def test_enum_queue_name(self, store: QueueStore):
        """Test symbolic queue names map to their string form."""
        store.enqueue_to(Symbol.TEST, LowPriorityJob)

        assert store.size("test") == 1
        assert store.size(Symbol.TEST) == 1

    def test_enqueue_to_explicit_queue(self, store: QueueStore):
        """Test enqueue_to ignores the class selector."""
        store.enqueue_to("other", LowPriorityJob)

        assert store.size("low") == 0
        assert store.size("other") == 1

    def test_create_inserts_directly(self, store: QueueStore):
        """Test create() stores a class path record without resolution."""
        record = store.create("critical", "tests.jobs.MyJob", Symbol.TEST)

        assert store.contents("critical") == (record,)
        assert record.class_name == "MyJob"
        assert record.args == ("test",)

    def test_dequeue_all_of_class(self, store: QueueStore):
        """Test dequeue without args removes every record of the class."""
        store.enqueue(JobWithArguments, 1)
        store.enqueue(JobWithArguments, 2)
        store.enqueue(MediumPriorityJob)

        assert store.dequeue(JobWithArguments) == 2
        assert [record.class_name for record in store.contents("medium")] == ["MediumPriorityJob"]

    def test_dequeue_matching_args(self, store: QueueStore):
        """Test dequeue with args only removes matching records."""
        store.enqueue(JobWithArguments, 1, "test")
        store.enqueue(JobWithArguments, 2)

        assert store.dequeue(JobWithArguments, 1, Symbol.TEST) == 1
        assert store.contents("medium")[0].args == (2,)

    def test_dequeue_empty_queue(self, store: QueueStore):
        """Test dequeue on an absent queue removes nothing."""
        assert store.dequeue(LowPriorityJob) == 0

    def test_reset_clears_queues_and_hooks(self, store: QueueStore):
        """Test reset empties the store and restores the hooks default."""
        store.enqueue(LowPriorityJob)
        store.enable_hooks()

        store.reset()

        assert store.size() == 0
        assert store.hooks_enabled is False

    def test_reset_restores_enabled_default(self, metrics: MetricsCollector):
        """Test reset restores a default of enabled hooks."""
        store = QueueStore(hooks_enabled=True, metrics=metrics)
        store.disable_hooks()

        store.reset()

        assert store.hooks_enabled is True


class TestEnqueueHooks:
    """Tests for enqueue-time hooks."""

    @pytest.fixture
    def store(self, metrics: MetricsCollector) -> QueueStore:
        """Create a store with hooks enabled."""
        return QueueStore(hooks_enabled=True, metrics=metrics)

    def test_after_enqueue_gets_original_args(self, store: QueueStore):
        """Test after_enqueue receives the unnormalized args."""
        store.enqueue(JobWithHooks, Symbol.TEST)

        assert JobWithHooks.markers["after_enqueue"] == (Symbol.TEST,)
        assert JobWithHooks.markers["after_enqueue"][0] is Symbol.TEST

    def test_before_enqueue_veto(self, store: QueueStore):
        """Test a before_enqueue hook returning False prevents the enqueue."""
        JobWithHooks.veto_enqueue = True

        assert store.enqueue(JobWithHooks) is False
        assert store.size("with_hooks") == 0
        assert "after_enqueue" not in JobWithHooks.markers

    def test_hooks_disabled_skip_enqueue_hooks(self, store: QueueStore):
        """Test no enqueue hook fires while hooks are disabled."""
        store.disable_hooks()
        JobWithHooks.veto_enqueue = True

        assert store.enqueue(JobWithHooks) is True
        assert JobWithHooks.markers == {}

    def test_create_skips_hooks(self, store: QueueStore):
        """Test direct insertion bypasses enqueue hooks."""
        store.create("with_hooks", JobWithHooks)

        assert JobWithHooks.markers == {}
