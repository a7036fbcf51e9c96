"""Tests for domain events and the event bus."""

import pytest

from projectmd.core.domain.events import (
    DomainEvent,
    EventBus,
    IssueCreated,
    SyncCompleted,
    TaskSkipped,
)


class TestEventBus:
    """Tests for EventBus."""

    @pytest.fixture
    def bus(self):
        return EventBus()

    def test_publish_to_subscriber(self, bus):
        received = []
        bus.subscribe(IssueCreated, received.append)

        event = IssueCreated(task_path="tasks/a.md", issue_number=3, title="A")
        bus.publish(event)
        bus.publish(TaskSkipped(task_path="tasks/b.md", issue_number=4))

        assert received == [event]

    def test_catch_all(self, bus):
        received = []
        bus.subscribe(DomainEvent, received.append)

        bus.publish(IssueCreated(task_path="a"))
        bus.publish(SyncCompleted(project_path="p"))

        assert [e.event_type for e in received] == ["IssueCreated", "SyncCompleted"]

    def test_history(self, bus):
        bus.publish(IssueCreated(task_path="a"))
        bus.publish(TaskSkipped(task_path="b"))

        history = bus.get_history()
        assert len(history) == 2
        history.clear()
        assert len(bus.get_history()) == 2

        bus.clear_history()
        assert bus.get_history() == []


class TestDomainEvent:
    """Tests for DomainEvent."""

    def test_events_are_immutable(self):
        event = IssueCreated(task_path="a", issue_number=1)
        with pytest.raises(AttributeError):
            event.issue_number = 2

    def test_event_ids_are_unique(self):
        assert IssueCreated().event_id != IssueCreated().event_id
