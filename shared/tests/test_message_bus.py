from dataclasses import dataclass

import pytest

from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import DomainEvent


@dataclass
class SomethingHappened(DomainEvent):
    what: str = ""


def test_handlers_run_and_failures_are_isolated():
    bus = MessageBus()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    bus.register_event_handler(SomethingHappened, broken)
    bus.register_event_handler(SomethingHappened, seen.append)
    bus.register_event_handler(SomethingHappened, seen.append)

    bus.publish_events([SomethingHappened(what="launch")])

    assert [event.what for event in seen] == ["launch"]


@pytest.mark.django_db
def test_unit_of_work_publishes_on_commit(django_capture_on_commit_callbacks):
    bus = MessageBus()
    seen = []
    bus.register_event_handler(SomethingHappened, seen.append)

    with django_capture_on_commit_callbacks(execute=True):
        with DjangoUnitOfWork(bus=bus) as uow:
            uow.add_event(SomethingHappened(what="commit"))
        assert seen == []

    assert [event.what for event in seen] == ["commit"]


@pytest.mark.django_db
def test_unit_of_work_discards_events_on_error(django_capture_on_commit_callbacks):
    bus = MessageBus()
    seen = []
    bus.register_event_handler(SomethingHappened, seen.append)

    with django_capture_on_commit_callbacks(execute=True):
        with pytest.raises(RuntimeError):
            with DjangoUnitOfWork(bus=bus) as uow:
                uow.add_event(SomethingHappened(what="rollback"))
                raise RuntimeError("abort")

    assert seen == []
