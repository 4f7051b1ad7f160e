"""
Tests for the change broker and the events report mutations publish
"""
import asyncio
import json

import pytest

from civic_reports.services import report_service
from civic_reports.services.realtime import ChangeBroker, ChangeEvent, ChangeKind


class RecordingBroker:
    def __init__(self):
        self.events = []

    def publish(self, event):
        self.events.append(event)


@pytest.fixture
def published(monkeypatch):
    recorder = RecordingBroker()
    monkeypatch.setattr(report_service, "broker", recorder)
    return recorder.events


def test_fan_out_to_every_subscriber():
    async def scenario():
        broker = ChangeBroker()
        async with broker.subscribe() as first, broker.subscribe() as second:
            assert broker.subscriber_count == 2
            broker.publish(ChangeEvent(kind=ChangeKind.DELETE, report_id=4))
            return first.get_nowait(), second.get_nowait(), broker

    first, second, broker = asyncio.run(scenario())
    assert first.report_id == second.report_id == 4
    assert broker.subscriber_count == 0


def test_slow_subscriber_drops_events():
    async def scenario():
        broker = ChangeBroker(queue_size=1)
        async with broker.subscribe() as queue:
            broker.publish(ChangeEvent(kind=ChangeKind.DELETE, report_id=1))
            broker.publish(ChangeEvent(kind=ChangeKind.DELETE, report_id=2))
            return queue.qsize(), queue.get_nowait()

    size, event = asyncio.run(scenario())
    assert size == 1
    assert event.report_id == 1


def test_sse_format():
    text = ChangeEvent(kind=ChangeKind.DELETE, report_id=9).to_sse()
    assert text.startswith("event: delete\n")
    assert text.endswith("\n\n")
    data = json.loads(text.split("data: ", 1)[1])
    assert data == {"kind": "DELETE", "report_id": 9, "report": None}


def test_mutations_publish_public_records(client, submit, super_admin, published):
    code = submit(reporter_email="fshehur@example.com")["tracking_code"]
    insert = published[-1]
    assert insert.kind == ChangeKind.INSERT
    assert insert.report.tracking_code == code
    assert "fshehur@example.com" not in insert.to_sse()

    client.post(f"/api/reports/{insert.report_id}/status", json={"status": "in_progress"})
    assert published[-1].kind == ChangeKind.UPDATE
    assert published[-1].report.status.value == "in_progress"

    client.delete(f"/api/reports/{insert.report_id}")
    assert published[-1].kind == ChangeKind.DELETE
    assert published[-1].report is None
