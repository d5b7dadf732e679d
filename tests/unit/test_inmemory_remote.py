"""In-memory remote tests."""

import pytest

from assignflow.contracts import AssignmentPayload, AssignmentStatus, BasicInfo, DraftQuestion
from assignflow.errors import RemoteFailure, TransportFailure
from assignflow.remotes.inmemory import InMemoryAssignmentRemote


def _payload(title="Reading log", questions=None) -> AssignmentPayload:
    if questions is None:
        questions = [DraftQuestion(id="q1", content="Which book?")]
    return AssignmentPayload(basic_info=BasicInfo(title=title), questions=questions)


@pytest.mark.asyncio
async def test_create_update_publish_load():
    remote = InMemoryAssignmentRemote()

    created = await remote.create(_payload())
    updated = await remote.update(created.assignment_id, _payload(title="Reading log 2"))
    published = await remote.publish(created.assignment_id, _payload(title="Reading log 2"))
    snapshot = await remote.load(created.assignment_id)

    assert updated.assignment_id == created.assignment_id
    assert published.status == AssignmentStatus.PUBLISHED
    assert snapshot.title == "Reading log 2"
    assert snapshot.published_at == published.published_at
    assert snapshot.created_at <= snapshot.updated_at
    assert [name for name, _ in remote.calls] == ["create", "update", "publish", "load"]


@pytest.mark.asyncio
async def test_unknown_assignment_is_404():
    remote = InMemoryAssignmentRemote()

    with pytest.raises(RemoteFailure) as excinfo:
        await remote.load("nope")

    assert excinfo.value.status_code == 404


@pytest.mark.asyncio
async def test_published_assignment_rejects_changes():
    remote = InMemoryAssignmentRemote()
    created = await remote.create(_payload())
    await remote.publish(created.assignment_id, _payload())

    for call in (remote.publish, remote.update):
        with pytest.raises(RemoteFailure) as excinfo:
            await call(created.assignment_id, _payload())
        assert excinfo.value.status_code == 409


@pytest.mark.asyncio
async def test_publish_validation_errors():
    remote = InMemoryAssignmentRemote()
    created = await remote.create(_payload(title=" ", questions=[]))

    with pytest.raises(RemoteFailure) as excinfo:
        await remote.publish(
            created.assignment_id,
            _payload(title=" ", questions=[DraftQuestion(id="q9", content="")]),
        )

    body = excinfo.value.body
    assert excinfo.value.status_code == 422
    assert body["errors"] == [
        {"scope": "assignment", "field": "title", "message": "Title is required"},
        {"scope": "question", "questionId": "q9", "message": "Question content is required"},
    ]


@pytest.mark.asyncio
async def test_queued_failure_is_raised_once():
    remote = InMemoryAssignmentRemote()
    remote.queue_failure("create", TransportFailure("timed-out"))

    with pytest.raises(TransportFailure):
        await remote.create(_payload())
    assert (await remote.create(_payload())).assignment_id
    assert remote.count("create") == 2
