"""Example showing a draft being saved, fixed and published."""

import asyncio

from assignflow import AssignmentActions, PublishConfirmationGate, get_remote
from assignflow.contracts import AssignmentPayload, BasicInfo, DraftQuestion
from assignflow.form_validation import validate_for_publish


async def main():
    """Save a draft, publish it and show how server errors come back."""
    # Pass None to pick the backend from ASSIGNFLOW_REMOTE or assignflow.yaml
    remote = get_remote("inmemory")
    await remote.connect()

    actions = AssignmentActions(
        remote,
        on_save_draft_success=lambda r: print(f"💾 Draft saved: {r.assignment_id}"),
        on_publish_success=lambda r: print(f"🚀 Published at {r.published_at}"),
        on_error=lambda e: print(f"❌ {e.kind.value}: {e.message}"),
    )
    gate = PublishConfirmationGate(actions)

    payload = AssignmentPayload(
        basic_info=BasicInfo(title="Fractions homework", description="Chapter 3"),
        class_id="math-5b",
        questions=[DraftQuestion(id="q1", content="")],
    )
    await actions.save_draft(payload)

    # The service rejects the empty question
    gate.request_open(validate_for_publish(payload).is_valid)
    await gate.confirm(payload)
    print(f"📋 Question errors: {actions.question_errors()}")

    actions.clear_field_error(question_id="q1")
    payload.questions[0].content = "What is 3/4 + 1/8?"
    await gate.confirm(payload)
    print(f"🔒 Editable: {actions.can_edit}")

    gate.detach()
    await remote.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
