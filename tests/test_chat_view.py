"""Tests for mounted chat views and the view store."""

import asyncio

import pytest

from services.chat.personas import COACH_GREETING, INSTRUCTOR_GREETING, Persona


def test_view_starts_with_greeting(view_store):
    coach = view_store.create(Persona.COACH)
    instructor = view_store.create(Persona.INSTRUCTOR)

    assert [turn.text for turn in coach.transcript] == [COACH_GREETING]
    assert [turn.text for turn in instructor.transcript] == [INSTRUCTOR_GREETING]
    assert coach.view_id != instructor.view_id
    assert len(view_store) == 2


def test_instructor_rejects_attachments(view_store, jpeg_ref):
    view = view_store.create(Persona.INSTRUCTOR)

    with pytest.raises(ValueError):
        view.select_attachment(jpeg_ref)
    assert view.pending_attachment is None


def test_clear_attachment(view_store, jpeg_ref):
    view = view_store.create(Persona.COACH)
    view.select_attachment(jpeg_ref)
    assert view.to_dict()["pending_attachment"]["filename"] == "backswing.jpg"

    view.clear_attachment()

    assert view.pending_attachment is None


@pytest.mark.asyncio
async def test_accepted_send_releases_attachment(view_store, provider, jpeg_ref):
    view = view_store.create(Persona.COACH)
    view.select_attachment(jpeg_ref)

    task = view.send("How's my takeaway?")

    assert task is not None
    assert view.pending_attachment is None
    await task
    assert view.transcript[1].attachment is jpeg_ref
    assert len(provider.multimodal_calls) == 1


@pytest.mark.asyncio
async def test_rejected_send_keeps_attachment(view_store, provider, jpeg_ref):
    provider.gate = asyncio.Event()
    view = view_store.create(Persona.COACH)
    first = view.send("Driver advice?")
    view.select_attachment(jpeg_ref)

    assert view.send("And this swing?") is None
    assert view.pending_attachment is jpeg_ref

    provider.gate.set()
    await first
    assert not view.busy


@pytest.mark.asyncio
async def test_views_share_persona_conversation(view_store, provider):
    first = view_store.create(Persona.COACH)
    second = view_store.create(Persona.COACH)

    await first.send("one")
    await second.send("two")

    assert len(provider.created) == 1
    assert len(first.transcript) == 3
    assert len(second.transcript) == 3


def test_close_discards_view(view_store):
    view = view_store.create(Persona.COACH)

    view_store.close(view.view_id)

    with pytest.raises(KeyError):
        view_store.get(view.view_id)
    with pytest.raises(KeyError):
        view_store.close(view.view_id)
