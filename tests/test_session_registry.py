"""Tests for the per-persona conversation registry."""

import asyncio

import pytest

from services.chat.personas import COACH_SYSTEM_INSTRUCTION, INSTRUCTIONAL_SYSTEM_INSTRUCTION, Persona


@pytest.mark.asyncio
async def test_get_or_create_is_idempotent(registry, provider):
    first = await registry.get_or_create(Persona.COACH)
    second = await registry.get_or_create(Persona.COACH)

    assert first is second
    assert len(provider.created) == 1
    assert first.system_instruction == COACH_SYSTEM_INSTRUCTION
    assert first.model == "chat-test"


@pytest.mark.asyncio
async def test_personas_get_separate_conversations(registry, provider):
    coach = await registry.get_or_create(Persona.COACH)
    instructor = await registry.get_or_create(Persona.INSTRUCTOR)

    assert coach is not instructor
    assert instructor.system_instruction == INSTRUCTIONAL_SYSTEM_INSTRUCTION
    assert set(registry.active()) == {Persona.COACH, Persona.INSTRUCTOR}


@pytest.mark.asyncio
async def test_failed_creation_is_not_cached(registry, provider):
    provider.fail_create = True
    with pytest.raises(ConnectionError):
        await registry.get_or_create(Persona.COACH)
    assert not registry.has(Persona.COACH)

    provider.fail_create = False
    handle = await registry.get_or_create(Persona.COACH)

    assert registry.has(Persona.COACH)
    assert provider.created == [handle]


@pytest.mark.asyncio
async def test_concurrent_first_use_creates_once(registry, provider):
    handles = await asyncio.gather(*(registry.get_or_create(Persona.INSTRUCTOR) for _ in range(5)))

    assert len(provider.created) == 1
    assert all(handle is handles[0] for handle in handles)


def test_unknown_persona_config_raises(provider):
    from services.chat.session_registry import SessionRegistry

    empty = SessionRegistry(provider, {})
    with pytest.raises(KeyError):
        empty.config(Persona.COACH)


@pytest.mark.asyncio
async def test_active_lists_only_created_personas(registry):
    assert list(registry.active()) == []

    await registry.get_or_create(Persona.INSTRUCTOR)

    assert list(registry.active()) == [Persona.INSTRUCTOR]
    assert registry.has(Persona.INSTRUCTOR)
    assert not registry.has(Persona.COACH)
