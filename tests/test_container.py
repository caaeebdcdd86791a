"""Tests for container wiring."""

import asyncio

from rope_fitness.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.workout_service is not None
    assert container.weight_service is not None
    assert container.chat_service.client is not None
    asyncio.run(container.close_resources())


def test_build_container_without_openai_key(settings) -> None:
    settings.openai_api_key = "  "
    container = build_container(settings)
    assert container.chat_service.client is None
    asyncio.run(container.close_resources())
