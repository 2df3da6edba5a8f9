from __future__ import annotations

import asyncio
import logging

import pytest
from _fakes import FakeTransport

from pyaida64.accessory import GpuFanAccessory
from pyaida64.config import AidaConfig
from pyaida64.exceptions import AidaFetchError, FetchErrorKind
from pyaida64.models.state import AccessoryState
from pyaida64.models.telemetry import TelemetrySnapshot
from pyaida64.poller import PollerState, PollOutcome
from pyaida64.state.store import StateStore


@pytest.mark.asyncio
async def test_handlers_answer_from_defaults_before_any_poll(config: AidaConfig) -> None:
    accessory = GpuFanAccessory(config, transport=FakeTransport())

    assert await accessory.get_on() is True
    assert await accessory.get_rotation_speed() == 0.0
    assert await accessory.get_gpu_temperature() == 0.0


@pytest.mark.asyncio
async def test_handlers_reflect_polled_values(config: AidaConfig) -> None:
    transport = FakeTransport('{"DGPU1":{"value":42},"TGPU1":{"value":61}}')

    async with GpuFanAccessory(config, transport=transport) as accessory:
        await asyncio.wait_for(transport.fetched.wait(), timeout=1.0)
        await asyncio.sleep(0)

        assert await accessory.get_on() is True
        assert await accessory.get_rotation_speed() == 42
        assert await accessory.get_gpu_temperature() == 61


@pytest.mark.asyncio
async def test_rotation_speed_is_clamped_for_the_host(config: AidaConfig) -> None:
    store = StateStore()
    accessory = GpuFanAccessory(config, store=store, transport=FakeTransport())

    store.write(TelemetrySnapshot(rotation_speed=130, temperature_celsius=70))
    assert await accessory.get_rotation_speed() == 100.0
    # The store itself keeps the reported value.
    assert store.read().rotation_speed == 130.0

    store.write(TelemetrySnapshot(rotation_speed=-5, temperature_celsius=70))
    assert await accessory.get_rotation_speed() == 0.0
    assert await accessory.get_on() is False


@pytest.mark.asyncio
async def test_setters_only_log(config: AidaConfig, caplog: pytest.LogCaptureFixture) -> None:
    store = StateStore()
    accessory = GpuFanAccessory(config, store=store, transport=FakeTransport())
    before = store.read()

    with caplog.at_level(logging.DEBUG, logger="pyaida64.accessory"):
        await accessory.set_on(False)
        await accessory.set_rotation_speed(15)

    assert store.read() is before
    messages = [r.getMessage() for r in caplog.records if r.name == "pyaida64.accessory"]
    assert any("Set Characteristic On -> False" in m for m in messages)
    assert any("Set Characteristic RotationSpeed -> 15" in m for m in messages)


@pytest.mark.asyncio
async def test_unreachable_endpoint_keeps_last_reading(config: AidaConfig) -> None:
    store = StateStore(initial=AccessoryState(rotation_speed=33, temperature_celsius=48))
    transport = FakeTransport(AidaFetchError("refused", kind=FetchErrorKind.UNREACHABLE))

    async with GpuFanAccessory(config, store=store, transport=transport) as accessory:
        await asyncio.wait_for(transport.fetched.wait(), timeout=1.0)
        await asyncio.sleep(0)

        assert await accessory.get_rotation_speed() == 33
        assert await accessory.get_gpu_temperature() == 48


@pytest.mark.asyncio
async def test_construct_then_teardown_polls_exactly_once(config: AidaConfig) -> None:
    transport = FakeTransport()
    accessory = GpuFanAccessory(config, transport=transport)

    accessory.start()
    await asyncio.wait_for(transport.fetched.wait(), timeout=1.0)
    await accessory.close()
    await asyncio.sleep(0.05)

    assert len(transport.calls) == 1
    assert accessory.poller.state is PollerState.STOPPED
    assert accessory.poller.is_running is False


@pytest.mark.asyncio
async def test_accessory_information_uses_configured_name() -> None:
    config = AidaConfig(device_name="Desk GPU")
    accessory = GpuFanAccessory(config, transport=FakeTransport())

    assert accessory.information.name == "Desk GPU"
    assert accessory.information.manufacturer == "Jiayin"


@pytest.mark.asyncio
async def test_default_transport_is_owned_and_closed(config: AidaConfig) -> None:
    accessory = GpuFanAccessory(config)
    owned = accessory._owned_client  # noqa: SLF001
    assert owned is not None

    await accessory.close()

    assert accessory._owned_client is None  # noqa: SLF001


@pytest.mark.asyncio
async def test_immediate_teardown_still_makes_startup_poll(config: AidaConfig) -> None:
    transport = FakeTransport()

    async with GpuFanAccessory(config, transport=transport) as accessory:
        pass

    assert len(transport.calls) == 1
    assert accessory.poller.stats.attempts == 1
    assert accessory.poller.state is PollerState.STOPPED


@pytest.mark.asyncio
async def test_poll_after_close_does_not_reach_transport(config: AidaConfig) -> None:
    transport = FakeTransport()
    accessory = GpuFanAccessory(config, transport=transport)
    accessory.start()
    await accessory.close()

    outcome = await accessory.poller.poll_once()

    assert outcome is PollOutcome.SKIPPED
    assert len(transport.calls) == 1
    assert accessory.poller.stats.attempts == 1


@pytest.mark.asyncio
async def test_owned_client_is_not_reopened_after_close(config: AidaConfig) -> None:
    accessory = GpuFanAccessory(config)
    client = accessory._owned_client  # noqa: SLF001
    assert client is not None

    await accessory.close()
    outcome = await accessory.poller.poll_once()

    assert outcome is PollOutcome.SKIPPED
    assert client.closed is True
    assert client._http is None  # noqa: SLF001
