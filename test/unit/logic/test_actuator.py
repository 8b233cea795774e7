import logging
from typing import Any, Callable

import pytest
from _pytest.logging import LogCaptureFixture
from pytest_mock import MockFixture

from spindown.common.config import Config
from spindown.common.exceptions import ExternalCommandError
from spindown.hardware.drive import Drive, ProtocolFamily
from spindown.logic.actuator import SpindownActuator, SpindownResult


@pytest.mark.asyncio
async def test_spin_down_spinning_drive(
    make_config: Callable[..., Config], fake_hdparm: Any, caplog: LogCaptureFixture
) -> None:
    hdparm = fake_hdparm()
    with caplog.at_level(logging.INFO):
        result = await SpindownActuator(make_config(), hdparm).spin_down(Drive("sda"))
    assert result is SpindownResult.SPUN_DOWN
    assert hdparm.spin_downs == ["sda"]
    assert "Spun down idle drive: sda" in caplog.text


@pytest.mark.asyncio
async def test_already_spun_down(
    make_config: Callable[..., Config], fake_hdparm: Any, caplog: LogCaptureFixture
) -> None:
    hdparm = fake_hdparm(stopped=["sda"])
    with caplog.at_level(logging.DEBUG):
        result = await SpindownActuator(make_config(), hdparm).spin_down(Drive("sda"))
    assert result is SpindownResult.ALREADY_STOPPED
    assert hdparm.spin_downs == []
    assert "Drive is already spun down: sda" in caplog.text
    assert "Spun down idle drive" not in caplog.text


@pytest.mark.asyncio
async def test_second_call_is_a_noop(make_config: Callable[..., Config], fake_hdparm: Any) -> None:
    hdparm = fake_hdparm()
    actuator = SpindownActuator(make_config(), hdparm)
    assert await actuator.spin_down(Drive("sda")) is SpindownResult.SPUN_DOWN
    assert await actuator.spin_down(Drive("sda")) is SpindownResult.ALREADY_STOPPED
    assert hdparm.spin_downs == ["sda"]
    assert hdparm.queries == ["sda", "sda"]


@pytest.mark.asyncio
async def test_dry_run_logs_without_spinning_down(
    make_config: Callable[..., Config], fake_hdparm: Any, caplog: LogCaptureFixture
) -> None:
    hdparm = fake_hdparm()
    with caplog.at_level(logging.INFO):
        result = await SpindownActuator(make_config(dry_run=True), hdparm).spin_down(Drive("sda"))
    assert result is SpindownResult.DRY_RUN
    assert hdparm.spin_downs == []
    assert "Spun down idle drive: sda" in caplog.text


@pytest.mark.asyncio
@pytest.mark.parametrize("protocol", [ProtocolFamily.SCSI, ProtocolFamily.UNKNOWN])
@pytest.mark.parametrize("dry_run", [True, False])
async def test_unsupported_protocol(
    make_config: Callable[..., Config],
    fake_hdparm: Any,
    caplog: LogCaptureFixture,
    protocol: ProtocolFamily,
    dry_run: bool,
) -> None:
    hdparm = fake_hdparm()
    with caplog.at_level(logging.WARNING):
        result = await SpindownActuator(make_config(dry_run=dry_run), hdparm).spin_down(Drive("sdc", protocol))
    assert result is SpindownResult.UNSUPPORTED
    assert hdparm.queries == []
    assert hdparm.spin_downs == []
    assert "Cannot spin down sdc" in caplog.text


@pytest.mark.asyncio
async def test_query_failure_propagates(make_config: Callable[..., Config], mocker: MockFixture) -> None:
    power = mocker.Mock()
    power.is_spinning = mocker.AsyncMock(side_effect=ExternalCommandError("hdparm exited with 2"))
    power.spin_down = mocker.AsyncMock()
    with pytest.raises(ExternalCommandError):
        await SpindownActuator(make_config(), power).spin_down(Drive("sda"))
    power.spin_down.assert_not_awaited()
