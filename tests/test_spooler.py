from unittest.mock import MagicMock

import pytest

from printreset.errors import CommandError, SpoolerError
from printreset.powershell import CommandRunner
from printreset.spooler import SpoolerService


@pytest.fixture
def runner():
    return MagicMock(spec=CommandRunner)


def test_stop_and_start_use_service_cmdlets(runner):
    spooler = SpoolerService("Spooler", runner)

    spooler.stop()
    spooler.start()

    scripts = [c.args[0] for c in runner.powershell.call_args_list]
    assert scripts == ["Stop-Service -Name 'Spooler' -Force", "Start-Service -Name 'Spooler'"]


def test_stop_failure_is_spooler_error(runner):
    runner.powershell.side_effect = CommandError(["powershell.exe"], 1, "Cannot stop service")

    with pytest.raises(SpoolerError, match="Failed to stop Spooler"):
        SpoolerService("Spooler", runner).stop()


def test_start_failure_is_spooler_error(runner):
    runner.powershell.side_effect = CommandError(["powershell.exe"], 1, "Cannot start service")

    with pytest.raises(SpoolerError, match="Failed to start Spooler"):
        SpoolerService("Spooler", runner).start()


def test_ensure_running_when_already_running(runner):
    runner.powershell.return_value = "Running"

    assert SpoolerService("Spooler", runner).ensure_running() is True
    runner.powershell.assert_called_once()


def test_ensure_running_starts_stopped_service(runner):
    runner.powershell.side_effect = ["Stopped", ""]

    assert SpoolerService("Spooler", runner).ensure_running() is True
    assert runner.powershell.call_args.args[0] == "Start-Service -Name 'Spooler'"


def test_ensure_running_never_raises(runner):
    runner.powershell.side_effect = ["Stopped", CommandError(["powershell.exe"], 1, "boom")]

    assert SpoolerService("Spooler", runner).ensure_running() is False
