import subprocess
from unittest.mock import MagicMock, patch

import pytest

from printreset.errors import CommandError
from printreset.powershell import POWERSHELL, CommandRunner, quote


def _completed(returncode=0, stdout="", stderr=""):
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


def test_quote_doubles_single_quotes():
    assert quote("Bob's Printer") == "'Bob''s Printer'"


@patch("printreset.powershell.subprocess.run")
def test_run_returns_stripped_stdout(mock_run):
    mock_run.return_value = _completed(stdout="  done \r\n")

    assert CommandRunner(timeout=5).run(["reg.exe", "query", "HKCU"]) == "done"
    mock_run.assert_called_once_with(
        ["reg.exe", "query", "HKCU"], capture_output=True, text=True, timeout=5
    )


@patch("printreset.powershell.subprocess.run")
def test_run_raises_on_nonzero_exit(mock_run):
    mock_run.return_value = _completed(returncode=1, stderr="Access is denied.")

    with pytest.raises(CommandError) as excinfo:
        CommandRunner().run(["pnputil.exe", "/delete-driver", "oem1.inf"])

    assert excinfo.value.returncode == 1
    assert "Access is denied." in str(excinfo.value)


@patch("printreset.powershell.subprocess.run", side_effect=FileNotFoundError("no such file"))
def test_run_wraps_launch_failure(mock_run):
    with pytest.raises(CommandError, match="no such file"):
        CommandRunner().run(["powershell.exe"])


@patch(
    "printreset.powershell.subprocess.run",
    side_effect=subprocess.TimeoutExpired(cmd="powershell.exe", timeout=10),
)
def test_run_wraps_timeout(mock_run):
    with pytest.raises(CommandError, match="timed out"):
        CommandRunner(timeout=10).run(["powershell.exe"])


@patch("printreset.powershell.subprocess.run")
def test_powershell_stops_on_errors(mock_run):
    mock_run.return_value = _completed()

    CommandRunner().powershell("Get-Printer")

    command = mock_run.call_args.args[0]
    assert command[0] == POWERSHELL
    assert "-NoProfile" in command
    assert command[-1] == "$ErrorActionPreference = 'Stop'; Get-Printer"


@patch("printreset.powershell.subprocess.run")
def test_powershell_json_wraps_single_object(mock_run):
    mock_run.return_value = _completed(stdout='{"Name": "Office"}')

    rows = CommandRunner().powershell_json("Get-Printer")

    assert rows == [{"Name": "Office"}]
    assert mock_run.call_args.args[0][-1].endswith("Get-Printer | ConvertTo-Json -Compress")


@patch("printreset.powershell.subprocess.run")
def test_powershell_json_empty_output(mock_run):
    mock_run.return_value = _completed(stdout="")

    assert CommandRunner().powershell_json("Get-Printer") == []


@patch("printreset.powershell.subprocess.run")
def test_powershell_json_rejects_garbage(mock_run):
    mock_run.return_value = _completed(stdout="not json")

    with pytest.raises(CommandError, match="unparseable"):
        CommandRunner().powershell_json("Get-Printer")
