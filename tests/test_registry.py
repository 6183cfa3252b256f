from datetime import datetime
from unittest.mock import MagicMock

import pytest

from printreset.errors import CommandError
from printreset.powershell import CommandRunner
from printreset.registry import RegistryCleaner, backup_filename, provider_path


@pytest.fixture
def runner():
    return MagicMock(spec=CommandRunner)


def test_provider_path_expands_hive():
    assert provider_path(r"HKCU\Printers\Connections") == r"Registry::HKEY_CURRENT_USER\Printers\Connections"
    assert provider_path("HKLM") == "Registry::HKEY_LOCAL_MACHINE"


def test_backup_filename_is_timestamped():
    name = backup_filename(r"HKCU\Printers\DevModes2", datetime(2024, 3, 5, 14, 7, 9))
    assert name == "printreset_HKCU_Printers_DevModes2_20240305_140709.reg"


@pytest.mark.parametrize("output,expected", [("True", True), ("False", False)])
def test_exists(runner, output, expected):
    runner.powershell.return_value = output

    assert RegistryCleaner(runner).exists(r"HKCU\Printers\Connections") is expected
    assert "Test-Path -LiteralPath 'Registry::HKEY_CURRENT_USER\\Printers\\Connections'" in (
        runner.powershell.call_args.args[0]
    )


def test_export_writes_reg_file(runner, tmp_path):
    when = datetime(2024, 1, 2, 3, 4, 5)
    backup_dir = tmp_path / "backups"

    backup = RegistryCleaner(runner).export(r"HKCU\Printers\Connections", backup_dir, when)

    expected = backup_dir / "printreset_HKCU_Printers_Connections_20240102_030405.reg"
    assert backup.file_path == expected
    assert backup.key_path == r"HKCU\Printers\Connections"
    assert backup_dir.is_dir()
    runner.run.assert_called_once_with(
        ["reg.exe", "export", r"HKCU\Printers\Connections", str(expected), "/y"]
    )


def test_export_failure_propagates(runner, tmp_path):
    runner.run.side_effect = CommandError(["reg.exe"], 1, "ERROR: Access is denied.")

    with pytest.raises(CommandError):
        RegistryCleaner(runner).export(r"HKCU\Printers\Connections", tmp_path)


def test_clear_children_keeps_key(runner):
    RegistryCleaner(runner).clear_children(r"HKCU\Printers\DevModes2")

    script = runner.powershell.call_args.args[0]
    assert "$key = 'Registry::HKEY_CURRENT_USER\\Printers\\DevModes2'" in script
    assert "Get-ChildItem -LiteralPath $key | Remove-Item -Recurse -Force" in script
    assert "Remove-ItemProperty -LiteralPath $key" in script
    # The key itself is never passed to Remove-Item
    assert "Remove-Item -LiteralPath $key" not in script
