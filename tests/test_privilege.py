from unittest.mock import MagicMock, patch

from printreset.privilege import is_admin


@patch("printreset.privilege.platform.system", return_value="Linux")
def test_never_admin_off_windows(mock_system):
    assert is_admin() is False


@patch("printreset.privilege.platform.system", return_value="Windows")
def test_uses_is_user_an_admin(mock_system):
    windll = MagicMock()
    windll.shell32.IsUserAnAdmin.return_value = 1
    with patch("printreset.privilege.ctypes.windll", windll, create=True):
        assert is_admin() is True

    windll.shell32.IsUserAnAdmin.return_value = 0
    with patch("printreset.privilege.ctypes.windll", windll, create=True):
        assert is_admin() is False


@patch("printreset.privilege.platform.system", return_value="Windows")
def test_missing_shell32_means_not_admin(mock_system):
    windll = MagicMock()
    windll.shell32.IsUserAnAdmin.side_effect = OSError("unavailable")
    with patch("printreset.privilege.ctypes.windll", windll, create=True):
        assert is_admin() is False
