"""Unit tests for AdbDevice.

Tests for the adb device backend with mocked command execution.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from debloatctl.device.adb import AdbDevice
from debloatctl.device.base import CommandFailedError, DeviceUnavailableError
from debloatctl.utils.shell import CommandResult


def _ok(stdout: str = "") -> CommandResult:
    return CommandResult(stdout=stdout, stderr="", returncode=0)


class TestIsAvailable:
    """Tests for AdbDevice.is_available."""

    def test_available_when_device_connected(self) -> None:
        """A device in 'device' state is available."""
        with (
            patch("debloatctl.device.adb.command_exists", return_value=True),
            patch("debloatctl.device.adb.run_command", return_value=_ok("device\n")) as mock_run,
        ):
            assert AdbDevice().is_available() is True

        assert mock_run.call_args[0][0] == ["adb", "get-state"]

    def test_unavailable_without_adb(self) -> None:
        """Missing adb executable means no device."""
        with (
            patch("debloatctl.device.adb.command_exists", return_value=False),
            patch("debloatctl.device.adb.run_command") as mock_run,
        ):
            assert AdbDevice().is_available() is False

        mock_run.assert_not_called()

    def test_unavailable_when_unauthorized(self) -> None:
        """Devices that did not accept the host key are unavailable."""
        result = CommandResult(stdout="", stderr="error: device unauthorized.", returncode=1)
        with (
            patch("debloatctl.device.adb.command_exists", return_value=True),
            patch("debloatctl.device.adb.run_command", return_value=result),
        ):
            assert AdbDevice().is_available() is False

    def test_unavailable_on_timeout(self) -> None:
        """A hanging adb server counts as unavailable."""
        with (
            patch("debloatctl.device.adb.command_exists", return_value=True),
            patch(
                "debloatctl.device.adb.run_command",
                side_effect=subprocess.TimeoutExpired(cmd="adb", timeout=5),
            ),
        ):
            assert AdbDevice().is_available() is False

    def test_serial_is_passed(self) -> None:
        """A configured serial targets that device."""
        with (
            patch("debloatctl.device.adb.command_exists", return_value=True),
            patch("debloatctl.device.adb.run_command", return_value=_ok("device")) as mock_run,
        ):
            AdbDevice(serial="emulator-5554").is_available()

        assert mock_run.call_args[0][0] == ["adb", "-s", "emulator-5554", "get-state"]


class TestListPackages:
    """Tests for package enumeration."""

    @patch("debloatctl.device.adb.run_command")
    def test_list_all_packages(self, mock_run: MagicMock, pm_list_all_output: str) -> None:
        """All system packages are listed, including uninstalled ones."""
        mock_run.return_value = _ok(pm_list_all_output)

        output = AdbDevice(user=10).list_all_packages()

        assert output.splitlines() == [
            "com.google.android.youtube",
            "com.facebook.appmanager",
            "com.miui.analytics",
            "com.android.systemui",
        ]
        args = mock_run.call_args[0][0]
        assert args == ["adb", "shell", "pm", "list", "packages", "-s", "-u", "--user", "10"]

    @patch("debloatctl.device.adb.run_command")
    def test_list_installed_packages(
        self, mock_run: MagicMock, pm_list_installed_output: str
    ) -> None:
        """Installed packages are returned as a set."""
        mock_run.return_value = _ok(pm_list_installed_output)

        installed = AdbDevice().list_installed_packages()

        assert installed == {"com.google.android.youtube", "com.android.systemui"}
        args = mock_run.call_args[0][0]
        assert "-u" not in args
        assert args[-2:] == ["--user", "0"]

    @patch("debloatctl.device.adb.run_command")
    def test_list_failure(self, mock_run: MagicMock) -> None:
        """pm errors raise CommandFailedError."""
        mock_run.return_value = CommandResult(
            stdout="", stderr="Error: user 7 does not exist", returncode=255
        )

        with pytest.raises(CommandFailedError, match="user 7 does not exist"):
            AdbDevice(user=7).list_all_packages()

    @patch("debloatctl.device.adb.run_command")
    def test_no_device(self, mock_run: MagicMock) -> None:
        """adb client errors raise DeviceUnavailableError."""
        mock_run.return_value = CommandResult(
            stdout="", stderr="adb: no devices/emulators found", returncode=1
        )

        with pytest.raises(DeviceUnavailableError, match="Device not reachable"):
            AdbDevice().list_installed_packages()

    @patch("debloatctl.device.adb.run_command")
    def test_adb_missing(self, mock_run: MagicMock) -> None:
        """A missing adb executable raises DeviceUnavailableError."""
        mock_run.side_effect = FileNotFoundError("adb")

        with pytest.raises(DeviceUnavailableError, match="adb executable not found"):
            AdbDevice().list_all_packages()

    @patch("debloatctl.device.adb.run_command")
    def test_timeout(self, mock_run: MagicMock) -> None:
        """Timeouts raise DeviceUnavailableError."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="adb", timeout=2)

        with pytest.raises(DeviceUnavailableError, match="did not respond within 2s"):
            AdbDevice(timeout=2).list_all_packages()


class TestRemoveRestore:
    """Tests for remove and restore."""

    @patch("debloatctl.device.adb.run_command")
    def test_remove_success(self, mock_run: MagicMock) -> None:
        """Removal uses pm uninstall -k for the user."""
        mock_run.return_value = _ok("Success\n")

        AdbDevice().remove("com.miui.analytics")

        args = mock_run.call_args[0][0]
        assert args == [
            "adb",
            "shell",
            "pm",
            "uninstall",
            "-k",
            "--user",
            "0",
            "com.miui.analytics",
        ]

    @patch("debloatctl.device.adb.run_command")
    def test_remove_failure_output(self, mock_run: MagicMock) -> None:
        """pm prints failures on stdout with exit status 0 on some devices."""
        mock_run.return_value = _ok("Failure [not installed for 0]\n")

        with pytest.raises(CommandFailedError, match=r"Failure \[not installed for 0\]"):
            AdbDevice().remove("com.miui.analytics")

    @patch("debloatctl.device.adb.run_command")
    def test_restore_success(self, mock_run: MagicMock) -> None:
        """Restore uses install-existing for the user."""
        mock_run.return_value = _ok(
            "Package com.miui.analytics installed for user: 0\n"
        )

        AdbDevice().restore("com.miui.analytics")

        args = mock_run.call_args[0][0]
        assert args[2:5] == ["cmd", "package", "install-existing"]
        assert args[-1] == "com.miui.analytics"

    @patch("debloatctl.device.adb.run_command")
    def test_restore_failure(self, mock_run: MagicMock) -> None:
        """Missing confirmation means the restore failed."""
        mock_run.return_value = CommandResult(
            stdout="Package com.x doesn't exist\n", stderr="", returncode=1
        )

        with pytest.raises(CommandFailedError, match="Failed to restore com.x"):
            AdbDevice().restore("com.x")

    @patch("debloatctl.device.adb.run_command")
    def test_device_disconnected_during_remove(self, mock_run: MagicMock) -> None:
        """Losing the device mid-session raises DeviceUnavailableError."""
        mock_run.return_value = CommandResult(
            stdout="", stderr="error: device offline", returncode=1
        )

        with pytest.raises(DeviceUnavailableError):
            AdbDevice().remove("com.miui.analytics")

    @patch("debloatctl.device.adb.run_command")
    def test_unknown_serial_is_unreachable(self, mock_run: MagicMock) -> None:
        """adb naming a missing serial means the device is gone."""
        mock_run.return_value = CommandResult(
            stdout="", stderr="adb: device 'R58M1234' not found", returncode=1
        )

        with pytest.raises(DeviceUnavailableError, match="R58M1234"):
            AdbDevice(serial="R58M1234").remove("com.miui.analytics")

    @patch("debloatctl.device.adb.run_command")
    def test_missing_remote_command_is_command_failure(self, mock_run: MagicMock) -> None:
        """A shell 'not found' on an old Android build is a failed command."""
        mock_run.return_value = CommandResult(
            stdout="", stderr="/system/bin/sh: cmd: not found", returncode=127
        )

        with pytest.raises(CommandFailedError, match="cmd: not found"):
            AdbDevice().restore("com.miui.analytics")

    @patch("debloatctl.device.adb.run_command")
    def test_dry_run_does_not_call_adb(self, mock_run: MagicMock) -> None:
        """Dry-run mode only logs."""
        device = AdbDevice(dry_run=True)

        device.remove("com.miui.analytics")
        device.restore("com.miui.analytics")

        assert device.dry_run is True
        mock_run.assert_not_called()
