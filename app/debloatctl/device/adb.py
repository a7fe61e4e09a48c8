"""ADB device implementation.

Enumerates and removes/restores packages on an Android device through
the ``adb`` client and the on-device package manager (``pm``).
"""

import logging
import re
import subprocess

from debloatctl.device.base import (
    CommandFailedError,
    DeviceInventory,
    DeviceUnavailableError,
)
from debloatctl.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)

# Prefix of every line printed by `pm list packages`
_PACKAGE_PREFIX = "package:"

# adb client messages meaning the device itself is not reachable
_UNREACHABLE_MARKERS: tuple[str, ...] = (
    "no devices/emulators found",
    "device offline",
    "unauthorized",
    "cannot connect",
)

# `adb -s SERIAL` naming a device that is not attached
_SERIAL_NOT_FOUND = re.compile(r"\bdevice '[^']*' not found")


class AdbDevice(DeviceInventory):
    """Device backend talking to a phone over adb.

    Packages are removed with ``pm uninstall -k --user N`` which keeps
    the APK on the system partition, so every removal can be undone with
    ``cmd package install-existing``.

    Attributes:
        adb_path: adb executable name or path.
        serial: Device serial to target (None uses the only connected device).
        user: Android user id the actions apply to.
        timeout: Per-command timeout in seconds.
        dry_run: If True, only log remove/restore without executing.
    """

    def __init__(
        self,
        adb_path: str = "adb",
        serial: str | None = None,
        user: int = 0,
        timeout: float = 60.0,
        dry_run: bool = False,
    ) -> None:
        super().__init__(dry_run=dry_run)
        self.adb_path = adb_path
        self.serial = serial
        self.user = user
        self.timeout = timeout

    def is_available(self) -> bool:
        """Check that adb exists and the target device is in 'device' state."""
        if not command_exists(self.adb_path):
            return False
        try:
            result = run_command([*self._base_args(), "get-state"], timeout=self.timeout)
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return False
        return result.success and result.stdout.strip() == "device"

    def list_all_packages(self) -> str:
        """List system packages including those uninstalled for the user.

        Returns:
            Newline-separated package identifiers.

        Raises:
            DeviceUnavailableError: If the device cannot be reached.
            CommandFailedError: If pm fails.
        """
        result = self._shell(["pm", "list", "packages", "-s", "-u", "--user", str(self.user)])
        if not result.success:
            msg = f"pm list packages failed: {result.output or 'no output'}"
            raise CommandFailedError(msg)
        return "\n".join(self._parse_pm_list(result.stdout))

    def list_installed_packages(self) -> set[str]:
        """List system packages currently installed for the user.

        Returns:
            Set of package identifiers.

        Raises:
            DeviceUnavailableError: If the device cannot be reached.
            CommandFailedError: If pm fails.
        """
        result = self._shell(["pm", "list", "packages", "-s", "--user", str(self.user)])
        if not result.success:
            msg = f"pm list packages failed: {result.output or 'no output'}"
            raise CommandFailedError(msg)
        return set(self._parse_pm_list(result.stdout))

    def remove(self, package: str) -> None:
        """Uninstall a package for the user, keeping its data and APK.

        Raises:
            DeviceUnavailableError: If the device cannot be reached.
            CommandFailedError: If pm does not report success.
        """
        if self.dry_run:
            logger.info("Dry-run: Would remove %s", package)
            return

        logger.info("Removing package: %s", package)
        result = self._shell(["pm", "uninstall", "-k", "--user", str(self.user), package])
        if not (result.success and "Success" in result.stdout):
            msg = f"Failed to remove {package}: {result.output or 'no output'}"
            raise CommandFailedError(msg)

    def restore(self, package: str) -> None:
        """Reinstall a package previously removed for the user.

        Raises:
            DeviceUnavailableError: If the device cannot be reached.
            CommandFailedError: If the package manager does not confirm the install.
        """
        if self.dry_run:
            logger.info("Dry-run: Would restore %s", package)
            return

        logger.info("Restoring package: %s", package)
        result = self._shell(
            ["cmd", "package", "install-existing", "--user", str(self.user), package]
        )
        if not (result.success and "installed for user" in result.stdout):
            msg = f"Failed to restore {package}: {result.output or 'no output'}"
            raise CommandFailedError(msg)

    def _base_args(self) -> list[str]:
        """Build the adb invocation prefix including the device serial."""
        args = [self.adb_path]
        if self.serial:
            args.extend(["-s", self.serial])
        return args

    def _shell(self, command: list[str]) -> CommandResult:
        """Run a command in the device shell.

        Args:
            command: Remote command and arguments.

        Returns:
            CommandResult of the adb invocation.

        Raises:
            DeviceUnavailableError: If adb is missing, times out, or reports
                that the device cannot be reached.
        """
        args = [*self._base_args(), "shell", *command]
        logger.debug("Running: %s", " ".join(args))

        try:
            result = run_command(args, timeout=self.timeout)
        except FileNotFoundError as e:
            msg = f"adb executable not found: {self.adb_path}"
            raise DeviceUnavailableError(msg) from e
        except subprocess.TimeoutExpired as e:
            msg = f"adb did not respond within {self.timeout:g}s"
            raise DeviceUnavailableError(msg) from e

        # adb client errors only ever appear on stderr
        stderr = result.stderr.strip().lower()
        unreachable = any(marker in stderr for marker in _UNREACHABLE_MARKERS) or bool(
            _SERIAL_NOT_FOUND.search(stderr)
        )
        if not result.success and unreachable:
            msg = f"Device not reachable: {result.stderr.strip()}"
            raise DeviceUnavailableError(msg)

        return result

    @staticmethod
    def _parse_pm_list(output: str) -> list[str]:
        """Extract identifiers from `pm list packages` output.

        Args:
            output: Raw output, one 'package:<name>' per line.

        Returns:
            Package identifiers in output order.
        """
        packages: list[str] = []
        for line in output.splitlines():
            line = line.strip()
            if line.startswith(_PACKAGE_PREFIX):
                line = line[len(_PACKAGE_PREFIX) :]
            if line:
                packages.append(line)
        return packages
