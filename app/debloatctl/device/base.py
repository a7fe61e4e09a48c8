"""Abstract base class for device inventory access.

This module defines the DeviceInventory interface that every device
backend must implement, and the errors it raises.
"""

from abc import ABC, abstractmethod


class DeviceError(Exception):
    """Base exception for device operation failures."""


class DeviceUnavailableError(DeviceError):
    """Raised when the device cannot be reached (missing client, offline, unauthorized)."""


class CommandFailedError(DeviceError):
    """Raised when the device rejects a command (e.g., unknown package)."""


class DeviceInventory(ABC):
    """Abstract base class for device package access.

    A device backend enumerates packages and executes remove/restore
    actions. Enumerations return raw identifiers; classification and
    merging are done by the inventory builder.

    Attributes:
        dry_run: If True, remove/restore only log what they would do.

    Example:
        >>> device = AdbDevice()
        >>> if device.is_available():
        ...     installed = device.list_installed_packages()
        ...     device.remove("com.example.bloat")
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the device backend.

        Args:
            dry_run: If True, only simulate remove/restore.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if the backend is in dry-run mode."""
        return self._dry_run

    @abstractmethod
    def is_available(self) -> bool:
        """Check if a device is connected and ready.

        Returns:
            True if commands can be sent to the device.
        """

    @abstractmethod
    def list_all_packages(self) -> str:
        """List every package known to the device, including uninstalled ones.

        Returns:
            Newline-separated package identifiers.

        Raises:
            DeviceError: If the enumeration fails.
        """

    @abstractmethod
    def list_installed_packages(self) -> set[str]:
        """List the packages currently installed for the device user.

        Returns:
            Set of package identifiers.

        Raises:
            DeviceError: If the enumeration fails.
        """

    @abstractmethod
    def remove(self, package: str) -> None:
        """Uninstall a package for the device user.

        Args:
            package: Package identifier.

        Raises:
            DeviceUnavailableError: If the device cannot be reached.
            CommandFailedError: If the device rejects the removal.
        """

    @abstractmethod
    def restore(self, package: str) -> None:
        """Reinstall a previously removed package for the device user.

        Args:
            package: Package identifier.

        Raises:
            DeviceUnavailableError: If the device cannot be reached.
            CommandFailedError: If the device rejects the restore.
        """
