"""Fixtures for CLI command tests."""

# pyright: reportPrivateUsage=false

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from fakes import FakeDevice


@pytest.fixture
def cli_device(fake_device: FakeDevice) -> Iterator[FakeDevice]:
    """Make the CLI talk to the fake device instead of adb.

    The --dry-run flag of the command is forwarded to the fake.
    """

    def factory(**kwargs: object) -> FakeDevice:
        fake_device._dry_run = bool(kwargs.get("dry_run", False))
        return fake_device

    with patch("debloatctl.cli.types.AdbDevice", side_effect=factory):
        yield fake_device


@pytest.fixture
def no_device() -> Iterator[MagicMock]:
    """Simulate adb without a connected device."""
    with patch("debloatctl.cli.types.AdbDevice") as mock_cls:
        mock_cls.return_value.is_available.return_value = False
        yield mock_cls
