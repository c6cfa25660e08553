"""Shared fixtures for probe unit tests."""

import logging
from typing import List, Sequence

import pytest

from probe.core.config import ProbeConfig
from probe.core.logger import LOGGER_NAME

UBUNTU_OS_RELEASE = '''PRETTY_NAME="Ubuntu 22.04.4 LTS"
NAME="Ubuntu"
VERSION_ID="22.04"
VERSION="22.04.4 LTS (Jammy Jellyfish)"
ID=ubuntu
ID_LIKE=debian
'''

ROCKY_OS_RELEASE = '''NAME="Rocky Linux"
VERSION="9.3 (Blue Onyx)"
ID="rocky"
ID_LIKE="rhel centos fedora"
VERSION_ID="9.3"
'''


class FakeCommandRunner:
    """Scripted replacement for the package query capability."""

    def __init__(self, output: bytes = b"", error: Exception = None):
        self.output = output
        self.error = error
        self.calls: List[List[str]] = []

    def __call__(self, command: Sequence[str]) -> bytes:
        self.calls.append(list(command))
        if self.error is not None:
            raise self.error
        return self.output


class FakeDescriptorReader:
    """Scripted replacement for the os-release reader."""

    def __init__(self, content: str = UBUNTU_OS_RELEASE, error: Exception = None):
        self.content = content
        self.error = error
        self.paths: List[str] = []

    def __call__(self, path: str) -> str:
        self.paths.append(path)
        if self.error is not None:
            raise self.error
        return self.content


class LoggerStub:
    """Stands in for ProbeLogger, handing out a logger that caplog can see."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def get_logger(self) -> logging.Logger:
        return self.logger


@pytest.fixture
def logger() -> logging.Logger:
    """Plain propagating logger for collectors."""
    test_logger = logging.getLogger("tests.probe")
    test_logger.setLevel(logging.DEBUG)
    return test_logger


@pytest.fixture
def probe_logger(logger: logging.Logger) -> LoggerStub:
    return LoggerStub(logger)


@pytest.fixture
def probe_config(tmp_path) -> ProbeConfig:
    """Default configuration with the log file kept inside tmp_path."""
    config = ProbeConfig(str(tmp_path / "absent.ini"))
    config.set('logging', 'log_file', str(tmp_path / "probe.log"))
    config.set('probe', 'root_dir', str(tmp_path))
    return config


@pytest.fixture(autouse=True)
def reset_probe_logger():
    """Drop handlers installed on the application logger between tests."""
    yield
    app_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True
