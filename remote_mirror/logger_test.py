import contextlib
import textwrap

from loguru import logger
import pytest
from pytest import LogCaptureFixture

from .logger import describe, log_level_name


@pytest.fixture
def log_level() -> str:
    return "TRACE"


@pytest.fixture(autouse=True)
def log_cleanly(log_cleanly: None) -> None: ...


@pytest.mark.typed
def test_describe_announces_start(caplog: LogCaptureFixture) -> None:
    with describe("Removing lib"):
        logger.info("rmtree")
    assert (
        caplog.text.strip()
        == textwrap.dedent(
            """
            Removing lib ...
            rmtree
            Removing lib [done]
            """
        ).strip()
    )


@pytest.mark.typed
def test_describe_short_reports_outcome_only(caplog: LogCaptureFixture) -> None:
    with describe("Cloning lib", short=True):
        logger.info("clone")
    with pytest.raises(RuntimeError, match="unreachable"), describe("Fetching lib", short=True):
        raise RuntimeError("unreachable")
    assert (
        caplog.text.strip()
        == textwrap.dedent(
            """
            clone
            Cloning lib [done]
            Fetching lib [failed]
            """
        ).strip()
    )


@pytest.mark.parametrize("log_level", ["WARNING"])
def test_describe_reports_failure_above_level(caplog: LogCaptureFixture) -> None:
    with describe("Cloning lib", level="INFO"):
        pass
    with contextlib.suppress(OSError), describe("Removing lib"):
        raise OSError()
    assert caplog.text.strip() == "Removing lib [failed]"


@pytest.mark.parametrize(
    "quiet, verbose, level",
    [
        (0, 0, "INFO"),
        (0, 2, "TRACE"),
        (0, 3, 0),
        (1, 0, "WARNING"),
        (3, 0, "CRITICAL"),
        (4, 0, 100),
        (3, 1, "ERROR"),
    ],
)
def test_log_level_name(quiet: int, verbose: int, level: str | int) -> None:
    assert log_level_name(quiet, verbose) == level
