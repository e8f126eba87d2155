from collections.abc import Generator
from pathlib import Path
import sys

from loguru import logger
import pytest
from pytest import LogCaptureFixture

from .config import MirrorConfig
from .test_utils import add_commit
from .typed_path import AbsDir, Remote
from .types import Commit


@pytest.fixture
def typed_tmp_path(tmp_path: Path) -> AbsDir:
    return AbsDir(tmp_path)


@pytest.fixture
def cache_dir(typed_tmp_path: AbsDir) -> AbsDir:
    return AbsDir(typed_tmp_path.path / "cache")


@pytest.fixture
def config(cache_dir: AbsDir) -> MirrorConfig:
    return MirrorConfig(cache_dir=cache_dir, default_branch="main", lock_timeout=1.0)


@pytest.fixture
def remote_dir(typed_tmp_path: AbsDir) -> AbsDir:
    return AbsDir(typed_tmp_path.path / "remote")


@pytest.fixture
def first_commit(remote_dir: AbsDir) -> Commit:
    return add_commit(remote_dir, {"README.md": "# lib", "src/lib.py": "VERSION = 1"})


@pytest.fixture
def remote(remote_dir: AbsDir, first_commit: Commit) -> Remote:
    return Remote(str(remote_dir.path))


@pytest.fixture(autouse=True)
def log_everything() -> Generator[None]:
    logger.remove()
    logger.add(
        sys.stderr,
        level="TRACE",
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{file.path}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    )
    yield
    logger.remove()


@pytest.fixture
def log_cleanly(caplog: LogCaptureFixture, log_level: str) -> None:
    logger.remove()
    logger.add(caplog.handler, level=log_level, colorize=False, format="{message}")
