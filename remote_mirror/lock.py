from __future__ import annotations

from dataclasses import dataclass
import errno
import fcntl
import os
import time
from types import TracebackType
from typing import ClassVar, Self

from loguru import logger

from .typed_path import AbsFile
from .types import PyFile


@dataclass(frozen=True)
class FileSystemLock:
    """Exclusive lease on a lock file, held until released or garbage collected."""

    file: PyFile
    POLL_SECONDS: ClassVar[float] = 0.01

    def __del__(self) -> None:
        self.release()

    @classmethod
    def acquire(cls, filepath: AbsFile, *, timeout: float | None = None) -> Self:
        filepath.path.parent.mkdir(parents=True, exist_ok=True)
        file = open(filepath, "a+")  # noqa: SIM115
        try:
            lock = cls.acquire_non_blocking(file)
            if lock is None:
                logger.debug(f"{filepath} is held by process {cls.read_holder(file)}, waiting.")
                lock = cls._wait(file, filepath, timeout)
        except BaseException:
            file.close()
            raise
        lock.write_holder()
        return lock

    @classmethod
    def _wait(cls, file: PyFile, filepath: AbsFile, timeout: float | None) -> Self:
        if timeout is None:
            fcntl.flock(file, fcntl.LOCK_EX)
            return cls(file)
        deadline = time.monotonic() + timeout
        while (lock := cls.acquire_non_blocking(file)) is None:
            if time.monotonic() >= deadline:
                raise TimeoutError(
                    f"{filepath} is in use by another process. Wait for it to finish then try again."
                )
            time.sleep(cls.POLL_SECONDS)
        return lock

    @classmethod
    def acquire_non_blocking(cls, file: PyFile) -> Self | None:
        try:
            fcntl.flock(file, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError as e:
            if e.errno in (errno.EWOULDBLOCK, errno.EAGAIN):
                return None
            raise e
        return cls(file)

    @classmethod
    def read_holder(cls, file: PyFile) -> str:
        file.seek(0)
        return file.read().strip() or "unknown"

    def write_holder(self) -> None:
        self.file.seek(0)
        self.file.truncate()
        self.file.write(str(os.getpid()))
        self.file.flush()

    @property
    def held(self) -> bool:
        return not self.file.closed

    def release(self) -> None:
        self.file.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        type_: type[BaseException] | None,
        value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.release()
