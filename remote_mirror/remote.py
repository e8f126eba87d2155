from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import functools
import os
import shutil
from typing import Self

from git import GitError
from git import Repo as GitRepo
from loguru import logger

from .config import MirrorConfig
from .constants import ORIGIN
from .errors import (
    DisposeFailed,
    FetchFailed,
    MirrorCreationFailed,
    MirrorError,
    OriginMismatchError,
)
from .githelper import GitHelper
from .lock import FileSystemLock
from .logger import describe
from .messages import t
from .typed_path import AbsDir, Remote
from .types import Commit


@dataclass(frozen=True)
class RemoteGitMirror:
    """A bare mirror of `source`, cached on disk under a path derived from `name`.

    Whether the directory exists is the only record of whether the remote has been mirrored.
    Every operation that touches the directory holds the lease on its lock file.
    """

    name: str
    source: Remote
    config: MirrorConfig = field(default_factory=MirrorConfig)
    branch: str | None = None

    def __post_init__(self) -> None:
        self.config.mirror_path(self.name)

    @classmethod
    def open(
        cls,
        name: str,
        source: Remote | str,
        *,
        config: MirrorConfig | None = None,
        branch: str | None = None,
    ) -> Self:
        mirror = cls(
            name,
            source if isinstance(source, Remote) else Remote(source),
            MirrorConfig() if config is None else config,
            branch,
        )
        mirror.ensure_mirrored()
        return mirror

    @property
    def url(self) -> str:
        return self.source.url

    @property
    def path(self) -> AbsDir:
        return self.config.mirror_path(self.name)

    @property
    def default_branch(self) -> str:
        return self.config.default_branch if self.branch is None else self.branch

    @functools.cached_property
    def repo(self) -> GitRepo:
        return GitHelper.repo(self.path)

    def is_mirrored(self) -> bool:
        return self.path.is_folder()

    def lease(self) -> FileSystemLock:
        return FileSystemLock.acquire(
            self.config.lock_path(self.name), timeout=self.config.lock_timeout
        )

    def _lease_or_raise(self, failure: Callable[[], MirrorError]) -> FileSystemLock:
        try:
            return self.lease()
        except TimeoutError:
            raise
        except OSError as e:
            raise failure() from e

    def ensure_mirrored(self) -> None:
        with self._lease_or_raise(
            lambda: MirrorCreationFailed(self.name, self.source, self.path)
        ):
            if not self.is_mirrored():
                self._clone()
            elif self.config.verify_origin:
                self.verify_origin()
            else:
                logger.debug(f"Reusing {self.path} for {self.name!r}.")

    def _clone(self) -> None:
        try:
            with describe(
                t("process.git_artifact_clone", name=self.name), short=True, level="INFO"
            ):
                GitHelper.clone_bare(self.source, self.path).close()
        except (GitError, OSError) as e:
            raise MirrorCreationFailed(self.name, self.source, self.path) from e

    def verify_origin(self) -> None:
        try:
            actual = GitHelper.origin_url(self.repo, ORIGIN)
        except (GitError, ValueError) as e:
            raise MirrorCreationFailed(self.name, self.source, self.path) from e
        if not actual.same_as(self.source):
            raise OriginMismatchError(self.name, self.source, self.path, actual)
        logger.debug(f"{self.path} mirrors {self.source}.")

    def fetch(self, branch: str | None = None) -> None:
        """Force the mirror's copy of `branch` to match the remote.

        Short names are read as branches (`refs/heads/<branch>`); pass a full ref such as
        `refs/tags/v1.0` to fetch anything else.
        """
        ref = self.default_branch if branch is None else branch
        if self.config.skip_fetch:
            logger.debug(f"Skipping fetch of {ref!r} for {self.name!r}.")
            return
        with self._lease_or_raise(lambda: FetchFailed(self.name, ref, ORIGIN)):
            try:
                with describe(
                    t("process.git_artifact_fetch", name=self.name, branch=ref),
                    short=True,
                    level="INFO",
                ):
                    GitHelper.fetch(self.repo, ORIGIN, [ref])
            except GitError as e:
                raise FetchFailed(self.name, ref, ORIGIN) from e

    def commit(self, branch: str | None = None) -> Commit:
        return GitHelper.commit(self.repo, self.default_branch if branch is None else branch)

    def release(self) -> None:
        repo: GitRepo | None = self.__dict__.pop("repo", None)
        if repo is not None:
            repo.close()

    def dispose(self) -> None:
        self.release()
        if not self.path.parent.is_folder():
            # Nothing has ever been cached here, not even a lock file.
            return
        with self._lease_or_raise(lambda: DisposeFailed(self.name, self.path)):
            if not os.path.lexists(self.path):
                return
            try:
                with describe(t("process.git_artifact_dispose", name=self.name), short=True):
                    if self.path.is_folder() and not self.path.path.is_symlink():
                        shutil.rmtree(self.path)
                    else:
                        os.remove(self.path)
            except OSError as e:
                raise DisposeFailed(self.name, self.path) from e
