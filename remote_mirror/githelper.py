from collections.abc import Sequence
import os

from git import Repo as GitRepo
from loguru import logger

from .typed_path import AbsDir, Remote
from .types import Commit


class GitHelper:
    @classmethod
    def repo(cls, local: AbsDir) -> GitRepo:
        # Convert to string explicitly to gitpython-developers/GitPython#2085
        return GitRepo(os.fspath(local))

    @classmethod
    def clone_bare(cls, remote: Remote, local: AbsDir) -> GitRepo:
        local.parent.path.mkdir(parents=True, exist_ok=True)
        return GitRepo.clone_from(remote.url, os.fspath(local), bare=True)

    @classmethod
    def refspec(cls, ref: str) -> str:
        """Map a branch or full ref onto the same ref in the mirror, allowing forced updates.

        Short names always resolve to branches, so tags must be given as `refs/tags/<tag>`.
        """
        if not ref.startswith("refs/"):
            ref = f"refs/heads/{ref}"
        return f"+{ref}:{ref}"

    @classmethod
    def fetch(cls, repo: GitRepo, remote_name: str, refs: Sequence[str]) -> None:
        # Remote.fetch parses the output into remote-tracking refs, which a mirror does not have.
        _, stdout, stderr = repo.git.fetch(
            remote_name,
            *(cls.refspec(ref) for ref in refs),
            verbose=True,
            with_extended_output=True,
        )
        logger.trace(f"stdout:\n{stdout}")
        logger.trace(f"stderr:\n{stderr}")

    @classmethod
    def origin_url(cls, repo: GitRepo, remote_name: str) -> Remote:
        return Remote(repo.remote(remote_name).url)

    @classmethod
    def commit(cls, repo: GitRepo, ref: str) -> Commit:
        return Commit(repo.commit(ref).hexsha)
