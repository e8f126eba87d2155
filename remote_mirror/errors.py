from dataclasses import dataclass

from .typed_path import AbsDir, AbsFile, Remote


class MirrorError(Exception): ...


@dataclass
class MirrorCreationFailed(MirrorError):
    name: str
    source: Remote
    path: AbsDir

    def __str__(self) -> str:
        return f"Unable to mirror {self.source} into {self.path} for {self.name!r}."


@dataclass
class OriginMismatchError(MirrorCreationFailed):
    actual: Remote

    def __str__(self) -> str:
        return (
            f"{self.path} already mirrors {self.actual}, but {self.name!r} expects {self.source}."
            " Dispose of the mirror to clone it again."
        )


@dataclass
class FetchFailed(MirrorError):
    name: str
    branch: str
    remote: str

    def __str__(self) -> str:
        return f"Unable to fetch {self.branch!r} from {self.remote!r} for {self.name!r}."


@dataclass
class DisposeFailed(MirrorError):
    name: str
    path: AbsDir

    def __str__(self) -> str:
        return f"Unable to remove {self.path} for {self.name!r}; its state is unknown."


@dataclass
class InvalidMirrorName(ValueError):
    name: str

    def __str__(self) -> str:
        return f"{self.name!r} cannot be used as a mirror name."


@dataclass
class ConfigError(ValueError):
    file: AbsFile
    reason: str

    def __str__(self) -> str:
        return f"Error while loading {self.file}: {self.reason}"
