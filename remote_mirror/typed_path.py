from __future__ import annotations

from dataclasses import dataclass
import os.path
from pathlib import Path
import re
from typing import Self, overload


@dataclass(frozen=True, slots=True)
class TypedPath:
    path: Path

    def __init__(self, path: Path | str | Self) -> None:
        if type(self) is TypedPath:
            raise TypeError()
        object.__setattr__(self, "path", Path(path))

    def exists(self) -> bool:
        return self.path.exists()

    def is_file(self) -> bool:
        return self.path.is_file()

    def is_folder(self) -> bool:
        return self.path.is_dir()

    def __fspath__(self) -> str:
        return self.path.__fspath__()

    def __str__(self) -> str:
        return repr(str(self.path))


@dataclass(frozen=True, slots=True, init=False)
class RelFile(TypedPath): ...


@dataclass(frozen=True, slots=True, init=False)
class RelDir(TypedPath):
    @classmethod
    def component(cls, name: str) -> Self:
        """Build a directory from one path component, rejecting anything that nests or escapes."""
        separators = {"/", os.sep, os.altsep} - {None}
        if not name or name in (os.curdir, os.pardir) or any(sep in name for sep in separators):
            raise ValueError(f"{name!r} is not a single path component.")
        return cls(name)


@dataclass(frozen=True, slots=True, init=False)
class AbsFile(TypedPath): ...


@dataclass(frozen=True, slots=True, init=False)
class AbsDir(TypedPath):
    def __init__(self, path: Path | str | TypedPath) -> None:
        TypedPath.__init__(self, Path(path).absolute())

    @overload
    def __truediv__(self, other: RelFile) -> AbsFile: ...
    @overload
    def __truediv__(self, other: RelDir) -> AbsDir: ...
    def __truediv__(self, other: TypedPath) -> TypedPath:
        match other:
            case RelFile():
                return AbsFile(self.path / other.path)
            case RelDir():
                return AbsDir(self.path / other.path)
        raise TypeError()

    def __add__(self, extension: Ext) -> AbsFile:
        return AbsFile(f"{self.path}{extension.extension}")

    @property
    def parent(self) -> AbsDir:
        return AbsDir(self.path.parent)


@dataclass(frozen=True, slots=True)
class Ext:
    extension: str


@dataclass(frozen=True)
class Remote:
    url: str

    def __fspath__(self) -> str:
        return self.url

    def __str__(self) -> str:
        return repr(self.url)

    @property
    def canonical(self) -> str:
        if os.path.exists(self):
            # Distinguish equivalent local paths (eg "." and the absolute cwd).
            return os.path.realpath(self)
        return self._without_trailing_slashes()

    def _without_trailing_slashes(self) -> str:
        match = re.match(r"^(.*?)\/*$", self.url)
        assert match is not None
        return match.group(1)

    def same_as(self, other: Remote) -> bool:
        return self.canonical == other.canonical
