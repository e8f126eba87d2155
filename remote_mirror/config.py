from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Self

import yaml
from yaml import YAMLError

from .constants import DEFAULT_BRANCH, MIRROR_CACHE, MIRROR_LOCK_EXTENSION
from .errors import ConfigError, InvalidMirrorName
from .typed_path import AbsDir, AbsFile, RelDir


@dataclass(frozen=True, kw_only=True, slots=True)
class MirrorConfig:
    cache_dir: AbsDir = MIRROR_CACHE
    default_branch: str = DEFAULT_BRANCH
    ignore_fetch: bool = False
    dry_run: bool = False
    verify_origin: bool = False
    lock_timeout: float | None = None

    FIELD_TYPES: ClassVar[dict[str, tuple[type, ...]]] = {
        "cache_dir": (str,),
        "default_branch": (str,),
        "ignore_fetch": (bool,),
        "dry_run": (bool,),
        "verify_origin": (bool,),
        "lock_timeout": (int, float, type(None)),
    }

    def mirror_path(self, name: str) -> AbsDir:
        try:
            return self.cache_dir / RelDir.component(name)
        except ValueError:
            raise InvalidMirrorName(name) from None

    def lock_path(self, name: str) -> AbsFile:
        return self.mirror_path(name) + MIRROR_LOCK_EXTENSION

    @property
    def skip_fetch(self) -> bool:
        return self.ignore_fetch or self.dry_run

    def replace(self, **changes: Any) -> Self:
        return dataclasses.replace(self, **changes)

    @classmethod
    def load(cls, file: AbsFile) -> Self:
        try:
            with open(file) as f:
                raw = yaml.safe_load(f)
        except YAMLError as e:
            raise ConfigError(file, f"invalid YAML ({e})") from e
        except OSError as e:
            raise ConfigError(file, e.strerror or str(e)) from e
        return cls.from_mapping(raw, file=file)

    @classmethod
    def from_mapping(cls, raw: Any, *, file: AbsFile) -> Self:
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(file, f"expected a mapping, got {type(raw).__name__}.")
        values: dict[str, Any] = {}
        for key, value in raw.items():
            name = str(key).replace("-", "_")
            if name not in cls.FIELD_TYPES:
                raise ConfigError(file, f"unknown key {key!r}.")
            # bool is an int, so reject it explicitly for numeric fields.
            if not isinstance(value, cls.FIELD_TYPES[name]) or (
                isinstance(value, bool) and bool not in cls.FIELD_TYPES[name]
            ):
                raise ConfigError(
                    file, f"expected {key!r} to be {cls._describe_type(name)}, got {value!r}."
                )
            values[name] = value
        if "cache_dir" in values:
            cache_dir = Path(values["cache_dir"]).expanduser()
            values["cache_dir"] = AbsDir(
                cache_dir if cache_dir.is_absolute() else file.path.parent / cache_dir
            )
        return cls(**values)

    @classmethod
    def _describe_type(cls, name: str) -> str:
        return " or ".join(
            "null" if type_ is type(None) else type_.__name__ for type_ in cls.FIELD_TYPES[name]
        )
