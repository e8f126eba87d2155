from .config import MirrorConfig
from .errors import (
    ConfigError,
    DisposeFailed,
    FetchFailed,
    InvalidMirrorName,
    MirrorCreationFailed,
    MirrorError,
    OriginMismatchError,
)
from .remote import RemoteGitMirror
from .typed_path import Remote

__all__ = [
    "ConfigError",
    "DisposeFailed",
    "FetchFailed",
    "InvalidMirrorName",
    "MirrorConfig",
    "MirrorCreationFailed",
    "MirrorError",
    "OriginMismatchError",
    "Remote",
    "RemoteGitMirror",
]
