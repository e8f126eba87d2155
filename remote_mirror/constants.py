from pathlib import Path

import platformdirs

from .typed_path import AbsDir, AbsFile, Ext, RelFile

MIRROR_NAME: str = "remote-mirror"
MIRROR_CACHE: AbsDir = AbsDir(Path(platformdirs.user_cache_dir(MIRROR_NAME)))
MIRROR_LOCK_EXTENSION: Ext = Ext(".lock")
MIRROR_MESSAGES: AbsFile = AbsDir(Path(__file__).parent) / RelFile("messages.yaml")

ORIGIN: str = "origin"
DEFAULT_BRANCH: str = "master"

LOADING_SUFFIX: str = "..."
DONE_SUFFIX: str = "[done]"
FAILURE_SUFFIX: str = "[failed]"
