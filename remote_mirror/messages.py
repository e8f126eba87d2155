from collections.abc import Mapping
import functools
from typing import Any

from loguru import logger
import yaml

from .constants import MIRROR_MESSAGES
from .typed_path import AbsFile


@functools.cache
def catalogue(file: AbsFile = MIRROR_MESSAGES) -> Mapping[str, str]:
    with open(file) as f:
        return dict(_flatten(yaml.safe_load(f) or {}))


def _flatten(tree: Mapping[str, Any], prefix: str = "") -> list[tuple[str, str]]:
    entries = []
    for key, value in tree.items():
        code = f"{prefix}{key}"
        if isinstance(value, Mapping):
            entries.extend(_flatten(value, prefix=f"{code}."))
        else:
            entries.append((code, str(value)))
    return entries


def t(code: str, /, **data: Any) -> str:
    """Look up the label for `code`, filled in with `data`.

    Labels are cosmetic: unknown codes or missing fields fall back to the code itself.
    """
    try:
        return catalogue()[code].format(**data)
    except (KeyError, IndexError, ValueError) as e:
        logger.debug(f"No label for {code!r} with {data}: {e!r}")
        return code
