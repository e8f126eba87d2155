from dataclasses import KW_ONLY, dataclass
import inspect
import sys
from types import TracebackType

from loguru import logger

from .constants import DONE_SUFFIX, FAILURE_SUFFIX, LOADING_SUFFIX

# Ordered from least to most verbose, centred on INFO.
LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "TRACE")


@dataclass(frozen=True, slots=True)
class describe:  # noqa: N801
    """Announce a step of the mirror lifecycle and report how it ended.

    A short description only reports the outcome. Failures are always reported at ERROR and
    the exception propagates unchanged.
    """

    message: str
    _: KW_ONLY
    short: bool = False
    level: str = "TRACE"

    def _emit(self, level: str, suffix: str) -> None:
        logger.opt(depth=self._caller_depth()).log(level, f"{self.message} {suffix}")

    @staticmethod
    def _caller_depth() -> int:
        for depth, frameinfo in enumerate(inspect.stack(), start=-1):
            if frameinfo.filename != __file__:
                return depth
        return 0

    def __enter__(self) -> None:
        if not self.short:
            self._emit(self.level, LOADING_SUFFIX)

    def __exit__(
        self,
        type_: type[BaseException] | None,
        value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if type_ is None:
            self._emit(self.level, DONE_SUFFIX)
        else:
            self._emit("ERROR", FAILURE_SUFFIX)


def log_level_name(quiet: int, verbose: int) -> str | int:
    index = LEVELS.index("INFO") + verbose - quiet
    if index < 0:
        # Above CRITICAL, so nothing is logged.
        return 100
    if index >= len(LEVELS):
        return 0
    return LEVELS[index]


def setup_logger(quiet: int, verbose: int) -> None:
    logger.remove()
    logger.add(sys.stderr, level=log_level_name(quiet, verbose), format="<level>{message}</level>")
