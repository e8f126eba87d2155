from dataclasses import dataclass
import io

type ExitCode = int
type PyFile = io.TextIOWrapper


@dataclass(frozen=True, slots=True)
class Commit:
    sha: str

    def __str__(self) -> str:
        return self.sha
