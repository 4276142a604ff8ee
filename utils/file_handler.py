import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from PySide6.QtCore import QStandardPaths

from app.config import APP_DIR_NAME, CSV_HEADER, LOG_FILENAME
from app.errors import ResultsLogError
from app.state import SessionResult

log = logging.getLogger(__name__)


def config_dir() -> Path:
    """Per-user config directory of the application (not created here)."""
    base = QStandardPaths.writableLocation(QStandardPaths.GenericConfigLocation)
    if not base:
        base = str(Path.home() / ".config")
    return Path(base) / APP_DIR_NAME


def default_log_path() -> Path:
    return config_dir() / LOG_FILENAME


def format_row(result: SessionResult) -> List[str]:
    return [
        result.finished_at.strftime("%c"),
        str(result.number_of_words),
        "" if result.number_of_secs is None else f"{result.number_of_secs:.2f}",
        f"{result.elapsed_secs:.2f}",
        str(result.wpm),
        str(result.accuracy),
        f"{result.std_dev:.2f}",
    ]


class ResultsLog:
    """
    Append-only CSV history of finished sessions.
    The header goes in only when the file is created.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else default_log_path()

    def append(self, result: SessionResult) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            needs_header = not self.path.exists()

            # one write per session so an interrupted run never leaves half a row
            buf = io.StringIO()
            writer = csv.writer(buf, lineterminator="\n")
            if needs_header:
                writer.writerow(CSV_HEADER)
            writer.writerow(format_row(result))

            with open(self.path, "a", encoding="utf-8", newline="") as f:
                f.write(buf.getvalue())
        except OSError as e:
            raise ResultsLogError(f"cannot write {self.path}: {e}") from e
        log.info("Saved results to %s", self.path)

    def read_rows(self) -> List[Dict[str, str]]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8", newline="") as f:
            return list(csv.DictReader(f))
