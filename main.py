# main.py
from __future__ import annotations
import argparse
import sys
import logging
from pathlib import Path
from typing import List, Optional

from PySide6.QtWidgets import QApplication, QMessageBox

from app.config import APP_NAME, APP_LOG_FILENAME, DEFAULT_NUMBER_OF_WORDS
from app.state import SessionSettings
from app.themes import theme_by_name, theme_names
from services.prompts import words_for_duration
from ui.main_window import MainWindow
from utils.file_handler import ResultsLog, default_log_path


def setup_logging(log_dir: Optional[Path] = None, verbose: bool = False) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir is not None:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_dir / APP_LOG_FILENAME, encoding="utf-8"))
        except OSError as e:
            print(f"cannot log to {log_dir}: {e}", file=sys.stderr)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        try:
            QMessageBox.critical(
                None, "Application Error", f"{exctype.__name__}: {value}"
            )
        except Exception:
            pass
        sys.exit(1)

    sys.excepthook = excepthook


def _positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return n


def _positive_float(value: str) -> float:
    x = float(value)
    if x <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {value}")
    return x


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="typesprint", description="Typing speed test.")
    p.add_argument("-w", "--number-of-words", type=_positive_int, default=DEFAULT_NUMBER_OF_WORDS,
                   help="number of words in the generated prompt")
    p.add_argument("-s", "--number-of-secs", type=_positive_float, default=None,
                   help="end the session after this many seconds")
    p.add_argument("-p", "--prompt", default=None, help="type this text instead of a generated one")
    p.add_argument("--pace", type=_positive_float, default=None,
                   help="highlight where a typist at this wpm would be")
    p.add_argument("--death-mode", action="store_true", help="the first mistake ends the session")
    p.add_argument("--theme", choices=theme_names(), default=theme_names()[0])
    p.add_argument("--log-file", type=Path, default=None, help="results log (csv)")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def parse_args(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    prompt = args.prompt
    if prompt is not None:
        prompt = " ".join(prompt.split())
        if not prompt:
            parser.error("prompt must contain at least one word")
        number_of_words = len(prompt.split())
    elif args.number_of_secs is not None:
        number_of_words = words_for_duration(args.number_of_secs)
    else:
        number_of_words = args.number_of_words

    settings = SessionSettings(
        number_of_words=number_of_words,
        number_of_secs=args.number_of_secs,
        pace=args.pace,
        death_mode=args.death_mode,
        prompt=prompt,
    )
    return settings, args


def main(argv: Optional[List[str]] = None) -> int:
    settings, args = parse_args(argv)
    log_path = args.log_file or default_log_path()
    setup_logging(log_path.parent, verbose=args.verbose)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName(APP_NAME)

    win = MainWindow(settings, results_log=ResultsLog(log_path), theme=theme_by_name(args.theme))
    win.show()
    logging.getLogger(__name__).info("Results are logged to %s", log_path)

    # Start the event loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
