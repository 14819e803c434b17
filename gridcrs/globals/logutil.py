"""
gridcrs/globals/logutil.py

Console logging helpers and an optional tee into a log file.

The referencing code reports non-fatal anomalies through ``warn``; the CLI
turns on :class:`Logger` so every message also lands in a timestamped file.
Set ``NO_COLOR`` (or ``GRIDCRS_NO_COLOR``) to print plain level tags.
"""
import re
import sys
import os
from pathlib import Path
from datetime import datetime

from gridcrs.globals import directories, configs

################################################################################################
ANSI_ESCAPE = re.compile(r'\x1B[@-_][0-?]*[ -/]*[@-~]')
TIMESTAMP_PREFIX = re.compile(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\]")
RESET = '\x1b[0m'
BOLD = "\033[1m"

LEVEL_COLORS = {
    "PROCESS": (171, 52, 235),
    "INFO": (0, 255, 255),
    "SETTING": (250, 197, 97),
    "WARNING": (255, 255, 0),
    "ERROR": (255, 0, 0),
    "SUCCESS": (0, 255, 0),
}


def use_color() -> bool:
    return not (os.environ.get("NO_COLOR") or os.environ.get("GRIDCRS_NO_COLOR"))


def default_log_path() -> Path:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return directories.LOGS_DIR / f"{configs.LOG_FILE_NAME}_{timestamp}.log"


def _stamp(line: str) -> str:
    """Prefix a non-blank line with the current time, once."""
    if not line.strip() or TIMESTAMP_PREFIX.match(line):
        return line
    return f"[{datetime.now():%Y-%m-%d %H:%M:%S}] {line}"


class Logger:
    """Mirror stdout/stderr into a log file (ANSI codes stripped).

    Only one logger is active at a time; use :meth:`setup` and
    :meth:`teardown` rather than the constructor when several commands may
    share a process.
    """
    _instance = None

    def __init__(self, logfile_path: Path | None = None):
        self.logfile_path = Path(logfile_path) if logfile_path else default_log_path()
        self.logfile_path.parent.mkdir(parents=True, exist_ok=True)

        self._console = sys.stdout
        self._prev_stderr = sys.stderr
        self.logfile = open(self.logfile_path, "a", encoding="utf-8", buffering=1)  # line-buffered
        sys.stdout = sys.stderr = self
        Logger._instance = self

    def __enter__(self): return self
    def __exit__(self, exc_type, exc, tb): self.close()

    def write(self, message):
        if message is None:
            return
        if isinstance(message, (bytes, bytearray)):
            message = message.decode("utf-8", errors="replace")
        text = "".join(_stamp(part) for part in str(message).splitlines(keepends=True))
        self._console.write(text)
        self.logfile.write(ANSI_ESCAPE.sub("", text))

    def flush(self):
        self._console.flush()
        self.logfile.flush()

    def close(self):
        if self.logfile.closed:
            return
        self.logfile.close()
        sys.stdout = self._console
        sys.stderr = self._prev_stderr
        Logger._instance = None

    @classmethod
    def setup(cls, logfile_path=None):
        if cls._instance is None:
            cls(logfile_path)
        return cls._instance

    @classmethod
    def teardown(cls):
        if cls._instance:
            cls._instance.close()


def rgb_prefix(r: int, g: int, b: int) -> str:
    """Start an RGB color (leave it open)."""
    return f"\033[38;2;{r};{g};{b}m"

def _log(level: str, msg: str):
    tag = f"[{level}]"
    if use_color():
        tag = f"{rgb_prefix(*LEVEL_COLORS[level])}{BOLD}{tag}{RESET}"
    print(f"{tag} {msg}")

def process_step(msg): _log("PROCESS", msg)
def info(msg): _log("INFO", msg)
def error(msg): _log("ERROR", msg)
def success(msg): _log("SUCCESS", msg)
def setting_config(msg): _log("SETTING", msg)

def warn(msg, cause: BaseException | None = None):
    """Warning sink. ``cause`` is appended when the anomaly came from an exception."""
    if cause is not None:
        msg = f"{msg} ({type(cause).__name__}: {cause})"
    _log("WARNING", msg)
