"""
Logging setup and batch progress reporting with rich console output.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Dict, Optional, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

console = Console()

LOG_FORMATS = {
    "minimal": "%(levelname)s: %(message)s",
    "simple": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    "detailed": "%(asctime)s %(levelname)-8s %(name)s.%(funcName)s:%(lineno)d: %(message)s",
}


def setup_logging(
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    use_rich: bool = True,
    format_style: str = "detailed"
) -> logging.Logger:
    """
    Route log records to the console and, optionally, a file.

    Args:
        level: Console logging level, by name or number
        log_file: File that receives every record from DEBUG up
        use_rich: Use a RichHandler instead of a plain stream handler
        format_style: One of LOG_FORMATS for the plain console handler

    Returns:
        Configured root logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()

    if use_rich:
        console_handler = RichHandler(
            console=console,
            show_path=format_style == "detailed",
            markup=False,
            rich_tracebacks=True
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMATS[format_style], "%H:%M:%S"))
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(LOG_FORMATS["detailed"]))
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG)
    else:
        root_logger.setLevel(level)

    return root_logger


class BatchProgress:
    """Progress bar and per-outcome counts for a batch of images.

    The counts are logged as one summary line when the block exits, also when
    it exits with an exception.
    """

    OUTCOMES = ("cropped", "unchanged", "failed")

    def __init__(self, description: str, total: int, logger: Optional[logging.Logger] = None,
                 enabled: bool = True):
        self.description = description
        self.total = total
        self.logger = logger or logging.getLogger(__name__)
        self.counts: Dict[str, int] = dict.fromkeys(self.OUTCOMES, 0)
        self._progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console,
            disable=not enabled,
        )
        self._task_id = None
        self._started = 0.0

    def __enter__(self) -> 'BatchProgress':
        self._started = time.perf_counter()
        self.logger.info(f"{self.description}: {self.total} image(s)")
        self._progress.start()
        self._task_id = self._progress.add_task(self.description, total=self.total)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._progress.stop()
        elapsed = time.perf_counter() - self._started
        summary = ", ".join(f"{name}={count}" for name, count in self.counts.items())
        if exc_type is not None:
            self.logger.error(f"{self.description} stopped after {elapsed:.2f}s ({summary}): {exc_val}")
        else:
            self.logger.info(f"{self.description} done in {elapsed:.2f}s ({summary})")

    def record(self, outcome: str) -> None:
        """Count one finished image and advance the bar."""
        if outcome not in self.counts:
            raise ValueError(f"Unknown outcome: {outcome}")
        self.counts[outcome] += 1
        if self._task_id is not None:
            self._progress.advance(self._task_id)
