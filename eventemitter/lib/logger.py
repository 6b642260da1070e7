import logging
import logging.handlers
from datetime import datetime
from pathlib import Path


def clean_old_logs(log_dir: Path, max_files: int = 5) -> list[Path]:
    """Delete all but the `max_files` most recently modified ``*.log`` files in `log_dir`

    Returns:
        list[Path]: The files that were deleted.
    """
    newest_first = sorted(log_dir.glob("*.log"), key=lambda p: p.stat().st_mtime, reverse=True)
    stale = newest_first[max_files:]
    for path in stale:
        path.unlink()
    return stale


class PaddedLevelFormatter(logging.Formatter):
    """Pads level names to a fixed width so file log messages line up."""

    width = 8

    def format(self, record):
        levelname = record.levelname
        record.levelname = levelname.ljust(self.width)
        try:
            return super().format(record)
        finally:
            # Other handlers see the same record
            record.levelname = levelname


def configure_logger(
    log_level: int = logging.INFO, log_dir: Path | None = None, max_log_files: int = 5
) -> list[logging.Handler]:
    """Configures the root logger with console output and an optional log file

    The console formatter leaves out the date and time to keep lines short. When `log_dir`
    is given, a rotating log file named after the current date and time is created there
    with the detailed format, and older log files beyond `max_log_files` are removed.

    Args:
        log_level (int): The log level to log at. logging.[DEBUG | INFO | ERROR | CRITICAL | WARN ].
            Defaults to logging.INFO.
        log_dir (Path | None): Where to store the logs. Defaults to no log file.
        max_log_files (int): Keeps only the previous (n) number of log files. Defaults to 5.

    Returns:
        list[logging.Handler]: The handlers installed on the root logger.
    """
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(
        logging.Formatter("%(levelname)s %(message)s", datefmt="%H:%M:%S")
    )
    handlers: list[logging.Handler] = [stream_handler]

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(exist_ok=True, parents=True)
        # Keep room for the file created below
        clean_old_logs(log_dir=log_dir, max_files=max(max_log_files - 1, 0))

        log_filename = log_dir / datetime.now().strftime("%Y-%m-%d_%H-%M-%S.log")
        file_handler = logging.handlers.RotatingFileHandler(
            log_filename, maxBytes=10 * 1024**2, backupCount=5
        )
        file_handler.setFormatter(
            PaddedLevelFormatter(
                "[%(asctime)s] %(levelname)s %(message)s", datefmt="%d.%m.%Y %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)
    return handlers
