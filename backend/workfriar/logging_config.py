import logging
import logging.handlers
import os
from datetime import datetime
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'


def _rotating_handler(path: Path, level: int, max_mb: int, backups: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=max_mb * 1024 * 1024,
        backupCount=backups,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging(logs_dir: Path | None = None) -> Path:
    """
    Configure logging for the Workfriar admin API.

    Console output plus rotating files: app.log (everything), errors.log
    (ERROR and above) and approvals.log (the timesheet approval workflow).
    """
    logs_dir = Path(logs_dir or os.getenv("LOG_DIR", "logs"))
    logs_dir.mkdir(parents=True, exist_ok=True)
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    root_logger.addHandler(_rotating_handler(logs_dir / "app.log", level, 10, 5))
    root_logger.addHandler(_rotating_handler(logs_dir / "errors.log", logging.ERROR, 5, 5))

    # Approval decisions get their own file for auditing
    approvals_logger = logging.getLogger('workfriar.services.approvals')
    approvals_logger.addHandler(_rotating_handler(logs_dir / "approvals.log", logging.DEBUG, 5, 3))
    approvals_logger.setLevel(logging.DEBUG)

    # Suppress noisy third-party loggers
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('multipart').setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info("Logging configuration completed")
    logger.info(f"Log files will be saved to: {logs_dir.absolute()}")

    return logs_dir


def get_log_files_info(logs_dir: Path | None = None) -> dict:
    """
    Size and modification time of the current log files.
    """
    logs_dir = Path(logs_dir or os.getenv("LOG_DIR", "logs"))
    if not logs_dir.exists():
        return {"status": "No logs directory found"}

    log_files = {}
    for log_file in logs_dir.glob("*.log"):
        stat = log_file.stat()
        log_files[log_file.name] = {
            "size_mb": round(stat.st_size / (1024*1024), 2),
            "modified": datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M:%S")
        }

    return log_files
