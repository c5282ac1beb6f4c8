import logging
import os
from pathlib import Path
from logging.handlers import RotatingFileHandler
from sc.common.setup import PATHS
from datetime import datetime

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Handlers are tagged "<logger>:<role>" so calling get_logger() again never stacks duplicates.
def _attach(logger, role, handler, level, fmt):
    handler.setLevel(level)
    handler.setFormatter(fmt)
    handler.set_name(f"{logger.name}:{role}")
    logger.addHandler(handler)

def _has_handler(logger, role):
    return any(h.get_name() == f"{logger.name}:{role}" for h in logger.handlers)

# Keeps only the newest `keep` per-run debug logs.
def _prune_debug_runs(debug_dir, name, keep):
    runs = sorted(debug_dir.glob(f"{name}_*.log"), key=lambda p: p.stat().st_mtime, reverse=True)
    for run in runs[keep:]:
        try: run.unlink()
        except OSError: pass

def get_logger(
        name = "scorecounter",
        level = logging.INFO,
        log_dir: Path | None = None,
        max_bytes = 5 * 1024 * 1024,
        backup_count = 5,
        persistent = True,
        console = False,
        historical_debugs: int = 10
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(level)

    log_dir = log_dir or PATHS.logs
    log_dir.mkdir(parents=True,exist_ok=True)
    fmt = logging.Formatter(LOG_FORMAT,LOG_DATE_FORMAT)

    # Rotating log kept across runs
    if persistent and not _has_handler(logger, "persistent"):
        _attach(logger, "persistent", RotatingFileHandler(
            filename=log_dir / f"{name}.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        ), level, fmt)

    # Latest-only log, truncated on every run
    if not _has_handler(logger, "latest"):
        _attach(logger, "latest", logging.FileHandler(log_dir / "latest.log", mode="w", encoding="utf-8"), level, fmt)

    # One full debug log per run
    if historical_debugs > 0 and not _has_handler(logger, "historical_debug"):
        debug_dir = log_dir / "debug"
        debug_dir.mkdir(parents=True,exist_ok=True)
        this_run_path = debug_dir / f"{name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"
        _attach(logger, "historical_debug", logging.FileHandler(this_run_path, encoding="utf-8"), logging.DEBUG, fmt)
        _prune_debug_runs(debug_dir, name, historical_debugs)

    if console and not _has_handler(logger, "console"):
        _attach(logger, "console", logging.StreamHandler(), level, fmt)

    return logger

# SCORECOUNTER_LOG_CONSOLE=1 mirrors the log to stderr, handy when running from a terminal.
log = get_logger(level=logging.DEBUG,
                 console=os.getenv("SCORECOUNTER_LOG_CONSOLE", "") not in ("", "0"),
                 historical_debugs=10)
log.info("=== INITIALIZED NEW SESSION ===")
