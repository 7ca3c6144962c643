"""
Structured event log for installs.
Mirrors key events to the standard logger and, optionally, to a JSON-lines file.
"""

import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any


class StructuredLogger:
    """
    Logger that writes ``event key=value`` lines to the standard logger and one
    JSON object per event to ``<log_dir>/ftb2pack_<timestamp>.jsonl``.

    Usage:
        logger = StructuredLogger("ftb2pack", log_dir=Path("logs"))
        logger.info("override_fetched", name="options.txt", size=512)
    """

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        enable_json: bool = True,
    ):
        self.name = name
        self.log_dir = log_dir
        self.enable_json = enable_json and log_dir is not None

        self._logger = logging.getLogger(name)

        self._json_file = None
        self.json_log_path: Path | None = None
        if self.enable_json:
            log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.json_log_path = log_dir / f"ftb2pack_{timestamp}.jsonl"
            self._json_file = open(self.json_log_path, "a", encoding="utf-8")  # noqa: SIM115

        self._session_context: dict[str, Any] = {
            "session_id": f"{int(time.time())}_{id(self)}",
        }

    @staticmethod
    def _format_message(event: str, **context) -> str:
        parts = [f"{event}:"]
        parts.extend(f"{key}={value}" for key, value in context.items())
        return " ".join(parts)

    def _write_json(self, level: str, event: str, **context) -> None:
        if not self._json_file or self._json_file.closed:
            return

        entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "event": event,
            **self._session_context,
            **context,
        }

        try:
            self._json_file.write(json.dumps(entry, default=str) + "\n")
            self._json_file.flush()
        except (OSError, TypeError, ValueError) as e:
            print(f"JSON logging failed: {e}", file=sys.stderr)

    def _emit(self, level: int, event: str, **context) -> None:
        self._logger.log(level, self._format_message(event, **context))
        self._write_json(logging.getLevelName(level), event, **context)

    def debug(self, event: str, **context) -> None:
        self._emit(logging.DEBUG, event, **context)

    def info(self, event: str, **context) -> None:
        self._emit(logging.INFO, event, **context)

    def warning(self, event: str, **context) -> None:
        self._emit(logging.WARNING, event, **context)

    def error(self, event: str, **context) -> None:
        self._emit(logging.ERROR, event, **context)

    def close(self) -> None:
        """Close JSON log file."""
        if self._json_file and not self._json_file.closed:
            self._json_file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class InstallLogger:
    """Specialized logger for install events."""

    def __init__(self, logger: StructuredLogger):
        self.logger = logger

    def install_started(self, pack_name: str, version_name: str, file_count: int):
        self.logger.info(
            "install_started",
            pack=pack_name,
            version=version_name,
            files=file_count,
        )

    def manifest_written(self, path: Path, dependencies: int, loaders: list[str]):
        self.logger.debug(
            "manifest_written",
            path=str(path),
            dependencies=dependencies,
            loaders=",".join(loaders),
        )

    def override_fetched(self, name: str, size_bytes: int):
        self.logger.debug("override_fetched", name=name, size_bytes=size_bytes)

    def override_failed(self, name: str, url: str | None, error: str | None):
        self.logger.warning("override_failed", name=name, url=url, error=error)

    def install_completed(
        self,
        work_dir: Path,
        downloaded: int,
        skipped: int,
        failed: int,
        duration_s: float,
    ):
        self.logger.info(
            "install_completed",
            work_dir=str(work_dir),
            downloaded=downloaded,
            skipped=skipped,
            failed=failed,
            duration_s=round(duration_s, 2),
        )

    def server_installer_saved(self, path: Path, size_bytes: int):
        self.logger.info(
            "server_installer_saved", path=str(path), size_bytes=size_bytes
        )


def create_structured_logger(
    log_dir: Path | None = None, enable_json: bool = False
) -> tuple[StructuredLogger, InstallLogger]:
    """
    Create the structured loggers.

    Returns:
        Tuple of (base_logger, install_logger)
    """
    base = StructuredLogger("ftb2pack.events", log_dir=log_dir, enable_json=enable_json)
    return base, InstallLogger(base)
