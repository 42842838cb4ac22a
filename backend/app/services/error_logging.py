"""
Error Logging Service

Failures that reach the API edge (ServerError, unhandled exceptions) are
recorded twice:
- in rotating files under LOG_DIR: errors.log (ERROR and above) and
  app_detailed.log (everything), when the directory is writable
- as ErrorLog rows, with request, user and traceback, for later inspection

Secrets in the attached context are redacted before anything is stored.

Usage:
    from app.services.error_logging import error_logger

    try:
        storage.remove(path)
    except OSError as e:
        error_logger.log_error(e, request=request, context={"path": path})
"""

import logging
import sys
import traceback
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import UUID

from app.core.config import settings
from app.models.error_log import ErrorLog


logger = logging.getLogger("error_logging")
logger.setLevel(logging.DEBUG)


# Keys whose values never reach the logs (substring match, any case)
SENSITIVE_FIELDS = {'password', 'token', 'authorization', 'api_key', 'secret', 'credential'}

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
DETAILED_LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10 MB


def _rotating_handler(path: Path, level: int, fmt: str, backup_count: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=LOG_DATE_FORMAT))
    return handler


def setup_file_logging(log_dir: str) -> bool:
    """
    Attach the rotating file handlers to the root logger.

    Returns:
        False if log_dir can't be written (console logging only)
    """
    logs_dir = Path(log_dir)
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        marker = logs_dir / ".write_test"
        marker.touch()
        marker.unlink()
    except OSError as e:
        logger.warning(f"Log directory {logs_dir} is not writable ({e}), file logging disabled")
        return False

    root_logger = logging.getLogger()
    root_logger.addHandler(_rotating_handler(logs_dir / "errors.log", logging.ERROR, LOG_FORMAT, 10))
    root_logger.addHandler(_rotating_handler(logs_dir / "app_detailed.log", logging.DEBUG, DETAILED_LOG_FORMAT, 5))
    return True


def sanitize_data(data: Any, depth: int = 0) -> Any:
    """
    Copy data with sensitive values replaced by '[REDACTED]'.

    UUIDs become strings so the result fits a JSON column.
    """
    if depth > 10:
        return "[MAX_DEPTH]"

    if isinstance(data, dict):
        return {
            key: "[REDACTED]" if any(field in str(key).lower() for field in SENSITIVE_FIELDS)
            else sanitize_data(value, depth + 1)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple, set)):
        return [sanitize_data(item, depth + 1) for item in data]
    if isinstance(data, str) and len(data) > 20 and data.startswith("eyJ"):
        # Looks like a JWT
        return "[REDACTED_TOKEN]"
    if isinstance(data, UUID):
        return str(data)
    return data


def truncate_string(s: str, max_length: int = 10000) -> str:
    if len(s) > max_length:
        return s[:max_length] + f"... [TRUNCATED, total {len(s)} chars]"
    return s


class ErrorLogger:
    """
    Writes errors to the log files and the error_logs table.

    The session factory is set at startup by configure_error_logging;
    until then errors are only logged.
    """

    def __init__(self):
        self.db_session_factory = None

    def set_db_session_factory(self, factory):
        self.db_session_factory = factory

    @staticmethod
    def _traceback_info(error: Exception) -> Dict[str, Optional[str]]:
        exc_tb = error.__traceback__ or sys.exc_info()[2]
        if exc_tb is None:
            return {"stack_trace": None, "module": None, "function": None, "line_number": None}

        last_frame = traceback.extract_tb(exc_tb)[-1]
        return {
            "stack_trace": ''.join(traceback.format_exception(type(error), error, exc_tb)),
            "module": last_frame.filename,
            "function": last_frame.name,
            "line_number": str(last_frame.lineno),
        }

    @staticmethod
    def _request_info(request: Optional[Any]) -> Dict[str, Optional[str]]:
        if request is None:
            return {}
        user_agent = request.headers.get("user-agent")
        return {
            "request_method": request.method,
            "request_path": str(request.url.path),
            "request_query": str(request.url.query) or None,
            "client_ip": request.client.host if request.client else None,
            "user_agent": truncate_string(user_agent, 500) if user_agent else None,
        }

    def _save(self, **fields) -> Optional[UUID]:
        try:
            db = self.db_session_factory()
            try:
                error_log = ErrorLog(**fields)
                db.add(error_log)
                db.commit()
                return error_log.id
            finally:
                db.close()
        except Exception as db_err:
            # Never raise on top of the failure being logged
            logger.error(f"Failed to save error to database: {db_err}")
            return None

    def log_error(
        self,
        error: Exception,
        request: Optional[Any] = None,
        user: Optional[Any] = None,
        severity: str = "error",
        context: Optional[Dict] = None,
        save_to_db: bool = True
    ) -> Optional[UUID]:
        """
        Log an error with its request and user context.

        Args:
            error: The exception being reported
            request: FastAPI Request, if the error happened in one
            user: Authenticated User, if any
            severity: warning, error or critical
            context: Extra data (ids, paths), sanitized before storage
            save_to_db: Also write an ErrorLog row

        Returns:
            Id of the ErrorLog row, None if nothing was saved
        """
        error_type = type(error).__name__
        request_info = self._request_info(request)
        user_email = getattr(user, "email", None)

        log_message = (
            f"{error_type}: {error} | User: {user_email or 'anonymous'} "
            f"| Path: {request_info.get('request_path') or 'N/A'}"
        )
        logger.log(logging.getLevelName(severity.upper()), log_message)

        if not save_to_db or self.db_session_factory is None:
            return None

        error_log_id = self._save(
            timestamp=datetime.now(timezone.utc),
            error_type=error_type,
            error_code=str(getattr(error, "status_code", "")) or None,
            severity=severity,
            user_id=getattr(user, "id", None),
            user_email=user_email,
            message=truncate_string(str(error), 1000),
            context_data=sanitize_data(context) if context else None,
            **request_info,
            **{
                key: truncate_string(value, 20000) if key == "stack_trace" and value else value
                for key, value in self._traceback_info(error).items()
            },
        )
        if error_log_id:
            logger.debug(f"Error logged to DB with ID: {error_log_id}")
        return error_log_id

    def log_warning(self, message: str):
        logger.warning(message)


# Singleton instance
error_logger = ErrorLogger()


def configure_error_logging(db_session_factory, log_dir: str = settings.LOG_DIR) -> bool:
    """
    Enable file logging and database persistence. Called once at startup.

    Returns:
        Whether file logging could be enabled
    """
    file_logging = setup_file_logging(log_dir)
    error_logger.set_db_session_factory(db_session_factory)
    logger.info("Error logging system configured")
    return file_logging
