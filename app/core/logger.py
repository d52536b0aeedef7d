import logging
import sys
import threading
from collections import deque
from typing import List, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class LogStreamManager:
    _instance = None

    def __init__(self, maxlen: int = 2000):
        # Buffer last 2000 lines
        self.buffer: deque = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls):
        if cls._instance is None:
            cls._instance = LogStreamManager()
        return cls._instance

    def add_log(self, message: str, level: str = "INFO"):
        """Adds a log message to the buffer."""
        with self._lock:
            self.buffer.append({
                "message": message,
                "level": level,
            })

    def tail(self, limit: int = 200, level: Optional[str] = None) -> List[dict]:
        with self._lock:
            entries = list(self.buffer)
        if level:
            entries = [e for e in entries if e["level"] == level.upper()]
        if limit <= 0:
            return []
        return entries[-limit:]

    def clear(self):
        with self._lock:
            self.buffer.clear()


# Global instance
log_manager = LogStreamManager.get_instance()


class ListLogHandler(logging.Handler):
    """Custom logging handler to push logs into LogStreamManager."""
    def emit(self, record):
        try:
            msg = self.format(record)
            log_manager.add_log(msg, record.levelname)
        except Exception:
            self.handleError(record)


def configure_logging(level: str = "INFO", log_file: Optional[str] = "server_debug.log"):
    """stdout + optional file + in-memory buffer for the admin log view"""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout), ListLogHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
