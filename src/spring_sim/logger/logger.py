import os
import threading
from datetime import datetime
from enum import Enum

from .local_file_strategy import LocalFileStrategy


class Logger:
    """
    Process-wide simulator logger.

    Used as a static class: call Logger.initialize() once from an entry point,
    then Logger.log(...) anywhere. Until a storage strategy is set every call
    is a no-op, so library code can log unconditionally.
    """

    class LogPriority(Enum):
        DEBUG = 1
        INFO = 2
        WARNING = 3
        ERROR = 4
        CRITICAL = 5

    DEFAULT_LOG_PATH = "/tmp/spring_sim_logs.txt"
    LOG_PATH_ENV = "SPRING_SIM_LOG_PATH"

    is_logging_enabled = True
    log_storage_strategy = None
    _lock = threading.RLock()

    # INSTALL THE DEFAULT FILE STRATEGY
    @classmethod
    def initialize(cls, file_location=None):
        """
        Set up file logging unless a strategy is already installed.

        Args:
            file_location (str, optional): Log path. Falls back to the
                SPRING_SIM_LOG_PATH environment variable, then DEFAULT_LOG_PATH.
        """
        with cls._lock:
            if cls.log_storage_strategy is not None:
                return
            if file_location is None:
                file_location = os.getenv(cls.LOG_PATH_ENV, cls.DEFAULT_LOG_PATH)
            cls.set_log_storage_strategy(LocalFileStrategy(file_location))
            cls.log(f"Logger initialized with file storage at {file_location}.", cls.LogPriority.INFO)

    # WRITE ONE ENTRY
    @classmethod
    def log(cls, message, priority=LogPriority.DEBUG):
        """
        Store a message with the given priority (DEBUG by default).
        """
        with cls._lock:
            if cls.is_logging_enabled and cls.log_storage_strategy:
                cls.log_storage_strategy.store_log(
                    message, priority.name, datetime.now().strftime("%Y-%m-%d %H:%M:%S")
                )

    @classmethod
    def set_log_storage_strategy(cls, log_storage_strategy):
        with cls._lock:
            cls.log_storage_strategy = log_storage_strategy

    # DETACH STORAGE (logging becomes a no-op again)
    @classmethod
    def shutdown(cls):
        with cls._lock:
            cls.log_storage_strategy = None

    @classmethod
    def flush_logs(cls):
        with cls._lock:
            if cls.is_logging_enabled and cls.log_storage_strategy:
                cls.log_storage_strategy.flush_logs()

    @classmethod
    def disable_logging(cls):
        with cls._lock:
            cls.log("Logging disabled")
            cls.is_logging_enabled = False

    @classmethod
    def enable_logging(cls):
        with cls._lock:
            cls.is_logging_enabled = True
            cls.log("Logging enabled")
