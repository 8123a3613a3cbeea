class LogStorageStrategy:
    """
    Base class for places the simulator log can be written to.
    """
    # STORE ONE LOG LINE
    def store_log(self, message, priority, timestamp):
        """
        Persist a single log entry.

        Args:
            message (str): Text of the entry.
            priority (str): Name of the priority level.
            timestamp (str): Formatted time of the entry.
        """
        raise NotImplementedError()

    # DROP EVERYTHING STORED SO FAR
    def flush_logs(self):
        """
        Discard all stored entries.
        """
        raise NotImplementedError()
