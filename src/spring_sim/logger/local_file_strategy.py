import os
from datetime import datetime

from .log_storage_strategy import LogStorageStrategy


class LocalFileStrategy(LogStorageStrategy):
    """
    Appends simulator log entries to a plain text file.
    """

    # OPEN (OR CREATE) THE LOG FILE
    def __init__(self, file_location):
        """
        Args:
            file_location (str): Absolute or working-directory relative path.
        """
        self.file_location = self.resolve_file_path(file_location)
        self.initialize_log_file()

    # MAKE PATH ABSOLUTE AND ENSURE ITS DIRECTORY EXISTS
    def resolve_file_path(self, file_location):
        file_location = os.fspath(file_location)
        if not os.path.isabs(file_location):
            file_location = os.path.join(os.getcwd(), file_location)

        dir_name = os.path.dirname(file_location)
        if dir_name:
            os.makedirs(dir_name, exist_ok=True)

        return file_location

    # START A FRESH FILE FOR THIS SESSION
    def initialize_log_file(self):
        with open(self.file_location, 'w') as log_file:
            log_file.write(f"LOG INITIALIZATION: {datetime.now()}\n")

    # APPEND ONE ENTRY
    def store_log(self, message, priority, timestamp):
        with open(self.file_location, 'a') as log_file:
            log_file.write(f"[{timestamp}] [{priority}] {message}\n")

    # TRUNCATE THE FILE
    def flush_logs(self):
        with open(self.file_location, 'w') as log_file:
            log_file.write(f"LOG FLUSHED: {datetime.now()}\n")
