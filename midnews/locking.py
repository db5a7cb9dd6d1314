"""Run-level lock so overlapping pipeline runs never touch the archive together."""

import errno
import fcntl
import logging
import os

logger = logging.getLogger(__name__)


class ProcessLock:
    """Process lock to prevent multiple runs from executing simultaneously"""

    def __init__(self, lock_file):
        self.lock_file = lock_file
        self.lock_file_handle = None

    def acquire(self):
        """Acquire a lock, return True if successful, False otherwise"""
        try:
            os.makedirs(os.path.dirname(self.lock_file) or ".", exist_ok=True)
            self.lock_file_handle = open(self.lock_file, 'a+')
            fcntl.flock(self.lock_file_handle, fcntl.LOCK_EX | fcntl.LOCK_NB)

            self.lock_file_handle.seek(0)
            self.lock_file_handle.truncate()
            self.lock_file_handle.write(str(os.getpid()))
            self.lock_file_handle.flush()

            logger.info(f"Process lock acquired (PID: {os.getpid()})")
            return True
        except OSError as e:
            if e.errno in (errno.EAGAIN, errno.EACCES):
                try:
                    with open(self.lock_file, 'r') as f:
                        pid = f.read().strip()
                    logger.warning(f"Another run is already in progress (PID: {pid or 'unknown'})")
                except OSError:
                    logger.warning("Another run is already in progress (unknown PID)")
            else:
                logger.error(f"Failed to acquire process lock: {e}")

            if self.lock_file_handle:
                self.lock_file_handle.close()
                self.lock_file_handle = None

            return False

    def release(self):
        """Release the lock"""
        if self.lock_file_handle:
            try:
                fcntl.flock(self.lock_file_handle, fcntl.LOCK_UN)
                self.lock_file_handle.close()
                logger.info("Process lock released")
            except OSError as e:
                logger.error(f"Error releasing process lock: {e}")
            finally:
                self.lock_file_handle = None

    @property
    def held(self):
        return self.lock_file_handle is not None
