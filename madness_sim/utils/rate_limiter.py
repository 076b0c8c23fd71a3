import logging
import time

logger = logging.getLogger(__name__)


class RateLimiter:
    """Minimum-delay rate limiter for the stats API."""

    def __init__(self, min_delay: float = 0.25):
        self.min_delay = min_delay
        self.last_call_time = 0.0

    def wait(self):
        """Block until at least min_delay seconds since last call."""
        elapsed = time.monotonic() - self.last_call_time
        if elapsed < self.min_delay:
            sleep_time = self.min_delay - elapsed
            logger.debug("Rate limiter sleeping %.2fs", sleep_time)
            time.sleep(sleep_time)
        self.last_call_time = time.monotonic()
