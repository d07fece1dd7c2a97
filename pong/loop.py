"""Frame scheduler — the cooperative tick source for match sessions.

Works like a browser's requestAnimationFrame: callbacks requested during a
frame run on the next one, and a handle can be cancelled until it runs.
"""

import itertools
import logging

logger = logging.getLogger(__name__)


class FrameScheduler:
    """Queue of callbacks run once per host frame."""

    def __init__(self):
        self._ids = itertools.count(1)
        self._pending = {}
        self.frame = 0

    def request_frame(self, callback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle) -> None:
        if handle is not None:
            self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_frame(self) -> int:
        """Run every callback requested before this frame. Returns how many ran."""
        self.frame += 1
        ran = 0
        for handle in list(self._pending):
            # An earlier callback of this frame may have cancelled it
            callback = self._pending.pop(handle, None)
            if callback is None:
                continue
            callback(self.frame)
            ran += 1
        return ran

    def run_until_idle(self, max_frames: int) -> int:
        """Run frames until nothing is pending or max_frames is reached."""
        ran = 0
        while self._pending and ran < max_frames:
            self.run_frame()
            ran += 1
        if self._pending:
            logger.debug("scheduler still has %d pending callbacks after %d frames",
                         len(self._pending), ran)
        return ran
