import logging
import threading
from dataclasses import dataclass, field

from tcpping.prober import probe

logger = logging.getLogger(__name__)


@dataclass
class SessionStats:
    sent: int = 0
    received: int = 0
    rtts: list = field(default_factory=list)

    @property
    def lost(self):
        return self.sent - self.received

    @property
    def loss_pct(self):
        return (self.lost / self.sent * 100.0) if self.sent else 0.0

    def record(self, result):
        self.sent += 1
        if result.connected:
            self.received += 1
            self.rtts.append(result.duration_ms)


def run(target, port, timeout, reporter, stop_event=None, count=None, stats=None):
    """Probe ``target:port`` until ``stop_event`` is set or ``count`` attempts are done.

    Every attempt is reported, then the loop waits the full ``timeout`` before
    the next one, however long the attempt took. Setting ``stop_event`` cuts
    the wait short. Pass ``stats`` to keep the counters visible to the caller
    if the run is interrupted.
    """
    if stop_event is None:
        stop_event = threading.Event()
    if stats is None:
        stats = SessionStats()

    while not stop_event.is_set():
        result = probe(target, port, timeout)
        stats.record(result)
        reporter.report(target, port, result)

        if count is not None and stats.sent >= count:
            logger.debug("Reached %d attempts, stopping", count)
            break
        if stop_event.wait(timeout):
            logger.debug("Stop requested after %d attempts", stats.sent)
            break

    return stats
