"""Injectable source of the current wall-clock time"""

from datetime import datetime


class SystemClock:
    """Reads local wall-clock time (naive, no tzinfo)"""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Always returns the same moment; used by tests and replays"""

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment
