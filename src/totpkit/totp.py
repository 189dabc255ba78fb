import datetime
import logging
from typing import List, Optional, Tuple, Union

from . import utils
from .exceptions import InvalidArgumentError
from .otp import DEFAULT_DIGITS, OTP, Secret

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 30
DEFAULT_EPOCH_START = 0

UNIX_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

Timestamp = Union[datetime.datetime, int, float, None]


def unix_seconds(now: Timestamp = None) -> int:
    """
    Whole seconds since the Unix epoch.

    :param now: aware or naive (local time) datetime, or a Unix timestamp.
        Defaults to the current time.
    """
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    if isinstance(now, datetime.datetime):
        # astimezone() reads a naive datetime as local time
        now = now.astimezone(datetime.timezone.utc)
        return int((now - UNIX_EPOCH).total_seconds())
    return int(now)


def get_counter(
    epoch_start: int = DEFAULT_EPOCH_START,
    step_size: int = DEFAULT_INTERVAL,
    now: Timestamp = None,
) -> int:
    """
    Converts a point in time into the counter fed to ``generate_token``.

    :param epoch_start: seconds added to the Unix epoch before counting steps
    :param step_size: seconds each counter value lasts
    :param now: the time to convert, defaults to the current time
    :returns: number of whole steps elapsed since the shifted epoch
    """
    if step_size <= 0:
        raise InvalidArgumentError("step_size must be positive")
    return (unix_seconds(now) - epoch_start) // step_size


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def __init__(
        self,
        s: Secret,
        digits: int = DEFAULT_DIGITS,
        interval: int = DEFAULT_INTERVAL,
        epoch_start: int = DEFAULT_EPOCH_START,
    ) -> None:
        """
        :param s: secret, either Base32 text or raw bytes
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param interval: the time interval in seconds for OTP. This defaults to 30.
        :param epoch_start: seconds after the Unix epoch at which counting starts
        """
        if interval <= 0:
            raise InvalidArgumentError("interval must be positive")
        self.interval = interval
        self.epoch_start = epoch_start
        super().__init__(s=s, digits=digits)

    def timecode(self, for_time: Timestamp = None) -> int:
        """
        Accepts either a datetime or a Unix timestamp and returns the counter
        for it.
        """
        return get_counter(self.epoch_start, self.interval, for_time)

    def at(self, for_time: Timestamp = None, counter_offset: int = 0) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        To get the time until the next timecode change (seconds until the current OTP expires), use this instead:

        .. code:: python

            totp = totpkit.TOTP(...)
            time_remaining = totp.remaining()

        :param for_time: the time to generate an OTP for
        :param counter_offset: the amount of ticks to add to the time counter
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time) + counter_offset)

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.at()

    def remaining(self, for_time: Timestamp = None) -> int:
        """
        Seconds until the OTP for ``for_time`` stops being current.
        """
        return self.interval - (unix_seconds(for_time) - self.epoch_start) % self.interval

    def window(self, for_time: Timestamp = None, size: int = 5) -> List[Tuple[int, str]]:
        """
        Tokens for the current counter and the ``size`` counters before it,
        oldest first. Counters below zero are skipped.

        :returns: list of (counter, OTP) pairs
        """
        if size < 0:
            raise InvalidArgumentError("size must not be negative")
        current = self.timecode(for_time)
        return [(counter, self.generate_otp(counter)) for counter in range(max(current - size, 0), current + 1)]

    def verify(self, otp: str, for_time: Timestamp = None, valid_window: int = 0) -> bool:
        """
        Verifies the OTP passed in against the current time OTP.

        :param otp: the OTP to check against
        :param for_time: Time to check OTP at (defaults to now)
        :param valid_window: extends the validity to this many counter ticks before and after the current one
        :returns: True if verification succeeded, False otherwise
        """
        if valid_window < 0:
            raise InvalidArgumentError("valid_window must not be negative")
        if for_time is None:
            for_time = datetime.datetime.now(datetime.timezone.utc)

        counter = self.timecode(for_time)
        for i in range(-valid_window, valid_window + 1):
            if counter + i < 0:
                continue
            if utils.strings_equal(str(otp), self.generate_otp(counter + i)):
                logger.debug("TOTP matched %d step(s) from counter %d", i, counter)
                return True
        logger.debug("TOTP did not match within %d step(s) of counter %d", valid_window, counter)
        return False
