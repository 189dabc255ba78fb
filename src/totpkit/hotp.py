import logging
from typing import Optional

from . import utils
from .exceptions import InvalidArgumentError
from .otp import DEFAULT_DIGITS, OTP, Secret

logger = logging.getLogger(__name__)


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.
    """

    def __init__(self, s: Secret, digits: int = DEFAULT_DIGITS, initial_count: int = 0) -> None:
        """
        :param s: secret, either Base32 text or raw bytes
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param initial_count: starting HMAC counter value, defaults to 0
        """
        if initial_count < 0:
            raise InvalidArgumentError("initial_count must not be negative")
        self.initial_count = initial_count
        super().__init__(s=s, digits=digits)

    def at(self, count: int) -> str:
        """
        Generates the OTP for the given count.

        :param count: the OTP HMAC counter
        :returns: OTP
        """
        return self.generate_otp(self.initial_count + count)

    def match(self, otp: str, counter: int, look_ahead: int = 0) -> Optional[int]:
        """
        Finds the counter an OTP was generated for.

        Checks ``counter`` and up to ``look_ahead`` counters after it, for
        tokens the user generated but never submitted.

        :param otp: the OTP to check against
        :param counter: the expected OTP HMAC counter
        :param look_ahead: how many later counters to also accept
        :returns: the matching counter, or None
        """
        if look_ahead < 0:
            raise InvalidArgumentError("look_ahead must not be negative")
        for candidate in range(counter, counter + look_ahead + 1):
            if utils.strings_equal(str(otp), self.at(candidate)):
                logger.debug("HOTP matched at counter %d (expected %d)", candidate, counter)
                return candidate
        logger.debug("HOTP did not match counters %d..%d", counter, counter + look_ahead)
        return None

    def verify(self, otp: str, counter: int, look_ahead: int = 0) -> bool:
        """
        Verifies the OTP passed in against the current counter OTP.

        :param otp: the OTP to check against
        :param counter: the OTP HMAC counter
        :param look_ahead: how many later counters to also accept
        """
        return self.match(otp, counter, look_ahead) is not None
