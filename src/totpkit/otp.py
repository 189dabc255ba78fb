import hashlib
import hmac
from typing import Union

from . import base32
from .exceptions import InvalidArgumentError, NullInputError

DEFAULT_DIGITS = 6
MAX_DIGITS = 10
MAX_COUNTER = 0x7FFFFFFFFFFFFFFF

# RFC 4226 and RFC 6238 verifiers expect HMAC-SHA1. Not configurable.
DIGEST = hashlib.sha1

Secret = Union[str, bytes, bytearray, memoryview]


def _check_digits(digits: int) -> None:
    if not 1 <= digits <= MAX_DIGITS:
        raise InvalidArgumentError("digits must be between 1 and {}".format(MAX_DIGITS))


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Turns an integer to the OATH specified
    bytestring, which is fed to the HMAC
    along with the secret
    """
    # Top bit of the first byte is always cleared so the counter reads the
    # same to verifiers that treat it as a signed 64-bit value.
    return (i & MAX_COUNTER).to_bytes(padding, "big")


def dynamic_truncate(hmac_hash: bytes) -> int:
    # The last nibble picks where the 4-byte window starts (0-15)
    offset = hmac_hash[-1] & 0xF
    return (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )


def generate_token(key: Union[bytes, bytearray, memoryview], counter: int, digits: int = DEFAULT_DIGITS) -> str:
    """
    Derives the RFC 4226 token for a counter value.

    :param key: shared secret as raw bytes
    :param counter: the HMAC counter, 0 <= counter < 2**63
    :param digits: token length, 1 to 10
    :returns: the token, left-padded with zeros to ``digits`` characters
    """
    if key is None:
        raise NullInputError("key must not be None")
    key = memoryview(key).tobytes()
    if not key:
        raise InvalidArgumentError("key must not be empty")
    if counter < 0:
        raise InvalidArgumentError("counter must not be negative")
    if counter > MAX_COUNTER:
        raise InvalidArgumentError("counter must fit in 63 bits")
    _check_digits(digits)

    hmac_hash = hmac.new(key, int_to_bytestring(counter), DIGEST).digest()
    code = dynamic_truncate(hmac_hash)
    # 10**10 > 2**31 so the padding trick keeps leading zeros for any digit count
    str_code = str(10_000_000_000 + (code % 10**digits))
    return str_code[-digits:]


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(self, s: Secret, digits: int = DEFAULT_DIGITS) -> None:
        """
        :param s: secret, either Base32 text or raw bytes
        :param digits: number of integers in the OTP
        """
        if s is None:
            raise NullInputError("secret must not be None")
        _check_digits(digits)
        self.digits = digits
        self.secret = s

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        return generate_token(self.byte_secret(), input, self.digits)

    def byte_secret(self) -> bytes:
        if isinstance(self.secret, str):
            return base32.decode(self.secret)
        return memoryview(self.secret).tobytes()
