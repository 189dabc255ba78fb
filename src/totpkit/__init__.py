import logging
import secrets

from . import base32 as base32
from .exceptions import FormatError as FormatError
from .exceptions import InvalidArgumentError as InvalidArgumentError
from .exceptions import NullInputError as NullInputError
from .exceptions import OTPError as OTPError
from .hotp import HOTP as HOTP
from .otp import OTP as OTP
from .otp import generate_token as generate_token
from .totp import TOTP as TOTP
from .totp import get_counter as get_counter

logger = logging.getLogger(__name__)


def generate_secure_key(byte_count: int) -> bytes:
    """
    Draws a new shared secret from the operating system's CSPRNG.

    :param byte_count: number of bytes, 20 (160 bits) is the RFC 4226 recommendation
    """
    if byte_count < 1:
        raise InvalidArgumentError("byte_count must be at least 1")
    logger.debug("Generating %d-byte key", byte_count)
    return secrets.token_bytes(byte_count)


def random_base32(byte_count: int = 20) -> str:
    # Note: the otpauth scheme DOES NOT use base32 padding for secret lengths not divisible by 8.
    # 20 bytes encode to exactly 32 characters, so the default never needs it.
    return base32.encode(generate_secure_key(byte_count))
