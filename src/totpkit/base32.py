import base64
import string
from typing import List, Optional, Union

from .exceptions import FormatError, InvalidArgumentError, NullInputError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

# Each output character carries 5 bits
SHIFT = 5

ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)

# length * 8 must fit in a signed 32-bit int
MAX_ENCODE_LENGTH = 1 << 28

# Digits a human is likely to type for the letter they resemble.
#   "0" -> "O" (14)
#   "1" -> "I" (8)
#   "8" -> "B" (1)
# Strict RFC 4648 decoders reject these. We accept them unless told not to.
LOOKALIKES = str.maketrans({"0": "O", "1": "I", "8": "B"})


def _build_table() -> List[int]:
    table = [-1] * 128
    for value, char in enumerate(ALPHABET):
        table[ord(char)] = value
    return table


# Indexed by character code; -1 marks a character outside the alphabet
_DECODE_TABLE = _build_table()


def _char_value(char: str) -> int:
    code = ord(char)
    if code >= len(_DECODE_TABLE):
        return -1
    return _DECODE_TABLE[code]


def decode(text: Optional[str], lenient: bool = True) -> bytes:
    """
    Converts Base32 text into bytes.

    Surrounding whitespace and trailing "=" padding are ignored and the text
    is matched case-insensitively. With ``lenient`` the digits 0, 1 and 8 are
    read as the letters O, I and B.

    :param text: Base32 text, padding optional
    :param lenient: accept lookalike digits in place of letters
    :returns: decoded bytes, ``floor(len(text) * 5 / 8)`` of them
    :raises NullInputError: if text is None
    :raises FormatError: if text contains a character outside the alphabet
    """
    if text is None:
        raise NullInputError("text must not be None")

    # ASCII-only uppercasing: str.upper() turns "ß" into "SS"
    encoded = text.strip().rstrip("=").translate(ASCII_UPPER)
    if lenient:
        encoded = encoded.translate(LOOKALIKES)
    if not encoded:
        return b""

    result = bytearray()
    buffer = 0
    bits_left = 0
    for char in encoded:
        value = _char_value(char)
        if value < 0:
            raise FormatError("Illegal character: {!r}".format(char))

        buffer = (buffer << SHIFT) | value
        bits_left += SHIFT
        if bits_left >= 8:
            bits_left -= 8
            result.append((buffer >> bits_left) & 0xFF)
            # Drop the bits we just emitted so the accumulator stays small
            buffer &= (1 << bits_left) - 1

    return bytes(result)


def encode(
    data: Union[bytes, bytearray, memoryview, None],
    offset: int = 0,
    length: Optional[int] = None,
    pad: bool = False,
) -> str:
    """
    Converts ``data[offset:offset + length]`` into Base32 text.

    :param data: raw bytes
    :param offset: index of the first byte to encode
    :param length: number of bytes to encode, defaults to the rest of data
    :param pad: append "=" up to a multiple of 8 characters
    :returns: Base32 text, ``ceil(length * 8 / 5)`` characters before padding
    :raises NullInputError: if data is None
    :raises InvalidArgumentError: if the range does not fit inside data
    """
    if data is None:
        raise NullInputError("data must not be None")
    # memoryview rejects ints, which bytes() would turn into zero-filled buffers
    data = memoryview(data).tobytes()
    if length is None:
        length = len(data) - offset

    if offset < 0:
        raise InvalidArgumentError("offset must not be negative")
    if length < 0:
        raise InvalidArgumentError("length must not be negative")
    if offset + length > len(data):
        raise InvalidArgumentError("offset + length exceeds the size of data")
    if length == 0:
        return ""
    if length >= MAX_ENCODE_LENGTH:
        raise InvalidArgumentError("length must be less than 2**28")

    # The stdlib encoder zero-fills the last partial group and pads to a
    # multiple of 8, the same output as a 5-bit accumulator over the range.
    encoded = base64.b32encode(data[offset : offset + length]).decode("ascii")
    if not pad:
        encoded = encoded.rstrip("=")
    return encoded
