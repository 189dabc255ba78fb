import pytest

from totpkit import HOTP, base32
from totpkit.exceptions import InvalidArgumentError

RFC4226_KEY = b"12345678901234567890"
SECRET = base32.encode(RFC4226_KEY)


def test_at():
    hotp = HOTP(SECRET)
    assert hotp.at(0) == "755224"
    assert hotp.at(9) == "520489"


def test_initial_count():
    hotp = HOTP(SECRET, initial_count=2)
    assert hotp.at(0) == "359152"
    assert hotp.at(1) == "969429"


def test_digits():
    assert HOTP(RFC4226_KEY, digits=8).at(0) == "84755224"


def test_verify():
    hotp = HOTP(SECRET)
    assert hotp.verify("755224", 0)
    assert not hotp.verify("755224", 1)
    assert not hotp.verify("000000", 0)
    assert hotp.verify(287082, 1)


def test_verify_fullwidth_digits():
    assert HOTP(SECRET).verify("７５５２２４", 0)


def test_look_ahead():
    hotp = HOTP(SECRET)
    assert not hotp.verify("969429", 0, look_ahead=2)
    assert hotp.verify("969429", 0, look_ahead=3)
    assert hotp.match("969429", 0, look_ahead=5) == 3
    assert hotp.match("969429", 4, look_ahead=5) is None


def test_rejects_negative_look_ahead():
    with pytest.raises(InvalidArgumentError):
        HOTP(SECRET).verify("755224", 0, look_ahead=-1)


def test_rejects_negative_initial_count():
    with pytest.raises(InvalidArgumentError):
        HOTP(SECRET, initial_count=-1)


def test_negative_counter():
    with pytest.raises(InvalidArgumentError):
        HOTP(SECRET).at(-1)
