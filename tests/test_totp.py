import datetime
import time

import pytest

from totpkit import TOTP, get_counter
from totpkit.exceptions import InvalidArgumentError

RFC6238_KEY = b"12345678901234567890"

UTC = datetime.timezone.utc

# RFC 6238 Appendix B, SHA-1 column
RFC6238_TOKENS = [
    (59, "94287082"),
    (1111111109, "07081804"),
    (1111111111, "14050471"),
    (1234567890, "89005924"),
    (2000000000, "69279037"),
    (20000000000, "65353130"),
]


@pytest.mark.parametrize("timestamp, token", RFC6238_TOKENS)
def test_rfc6238_vectors(timestamp, token):
    totp = TOTP(RFC6238_KEY, digits=8)
    assert totp.at(timestamp) == token
    assert totp.at(datetime.datetime.fromtimestamp(timestamp, UTC)) == token


def test_get_counter_from_timestamp():
    assert get_counter(now=0) == 0
    assert get_counter(now=29) == 0
    assert get_counter(now=30) == 1
    assert get_counter(now=59) == 1
    assert get_counter(now=59.9) == 1
    assert get_counter(now=1111111109) == 0x23523EC


def test_get_counter_from_datetime():
    now = datetime.datetime(2009, 2, 13, 23, 31, 30, tzinfo=UTC)
    assert get_counter(now=now) == 1234567890 // 30


def test_get_counter_converts_to_utc():
    utc = datetime.datetime(2009, 2, 13, 23, 31, 30, tzinfo=UTC)
    plus_two = utc.astimezone(datetime.timezone(datetime.timedelta(hours=2)))
    assert plus_two.hour == 1
    assert get_counter(now=plus_two) == get_counter(now=utc)


def test_get_counter_naive_datetime_is_local_time():
    utc = datetime.datetime(2009, 2, 13, 23, 31, 30, tzinfo=UTC)
    local_naive = utc.astimezone().replace(tzinfo=None)
    assert get_counter(now=local_naive) == get_counter(now=utc)


def test_get_counter_defaults_to_now():
    before = int(time.time()) // 30
    counter = get_counter()
    after = int(time.time()) // 30
    assert before <= counter <= after


def test_get_counter_step_and_epoch():
    assert get_counter(step_size=60, now=119) == 1
    assert get_counter(epoch_start=30, now=59) == 0
    assert get_counter(epoch_start=30, now=60) == 1
    assert get_counter(epoch_start=-30, now=0) == 1


@pytest.mark.parametrize("step_size", [0, -30])
def test_get_counter_rejects_step_size(step_size):
    with pytest.raises(InvalidArgumentError):
        get_counter(step_size=step_size, now=100)


def test_get_counter_monotonic():
    previous = get_counter(now=0)
    for t in range(0, 400, 7):
        counter = get_counter(step_size=13, now=t)
        assert counter >= previous
        previous = counter


def test_timecode_and_remaining():
    totp = TOTP(RFC6238_KEY)
    assert totp.timecode(59) == 1
    assert totp.remaining(59) == 1
    assert totp.remaining(60) == 30
    assert TOTP(RFC6238_KEY, interval=60, epoch_start=10).remaining(70) == 60


def test_now_matches_at():
    totp = TOTP(RFC6238_KEY)
    before = totp.at(int(time.time()))
    now = totp.now()
    after = totp.at(int(time.time()))
    assert now in (before, after)


def test_at_counter_offset():
    totp = TOTP(RFC6238_KEY, digits=8)
    assert totp.at(29, counter_offset=1) == "94287082"


def test_window():
    totp = TOTP(RFC6238_KEY)
    assert totp.window(95, size=2) == [(1, "287082"), (2, "359152"), (3, "969429")]
    assert totp.window(30, size=5) == [(0, "755224"), (1, "287082")]
    assert totp.window(95, size=0) == [(3, "969429")]


def test_verify():
    totp = TOTP(RFC6238_KEY, digits=8)
    assert totp.verify("07081804", for_time=1111111109)
    assert not totp.verify("07081804", for_time=1111111109 + 30)
    assert totp.verify("07081804", for_time=1111111109 + 30, valid_window=1)
    assert totp.verify("07081804", for_time=1111111109 - 30, valid_window=1)
    assert not totp.verify("07081804", for_time=1111111109 + 60, valid_window=1)


def test_verify_current_time():
    totp = TOTP(RFC6238_KEY)
    assert totp.verify(totp.now(), valid_window=1)


def test_verify_near_epoch_skips_negative_counters():
    totp = TOTP(RFC6238_KEY)
    assert totp.verify("755224", for_time=0, valid_window=2)


def test_rejects_bad_parameters():
    with pytest.raises(InvalidArgumentError):
        TOTP(RFC6238_KEY, interval=0)
    with pytest.raises(InvalidArgumentError):
        TOTP(RFC6238_KEY, digits=0)
    with pytest.raises(InvalidArgumentError):
        TOTP(RFC6238_KEY).verify("000000", for_time=59, valid_window=-1)
    with pytest.raises(InvalidArgumentError):
        TOTP(RFC6238_KEY).window(59, size=-1)


def test_before_shifted_epoch():
    # Counter goes negative before epoch_start, which no token can use
    with pytest.raises(InvalidArgumentError):
        TOTP(RFC6238_KEY, epoch_start=100).at(50)
