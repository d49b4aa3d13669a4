import pytest

from vigenerecracker import AlphabetRange, Candidate, InputDomainError
from vigenerecracker.core.utils import (
    estimate_seconds,
    format_duration,
    normalize_az,
    restrict_to_range,
)


def test_alphabet_range_helpers():
    alpha = AlphabetRange.from_chars("0", "9")
    assert (alpha.start, alpha.end, alpha.size) == (48, 57, 10)
    assert alpha.first_char == "0"
    assert alpha.last_char == "9"
    assert alpha.contains("5")
    assert not alpha.contains("A")


def test_normalize_az():
    assert normalize_az("Attack at dawn!") == "ATTACKATDAWN"
    assert normalize_az(None) == ""


def test_restrict_to_range():
    assert restrict_to_range("attack at dawn", ord("A"), ord("Z")) == "ATTACKATDAWN"
    assert restrict_to_range("pin: 12-34", ord("0"), ord("9")) == "1234"
    # Only the exact A-Z range is uppercased
    assert restrict_to_range("abcXYZ", ord("A"), ord("Y")) == "XY"


def test_candidate_unpacks_and_serialises():
    c = Candidate(index=3, key="AD", plaintext="HELLO")
    key, plaintext = c
    assert (key, plaintext) == ("AD", "HELLO")
    assert c.to_dict() == {"index": 3, "key": "AD", "plaintext": "HELLO"}


def test_estimate_seconds():
    # 26^3 keys in 205 s is the rate behind the classic "52,000 years for 10 letters" figure
    rate = 26 ** 3 / 205
    assert estimate_seconds(26 ** 3, rate) == pytest.approx(205)
    years = estimate_seconds(26 ** 10, rate) / (365 * 24 * 3600)
    assert 50_000 < years < 55_000
    with pytest.raises(ValueError):
        estimate_seconds(10, 0)


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (12.5, "12.50 s"),
        (205, "3.4 min"),
        (7200, "2.0 h"),
        (138_580, "1.6 days"),
        (2 * 365 * 24 * 3600, "2 years"),
    ],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_check_agrees_with_contains():
    alpha = AlphabetRange.from_chars("0", "9")
    text = "12a4"
    bad = [i for i, ch in enumerate(text) if not alpha.contains(ch)]
    with pytest.raises(InputDomainError) as exc:
        alpha.check(text, "text")
    assert exc.value.position == bad[0] == 2
