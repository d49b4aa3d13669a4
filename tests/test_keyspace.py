import pytest

from vigenerecracker import EmptyKeyError, InputDomainError, KeyLengthError, VigenereEngine, VigenereError

engine = VigenereEngine()
digits = VigenereEngine.from_chars("0", "9")


# ── Successor ────────────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "key, expected",
    [
        ("AA", "AB"),
        ("AZ", "BA"),
        ("ZZ", "AA"),
        ("A", "B"),
        ("Z", "A"),
        ("AZZ", "BAA"),
        ("MZZ", "NAA"),
        ("ZAZ", "ZBA"),
        ("ZZY", "ZZZ"),
    ],
)
def test_next_key(key, expected):
    assert engine.next_key(key) == expected


def test_next_key_digits():
    assert digits.next_key("09") == "10"
    assert digits.next_key("99") == "00"
    assert digits.next_key("123") == "124"


def test_next_key_rejects_bad_keys():
    with pytest.raises(EmptyKeyError):
        engine.next_key("")
    with pytest.raises(InputDomainError):
        engine.next_key("A1")


def test_next_key_returns_new_value():
    key = "AZ"
    nxt = engine.next_key(key)
    assert key == "AZ"
    assert nxt == "BA"


# ── Coverage ─────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("eng, length", [(engine, 1), (engine, 2), (digits, 3)])
def test_successor_visits_every_key_once_then_wraps(eng, length):
    size = eng.keyspace_size(length)
    key = eng.zero_key(length)
    seen = []
    for _ in range(size):
        seen.append(key)
        key = eng.next_key(key)
    assert len(set(seen)) == size
    assert seen == sorted(seen)
    # size-th step lands back on the zero key
    assert key == eng.zero_key(length)


def test_keys_from_zero():
    keys = list(digits.keys(2))
    assert len(keys) == 100
    assert keys[0] == "00"
    assert keys[-1] == "99"


def test_keys_resume_from_arbitrary_key():
    keys = list(engine.keys(2, start_key="ZY"))
    assert len(keys) == 676
    assert keys[:4] == ["ZY", "ZZ", "AA", "AB"]
    assert len(set(keys)) == 676


def test_keys_start_key_length_mismatch():
    with pytest.raises(KeyLengthError):
        list(engine.keys(3, start_key="AB"))


def test_keyspace_size_and_zero_key():
    assert engine.keyspace_size(3) == 17_576
    assert engine.keyspace_size(10) == 26 ** 10
    assert engine.zero_key(4) == "AAAA"
    assert digits.zero_key(3) == "000"
    with pytest.raises(EmptyKeyError):
        engine.keyspace_size(0)


# ── Index arithmetic ─────────────────────────────────────────────────────────
def test_key_index_roundtrip():
    assert engine.key_to_index("AA") == 0
    assert engine.key_to_index("BA") == 26
    assert engine.key_to_index("ZZ") == 675
    assert engine.index_to_key(26, 2) == "BA"
    assert digits.key_to_index("042") == 42
    assert digits.index_to_key(42, 3) == "042"


def test_index_to_key_wraps_like_successor():
    assert engine.index_to_key(676, 2) == "AA"
    assert engine.index_to_key(677, 2) == engine.next_key("AA")


def test_index_agrees_with_successor():
    key = engine.zero_key(3)
    for i in range(2000):
        assert engine.index_to_key(i, 3) == key
        key = engine.next_key(key)


def test_key_length_error_is_engine_error():
    assert issubclass(KeyLengthError, VigenereError)
