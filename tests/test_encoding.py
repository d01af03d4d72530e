import pytest

from udpstatsd import encoding
from udpstatsd.encoding import encode


def test_can_encode_a_bare_counter():
    assert encode("test", 1, "c", global_tags=[]) == "test:1|c"


def test_can_encode_per_call_tags_followed_by_global_tags():
    assert encode("test", 42, "c", tags=["foo", "bar"], global_tags=["gtag"]) == "test:42|c|#foo,bar,gtag"


def test_duplicate_tags_are_preserved():
    assert encode("test", 1, "c", tags=["gtag"], global_tags=["gtag"]) == "test:1|c|#gtag,gtag"


def test_can_encode_prefix_suffix_and_accepted_sample(fixed_random):
    message = encode("test", 42, "ms", 0.5, prefix="foo.", suffix=".bar", global_tags=[])
    assert message == "foo.test.bar:42|ms|@0.5"


def test_rejected_samples_are_suppressed(monkeypatch):
    monkeypatch.setattr(encoding, "random", lambda: 0.42)
    assert encode("test", 1, "c", 0.42) is None
    assert encode("test", 1, "c", 0.1) is None


@pytest.mark.parametrize("sample_rate", [None, 0, 1, 1.5])
def test_sample_rates_that_always_send_add_no_annotation(monkeypatch, sample_rate):
    monkeypatch.setattr(encoding, "random", lambda: 0.99)
    assert encode("test", 1, "c", sample_rate) == "test:1|c"


def test_delimiters_in_names_are_not_escaped():
    assert encode("a:b|c", 1, "c") == "a:b|c:1|c"


def test_sampled_fraction_converges_to_the_sample_rate():
    sent = sum(encode("test", 1, "c", 0.3) is not None for _ in range(20000))
    assert 0.27 < sent / 20000 < 0.33
