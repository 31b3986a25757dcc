import pytest
from argon2 import Type

from argon2hasher.errors import ConfigurationError, DecodeError
from argon2hasher.params import PINNED_PARALLELISM, HashParameters, decode_parameters


def test_defaults():
    p = HashParameters()
    assert (p.memory_cost, p.time_cost, p.parallelism) == (1024, 3, 1)


def test_values_are_coerced_to_int():
    p = HashParameters(memory_cost="2048", time_cost=2.0, parallelism="2")
    assert (p.memory_cost, p.time_cost, p.parallelism) == (2048, 2, 2)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"memory_cost": 7},
        {"memory_cost": -1024},
        {"time_cost": 0},
        {"parallelism": 0},
        {"time_cost": "abc"},
        {"memory_cost": None},
        {"parallelism": True},
        {"memory_cost": 2**32},
        {"time_cost": 2**32},
        {"parallelism": 2**32},
    ],
)
def test_invalid_values_raise_configuration_error(kwargs):
    with pytest.raises(ConfigurationError):
        HashParameters(**kwargs)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        HashParameters(time_cost=0)


def test_parameters_are_immutable():
    p = HashParameters()
    with pytest.raises(AttributeError):
        p.memory_cost = 1


def test_with_options_precedence():
    base = HashParameters(memory_cost=4096, time_cost=4, parallelism=1)
    p = base.with_options({"memory_cost": 2048, "time_cost": None, "threads": 2, "cost": 12})
    assert p == HashParameters(memory_cost=2048, time_cost=4, parallelism=2)
    assert base.memory_cost == 4096


@pytest.mark.parametrize("options", [None, {}, {"unrelated": 1}, {"memory_cost": None}])
def test_with_options_without_overrides_returns_same_snapshot(options):
    base = HashParameters()
    assert base.with_options(options) is base


def test_to_argon2_pins_parallelism():
    a = HashParameters(memory_cost=2048, time_cost=2, parallelism=8).to_argon2()
    assert a.type is Type.I
    assert a.parallelism == PINNED_PARALLELISM == 1
    assert (a.memory_cost, a.time_cost) == (2048, 2)


def test_decode_parameters_reads_embedded_costs():
    p = decode_parameters("$argon2i$v=19$m=2048,t=2,p=1$c29tZXNhbHRzYWx0$aGFzaGhhc2hoYXNoaGFzaA")
    assert (p.type, p.version, p.memory_cost, p.time_cost, p.parallelism) == (Type.I, 19, 2048, 2, 1)


def test_decode_parameters_accepts_bytes():
    p = decode_parameters(b"$argon2i$v=19$m=1024,t=3,p=1$c29tZXNhbHRzYWx0$aGFzaGhhc2hoYXNoaGFzaA")
    assert p.memory_cost == 1024


@pytest.mark.parametrize(
    "bad",
    [
        "",
        None,
        "not-a-valid-hash",
        "$argon2x$v=19$m=1024,t=3,p=1$c29tZXNhbHQ$aGFzaA",
        "$argon2i$v=19$m=lots,t=3,p=1$c29tZXNhbHQ$aGFzaA",
        b"\xff\xfe",
        12345,
    ],
)
def test_decode_parameters_rejects_malformed(bad):
    with pytest.raises(DecodeError):
        decode_parameters(bad)
