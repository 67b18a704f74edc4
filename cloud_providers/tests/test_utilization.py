import pytest

from cloud_providers import compute_utilization


@pytest.mark.parametrize(
    "cidr,available,expected",
    [
        ("10.0.0.0/24", 251, 0.0),
        ("10.0.0.0/24", 0, 100.0),
        ("10.0.0.0/16", 65531 - 6553, pytest.approx(10.0, abs=0.01)),
    ],
)
def test_compute_utilization(cidr, available, expected):
    assert compute_utilization(cidr, available, 5) == expected


def test_nearly_full_subnet():
    assert compute_utilization("10.0.0.0/24", 1, 5) == pytest.approx(99.60, abs=0.01)


@pytest.mark.parametrize("cidr", ["10.0.0.0/29", "10.0.0.0/30", "10.0.0.4/32"])
def test_tiny_subnets_never_divide_by_zero(cidr):
    # None of these has an addressable IP once 8 are reserved.
    value = compute_utilization(cidr, 0, 8)
    assert value == 0.0


def test_host_bits_tolerated():
    assert compute_utilization("10.0.0.17/24", 251, 5) == 0.0


def test_invalid_cidr():
    with pytest.raises(ValueError):
        compute_utilization("not-a-cidr", 0, 5)
