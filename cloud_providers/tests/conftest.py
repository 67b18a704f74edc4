import copy
import itertools
from datetime import datetime, timedelta, timezone

import pytest

from cloud_providers import (
    BaseProvider,
    CloudSubnet,
    Context,
    LeafSubnet,
    Network,
    ProviderRegistry,
    SubnetNotFound,
    SubnetRecord,
)
from cloud_providers.errors import ProviderUnavailable


class InMemorySubnetRepository:
    """Dict-backed SubnetRepository. Optionally fails writes for given CIDRs.

    Records are copied on the way in and out, so callers only see their
    changes once they are written back.
    """

    def __init__(self, fail_cidrs=()):
        self.records: dict[str, SubnetRecord] = {}
        self.fail_cidrs = set(fail_cidrs)
        self._ids = itertools.count(1)

    def get_subnet_by_cidr(self, cidr):
        for record in self.records.values():
            if record.cidr == cidr:
                return copy.deepcopy(record)
        raise SubnetNotFound(cidr)

    def create_subnet(self, subnet):
        if subnet.cidr in self.fail_cidrs:
            raise RuntimeError(f"write rejected for {subnet.cidr}")
        stored = copy.deepcopy(subnet)
        stored.id = stored.id or f"subnet-{next(self._ids)}"
        self.records[stored.id] = stored
        return copy.deepcopy(stored)

    def update_subnet(self, subnet_id, subnet):
        if subnet.cidr in self.fail_cidrs:
            raise RuntimeError(f"write rejected for {subnet.cidr}")
        if subnet_id not in self.records:
            raise SubnetNotFound(subnet_id)
        self.records[subnet_id] = copy.deepcopy(subnet)
        return copy.deepcopy(subnet)

    def list_subnets(self, cloud_provider=None):
        return [
            copy.deepcopy(r)
            for r in self.records.values()
            if cloud_provider is None
            or (r.cloud_info is not None and r.cloud_info.provider == cloud_provider)
        ]

    def by_cidr(self, cidr):
        return self.get_subnet_by_cidr(cidr)


class FakeLister:
    """NetworkLister returning canned data."""

    def __init__(self, networks=(), subnets=(), utilization=None, region="us-east-1"):
        self.region = region
        self.networks = list(networks)
        self.subnets = list(subnets)
        self.utilization = dict(utilization or {})
        self.fail_networks = None
        self.fail_subnets = None
        self.utilization_calls = []

    def list_networks(self, ctx):
        if self.fail_networks:
            raise self.fail_networks
        return list(self.networks)

    def list_leaf_subnets(self, ctx):
        if self.fail_subnets:
            raise self.fail_subnets
        return list(self.subnets)

    def get_utilization(self, ctx, subnet_id):
        self.utilization_calls.append(subnet_id)
        value = self.utilization.get(subnet_id)
        if isinstance(value, Exception):
            raise value
        if value is None:
            raise ProviderUnavailable(f"subnet {subnet_id} not found", provider_type="aws")
        return value

    def validate_credentials(self, ctx):
        return None


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self):
        self.current = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        self.current += timedelta(seconds=1)
        return self.current


class StaticProvider(BaseProvider):
    """Test provider returning fixed subnets or raising a fixed error."""

    required_fields = ("token",)

    def __init__(self, provider_type, subnets=None, error=None, delay=0.0):
        self.provider_type = provider_type
        self.display_name = f"Static {provider_type}"
        self.regions = ("region-1",)
        self._subnets = subnets if subnets is not None else []
        self._error = error
        self._delay = delay
        super().__init__()

    def _fetch(self, ctx, credentials):
        if self._delay and ctx.wait(self._delay):
            ctx.raise_if_done()
        if self._error is not None:
            raise self._error
        return list(self._subnets)


@pytest.fixture
def repository():
    return InMemorySubnetRepository()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def ctx():
    return Context.background()


@pytest.fixture
def registry():
    return ProviderRegistry()


@pytest.fixture
def vpc():
    return Network(id="vpc-1", cidr="10.0.0.0/16", name="main", region="us-east-1", tags={"Name": "main"})


@pytest.fixture
def leaf():
    return LeafSubnet(
        id="subnet-a",
        cidr="10.0.1.0/24",
        name="app",
        parent_id="vpc-1",
        region="us-east-1",
        tags={"Name": "app", "env": "prod"},
    )


@pytest.fixture
def cloud_subnet():
    return CloudSubnet(cidr="10.0.0.0/24", name="test-subnet", region="us-east-1", account_id="123456")
