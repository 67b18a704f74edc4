from unittest import mock

from django.apps import apps as django_apps

from cloud_providers import LeafSubnet, Network
from cloud_providers.tests.conftest import FakeLister

from apps.subnets import collector


def aws_lister(region="us-east-1", **kwargs):
    """A lister holding one VPC with two subnets."""
    networks = kwargs.pop(
        "networks",
        [Network(id="vpc-1", cidr="10.0.0.0/16", name="main", region=region, tags={"Name": "main"})],
    )
    subnets = kwargs.pop(
        "subnets",
        [
            LeafSubnet(id="subnet-a", cidr="10.0.1.0/24", name="app", parent_id="vpc-1", region=region),
            LeafSubnet(id="subnet-b", cidr="10.0.2.0/24", name="db", parent_id="vpc-1", region=region),
        ],
    )
    utilization = kwargs.pop("utilization", {"subnet-a": 12.5, "subnet-b": 50.0})
    return FakeLister(networks=networks, subnets=subnets, utilization=utilization, region=region)


def patch_listers(*listers):
    """Make the collector build ``listers`` for AWS."""
    return mock.patch.dict(collector.LISTER_FACTORIES, {"aws": lambda: list(listers)})


def use_registry(registry):
    """Swap the registry owned by the subnets app config."""
    return mock.patch.object(django_apps.get_app_config("subnets"), "registry", registry)
