from django.apps import apps as django_apps
from django.test import TestCase, override_settings

from cloud_providers import ProviderNotFound, ProviderUnavailable
from cloud_providers.aws_ec2 import Ec2NetworkLister

from apps.subnets import collector
from apps.subnets.dispatcher import (
    REFRESH_UTILIZATION_TASK,
    SUBNETS_CHANNEL,
    SYNC_ALL_TASK,
    get_dispatcher_config,
)

from .helpers import use_registry

TWO_REGIONS = [
    {"region": "us-east-1", "access_key_id": "AKIA", "secret_access_key": "secret"},
    {"region": "eu-west-1"},
    {"access_key_id": "no-region"},
]


class TestListers(TestCase):
    @override_settings(CLOUD_AWS_REGIONS=TWO_REGIONS)
    def test_one_lister_per_configured_region(self):
        listers = collector.get_listers("aws")
        self.assertEqual([lister.region for lister in listers], ["us-east-1", "eu-west-1"])
        self.assertTrue(all(isinstance(lister, Ec2NetworkLister) for lister in listers))

    @override_settings(CLOUD_AWS_REGIONS=TWO_REGIONS)
    def test_region_filter(self):
        listers = collector.get_listers("aws", "eu-west-1")
        self.assertEqual([lister.region for lister in listers], ["eu-west-1"])

    def test_unconfigured_region(self):
        with self.assertRaisesMessage(ProviderUnavailable, "no aws sync configured for region ap-south-1"):
            collector.get_listers("aws", "ap-south-1")

    @override_settings(CLOUD_AWS_ENABLED=False, CLOUD_AWS_REGIONS=TWO_REGIONS)
    def test_aws_disabled(self):
        self.assertFalse(collector.sync_configured("aws"))
        self.assertNotIn("aws", collector.configured_providers())

    @override_settings(CLOUD_PROVIDERS_ENABLED=False, CLOUD_AWS_ENABLED=True, CLOUD_AWS_REGIONS=TWO_REGIONS)
    def test_master_switch_is_separate(self):
        self.assertFalse(collector.cloud_enabled())
        self.assertTrue(collector.sync_configured("aws"))

    def test_no_sync_support(self):
        with self.assertRaises(ProviderUnavailable):
            collector.get_listers("azure")

    def test_unknown_provider(self):
        with self.assertRaises(ProviderNotFound):
            collector.get_listers("nope")

    def test_configured_providers(self):
        self.assertEqual(collector.configured_providers(), ["aws"])


class TestRegistry(TestCase):
    def test_registry_owned_by_app_config(self):
        config = django_apps.get_app_config("subnets")
        self.assertIsNotNone(config.registry)
        self.assertIs(collector.get_registry(), config.registry)

    def test_disabled_provider_filtered(self):
        with override_settings(CLOUD_PROVIDERS_DISABLED=["aws"]):
            registry = collector.build_registry()
        self.assertNotIn("aws", registry)
        with use_registry(registry), self.assertRaises(ProviderNotFound):
            collector.get_listers("aws")

    def test_resolve_credentials_defaults_type(self):
        creds = collector.resolve_credentials("aws", {"access_key": "a", "secret_key": "b"})
        self.assertEqual(creds.provider_type, "aws")
        self.assertEqual(creds.secret_key, "b")

    @override_settings(CLOUD_PROVIDER_FETCH_TIMEOUT=5)
    def test_fetch_context_deadline(self):
        ctx = collector.fetch_context()
        self.assertLessEqual(ctx.remaining(), 5)


class TestDispatcherConfig(TestCase):
    def test_schedule_when_enabled(self):
        config = get_dispatcher_config()
        schedule = config["producers"]["ScheduledProducer"]["task_schedule"]
        self.assertEqual(schedule[SYNC_ALL_TASK], {"schedule": 300})
        self.assertEqual(schedule[REFRESH_UTILIZATION_TASK], {"schedule": 900})
        self.assertEqual(config["brokers"]["pg_notify"]["channels"], [SUBNETS_CHANNEL])

    @override_settings(CLOUD_PROVIDERS_ENABLED=False)
    def test_no_schedule_when_disabled(self):
        config = get_dispatcher_config()
        self.assertEqual(config["producers"], {"ControlProducer": {}})
