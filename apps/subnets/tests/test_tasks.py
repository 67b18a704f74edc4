from django.test import TestCase, override_settings

from apps.subnets import tasks
from apps.subnets.models import Subnet, SyncRun

from .helpers import aws_lister, patch_listers


def failing_lister(region):
    lister = aws_lister(region=region, networks=[], subnets=[])
    lister.fail_networks = RuntimeError(f"{region} unreachable")
    return lister


class TestRunSync(TestCase):
    def test_completed(self):
        run = SyncRun.objects.create(provider="aws")
        with patch_listers(aws_lister()):
            result = tasks.run_sync(str(run.pk))

        run.refresh_from_db()
        self.assertEqual(run.status, SyncRun.Status.COMPLETED)
        self.assertIsNotNone(run.completed_at)
        self.assertEqual(run.networks_found, 1)
        self.assertEqual(run.subnets_found, 2)
        self.assertEqual(run.subnets_created, 3)
        self.assertEqual(run.errors, [])
        self.assertEqual(result["created"], 3)
        self.assertEqual(Subnet.objects.filter(cloud_provider="aws").count(), 3)

    def test_partial_when_one_region_fails(self):
        run = SyncRun.objects.create(provider="aws")
        with patch_listers(aws_lister("us-east-1"), failing_lister("eu-west-1")):
            tasks.run_sync(str(run.pk))

        run.refresh_from_db()
        self.assertEqual(run.status, SyncRun.Status.PARTIAL)
        self.assertEqual(run.subnets_created, 3)
        self.assertEqual(len(run.errors), 1)
        self.assertIn("eu-west-1 unreachable", run.errors[0])

    def test_failed_when_every_region_fails(self):
        run = SyncRun.objects.create(provider="aws")
        with patch_listers(failing_lister("us-east-1")):
            result = tasks.run_sync(str(run.pk))

        run.refresh_from_db()
        self.assertEqual(run.status, SyncRun.Status.FAILED)
        self.assertIn("failed to list networks", run.error_message)
        self.assertIn("SyncError", run.result_traceback)
        self.assertIn("error", result)

    def test_region_restricts_listers(self):
        run = SyncRun.objects.create(provider="aws", region="us-east-1")
        with patch_listers(aws_lister("us-east-1"), failing_lister("eu-west-1")):
            tasks.run_sync(str(run.pk))

        run.refresh_from_db()
        self.assertEqual(run.status, SyncRun.Status.COMPLETED)

    def test_terminal_run_is_skipped(self):
        run = SyncRun.objects.create(provider="aws", status=SyncRun.Status.COMPLETED)
        result = tasks.run_sync(str(run.pk))
        self.assertEqual(result, {"skipped": True, "status": "completed"})

    def test_missing_run(self):
        result = tasks.run_sync("00000000-0000-0000-0000-000000000000")
        self.assertIn("not found", result["error"])


class TestUtilizationRefresh(TestCase):
    def test_refresh_updates_linked_subnets(self):
        lister = aws_lister()
        with patch_listers(lister):
            tasks.run_sync(str(SyncRun.objects.create(provider="aws").pk))
            lister.utilization = {"subnet-a": 75.0, "subnet-b": 25.0}
            run = SyncRun.objects.create(provider="aws", kind=SyncRun.Kind.UTILIZATION)
            tasks.run_utilization_refresh(str(run.pk))

        run.refresh_from_db()
        self.assertEqual(run.status, SyncRun.Status.COMPLETED)
        self.assertEqual(run.subnets_updated, 2)
        self.assertEqual(Subnet.objects.get(cidr="10.0.1.0/24").utilization_percent, 75.0)
        self.assertEqual(Subnet.objects.get(cidr="10.0.2.0/24").utilization_percent, 25.0)


class TestPeriodicTasks(TestCase):
    def test_sync_all_providers(self):
        with patch_listers(aws_lister()):
            outcome = tasks.sync_all_providers()

        self.assertEqual(list(outcome), ["aws"])
        self.assertEqual(outcome["aws"]["created"], 3)
        run = SyncRun.objects.get()
        self.assertEqual(run.kind, SyncRun.Kind.FULL)
        self.assertEqual(run.status, SyncRun.Status.COMPLETED)

    def test_skips_provider_with_active_run(self):
        SyncRun.objects.create(provider="aws", status=SyncRun.Status.RUNNING)
        with patch_listers(aws_lister()):
            outcome = tasks.sync_all_providers()

        self.assertEqual(outcome, {"aws": {"skipped": True}})
        self.assertEqual(SyncRun.objects.count(), 1)

    @override_settings(CLOUD_PROVIDERS_ENABLED=False)
    def test_disabled(self):
        self.assertEqual(tasks.sync_all_providers(), {"skipped": True})
        self.assertFalse(SyncRun.objects.exists())

    def test_refresh_all_utilization(self):
        with patch_listers(aws_lister()):
            tasks.sync_all_providers()
            outcome = tasks.refresh_all_utilization()

        self.assertEqual(outcome["aws"]["updated"], 2)
        self.assertEqual(
            SyncRun.objects.filter(kind=SyncRun.Kind.UTILIZATION, status=SyncRun.Status.COMPLETED).count(), 1
        )


class TestRunDeadline(TestCase):
    @override_settings(DISPATCHER_TASK_TIMEOUT=0)
    def test_expired_deadline_fails_run(self):
        run = SyncRun.objects.create(provider="aws")
        with patch_listers(aws_lister()):
            result = tasks.run_sync(str(run.pk))

        run.refresh_from_db()
        self.assertEqual(run.status, SyncRun.Status.FAILED)
        self.assertIn("deadline exceeded", run.error_message)
        self.assertIn("deadline exceeded", result["error"])
        self.assertFalse(Subnet.objects.exists())

    @override_settings(DISPATCHER_TASK_TIMEOUT=None)
    def test_no_deadline(self):
        run = SyncRun.objects.create(provider="aws")
        with patch_listers(aws_lister()):
            tasks.run_sync(str(run.pk))

        run.refresh_from_db()
        self.assertEqual(run.status, SyncRun.Status.COMPLETED)
