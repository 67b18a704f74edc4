from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from apps.subnets.models import Subnet


class TestSubnetAPI(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.vpc = Subnet.objects.create(
            cidr="10.0.0.0/16",
            name="VPC-main",
            location_type="cloud",
            cloud_provider="aws",
            cloud_resource_type="vpc",
            cloud_vpc_id="vpc-1",
        )
        self.leaf = Subnet.objects.create(
            cidr="10.0.1.0/24",
            name="app",
            location_type="cloud",
            cloud_provider="aws",
            cloud_resource_type="subnet",
            cloud_vpc_id="vpc-1",
            cloud_subnet_id="subnet-a",
            utilization_percent=40.0,
            parent=self.vpc,
        )
        self.manual = Subnet.objects.create(cidr="192.168.0.0/24", name="office", location_type="site")

    def test_list(self):
        response = self.client.get("/api/v1/subnets/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["count"], 3)

    def test_retrieve_nested_representation(self):
        response = self.client.get(f"/api/v1/subnets/{self.leaf.pk}/")
        data = response.json()
        self.assertEqual(data["cloud_info"]["subnet_id"], "subnet-a")
        self.assertEqual(data["utilization"]["utilization_percent"], 40.0)
        self.assertEqual(data["parent"], str(self.vpc.pk))

        manual = self.client.get(f"/api/v1/subnets/{self.manual.pk}/").json()
        self.assertIsNone(manual["cloud_info"])
        self.assertIsNone(manual["utilization"])

    def test_filter_by_provider_and_type(self):
        response = self.client.get("/api/v1/subnets/", {"cloud_provider": "aws", "cloud_resource_type": "subnet"})
        self.assertEqual([r["cidr"] for r in response.json()["results"]], ["10.0.1.0/24"])

    def test_filter_is_cloud(self):
        response = self.client.get("/api/v1/subnets/", {"is_cloud": "false"})
        self.assertEqual([r["cidr"] for r in response.json()["results"]], ["192.168.0.0/24"])

    def test_filter_by_parent(self):
        response = self.client.get("/api/v1/subnets/", {"parent": str(self.vpc.pk)})
        self.assertEqual(response.json()["count"], 1)

    def test_filter_utilization_range(self):
        response = self.client.get("/api/v1/subnets/", {"utilization_min": 30})
        self.assertEqual(response.json()["count"], 1)

    def test_create_normalizes_cidr(self):
        response = self.client.post(
            "/api/v1/subnets/",
            {"cidr": "172.16.5.7/16", "name": "lab", "location_type": "datacenter"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.json()["cidr"], "172.16.0.0/16")

    def test_create_rejects_invalid_cidr(self):
        response = self.client.post("/api/v1/subnets/", {"cidr": "10.0.0.300/24"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("cidr", response.json())

    def test_create_rejects_duplicate_cidr(self):
        response = self.client.post("/api/v1/subnets/", {"cidr": "10.0.1.0/24"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_rejects_non_string_tags(self):
        response = self.client.post(
            "/api/v1/subnets/", {"cidr": "172.17.0.0/16", "tags": {"n": 1}}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_patch_updates_timestamp(self):
        before = self.manual.updated_at
        response = self.client.patch(
            f"/api/v1/subnets/{self.manual.pk}/", {"name": "hq"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.manual.refresh_from_db()
        self.assertEqual(self.manual.name, "hq")
        self.assertGreater(self.manual.updated_at, before)

    def test_cannot_parent_itself(self):
        response = self.client.patch(
            f"/api/v1/subnets/{self.manual.pk}/", {"parent": str(self.manual.pk)}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_vpc_orphans_children(self):
        response = self.client.delete(f"/api/v1/subnets/{self.vpc.pk}/")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.leaf.refresh_from_db()
        self.assertIsNone(self.leaf.parent)
