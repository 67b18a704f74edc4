import pytest

from cloud_providers import (
    BaseProvider,
    CloudProvider,
    Context,
    Credentials,
    InvalidCredentials,
    ProviderType,
    ProviderTypeMismatch,
    ProviderUnavailable,
)
from cloud_providers.contrib import (
    BUILTIN_PROVIDERS,
    AWSProvider,
    AzureProvider,
    GCPProvider,
    OVHProvider,
    ScalewayProvider,
)

KEY_BASED = [AWSProvider, ScalewayProvider, OVHProvider]
TOKEN_BASED = [AzureProvider, GCPProvider]


def _complete_credentials(provider):
    return Credentials(
        provider_type=provider.get_type(),
        access_key="AKIAEXAMPLE",
        secret_key="secret",
        token="token",
    )


class TestProviderContract:
    @pytest.mark.parametrize("provider_cls", BUILTIN_PROVIDERS)
    def test_satisfies_protocol(self, provider_cls):
        provider = provider_cls()
        assert isinstance(provider, CloudProvider)
        assert isinstance(provider, BaseProvider)

    def test_builtin_types(self):
        types = sorted(cls().get_type() for cls in BUILTIN_PROVIDERS)
        assert types == sorted(ProviderType.BUILTIN)

    @pytest.mark.parametrize(
        "provider_cls,name",
        [
            (AWSProvider, "Amazon Web Services"),
            (AzureProvider, "Microsoft Azure"),
            (GCPProvider, "Google Cloud Platform"),
            (ScalewayProvider, "Scaleway"),
            (OVHProvider, "OVH"),
        ],
    )
    def test_display_names(self, provider_cls, name):
        assert provider_cls().get_name() == name

    @pytest.mark.parametrize("provider_cls", BUILTIN_PROVIDERS)
    def test_regions_are_static_and_nonempty(self, provider_cls):
        provider = provider_cls()
        regions = provider.get_regions()
        assert regions
        assert regions == provider.get_regions()
        regions.append("mutated")
        assert "mutated" not in provider.get_regions()

    def test_known_regions(self):
        assert "us-east-1" in AWSProvider().get_regions()
        assert "westeurope" in AzureProvider().get_regions()
        assert "europe-west1" in GCPProvider().get_regions()
        assert "fr-par-1" in ScalewayProvider().get_regions()
        assert "GRA1" in OVHProvider().get_regions()

    def test_metadata(self):
        meta = AWSProvider().metadata()
        assert meta["type"] == "aws"
        assert meta["required_fields"] == ["access_key", "secret_key"]
        assert meta["class"] == "cloud_providers.contrib.aws.AWSProvider"


class TestValidateCredentials:
    @pytest.mark.parametrize("provider_cls", BUILTIN_PROVIDERS)
    def test_complete_credentials_accepted(self, provider_cls):
        provider = provider_cls()
        provider.validate_credentials(_complete_credentials(provider))

    @pytest.mark.parametrize("provider_cls", BUILTIN_PROVIDERS)
    def test_type_mismatch(self, provider_cls):
        provider = provider_cls()
        other = "gcp" if provider.get_type() != "gcp" else "aws"
        creds = Credentials(provider_type=other, access_key="a", secret_key="b", token="c")
        with pytest.raises(ProviderTypeMismatch) as exc_info:
            provider.validate_credentials(creds)
        assert str(exc_info.value) == (
            f"invalid provider type: expected {provider.get_type()}, got {other}"
        )
        assert isinstance(exc_info.value, InvalidCredentials)

    @pytest.mark.parametrize("provider_cls", KEY_BASED)
    @pytest.mark.parametrize("missing", ["access_key", "secret_key"])
    def test_key_based_require_both_keys(self, provider_cls, missing):
        provider = provider_cls()
        creds = _complete_credentials(provider)
        setattr(creds, missing, "")
        with pytest.raises(InvalidCredentials, match=missing):
            provider.validate_credentials(creds)

    @pytest.mark.parametrize("provider_cls", KEY_BASED)
    def test_key_based_ignore_token(self, provider_cls):
        provider = provider_cls()
        creds = Credentials(provider.get_type(), access_key="a", secret_key="b")
        provider.validate_credentials(creds)

    @pytest.mark.parametrize("provider_cls", TOKEN_BASED)
    def test_token_based_require_token(self, provider_cls):
        provider = provider_cls()
        creds = Credentials(provider.get_type(), access_key="a", secret_key="b")
        with pytest.raises(InvalidCredentials, match="token"):
            provider.validate_credentials(creds)

    @pytest.mark.parametrize("provider_cls", TOKEN_BASED)
    def test_token_based_ignore_keys(self, provider_cls):
        provider = provider_cls()
        provider.validate_credentials(Credentials(provider.get_type(), token="t"))

    def test_repr_masks_secrets(self):
        creds = Credentials("aws", access_key="AKIAEXAMPLE", secret_key="topsecret")
        assert "topsecret" not in repr(creds)
        assert "AKIAEXAMPLE" not in repr(creds)


class TestFetchSubnets:
    @pytest.mark.parametrize("provider_cls", BUILTIN_PROVIDERS)
    def test_stub_reports_unavailable(self, provider_cls, ctx):
        provider = provider_cls()
        with pytest.raises(ProviderUnavailable) as exc_info:
            provider.fetch_subnets(ctx, _complete_credentials(provider))
        assert "not yet implemented" in str(exc_info.value)
        assert exc_info.value.provider_type == provider.get_type()

    @pytest.mark.parametrize("provider_cls", BUILTIN_PROVIDERS)
    def test_invalid_credentials_raised_before_fetch(self, provider_cls, ctx):
        provider = provider_cls()
        with pytest.raises(InvalidCredentials):
            provider.fetch_subnets(ctx, Credentials(provider.get_type()))

    def test_cancelled_context_checked_before_fetch(self):
        from cloud_providers import OperationCancelled

        ctx = Context()
        ctx.cancel("shutting down")
        provider = AWSProvider()
        with pytest.raises(OperationCancelled, match="shutting down"):
            provider.fetch_subnets(ctx, _complete_credentials(provider))

    def test_unexpected_error_wrapped(self, ctx):
        from .conftest import StaticProvider

        provider = StaticProvider("static", error=RuntimeError("boom"))
        with pytest.raises(ProviderUnavailable) as exc_info:
            provider.fetch_subnets(ctx, Credentials("static", token="t"))
        assert isinstance(exc_info.value.cause, RuntimeError)
        assert exc_info.value.__cause__ is exc_info.value.cause
        assert exc_info.value.provider_type == "static"

    def test_returns_subnets(self, ctx, cloud_subnet):
        from .conftest import StaticProvider

        provider = StaticProvider("static", subnets=[cloud_subnet])
        subnets = provider.fetch_subnets(ctx, Credentials("static", token="t"))
        assert [s.cidr for s in subnets] == ["10.0.0.0/24"]
