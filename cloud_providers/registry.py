"""Cloud provider registry: registration, lookup, and concurrent fan-out.

Providers are keyed by ``get_type()`` (e.g. ``"aws"``, ``"gcp"``). A
registry is an ordinary object: build one, register providers on it, and
pass it to whatever needs it. ``build_default_registry()`` wires the
built-in providers plus any entry-point providers::

    # In a partner's pyproject.toml:
    [project.entry-points."cloud_providers"]
    my_cloud = "my_package.provider:MyCloudProvider"

The provider map is guarded by one reader/writer lock. Writers
(``register``/``unregister``) take it exclusively; lookups and the
snapshot taken at the start of a fan-out share it. Remote calls never
run under the lock.
"""

from __future__ import annotations

import importlib
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from .base import BaseProvider, CloudProvider, CloudSubnet, Credentials
from .context import Context
from .errors import (
    DuplicateProvider,
    NilProvider,
    ProviderNotFound,
    ProviderUnavailable,
)

logger = logging.getLogger("cloud_providers.registry")

# External packages register providers under this entry point group
ENTRY_POINT_GROUP = "cloud_providers"


class ReadWriteLock:
    """Many readers or one writer. Writers are preferred once waiting."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class ProviderRegistry:
    """
    Thread-safe catalog of cloud providers.

    Provider instances are treated as immutable once registered, so the
    single map-level lock is all the synchronisation needed.
    """

    def __init__(self):
        self._providers: dict[str, CloudProvider] = {}
        self._lock = ReadWriteLock()

    # ── Registration ──────────────────────────────────────────────────

    def register(self, provider: CloudProvider | None) -> None:
        """
        Register a provider instance under ``provider.get_type()``.

        Raises:
            NilProvider: If ``provider`` is None.
            TypeError: If it does not implement the provider contract.
            DuplicateProvider: If its type is already registered.
        """
        if provider is None:
            raise NilProvider()
        if not isinstance(provider, CloudProvider):
            raise TypeError(f"{provider!r} does not implement the CloudProvider contract")

        key = provider.get_type()
        if not key:
            raise ValueError(f"{type(provider).__name__} returned an empty provider type")

        with self._lock.write():
            if key in self._providers:
                raise DuplicateProvider(key)
            self._providers[key] = provider

        logger.info("Registered cloud provider: %s (%s)", key, type(provider).__name__)

    def unregister(self, provider_type: str) -> None:
        """Remove a provider. Raises ``ProviderNotFound`` if it is not registered."""
        with self._lock.write():
            if provider_type not in self._providers:
                raise ProviderNotFound(provider_type)
            del self._providers[provider_type]
        logger.info("Unregistered cloud provider: %s", provider_type)

    # ── Discovery ─────────────────────────────────────────────────────

    def discover_entrypoints(self) -> int:
        """
        Load providers from the ``cloud_providers`` entry point group.

        An entry point may name a provider class (instantiated with no
        arguments), a provider instance, or a module to scan. Returns the
        number of providers registered. Failures are logged per entry point.
        """
        from importlib.metadata import entry_points

        count = 0
        for ep in entry_points(group=ENTRY_POINT_GROUP):
            try:
                obj = ep.load()
                if isinstance(obj, type) and issubclass(obj, BaseProvider):
                    self.register(obj())
                    count += 1
                elif isinstance(obj, CloudProvider) and not isinstance(obj, type):
                    self.register(obj)
                    count += 1
                elif hasattr(obj, "__path__") or hasattr(obj, "__file__"):
                    count += self.load_module(obj)
                else:
                    logger.warning(
                        "Entry point %s resolved to %s which is not a cloud provider",
                        ep.name,
                        obj,
                    )
            except Exception:
                logger.exception("Failed to load entry-point cloud provider: %s", ep.name)
        return count

    def load_module(self, module) -> int:
        """
        Scan a module for concrete ``BaseProvider`` subclasses, instantiate
        and register each one. Types already registered are skipped.

        Returns:
            Number of providers registered from this module.
        """
        count = 0
        for attr_name in dir(module):
            obj = getattr(module, attr_name)
            if (
                isinstance(obj, type)
                and issubclass(obj, BaseProvider)
                and obj is not BaseProvider
                and obj.provider_type
                and not getattr(obj, "__abstractmethods__", None)
            ):
                if self.is_provider_registered(obj.provider_type):
                    logger.debug("Skipping %s, type %s already registered", obj.__name__, obj.provider_type)
                    continue
                self.register(obj())
                count += 1
        return count

    def load_class(self, dotted_path: str) -> CloudProvider:
        """
        Import a provider class from a dotted path, instantiate and register it.

        Example::

            registry.load_class("my_package.providers.MyCloudProvider")
        """
        module_path, _, class_name = dotted_path.rpartition(".")
        if not module_path:
            raise ImportError(f"Invalid dotted path: {dotted_path}")

        module = importlib.import_module(module_path)
        cls = getattr(module, class_name)
        if not isinstance(cls, type) or not issubclass(cls, BaseProvider):
            raise TypeError(f"{dotted_path} is not a BaseProvider subclass")

        provider = cls()
        self.register(provider)
        return provider

    def apply_filter(self, disabled: list[str] | None = None) -> None:
        """Unregister the given provider types, ignoring unknown ones."""
        for provider_type in disabled or ():
            try:
                self.unregister(provider_type)
                logger.info("Cloud provider %s disabled via settings", provider_type)
            except ProviderNotFound:
                logger.debug("Disabled cloud provider %s was not registered", provider_type)

    # ── Lookup ────────────────────────────────────────────────────────

    def get_provider(self, provider_type: str) -> CloudProvider:
        with self._lock.read():
            provider = self._providers.get(provider_type)
        if provider is None:
            raise ProviderNotFound(provider_type)
        return provider

    def is_provider_registered(self, provider_type: str) -> bool:
        with self._lock.read():
            return provider_type in self._providers

    def list_providers(self) -> set[str]:
        """Registered provider types. Unordered."""
        with self._lock.read():
            return set(self._providers)

    def describe(self) -> list[dict[str, Any]]:
        """Return a metadata dict per provider, sorted by type."""
        with self._lock.read():
            providers = sorted(self._providers.items())
        return [
            {
                "type": key,
                "name": provider.get_name(),
                "regions": provider.get_regions(),
            }
            for key, provider in providers
        ]

    def _snapshot(self) -> dict[str, CloudProvider]:
        with self._lock.read():
            return dict(self._providers)

    # ── Fetching ──────────────────────────────────────────────────────

    def fetch_subnets_from_provider(
        self, ctx: Context, provider_type: str, credentials: Credentials
    ) -> list[CloudSubnet]:
        """
        Fetch subnets from one provider.

        Raises:
            ProviderNotFound: If the type is not registered (propagated unchanged).
            ProviderUnavailable: For any failure of the provider itself,
                carrying ``provider_type`` and the original ``cause``.
        """
        provider = self.get_provider(provider_type)
        return self._fetch(ctx, provider_type, provider, credentials)

    def fetch_subnets_from_all_providers(
        self, ctx: Context, credentials_by_type: Mapping[str, Credentials]
    ) -> tuple[dict[str, list[CloudSubnet]], dict[str, ProviderUnavailable]]:
        """
        Fetch from every registered provider that has credentials, concurrently.

        Providers without an entry in ``credentials_by_type`` are skipped.
        One worker per provider; all are joined before returning. Returns
        ``(results, errors)`` keyed by provider type; every dispatched
        provider appears in exactly one of the two.
        """
        snapshot = self._snapshot()
        targets = {
            key: provider for key, provider in snapshot.items() if key in credentials_by_type
        }

        results: dict[str, list[CloudSubnet]] = {}
        errors: dict[str, ProviderUnavailable] = {}
        if not targets:
            return results, errors

        results_lock = threading.Lock()

        def _run(key: str, provider: CloudProvider) -> None:
            try:
                subnets = self._fetch(ctx, key, provider, credentials_by_type[key])
            except ProviderUnavailable as exc:
                with results_lock:
                    errors[key] = exc
                return
            with results_lock:
                results[key] = subnets

        logger.info("Fetching subnets from %d provider(s): %s", len(targets), ", ".join(sorted(targets)))
        with ThreadPoolExecutor(
            max_workers=len(targets), thread_name_prefix="cloud-fetch"
        ) as executor:
            futures = [executor.submit(_run, key, provider) for key, provider in targets.items()]
            wait(futures)

        for future in futures:
            # _run only lets non-Exception BaseExceptions escape.
            future.result()

        logger.info(
            "Fan-out complete: %d succeeded, %d failed", len(results), len(errors)
        )
        return results, errors

    @staticmethod
    def _fetch(
        ctx: Context, key: str, provider: CloudProvider, credentials: Credentials
    ) -> list[CloudSubnet]:
        try:
            subnets = list(provider.fetch_subnets(ctx, credentials))
        except ProviderUnavailable as exc:
            if exc.provider_type == key:
                raise
            raise ProviderUnavailable(
                "subnet fetch failed", provider_type=key, cause=exc
            ) from exc
        except Exception as exc:
            logger.warning("Cloud provider %s failed: %s", key, exc)
            raise ProviderUnavailable(
                "subnet fetch failed", provider_type=key, cause=exc
            ) from exc
        logger.debug("Cloud provider %s returned %d subnet(s)", key, len(subnets))
        return subnets

    # ── Utility ───────────────────────────────────────────────────────

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._providers)

    def __contains__(self, provider_type: str) -> bool:
        return self.is_provider_registered(provider_type)


def build_default_registry(include_entrypoints: bool = True) -> ProviderRegistry:
    """Create a registry holding the built-in providers and, optionally, entry-point ones."""
    from .contrib import BUILTIN_PROVIDERS

    registry = ProviderRegistry()
    for provider_cls in BUILTIN_PROVIDERS:
        registry.register(provider_cls())
    if include_entrypoints:
        registry.discover_entrypoints()

    logger.info(
        "Cloud provider registry ready: %d providers (%s)",
        len(registry),
        ", ".join(sorted(registry.list_providers())) or "(none)",
    )
    return registry
