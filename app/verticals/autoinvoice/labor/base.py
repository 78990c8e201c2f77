from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Type

from ..engine.context import LaborEstimate, Vehicle

if TYPE_CHECKING:
    from app.core.settings import Settings


class LaborProvider:
    """
    Base class for labor-hours estimators. Every provider must implement
    estimate(vehicle, job_name, op_code).

    Returning None means "no estimate from this provider"; the resolver then
    moves on to the next one. Providers hold no shared mutable state, so an
    in-flight call can be cancelled at any await point.
    """

    kind: str = "base"

    @classmethod
    def from_settings(cls, settings: "Settings", **options: Any) -> Optional["LaborProvider"]:
        """
        Build the provider for a chain. None => provider is switched off by
        config and is left out of the chain.
        """
        return cls()

    @property
    def name(self) -> str:
        return self.kind

    async def estimate(self, vehicle: Vehicle, job_name: str, op_code: str = "") -> Optional[LaborEstimate]:
        raise NotImplementedError


# Registry: provider kind -> provider class
provider_registry: Dict[str, Type[LaborProvider]] = {}


def register(provider_cls: Type[LaborProvider]) -> Type[LaborProvider]:
    """
    Decorator to register a provider by its kind.
    Fails fast on duplicate registrations (useful during dev/reload).
    """
    key = getattr(provider_cls, "kind", None)
    if not key or key == "base":
        raise ValueError(f"Provider class {provider_cls.__name__} has no kind")

    if key in provider_registry and provider_registry[key] is not provider_cls:
        raise ValueError(
            f"Duplicate provider registration for kind '{key}': "
            f"{provider_registry[key].__name__} vs {provider_cls.__name__}"
        )

    provider_registry[key] = provider_cls
    return provider_cls


def provider_class(kind: str) -> Type[LaborProvider]:
    try:
        return provider_registry[kind]
    except KeyError:
        known = ", ".join(sorted(provider_registry))
        raise ValueError(f"Unknown labor provider kind '{kind}' (known: {known})") from None
