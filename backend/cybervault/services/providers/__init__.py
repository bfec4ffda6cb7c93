from typing import Callable, Dict, List, Optional, Type

import httpx

from ...config import Settings
from .base import ProviderClient

_REGISTRY: Dict[str, Type[ProviderClient]] = {}


def provider_name(name: str) -> Callable[[Type[ProviderClient]], Type[ProviderClient]]:
    def deco(cls: Type[ProviderClient]) -> Type[ProviderClient]:
        cls.name = name
        _REGISTRY[name] = cls
        return cls
    return deco


def get_provider(name: str) -> Type[ProviderClient]:
    return _REGISTRY[name]


def all_providers() -> List[str]:
    return list(_REGISTRY.keys())


class ProviderFactory:
    """Builds provider clients from one shared Settings object."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.settings = settings
        self.transport = transport

    def create(self, name: str) -> ProviderClient:
        return get_provider(name)(self.settings, transport=self.transport)


# imported for their registration side effect
from . import google, greynoise, otx, shodan, virustotal, zoomeye  # noqa: E402,F401
