from __future__ import annotations

from fastapi import Depends

from .config import Settings, get_settings
from .services.providers import ProviderFactory


def get_provider_factory(settings: Settings = Depends(get_settings)) -> ProviderFactory:
    return ProviderFactory(settings)
