from fastapi import Depends

from record_uploader.core.config import Settings, settings
from record_uploader.services.api_client import APIClient
from record_uploader.services.config_store import ConfigStore

# One store per Settings instance, so cached files follow the active config
_stores: dict[int, ConfigStore] = {}


# Dependencies we use in FastAPI routes; tests swap them via dependency_overrides
def get_settings() -> Settings:
    return settings


def get_store(current: Settings = Depends(get_settings)) -> ConfigStore:
    store = _stores.get(id(current))
    if store is None or store.settings is not current:
        store = _stores[id(current)] = ConfigStore(current)
    return store


def get_client_factory():
    return APIClient
