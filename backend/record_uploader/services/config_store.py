import json
import logging
import os

from pydantic import ValidationError as SchemaError

from record_uploader.core.config import Settings
from record_uploader.core.errors import ConfigError
from record_uploader.schemas.track import Route, Track
from record_uploader.schemas.user import RequestHeaders

logger = logging.getLogger(__name__)


def _load_json(path: str):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e


class ConfigStore:
    """Loads headers, the route catalog and track files on first use.

    Each value is read from disk once and kept for the lifetime of the store.

    Layout:
      <config_dir>/headers.json   {userAgent, miniappVersion, referer, tenant}
      <config_dir>/routes.json    {"routes": [Route, ...]}
      <tracks_dir>/<route>.json   {"track": [...], "metadata": {...}}
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._headers: RequestHeaders | None = None
        self._routes: list[Route] | None = None
        self._tracks: dict[str, Track] = {}

    def load_headers(self) -> RequestHeaders:
        if self._headers is None:
            path = os.path.join(self.settings.config_dir, "headers.json")
            try:
                self._headers = RequestHeaders.model_validate(_load_json(path))
            except SchemaError as e:
                raise ConfigError(f"Invalid headers config {path}: {e}") from e
            logger.info("Loaded request headers from %s", path)
        return self._headers

    def load_routes(self) -> list[Route]:
        if self._routes is None:
            path = os.path.join(self.settings.config_dir, "routes.json")
            data = _load_json(path)
            try:
                self._routes = [Route.model_validate(r) for r in data.get("routes", [])]
            except (AttributeError, SchemaError) as e:
                raise ConfigError(f"Invalid route catalog {path}: {e}") from e
            logger.info("Loaded %d routes from %s", len(self._routes), path)
        return self._routes

    def route_names(self) -> list[str]:
        return [r.route_name for r in self.load_routes()]

    def get_route(self, route_name: str) -> Route:
        for r in self.load_routes():
            if r.route_name == route_name:
                return r
        raise ConfigError(f"Unknown route: {route_name}")

    def load_track(self, route_name: str) -> Track:
        if route_name not in self._tracks:
            # Route names are used as file names; keep lookups inside tracks_dir
            if os.path.basename(route_name) != route_name or route_name in ("", ".", ".."):
                raise ConfigError(f"Invalid route name: {route_name!r}")
            path = os.path.join(self.settings.tracks_dir, f"{route_name}.json")
            try:
                self._tracks[route_name] = Track.model_validate(_load_json(path))
            except SchemaError as e:
                raise ConfigError(f"Invalid track file {path}: {e}") from e
            logger.info("Loaded track for %s from %s", route_name, path)
        return self._tracks[route_name]
