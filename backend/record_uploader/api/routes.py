from fastapi import APIRouter, Depends, HTTPException

from record_uploader.core.errors import ConfigError
from record_uploader.deps import get_store
from record_uploader.schemas.track import Route, Track
from record_uploader.services.config_store import ConfigStore

router = APIRouter(prefix="/routes", tags=["routes"])


@router.get("/", response_model=list[Route])
def list_routes(store: ConfigStore = Depends(get_store)):
    try:
        return store.load_routes()
    except ConfigError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{route_name}", response_model=Route)
def get_route(route_name: str, store: ConfigStore = Depends(get_store)):
    try:
        return store.get_route(route_name)
    except ConfigError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{route_name}/track", response_model=Track)
def get_track(route_name: str, store: ConfigStore = Depends(get_store)):
    try:
        return store.load_track(route_name)
    except ConfigError as e:
        raise HTTPException(status_code=404, detail=str(e))
