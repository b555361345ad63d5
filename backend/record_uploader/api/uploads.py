from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from record_uploader.core.config import Settings
from record_uploader.core.errors import ConfigError
from record_uploader.deps import get_client_factory, get_settings, get_store
from record_uploader.schemas.upload import UploadResponse, VerificationResult
from record_uploader.schemas.user import CustomTrack, UserConfig
from record_uploader.services.config_store import ConfigStore
from record_uploader.services.track_import import track_from_gpx
from record_uploader.services.upload import ProgressLog, UploadService
from record_uploader.services.verification import VerificationService

router = APIRouter(tags=["uploads"])


@router.post("/verify", response_model=VerificationResult)
def verify(
    token: str = Form(""),
    settings: Settings = Depends(get_settings),
    store: ConfigStore = Depends(get_store),
    client_factory=Depends(get_client_factory),
):
    try:
        headers = store.load_headers()
    except ConfigError as e:
        raise HTTPException(status_code=500, detail=str(e))
    service = VerificationService(settings, client_factory)
    return service.validate_token_only(UserConfig(token=token), headers)


@router.post("/uploads", response_model=UploadResponse)
def upload_record(
    token: str = Form(""),
    date_time: datetime = Form(...),
    route: str = Form(""),
    start_image: Optional[UploadFile] = File(None),
    finish_image: Optional[UploadFile] = File(None),
    custom_track: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
    store: ConfigStore = Depends(get_store),
    client_factory=Depends(get_client_factory),
):
    """Run the full upload and return its result with every progress event.

    Upload failures come back with 200 and `success: false`; only bad
    input (unknown route, unreadable GPX, missing config) is an HTTP error.
    """
    try:
        headers = store.load_headers()
        route_def = store.get_route(route) if route else None
        if custom_track is not None:
            text = custom_track.file.read().decode("utf-8", errors="replace")
            track = track_from_gpx(text)
        elif route_def is not None:
            track = store.load_track(route)
        else:
            track = None
    except ConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))

    user = UserConfig(
        token=token,
        date_time=date_time,
        route=route,
        start_image=(start_image.filename or "") if start_image else "",
        finish_image=(finish_image.filename or "") if finish_image else "",
        custom_track=CustomTrack(
            enable=custom_track is not None,
            file_path=(custom_track.filename or "") if custom_track else "",
        ),
    )

    log = ProgressLog()
    service = UploadService(settings, observer=log, client_factory=client_factory)
    result = service.upload_exercise_record(
        user,
        headers,
        route_def,
        track,
        start_image.file.read() if start_image else b"",
        finish_image.file.read() if finish_image else b"",
    )
    return UploadResponse(result=result, progress=log.events)
