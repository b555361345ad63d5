import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from record_uploader.api.routes import router as routes_router
from record_uploader.api.uploads import router as uploads_router
from record_uploader.core.config import settings

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
# httpx logs every request at INFO; keep it quiet
logging.getLogger("httpx").setLevel(logging.WARNING)


app = FastAPI()

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes_router)
app.include_router(uploads_router)


@app.get("/")
def root():
    return {"message": "Record uploader is running"}
