from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api import routers
from app.core.config import get_settings
from app.core.logging import configure_logging

# === إعدادات وتسجيل ===
settings = get_settings()
logger = configure_logging()

app = FastAPI(title=settings.app_name, version=settings.app_version)

# === CORS ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# === Routers ===
for router in routers:
    app.include_router(router)

# === الملفات المضغوطة ===
compressed_dir: Path = settings.compressed_dir
compressed_dir.mkdir(parents=True, exist_ok=True)
app.mount("/uploads/compressed", StaticFiles(directory=str(compressed_dir)), name="compressed")


# === Basic endpoints ===
@app.get("/")
async def root() -> dict:
    logger.debug("Root endpoint accessed")
    return {"message": f"Welcome to {settings.app_name}"}


@app.get("/health")
async def health_check() -> dict:
    logger.debug("Health check invoked")
    return {"status": "ok", "message": f"{settings.app_name} is running"}
