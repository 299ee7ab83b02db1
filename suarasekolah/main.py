from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from suarasekolah.core.logging_config import setup_logging
from suarasekolah.db.session import init_db
from suarasekolah.routes.chat import router as chat_router
from suarasekolah.routes.provisioning import CORS_ALLOW_HEADERS
from suarasekolah.routes.provisioning import router as provisioning_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await init_db()
    yield


# Hosted-function endpoints are callable from any origin, independent of the portal pages
functions_app = FastAPI(title="Suara Sekolah functions")
functions_app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=CORS_ALLOW_HEADERS,
)
functions_app.include_router(provisioning_router)

app = FastAPI(title="Suara Sekolah", lifespan=lifespan)
app.include_router(chat_router)
app.mount("/functions/v1", functions_app)


@app.get("/")
async def index():
    return RedirectResponse(url="/chat")


@app.get("/api/health")
async def health() -> dict:
    return {"status": "ok"}
