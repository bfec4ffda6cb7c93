import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .routes.greynoise import router as greynoise_router
from .routes.otx import router as otx_router
from .routes.search import router as search_router
from .routes.shodan import router as shodan_router
from .routes.status import router as status_router
from .routes.threats import router as threats_router
from .routes.vulnerabilities import router as vulnerabilities_router
from .routes.zoomeye import router as zoomeye_router
from .utils.logs import configure_logging


logger = logging.getLogger(__name__)

app = FastAPI(title="Salem Cyber Vault")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging(settings.log_level)
    configs = settings.provider_configs()
    configured = sorted(name for name, cfg in configs.items() if cfg.api_key_present)
    missing = sorted(name for name, cfg in configs.items() if not cfg.api_key_present)
    logger.info("Providers configured: %s", ", ".join(configured) or "none")
    if missing:
        logger.warning("Providers without credentials (fallback or error responses): %s", ", ".join(missing))


app.include_router(greynoise_router, prefix="/api/greynoise", tags=["greynoise"])
app.include_router(otx_router, prefix="/api/otx", tags=["otx"])
app.include_router(search_router, prefix="/api/search", tags=["search"])
app.include_router(shodan_router, prefix="/api/shodan", tags=["shodan"])
app.include_router(zoomeye_router, prefix="/api/zoomeye", tags=["zoomeye"])
app.include_router(threats_router, prefix="/api/threats", tags=["threats"])
app.include_router(vulnerabilities_router, prefix="/api/vulnerabilities", tags=["vulnerabilities"])
app.include_router(status_router, prefix="/api/status", tags=["status"])


@app.get("/healthz")
async def healthz() -> dict:
    return {"ok": True}


def run() -> None:
    import uvicorn

    uvicorn.run("cybervault.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())
