from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from . import __version__
from .config import settings
from .routers import engine

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("toolingcost")

app = FastAPI(
    title="Tooling Cost Engine",
    description="Shorthand specifications, volume formulas, dated material prices and part costs",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(engine.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME, "version": __version__}


logger.info("%s %s ready (default density %.2f g/cm³)",
            settings.APP_NAME, __version__, settings.DEFAULT_DENSITY)
