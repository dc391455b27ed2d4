import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .db import create_schema, dispose_engine
from .errors import install_error_handlers
from .routers import auth, validation
from .services.risk import get_scorer

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
LOG = logging.getLogger("medclarity")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ReferenceTableError / bad RISK_POLICY fail startup rather than the first request
    scorer = get_scorer()
    if settings.DISPOSABLE_LIST_URL:
        added = await scorer.refresh_disposable(settings.DISPOSABLE_LIST_URL)
        LOG.info("Disposable list refresh added %d domains", added)

    if settings.DEBUG:
        await create_schema()

    yield

    await dispose_engine()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ---------------------------------------------------
# CORS (browser signup form)
# ---------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)


# ---------------------------------------------------
# Health check
# ---------------------------------------------------
@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}

# ---------------------------------------------------
# Routers
# ---------------------------------------------------
app.include_router(validation.router, prefix="/validate-email", tags=["validation"])
app.include_router(auth.router, prefix="/auth", tags=["auth"])
