from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from userdirs.config import Settings, get_settings
from userdirs.middleware.user_data import UserDataMiddleware
from userdirs.routers import files
from userdirs.services.identity import IdentityProvider, default_user_provider, set_identity_provider
from userdirs.utils.utils import ensure_user_directories

logger = logging.getLogger(__name__)

def create_app(settings: Optional[Settings] = None,
               provider: Optional[IdentityProvider] = None) -> FastAPI:
    settings = settings or get_settings()
    provider = provider or default_user_provider(settings)
    # module-level shortcuts answer for the same identity as the middleware
    set_identity_provider(provider)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Serving user directories from %s", settings.data_root)
        await provider.init_storage()
        if settings.create_directories:
            for handle in await provider.all_handles():
                ensure_user_directories(handle, settings.data_root)
                logger.info("Directories ready for user %s", handle)
        yield

    app = FastAPI(
        title="User Directories",
        description="Per-user data directories and static file routes.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(UserDataMiddleware, provider=provider, data_root=settings.data_root)

    app.include_router(files.router)

    @app.get("/ping")
    def ping(): return {"status": "ok"}

    return app

app = create_app()
