from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from doc_browser.control import Control, ControlConfig

from api.dependencies import build_control, get_config, get_control
from api.routes.items import router as items_router


def create_app(config: Optional[ControlConfig] = None) -> FastAPI:
    config = config or get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.control = build_control(config)
        yield

    app = FastAPI(title="Doc Browser API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(items_router)

    @app.get("/healthz")
    def health(control: Control = Depends(get_control)) -> dict:
        return {"status": "ok", "control": control.state.value}

    return app
