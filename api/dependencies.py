from __future__ import annotations

from functools import lru_cache

from fastapi import Request

from doc_browser.control import Control, ControlConfig, DirProvider


@lru_cache(maxsize=1)
def get_config() -> ControlConfig:
    return ControlConfig.from_env()


def build_control(config: ControlConfig) -> Control:
    """Must run inside the event loop that serves requests."""
    return Control(DirProvider(config.docs_root))


def get_control(request: Request) -> Control:
    return request.app.state.control


def split_slug(slug: str) -> list[str]:
    return [segment for segment in slug.split("/") if segment]
