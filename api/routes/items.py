from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from doc_browser.control import (
    Control,
    InitializationFailure,
    ParseFailure,
    UnsupportedContentType,
    UnsupportedExtension,
    UnsupportedScheme,
)

from api.dependencies import get_control, split_slug

router = APIRouter(prefix="/items", tags=["items"])


@router.get("")
async def list_items(control: Control = Depends(get_control)):
    try:
        items = await control.list_items()
    except InitializationFailure as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    return [item.to_dict() for item in items]


@router.get("/{slug:path}")
async def get_item(slug: str, control: Control = Depends(get_control)):
    segments = split_slug(slug)
    if not segments:
        raise HTTPException(status_code=404, detail="Item not found: empty slug")
    try:
        item = await control.select_item(segments)
    except InitializationFailure as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    except (UnsupportedExtension, UnsupportedContentType) as exc:
        raise HTTPException(status_code=415, detail=str(exc))
    except UnsupportedScheme as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except ParseFailure as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    if item is None:
        raise HTTPException(status_code=404, detail=f"Item not found: {slug}")
    return item.to_dict()
