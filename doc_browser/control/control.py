from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from .dispatch import get_parse_engine, pre_parse
from .errors import InitializationFailure
from .models import ControlState, GetContentResult, Item, ItemReference
from .provider import ItemSource
from .storage import SourceStorage

logger = logging.getLogger(__name__)

READY_EVENT = "ready"
ERROR_EVENT = "error"


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class Control:
    """
    Drives an item from slug to parsed content: source initialisation ->
    slug resolution -> download -> pre-parse -> parse engine.

    Construction schedules the source's `init()` on the running event loop,
    so a `Control` must be created from inside a coroutine. The state moves
    from loading to ready or error exactly once and never changes again; an
    initialisation failure is kept and re-raised to every later caller.
    """

    def __init__(self, source: ItemSource, storage: Optional[SourceStorage] = None):
        self.source = source
        self.storage = storage or SourceStorage()
        self.state = ControlState.IDLE
        self._error: Optional[InitializationFailure] = None
        self._listeners: Dict[str, List[Callable[..., Any]]] = {}

        loop = asyncio.get_running_loop()
        self._init_task = loop.create_task(self._initialize())
        self.state = ControlState.LOADING

    @property
    def error(self) -> Optional[InitializationFailure]:
        return self._error

    async def wait(self) -> None:
        if self.state == ControlState.READY:
            return
        if self.state == ControlState.ERROR:
            raise self._error.with_traceback(None)

        waiter = asyncio.get_running_loop().create_future()

        def listener(*_: Any) -> None:
            self.off(READY_EVENT, listener)
            self.off(ERROR_EVENT, listener)
            if not waiter.done():
                waiter.set_result(None)

        def release(fut: asyncio.Future) -> None:
            # A cancelled caller must not stay subscribed.
            if fut.cancelled():
                self.off(READY_EVENT, listener)
                self.off(ERROR_EVENT, listener)

        self.on(READY_EVENT, listener)
        self.on(ERROR_EVENT, listener)
        waiter.add_done_callback(release)
        await waiter
        if self.state == ControlState.ERROR:
            # The stored failure is shared; drop frames from earlier raises.
            raise self._error.with_traceback(None)

    async def list_items(self) -> List[ItemReference]:
        await self.wait()
        list_items = getattr(self.source, "list_items", None)
        if list_items is None:
            return []
        return list(await _maybe_await(list_items()))

    async def select_item(self, slug: Sequence[str]) -> Optional[Item]:
        await self.wait()
        select_item = getattr(self.source, "select_item", None)
        ref = await _maybe_await(select_item(tuple(slug))) if select_item is not None else None
        if ref is None:
            logger.debug("No item found for slug %s", "/".join(slug))
            return None

        content = await self.get(ref.location)
        return Item(slug=ref.slug, ref=ref, content=content)

    async def get(self, location: str) -> GetContentResult:
        source = await self.storage.download(location)
        parsed = pre_parse(source.content_type, source.data)
        engine_cls = get_parse_engine(parsed.content_type)
        content = engine_cls(location, parsed.payload).to_content_nodes()
        logger.info("Parsed %s as %s with %s", location, parsed.content_type, engine_cls.__name__)
        return GetContentResult(content_type=parsed.content_type, buffer=source.data, content=content)

    def on(self, event: str, listener: Callable[..., Any]) -> None:
        self._listeners.setdefault(event, []).append(listener)

    def off(self, event: str, listener: Callable[..., Any]) -> None:
        remaining = [registered for registered in self._listeners.get(event, []) if registered is not listener]
        if remaining:
            self._listeners[event] = remaining
        else:
            self._listeners.pop(event, None)

    def _emit(self, event: str, *args: Any) -> bool:
        listeners = self._listeners.get(event)
        if not listeners:
            return False
        # Listeners unsubscribe themselves while being notified.
        for listener in list(listeners):
            try:
                listener(*args)
            except Exception:  # noqa: BLE001
                logger.exception("Listener %r for %r event failed", listener, event)
        return True

    async def _initialize(self) -> None:
        init = getattr(self.source, "init", None)
        try:
            if init is not None:
                await _maybe_await(init())
        except Exception as exc:  # noqa: BLE001
            self._error = InitializationFailure(f"Item source initialization failed: {exc}", cause=exc)
            self.state = ControlState.ERROR
            logger.error("Item source %s failed to initialise: %s", type(self.source).__name__, exc)
            self._emit(ERROR_EVENT, self._error)
            return

        self.state = ControlState.READY
        logger.info("Item source %s ready", type(self.source).__name__)
        self._emit(READY_EVENT)
