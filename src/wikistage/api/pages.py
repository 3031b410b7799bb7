"""Wiki page endpoints.

Every request goes through a single handler that validates the path with the
app's ``PathRouter`` and dispatches on the extracted action.
"""

import asyncio
import logging

from aiohttp import web

from wikistage.app_keys import path_router_key, renderer_key, store_key
from wikistage.core.routing import PathRouter
from wikistage.core.types import Action, Page
from wikistage.errors import PageNotFoundError, PageWriteError, RenderError

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html"


def create_pages_routes() -> list[web.RouteDef]:
    return [web.route("*", "/{path:.*}", dispatch)]


async def dispatch(request: web.Request) -> web.StreamResponse:
    router = request.app[path_router_key]
    route = router.match(request.path)
    if route is None:
        logger.debug(f"Rejected path {request.path}")
        return web.Response(text=request.path, status=404)

    handler = _HANDLERS[route.action]
    try:
        return await handler(request, route.title)
    except (PageWriteError, RenderError) as e:
        logger.error(f"{route.action.value} {route.title} failed: {e}")
        return web.Response(text=str(e), status=500)


async def view_page(request: web.Request, title: str) -> web.Response:
    store = request.app[store_key]
    try:
        page = await asyncio.to_thread(store.load, title)
    except PageNotFoundError:
        raise web.HTTPFound(_path(request, Action.EDIT, title)) from None
    return _render(request, Action.VIEW, page)


async def edit_page(request: web.Request, title: str) -> web.Response:
    store = request.app[store_key]
    try:
        page = await asyncio.to_thread(store.load, title)
    except PageNotFoundError:
        page = Page(title=title, prefix=request.app[path_router_key].prefix)
    return _render(request, Action.EDIT, page)


async def save_page(request: web.Request, title: str) -> web.Response:
    store = request.app[store_key]
    body = await _form_value(request, "body")
    page = Page(
        title=title,
        body=body.encode("utf-8"),
        prefix=request.app[path_router_key].prefix,
    )
    await asyncio.to_thread(store.save, page)
    raise web.HTTPFound(_path(request, Action.VIEW, title))


async def _form_value(request: web.Request, name: str) -> str:
    """Return a form field from the request body, else from the query string."""
    form = await request.post()
    value = form.get(name)
    if value is None:
        value = request.query.get(name, "")
    # File uploads come back as FileField; only text fields are accepted
    return value if isinstance(value, str) else ""


def _render(request: web.Request, action: Action, page: Page) -> web.Response:
    renderer = request.app[renderer_key]
    body = renderer.render(action.value, page)
    return web.Response(body=body, content_type=HTML_CONTENT_TYPE, charset="utf-8")


def _path(request: web.Request, action: Action, title: str) -> str:
    router: PathRouter = request.app[path_router_key]
    return router.build_path(action, title)


_HANDLERS = {
    Action.VIEW: view_page,
    Action.EDIT: edit_page,
    Action.SAVE: save_page,
}
