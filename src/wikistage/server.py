"""aiohttp server for Wikistage.

Application factory and route registration.
"""

import logging

from aiohttp import web

from wikistage.api.pages import create_pages_routes
from wikistage.app_keys import config_key, path_router_key, renderer_key, store_key
from wikistage.config import Config
from wikistage.core.renderer import Renderer, TemplateRenderer
from wikistage.core.routing import PathRouter
from wikistage.core.store import PageStore

logger = logging.getLogger(__name__)


def create_app(config: Config, *, renderer: Renderer | None = None) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        renderer: Renderer to use instead of templates from config.storage.templates_dir

    Returns:
        Configured aiohttp application

    Raises:
        RenderError: If the default templates cannot be loaded
        OSError: If the pages directory cannot be created
    """
    app = web.Application()

    path_router = PathRouter(config.server.prefix)
    store = PageStore(config.storage.pages_dir, prefix=path_router.prefix)
    store.ensure_dir()

    if renderer is None:
        renderer = TemplateRenderer(config.storage.templates_dir)

    app[config_key] = config
    app[path_router_key] = path_router
    app[store_key] = store
    app[renderer_key] = renderer

    app.router.add_routes(create_pages_routes())

    return app


def entry_url(config: Config, title: str = "FrontPage") -> str:
    """Return the URL of a page's view route on the configured listener."""
    return f"http://{config.server.host}:{config.server.port}{config.server.prefix}/view/{title}"


def run_server(config: Config) -> None:
    """Run the server until interrupted.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info(f"Listening at {entry_url(config)}")
    web.run_app(app, host=config.server.host, port=config.server.port, print=None)
