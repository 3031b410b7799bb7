"""Application keys for type-safe app configuration access."""

from aiohttp import web

from wikistage.config import Config
from wikistage.core.renderer import Renderer
from wikistage.core.routing import PathRouter
from wikistage.core.store import PageStore

config_key = web.AppKey("config", Config)
path_router_key = web.AppKey("path_router", PathRouter)
store_key = web.AppKey("store", PageStore)
renderer_key = web.AppKey("renderer", Renderer)
