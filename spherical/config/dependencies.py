"""FastAPI dependencies exposing the objects built by create_app()."""

from starlette.requests import Request


def get_access_policy(request: Request):
    return request.app.state.access_policy


def get_channel(request: Request):
    return request.app.state.channel


def get_catalog_cache(request: Request):
    return request.app.state.catalog_cache
