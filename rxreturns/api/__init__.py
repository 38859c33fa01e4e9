"""HTTP API: FastAPI app factory and routers."""

from rxreturns.api.server import create_app

__all__ = ["create_app"]
