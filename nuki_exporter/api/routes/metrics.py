"""
Prometheus scrape endpoint
"""

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST


def scrape_metrics(request: Request):
    """Current registry contents in the Prometheus text format"""
    # plain def: runs on the worker pool, concurrently with the poll loop
    registry = request.app.state.registry
    return Response(content=registry.render(), media_type=CONTENT_TYPE_LATEST)


def build_router(metrics_path: str) -> APIRouter:
    router = APIRouter()
    router.add_api_route(metrics_path, scrape_metrics, methods=["GET"], include_in_schema=False)
    return router
