"""
Prometheus Metrics Endpoint.

Test with: curl http://localhost:3000/metrics
"""

from fastapi import APIRouter, Response
from yelp_bot.observability.metrics import get_metrics_content


router = APIRouter(prefix="/metrics", tags=["observability"])


@router.get("")
async def metrics():
    """Return metrics in Prometheus text format."""
    content, content_type = get_metrics_content()
    return Response(content=content, media_type=content_type)
