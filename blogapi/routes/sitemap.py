"""
sitemap.xml for search engines.
"""
from fastapi import APIRouter, Depends, Response

from ..clock import Clock, get_clock
from ..config import get_settings
from ..services.providers import ContentProvider, get_content_provider
from ..services.sitemap import build_sitemap

router = APIRouter(tags=["sitemap"])


@router.get("/sitemap.xml", response_class=Response)
def sitemap(
    provider: ContentProvider = Depends(get_content_provider),
    clock: Clock = Depends(get_clock),
):
    xml = build_sitemap(provider, get_settings().site_url, clock().date())
    return Response(
        content=xml,
        media_type="application/xml",
        headers={"Cache-Control": "public, max-age=3600"},
    )
