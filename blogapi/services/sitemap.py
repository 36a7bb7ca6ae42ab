"""
sitemap.xml for the public site: the fixed marketing pages plus one entry
per visible post, dated by its publication day.
"""
from datetime import date
from typing import List, Tuple
from xml.sax.saxutils import escape

from ..logging_config import content_logger, timed
from .providers import ContentProvider

# (path, changefreq, priority)
SITE_PAGES: List[Tuple[str, str, str]] = [
    ("/", "monthly", "1.0"),
    ("/methodology", "monthly", "0.8"),
    ("/results", "monthly", "0.8"),
    ("/programs", "monthly", "0.8"),
    ("/blog", "weekly", "0.9"),
]


def _url(loc: str, lastmod: str, changefreq: str, priority: str) -> str:
    return (
        "  <url>\n"
        f"    <loc>{escape(loc)}</loc>\n"
        f"    <lastmod>{lastmod}</lastmod>\n"
        f"    <changefreq>{changefreq}</changefreq>\n"
        f"    <priority>{priority}</priority>\n"
        "  </url>\n"
    )


@timed(content_logger, slow_ms=500)
def build_sitemap(provider: ContentProvider, site_url: str, today: date) -> str:
    """Render the sitemap. Only posts the provider reports as visible are listed."""
    base = site_url.rstrip("/")
    urls = [_url(f"{base}{path}", today.isoformat(), freq, prio) for path, freq, prio in SITE_PAGES]
    for post in provider.list_visible_posts():
        urls.append(_url(f"{base}/blog/{post.slug}", post.date or today.isoformat(), "monthly", "0.7"))

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        f"{''.join(urls)}"
        "</urlset>\n"
    )
