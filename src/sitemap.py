"""XML sitemap generation."""

from typing import Iterable
from xml.sax.saxutils import escape

from src.schemas import BlogPost

# (path, changefreq, priority)
STATIC_PAGES = [
    ("/", "monthly", "1.0"),
    ("/blog", "weekly", "0.9"),
]


def _url_entry(loc: str, changefreq: str, priority: str, lastmod: str = None) -> str:
    entry = "  <url>\n"
    entry += f"    <loc>{escape(loc)}</loc>\n"
    if lastmod:
        entry += f"    <lastmod>{lastmod}</lastmod>\n"
    entry += f"    <changefreq>{changefreq}</changefreq>\n"
    entry += f"    <priority>{priority}</priority>\n"
    entry += "  </url>\n"
    return entry


def build_sitemap(site_url: str, posts: Iterable[BlogPost] = ()) -> str:
    """
    Render a sitemap (protocol 0.9) for the static pages and the given posts.

    Args:
        site_url: Public base URL without trailing slash
        posts: Published posts to list under /blog/<slug>

    Returns:
        str: Sitemap XML document
    """
    sitemap_xml = '<?xml version="1.0" encoding="UTF-8"?>\n'
    sitemap_xml += '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'

    for path, changefreq, priority in STATIC_PAGES:
        sitemap_xml += _url_entry(f"{site_url}{path}", changefreq, priority)

    for post in posts:
        sitemap_xml += _url_entry(
            f"{site_url}/blog/{post.slug}",
            "monthly",
            "0.8",
            lastmod=post.updated_at.date().isoformat(),
        )

    sitemap_xml += "</urlset>\n"
    return sitemap_xml
