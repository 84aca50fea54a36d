import datetime
import html
from email.utils import format_datetime
from typing import Iterable, Optional

from app.schemas.blog import Post
from app.services.content_loader import now_utc, parse_pub_date


def rfc822_date(value: datetime.datetime) -> str:
    return format_datetime(value.astimezone(datetime.timezone.utc), usegmt=True)


def _cdata(text: str) -> str:
    # "]]>" cannot appear inside a CDATA section, so split it across two
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def _render_item(
    post: Post, site_url: str, author: str, build_date: datetime.datetime
) -> str:
    fm = post.frontmatter
    link = html.escape(f"{site_url}/post/{post.slug}")
    published = parse_pub_date(fm.pubDate) or build_date
    lines = [
        "    <item>",
        f"      <title>{html.escape(fm.title)}</title>",
        f"      <link>{link}</link>",
        f"      <guid>{link}</guid>",
        f"      <pubDate>{rfc822_date(published)}</pubDate>",
        f"      <description>{html.escape(fm.description)}</description>",
        f"      <content:encoded>{_cdata(post.content)}</content:encoded>",
        f"      <author>{html.escape(fm.author or author)}</author>",
    ]
    lines.extend(f"      <category>{html.escape(tag)}</category>" for tag in fm.tags)
    lines.append("    </item>")
    return "\n".join(lines)


def generate_rss_feed(
    posts: Iterable[Post],
    *,
    site_url: str,
    title: str,
    description: str,
    author: str,
    build_date: Optional[datetime.datetime] = None,
) -> str:
    """Render posts (already newest-first) as an RSS 2.0 document."""
    site_url = site_url.rstrip("/")
    build_date = build_date or now_utc()
    items = [_render_item(post, site_url, author, build_date) for post in posts]

    header = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0"',
        '  xmlns:content="http://purl.org/rss/1.0/modules/content/"',
        '  xmlns:dc="http://purl.org/dc/elements/1.1/"',
        '  xmlns:atom="http://www.w3.org/2005/Atom">',
        "  <channel>",
        f"    <title>{html.escape(title)}</title>",
        f"    <link>{html.escape(site_url)}</link>",
        f"    <description>{html.escape(description)}</description>",
        "    <language>en</language>",
        f"    <lastBuildDate>{rfc822_date(build_date)}</lastBuildDate>",
        f'    <atom:link href="{html.escape(site_url)}/rss.xml" rel="self" '
        'type="application/rss+xml"/>',
    ]
    footer = ["  </channel>", "</rss>"]
    return "\n".join(header + items + footer) + "\n"
