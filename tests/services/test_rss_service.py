import datetime

from app.services.content_loader import PostDefaults, build_post
from app.services.rss_service import generate_rss_feed, rfc822_date
from tests.conftest import FIXED_NOW

BUILD_DATE = datetime.datetime(2024, 6, 2, 8, 0, tzinfo=datetime.timezone.utc)


def _post(slug, header, body=""):
    text = f"---\n{header}---\n{body}"
    return build_post(f"posts/{slug}.md", text, PostDefaults(), FIXED_NOW.date())


def _feed(posts, site_url="https://blog.example.com"):
    return generate_rss_feed(
        posts,
        site_url=site_url,
        title="Example Blog",
        description="Notes & essays",
        author="Cooper Wallace",
        build_date=BUILD_DATE,
    )


def test_rfc822_date_is_utc():
    value = datetime.datetime(
        2024, 1, 15, 12, 0, tzinfo=datetime.timezone(datetime.timedelta(hours=2))
    )
    assert rfc822_date(value) == "Mon, 15 Jan 2024 10:00:00 GMT"


def test_feed_channel_metadata():
    feed = _feed([])

    assert feed.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "<title>Example Blog</title>" in feed
    assert "<description>Notes &amp; essays</description>" in feed
    assert "<lastBuildDate>Sun, 02 Jun 2024 08:00:00 GMT</lastBuildDate>" in feed
    assert (
        '<atom:link href="https://blog.example.com/rss.xml" rel="self" '
        'type="application/rss+xml"/>'
    ) in feed
    assert "<item>" not in feed


def test_feed_item_fields():
    post = _post(
        "sbom",
        "title: SBOMs & You\npubDate: 2024-01-15\ndescription: <b>why</b>\n"
        "tags: Security, DevSecOps\n",
        "# Body\n",
    )

    feed = _feed([post], site_url="https://blog.example.com/")

    assert "<title>SBOMs &amp; You</title>" in feed
    assert "<link>https://blog.example.com/post/sbom</link>" in feed
    assert "<guid>https://blog.example.com/post/sbom</guid>" in feed
    assert "<pubDate>Mon, 15 Jan 2024 00:00:00 GMT</pubDate>" in feed
    assert "<description>&lt;b&gt;why&lt;/b&gt;</description>" in feed
    assert "<content:encoded><![CDATA[# Body\n]]></content:encoded>" in feed
    assert "<author>Cooper Wallace</author>" in feed
    assert "<category>Security</category>" in feed
    assert "<category>DevSecOps</category>" in feed


def test_feed_keeps_post_order():
    posts = [
        _post("newer", "pubDate: 2024-05-01\n"),
        _post("older", "pubDate: 2023-05-01\n"),
    ]

    feed = _feed(posts)

    assert feed.index("post/newer") < feed.index("post/older")
    assert feed.count("<item>") == 2


def test_feed_uses_build_date_for_unparseable_pub_date():
    feed = _feed([_post("odd", "pubDate: sometime soon\n")])

    assert "<pubDate>Sun, 02 Jun 2024 08:00:00 GMT</pubDate>" in feed


def test_feed_splits_cdata_terminator_in_body():
    feed = _feed([_post("code", "title: Code\n", "a ]]> b")])

    assert "<![CDATA[a ]]]]><![CDATA[> b]]>" in feed

