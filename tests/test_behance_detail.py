"""Tests for project page parsing."""

from catso.behance.detail import (
    find_all_videos,
    find_project_images,
    parse_project_detail,
    parse_video_ref,
)


def test_youtube_embed() -> None:
    html = '<iframe src="https://www.youtube.com/embed/dQw4w9WgXcQ?rel=0"></iframe>'
    assert parse_video_ref(html) == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def test_youtube_embed_in_escaped_json() -> None:
    html = r'{"embed":"<iframe src=\"https:\/\/www.youtube.com\/embed\/dQw4w9WgXcQ\">"}'
    assert parse_video_ref(html) == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def test_youtube_short_link() -> None:
    html = '<a href="https://youtu.be/aBcDeFgHiJk">watch</a>'
    assert parse_video_ref(html) == "https://www.youtube.com/watch?v=aBcDeFgHiJk"


def test_vimeo_embed() -> None:
    html = '<iframe src="https://player.vimeo.com/video/123456789?h=abc"></iframe>'
    assert parse_video_ref(html) == "https://vimeo.com/123456789"


def test_youtube_takes_priority_over_vimeo() -> None:
    html = (
        '<iframe src="https://player.vimeo.com/video/123456789"></iframe>'
        '<iframe src="https://www.youtube.com/embed/dQw4w9WgXcQ"></iframe>'
    )
    assert parse_video_ref(html) == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def test_template_placeholder_falls_through_to_vimeo() -> None:
    html = (
        '<iframe src="https://www.youtube.com/embed/{{video_id}}"></iframe>'
        '<iframe src="https://player.vimeo.com/video/987654321"></iframe>'
    )
    assert parse_video_ref(html) == "https://vimeo.com/987654321"


def test_placeholder_match_skips_the_rest_of_that_pattern() -> None:
    html = (
        '<iframe src="https://www.youtube.com/embed/{video_id_1}"></iframe>'
        '<iframe src="https://www.youtube.com/embed/dQw4w9WgXcQ"></iframe>'
    )
    assert parse_video_ref(html) is None


def test_vimeo_placeholder_is_rejected() -> None:
    html = '<iframe src="https://player.vimeo.com/video/{{vimeo_id}}"></iframe>'
    assert parse_video_ref(html) is None
    assert find_all_videos(html) == []


def test_no_video() -> None:
    assert parse_video_ref("<html><body>Stills only</body></html>") is None
    assert parse_video_ref("") is None
    assert parse_video_ref(None) is None


def test_find_all_videos_dedupes() -> None:
    html = (
        '<iframe src="https://www.youtube.com/embed/dQw4w9WgXcQ"></iframe>'
        '<a href="https://youtu.be/dQw4w9WgXcQ">again</a>'
        '<iframe src="https://player.vimeo.com/video/123456789"></iframe>'
    )
    assert find_all_videos(html) == [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://vimeo.com/123456789",
    ]


def test_project_images_from_tags_and_json() -> None:
    html = (
        '<img src="https://mir-s3-cdn-cf.behance.net/project_modules/max_1200/a1.jpg">'
        "<script>"
        r'{"src":"https:\/\/mir-s3-cdn-cf.behance.net\/project_modules\/max_1200\/a1.jpg",'
        r'"fs":"https:\/\/mir-s3-cdn-cf.behance.net\/project_modules\/fs\/b2.png"}'
        "</script>"
        '<img src="https://example.com/logo.png">'
    )

    assert find_project_images(html) == [
        "https://mir-s3-cdn-cf.behance.net/project_modules/max_1200/a1.jpg",
        "https://mir-s3-cdn-cf.behance.net/project_modules/fs/b2.png",
    ]


def test_parse_project_detail() -> None:
    html = (
        '<iframe src="https://www.youtube.com/embed/dQw4w9WgXcQ"></iframe>'
        '<iframe src="https://player.vimeo.com/video/123456789"></iframe>'
        '<img src="https://mir-s3-cdn-cf.behance.net/project_modules/disp/c3.webp">'
    )

    detail = parse_project_detail(html)

    assert detail.video_ref == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    assert detail.extra_videos == ["https://vimeo.com/123456789"]
    assert detail.images == [
        "https://mir-s3-cdn-cf.behance.net/project_modules/disp/c3.webp"
    ]


def test_parse_empty_detail() -> None:
    detail = parse_project_detail(None)
    assert detail.video_ref is None
    assert detail.extra_videos == []
    assert detail.images == []
