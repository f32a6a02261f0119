from invader_news.services.change_detector import (
    content_hash,
    extract_news_content,
    has_changed,
    normalise_html,
)

PAGE = """<html><head><title>News</title></head>
<body>
  <div id="mois202601"><p>3 : Ajout de PA_1</p></div>
</body></html>"""


def test_no_previous_cache_counts_as_changed():
    assert has_changed(PAGE, None) is True


def test_identical_pages_are_unchanged():
    assert has_changed(PAGE, PAGE) is False


def test_new_day_is_a_change():
    updated = PAGE.replace("</div>", "<p>4 : Destruction de PA_2</p></div>")
    assert has_changed(updated, PAGE) is True


def test_ignores_scripts_nonces_and_cache_busters():
    noisy = PAGE.replace(
        "<body>",
        '<body><script nonce="abc123">var t = 1767225600;</script>'
        '<link href="/style.css?v=42"><style>p { color: red; }</style>',
    )
    other = PAGE.replace(
        "<body>",
        '<body><script nonce="zzz">var t = 1767229200;</script>'
        '<link href="/style.css?v=43"><style>p { color: blue; }</style>',
    )
    assert has_changed(noisy, other) is False


def test_ignores_head_and_formatting():
    reformatted = PAGE.replace("<title>News</title>", "<title>News (updated)</title>").replace(
        "\n  <div", "\n\n\n      <div"
    )
    assert has_changed(reformatted, PAGE) is False


def test_ignores_comments_and_timestamps():
    first = PAGE.replace(
        '<div id="mois202601">', '<!-- built 12:00 --><div id="mois202601" data-timestamp="1">'
    )
    second = PAGE.replace(
        '<div id="mois202601">', '<!-- built 13:00 --><div id="mois202601" data-timestamp="2">'
    )
    assert content_hash(first) == content_hash(second)


def test_extract_keeps_only_body():
    content = extract_news_content(PAGE)
    assert "<title>" not in content
    assert "PA_1" in content


def test_normalise_html_strips_whitespace_between_tags():
    assert normalise_html("<ul>\n   <li>a</li>\n\n  <li>b</li>\n</ul>") == "<ul><li>a</li><li>b</li></ul>"
