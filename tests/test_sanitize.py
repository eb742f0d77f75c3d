import pytest
from bs4 import BeautifulSoup

from social_crawl_tool.extraction.sanitize import (
    DEFAULT_RULES,
    SanitizeRule,
    apply_rules,
    parse_markup,
    render_markup,
    sanitize_html,
)

RULES = {rule.name: rule for rule in DEFAULT_RULES}


def run_rule(name: str, markup: str) -> str:
    soup = parse_markup(markup)
    RULES[name](soup)
    return render_markup(soup)


def test_rule_names_are_unique() -> None:
    assert len(RULES) == len(DEFAULT_RULES)


def test_chrome_is_detected_before_attributes_are_stripped() -> None:
    names = [rule.name for rule in DEFAULT_RULES]
    assert names.index("chrome_keywords") < names.index("presentation_attributes")
    assert names[-1] == "whitespace"


@pytest.mark.parametrize(
    ("rule", "markup", "expected"),
    [
        ("scripts", '<p>a</p><script type="module">alert(1)</script>', "<p>a</p>"),
        ("styles", "<style>\n.a { color: red }\n</style><p>a</p>", "<p>a</p>"),
        ("links", '<link rel="stylesheet" href="/a.css"><p>a</p>', "<p>a</p>"),
        ("noscript", "<noscript><img></noscript><p>a</p>", "<p>a</p>"),
        ("comments", "<p>a<!-- hidden\n note --></p>", "<p>a</p>"),
        ("comments", "<!DOCTYPE html><p>a</p>", "<p>a</p>"),
    ],
)
def test_element_rules(rule: str, markup: str, expected: str) -> None:
    assert run_rule(rule, markup) == expected


def test_media_data_uris_are_removed_case_insensitively() -> None:
    markup = '<img src="DATA:IMAGE/PNG;BASE64,iVBORw0KGgo="><video poster="data:video/mp4;base64,AAAA">'
    assert run_rule("media_data_uris", markup) == '<img src=""><video poster=""></video>'


def test_media_data_uri_with_charset_label() -> None:
    markup = '<img src="data:image/svg+xml;charset=utf-8,%3Csvg%3E%3C/svg%3E" alt="icon">'
    assert run_rule("media_data_uris", markup) == '<img alt="icon" src="">'


def test_code_data_uris_are_removed_from_text() -> None:
    markup = "<p>x data:text/css;charset=utf-8,body{margin:0} y data:application/javascript;base64,YWxlcnQ= z</p>"
    assert run_rule("code_data_uris", markup) == "<p>x  y  z</p>"


def test_base64_catch_all() -> None:
    markup = "<p>a data:application/octet-stream;base64,AAAA b charset=utf-8;base64,QUJD c</p>"
    assert run_rule("base64_payloads", markup) == "<p>a  b  c</p>"


def test_image_sources_keep_other_attributes() -> None:
    markup = '<img src="/a.jpg" srcset="/a.jpg 1x, /b.jpg 2x" alt="post" data-src="/lazy.jpg">'
    assert run_rule("image_sources", markup) == '<img alt="post" data-src="/lazy.jpg">'


def test_anchor_keeps_only_href() -> None:
    markup = '<a class="x" href="/p/1/" target="_blank" rel="noopener">Post</a>'
    assert run_rule("anchors", markup) == '<a href="/p/1/">Post</a>'


def test_anchor_without_href_loses_all_attributes() -> None:
    assert run_rule("anchors", '<a name="top" id="t">x</a>') == "<a>x</a>"


def test_anchor_rule_ignores_other_tags() -> None:
    markup = '<abbr title="tag">#</abbr>'
    assert run_rule("anchors", markup) == markup


def test_presentation_attributes_removed_from_tags_only() -> None:
    markup = (
        '<div class="a" style="b" role="button" tabindex="0" aria-label="c" '
        'data-testid="d" id="keep">first class defer async</div>'
    )
    assert run_rule("presentation_attributes", markup) == '<div id="keep">first class defer async</div>'


def test_presentation_boolean_attributes() -> None:
    markup = '<script async defer nonce="abc" crossorigin="anonymous" src="/x.js"></script>'
    assert run_rule("presentation_attributes", markup) == '<script src="/x.js"></script>'


def test_vector_graphics_removed() -> None:
    markup = '<button><svg viewBox="0 0 24 24"><path d="M0 0"/></svg>Like</button>'
    assert run_rule("vector_graphics", markup) == "<button>Like</button>"


def test_page_chrome_removed() -> None:
    markup = "<header>Top</header><nav><a>Home</a></nav><article>Body</article><footer>Bottom</footer>"
    assert run_rule("page_chrome", markup) == "<article>Body</article>"


def test_nested_page_chrome_removed_whole() -> None:
    markup = "<nav><ul><li><nav>x</nav></li></ul>Explore Reels</nav><p>post</p>"
    assert run_rule("page_chrome", markup) == "<p>post</p>"


@pytest.mark.parametrize(
    "markup",
    [
        '<div id="sidebar-left">links</div><p>post</p>',
        '<ul id="MainMenu"><li>x</li></ul><p>post</p>',
        '<section title="breadcrumb trail">a / b</section><p>post</p>',
        '<div role="navigation"><a href="/">Home</a></div><p>post</p>',
        '<div class="left sidebar"><div>Suggested</div></div><p>post</p>',
        '<div aria-label="More menu"><div>Settings</div></div><p>post</p>',
        '<div role="toolbar"><button>Like</button></div><p>post</p>',
        '<div id="sidebar"><div>Suggested</div><div>Follow alice</div></div><p>post</p>',
    ],
)
def test_chrome_keyword_elements_removed(markup: str) -> None:
    assert run_rule("chrome_keywords", markup) == "<p>post</p>"


def test_chrome_keywords_only_match_attributes() -> None:
    markup = "<p>today's menu was great</p>"
    assert run_rule("chrome_keywords", markup) == markup


def test_role_menu_removed_by_full_pipeline() -> None:
    markup = (
        '<main><div role="menu" aria-label="More menu"><div>Settings</div><div>Log out</div></div>'
        "<article>#busan_food dinner</article></main>"
    )
    assert sanitize_html(markup) == "<main><article>#busan_food dinner</article></main>"


def test_nested_empty_containers_removed() -> None:
    markup = '<div><div id="x"><span> </span></div></div><p>x</p><p>\n</p>'
    assert run_rule("empty_containers", markup) == "<p>x</p>"


def test_deeply_nested_empty_containers_removed_in_one_pass() -> None:
    markup = "<div>" * 60 + "<span> </span>" + "</div>" * 60 + "<p>x</p>"
    assert run_rule("empty_containers", markup) == "<p>x</p>"


def test_container_with_element_child_is_kept() -> None:
    markup = '<div><img alt="a"></div>'
    assert run_rule("empty_containers", markup) == markup


def test_whitespace_collapsed_and_trimmed() -> None:
    assert run_rule("whitespace", "  <p>a\n\n   b</p>\t ") == "<p>a b</p>"


def test_sanitize_full_fragment() -> None:
    markup = """
    <article class="post" data-id="42">
      <header><span>Sponsored</span></header>
      <img src="data:image/jpeg;base64,/9j/4AAQ" alt="Dumplings in Busan" class="photo">
      <a href="/explore/tags/busan_food/" class="tag" tabindex="0">#busan_food</a>
      <div class="spacer"><span></span></div>
      <script>track()</script>
      <!-- comment -->
      <svg aria-hidden="true"><circle r="1"/></svg>
    </article>
    """
    assert sanitize_html(markup) == (
        '<article> <img alt="Dumplings in Busan"> '
        '<a href="/explore/tags/busan_food/">#busan_food</a> </article>'
    )


def test_sanitize_is_idempotent() -> None:
    markup = """
    <main role="main">
      <div><div><div><span>  </span></div></div></div>
      <div id="menu-root"><div>Explore</div></div>
      <p style="x">caf&eacute; &amp; <b>#busan_food</b></p>
      <a target="_blank">bare</a>
      <img srcset="data:image/webp;base64,UklGR 1x" alt="a">
    </main>
    """
    once = sanitize_html(markup)
    assert sanitize_html(once) == once
    assert "Explore" not in once


def test_sanitize_is_idempotent_for_stacked_comment_openers() -> None:
    markup = "<p>a<!-- x -->b</p>"
    for _ in range(12):
        markup = markup.replace("<!--", "<!<!---->--", 1)

    once = sanitize_html(markup)

    assert sanitize_html(once) == once
    assert once.startswith("<p>a")
    assert once.endswith("b</p>")


def test_sanitize_is_idempotent_for_deep_nesting() -> None:
    markup = "<section>" * 40 + "<div><p>post</p><span></span></div>" + "</section>" * 40

    once = sanitize_html(markup)

    assert sanitize_html(once) == once
    assert once == "<section>" * 40 + "<div><p>post</p></div>" + "</section>" * 40


def drop_bold(soup: BeautifulSoup) -> None:
    for tag in soup.find_all("b"):
        tag.unwrap()


def shout(soup: BeautifulSoup) -> None:
    for node in soup.find_all(string=True):
        node.replace_with(node.upper())


def test_custom_rules_are_applied_in_order() -> None:
    rules = [SanitizeRule("unwrap_bold", drop_bold), SanitizeRule("shout", shout)]

    assert render_markup(apply_rules(parse_markup("<p>a<b>b</b>c</p>"), rules)) == "<p>ABC</p>"
    assert sanitize_html("<p>a<b>b</b>c</p>", rules) == "<p>ABC</p>"
