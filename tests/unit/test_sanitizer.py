from furigana_service.sanitizer import escape_text, sanitize
from furigana_service.types import SanitizedHtml


def test_canonical_ruby_passes_through_unchanged() -> None:
    assert sanitize("<ruby>本<rt>ほん</rt></ruby>") == "<ruby>本<rt>ほん</rt></ruby>"


def test_nested_tags_stripped_from_base() -> None:
    assert sanitize("<ruby><b>食</b><rt>た</rt></ruby>べる") == "<ruby>食<rt>た</rt></ruby>べる"


def test_plain_markup_is_escaped() -> None:
    assert sanitize("<script>alert(1)</script>") == "&lt;script&gt;alert(1)&lt;/script&gt;"


def test_attributed_ruby_is_escaped_literal() -> None:
    result = sanitize("<ruby attr=1>本<rt>ほん</rt></ruby>")

    assert result == "&lt;ruby attr=1&gt;本&lt;rt&gt;ほん&lt;/rt&gt;&lt;/ruby&gt;"
    assert "<ruby" not in result


def test_attributed_rt_is_not_matched() -> None:
    result = sanitize('<ruby>本<rt class="x">ほん</rt></ruby>')

    assert "<ruby>" not in result
    assert "&lt;rt class=&quot;x&quot;&gt;" in result


def test_missing_closing_ruby_fails_open_to_text() -> None:
    assert sanitize("<ruby>本<rt>ほん</rt>") == "&lt;ruby&gt;本&lt;rt&gt;ほん&lt;/rt&gt;"


def test_whitespace_and_case_in_tags_are_canonicalised() -> None:
    raw = "<RUBY >  今日 <RT >  きょう </RT></Ruby>は晴れ"

    assert sanitize(raw) == "<ruby>今日<rt>きょう</rt></ruby>は晴れ"


def test_nested_tags_stripped_from_reading() -> None:
    assert sanitize("<ruby>本<rt><b>ほん</b></rt></ruby>") == "<ruby>本<rt>ほん</rt></ruby>"


def test_content_between_rt_and_closing_ruby_is_dropped() -> None:
    raw = "<ruby>漢<rt>かん</rt><rp>)</rp><img src=x onerror=alert(1)></ruby>"

    assert sanitize(raw) == "<ruby>漢<rt>かん</rt></ruby>"


def test_text_around_fragments_keeps_order() -> None:
    raw = "<ruby>今日<rt>きょう</rt></ruby>は<ruby>晴<rt>は</rt></ruby>れ & <b>暑い</b>"

    assert sanitize(raw) == (
        "<ruby>今日<rt>きょう</rt></ruby>は<ruby>晴<rt>は</rt></ruby>"
        "れ &amp; &lt;b&gt;暑い&lt;/b&gt;"
    )


def test_empty_and_non_string_inputs() -> None:
    assert sanitize("") == ""
    assert sanitize(None) == ""
    assert sanitize(42) == ""
    assert isinstance(sanitize(None), SanitizedHtml)


def test_result_is_sanitized_type() -> None:
    assert isinstance(sanitize("かな"), SanitizedHtml)


def test_escape_keeps_existing_character_references() -> None:
    assert escape_text("&amp; &lt; &#12354; &#x3042; & &x") == "&amp; &lt; &#12354; &#x3042; &amp; &amp;x"
    assert escape_text('"q"') == "&quot;q&quot;"


def test_byte_order_marks_trimmed_inside_ruby() -> None:
    assert sanitize("<ruby>\ufeff本 <rt> ほん\ufeff</rt></ruby>") == "<ruby>本<rt>ほん</rt></ruby>"
