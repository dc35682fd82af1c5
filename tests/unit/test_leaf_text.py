"""Unit tests for the Leaf Text Extractor."""

from customization.leaf_text import extract_leaf_spans, plain_text


class TestPlainText:

    def test_strips_tags_and_collapses_whitespace(self):
        assert plain_text("  Hello\n  <strong>big</strong>   world ") == "Hello big world"

    def test_drops_script_and_style_blocks(self):
        html = "<script>var a = 1;</script>Visible<style>p { color: red }</style>"
        assert plain_text(html) == "Visible"

    def test_decodes_minimal_entities(self):
        assert plain_text("Fish&nbsp;&amp;&NBSP;chips") == "Fish & chips"


class TestExtractLeafSpans:

    def test_keeps_inner_markup(self):
        fragment = '<p>Hello <strong>world</strong></p><h2 class="t">Title</h2>'
        spans = extract_leaf_spans(fragment)

        assert [s.tag_name for s in spans] == ["p", "h2"]
        assert spans[0].inner_html == "Hello <strong>world</strong>"
        assert spans[0].plain_text == "Hello world"
        assert spans[0].attrs == ""
        assert spans[1].attrs == ' class="t"'

    def test_offsets_are_relative_to_fragment(self):
        fragment = '<div><p id="a">One</p></div><li>Two</li>'
        spans = extract_leaf_spans(fragment)

        assert [fragment[s.start:s.end] for s in spans] == ['<p id="a">One</p>', "<li>Two</li>"]

    def test_empty_spans_are_discarded(self):
        fragment = "<p>   </p><li>&nbsp;</li><p><script>track()</script></p><p><img src='x'></p>"
        assert extract_leaf_spans(fragment) == []

    def test_all_leaf_tags(self):
        fragment = (
            "<p>a</p><h1>b</h1><h6>c</h6><li>d</li>"
            "<blockquote>e</blockquote><figcaption>f</figcaption>"
        )
        tags = [s.tag_name for s in extract_leaf_spans(fragment)]
        assert tags == ["p", "h1", "h6", "li", "blockquote", "figcaption"]

    def test_structural_tags_are_ignored(self):
        fragment = "<div>text</div><span>more</span><h7>no</h7><pre>code</pre>"
        assert extract_leaf_spans(fragment) == []

    def test_case_insensitive_and_multiline(self):
        fragment = "<P>first\nline</P>"
        spans = extract_leaf_spans(fragment)

        assert len(spans) == 1
        assert spans[0].tag_name == "P"
        assert spans[0].inner_html == "first\nline"

    def test_non_greedy_match_stops_at_first_close(self):
        spans = extract_leaf_spans("<li>one</li><li>two</li>")
        assert [s.inner_html for s in spans] == ["one", "two"]
