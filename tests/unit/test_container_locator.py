"""
Unit tests for the Container Locator.

Verifies:
✔ Marked element inner range is found
✔ Same-named nested tags are balanced by depth
✔ Nested markers are absorbed into the outer container
✔ Unclosed containers are dropped without error
✔ Marker matching is token-based and case-insensitive
"""

from customization.containers import find_containers


def inner_slices(html):
    return [html[c.inner_start:c.inner_end] for c in find_containers(html)]


class TestFindContainers:

    def test_single_container(self):
        html = '<div class="generative-customization"><p>Hello world</p></div>'
        containers = find_containers(html)

        assert len(containers) == 1
        assert containers[0].inner_start == html.index("<p>")
        assert inner_slices(html) == ["<p>Hello world</p>"]

    def test_no_marker_returns_nothing(self):
        html = '<div class="hero"><p>Hello</p></div>'
        assert find_containers(html) == []

    def test_marker_among_other_classes_single_quotes(self):
        html = "<article class='hero generative-customization wide'><p>Hi</p></article>"
        assert inner_slices(html) == ["<p>Hi</p>"]

    def test_marker_prefix_is_not_a_match(self):
        html = '<div class="generative-customizations"><p>Hi</p></div>'
        assert find_containers(html) == []

    def test_uppercase_markup(self):
        html = '<DIV CLASS="generative-customization"><P>Hi</P></DIV>'
        assert inner_slices(html) == ["<P>Hi</P>"]

    def test_nested_same_name_tags_are_balanced(self):
        html = (
            '<div class="generative-customization">'
            "<div><p>A</p></div><p>B</p>"
            "</div><div><p>outside</p></div>"
        )
        assert inner_slices(html) == ["<div><p>A</p></div><p>B</p>"]

    def test_longer_tag_name_is_not_an_opening(self):
        html = '<div class="generative-customization"><divider></divider><p>A</p></div>'
        assert inner_slices(html) == ["<divider></divider><p>A</p>"]

    def test_nested_marker_is_absorbed(self):
        html = (
            '<section class="generative-customization">'
            '<div class="generative-customization"><p>A</p></div>'
            "</section>"
        )
        assert inner_slices(html) == [
            '<div class="generative-customization"><p>A</p></div>'
        ]

    def test_sibling_containers(self):
        html = (
            '<div class="generative-customization"><p>One</p></div>'
            "<p>between</p>"
            '<div class="generative-customization"><p>Two</p></div>'
        )
        assert inner_slices(html) == ["<p>One</p>", "<p>Two</p>"]

    def test_unclosed_container_is_dropped(self):
        html = '<div class="generative-customization"><p>A</p>'
        assert find_containers(html) == []

    def test_unclosed_outer_does_not_hide_closed_inner(self):
        html = (
            '<section class="generative-customization">'
            '<div class="x generative-customization"><p>A</p></div>'
        )
        assert inner_slices(html) == ["<p>A</p>"]

    def test_dropped_container_does_not_stop_later_ones(self):
        html = (
            '<span class="generative-customization"><p>lost</p>'
            '<div class="generative-customization"><p>kept</p></div>'
        )
        assert inner_slices(html) == ["<p>kept</p>"]

    def test_custom_marker_class(self):
        html = '<div class="rewrite-me"><p>A</p></div>'
        containers = find_containers(html, marker_class="rewrite-me")
        assert len(containers) == 1
