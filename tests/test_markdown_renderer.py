from quiz_runner.core.markdown_renderer import MarkdownRenderer


def test_renders_markdown_to_html():
    html = MarkdownRenderer().render_fragment("What is `typeof null`?")

    assert "<code>typeof null</code>" in html
    assert html.startswith("<p>")


def test_empty_text_has_placeholder():
    assert "No content provided" in MarkdownRenderer().render_fragment("   ")


def test_raw_html_is_escaped_by_default():
    html = MarkdownRenderer().render_fragment("<script>alert(1)</script>")

    assert "<script>" not in html
