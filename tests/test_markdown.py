from __future__ import annotations

import unittest

from portfolio_manifest.markdown import locate_image, strip_markdown, to_raw_url


class StripMarkdownTests(unittest.TestCase):
    def test_absent_and_empty_input(self) -> None:
        self.assertEqual(strip_markdown(None), "")
        self.assertEqual(strip_markdown(""), "")

    def test_removes_fenced_code_blocks(self) -> None:
        markdown = "Intro\n\n```python\nsecret_fence_value = 1\n```\n\nOutro"
        result = strip_markdown(markdown)
        self.assertEqual(result, "Intro Outro")
        self.assertNotIn("secret_fence_value", result)

    def test_removes_several_fences(self) -> None:
        markdown = "a\n```\nfirst\n```\nb\n```sh\nsecond\n```\nc"
        result = strip_markdown(markdown)
        self.assertEqual(result, "a b c")

    def test_removes_inline_code(self) -> None:
        self.assertEqual(strip_markdown("Run `make build` now"), "Run now")

    def test_flattens_images_and_links(self) -> None:
        markdown = "![Logo](docs/logo.png)\n# Widget\nSee [the docs](https://example.com/docs) for more."
        self.assertEqual(strip_markdown(markdown), "Logo # Widget See the docs for more.")

    def test_code_is_removed_before_links(self) -> None:
        markdown = "Call `[x](y)` here\n```\n[label](target)\n```\nand [real](link)"
        result = strip_markdown(markdown)
        self.assertEqual(result, "Call here and real")
        self.assertNotIn("label", result)

    def test_nested_badge_link_is_flattened(self) -> None:
        markdown = "[![build](https://ci.example.com/badge.svg)](https://ci.example.com)"
        self.assertEqual(strip_markdown(markdown), "build")

    def test_collapses_whitespace(self) -> None:
        self.assertEqual(strip_markdown("  one\n\n\ttwo   three \n"), "one two three")

    def test_idempotent(self) -> None:
        samples = [
            "# Title\n\nSome [link](x) and ![img](y.png)",
            "[[a](b)](c)",
            "``` unterminated fence",
            "`odd backtick ` pair ` left",
            "plain text",
            "[![a](b)](c) `[d](e)`",
        ]
        for sample in samples:
            with self.subTest(sample=sample):
                once = strip_markdown(sample)
                self.assertEqual(strip_markdown(once), once)


class LocateImageTests(unittest.TestCase):
    def test_absent_input(self) -> None:
        self.assertIsNone(locate_image(None, "acme", "widget"))
        self.assertIsNone(locate_image("", "acme", "widget"))

    def test_relative_embedded_image(self) -> None:
        result = locate_image("See ![logo](images/logo.png) here", "acme", "widget")
        self.assertEqual(result, "https://raw.githubusercontent.com/acme/widget/main/images/logo.png")

    def test_leading_dot_slash_is_removed(self) -> None:
        result = locate_image("![shot](./docs/shot.gif)", "acme", "widget")
        self.assertEqual(result, "https://raw.githubusercontent.com/acme/widget/main/docs/shot.gif")

    def test_absolute_embedded_image_is_kept(self) -> None:
        markdown = "![a](https://img.example.com/a.png) ![b](b.png)"
        self.assertEqual(locate_image(markdown, "acme", "widget"), "https://img.example.com/a.png")

    def test_image_title_is_dropped(self) -> None:
        markdown = '![logo](assets/logo.svg "Widget logo")'
        self.assertEqual(
            locate_image(markdown, "acme", "widget"),
            "https://raw.githubusercontent.com/acme/widget/main/assets/logo.svg",
        )

    def test_bare_image_url(self) -> None:
        markdown = "Screenshot: https://cdn.example.com/shot.jpg"
        self.assertEqual(locate_image(markdown, "acme", "widget"), "https://cdn.example.com/shot.jpg")

    def test_bare_image_url_is_case_insensitive(self) -> None:
        markdown = "https://cdn.example.com/SHOT.PNG"
        self.assertEqual(locate_image(markdown, "acme", "widget"), "https://cdn.example.com/SHOT.PNG")

    def test_embedded_image_wins_over_bare_url(self) -> None:
        markdown = "https://cdn.example.com/first.png then ![cover](cover.jpeg)"
        self.assertEqual(
            locate_image(markdown, "acme", "widget"),
            "https://raw.githubusercontent.com/acme/widget/main/cover.jpeg",
        )

    def test_no_image(self) -> None:
        markdown = "Read [the docs](https://example.com/docs) or visit https://example.com"
        self.assertIsNone(locate_image(markdown, "acme", "widget"))

    def test_angle_bracket_target_keeps_spaces(self) -> None:
        result = locate_image("![shot](<docs/screen shot.png>)", "acme", "widget")
        self.assertEqual(result, "https://raw.githubusercontent.com/acme/widget/main/docs/screen shot.png")

    def test_single_quoted_title_is_dropped(self) -> None:
        result = locate_image("![logo](img/logo.png 'Logo')", "acme", "widget")
        self.assertEqual(result, "https://raw.githubusercontent.com/acme/widget/main/img/logo.png")

    def test_custom_branch(self) -> None:
        result = locate_image("![x](x.png)", "acme", "widget", branch="master")
        self.assertEqual(result, "https://raw.githubusercontent.com/acme/widget/master/x.png")


class RawUrlTests(unittest.TestCase):
    def test_absolute_urls_are_unchanged(self) -> None:
        url = "https://raw.githubusercontent.com/acme/widget/main/x.png"
        self.assertEqual(to_raw_url(url, "acme", "widget"), url)
        self.assertEqual(to_raw_url(to_raw_url("x.png", "acme", "widget"), "acme", "widget"), url)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
