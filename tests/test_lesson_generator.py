import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

from services.lesson_generator import (
    EMPTY_CONTENT_HTML,
    ERROR_CONTENT_HTML,
    LessonContentGenerator,
)


def completion(content):
    return SimpleNamespace(choices=[
        SimpleNamespace(finish_reason="stop", message=SimpleNamespace(content=content))
    ])


class TestLessonContentGenerator(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()
        self.generator = LessonContentGenerator(self.client)

    def test_returns_html_and_sends_topic(self):
        self.client.chat.completions.create.return_value = completion("<h3>Osmosis</h3><p>Water moves.</p>")

        html = self.generator.generate("Osmosis")

        self.assertEqual(html, "<h3>Osmosis</h3><p>Water moves.</p>")
        kwargs = self.client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["temperature"], 0.5)
        self.assertEqual(kwargs["max_tokens"], 2048)
        system, user = kwargs["messages"]
        self.assertIn("Key Insight", system["content"])
        self.assertIn('"Osmosis"', user["content"])

    def test_strips_html_fences(self):
        self.client.chat.completions.create.return_value = completion("```html\n<p>Body</p>\n```")
        self.assertEqual(self.generator.generate("Diffusion"), "<p>Body</p>")

    def test_empty_completion_returns_placeholder(self):
        self.client.chat.completions.create.return_value = completion("")
        self.assertEqual(self.generator.generate("Diffusion"), EMPTY_CONTENT_HTML)

    def test_provider_error_returns_stub(self):
        self.client.chat.completions.create.side_effect = RuntimeError("503 from provider")

        html = self.generator.generate("Diffusion")

        self.assertEqual(html, ERROR_CONTENT_HTML)
        self.assertEqual(self.client.chat.completions.create.call_count, 1)

    def test_missing_client_returns_stub(self):
        self.assertEqual(LessonContentGenerator(None).generate("Diffusion"), ERROR_CONTENT_HTML)

    def test_repeated_calls_are_independent(self):
        self.client.chat.completions.create.side_effect = [
            completion("<p>First</p>"),
            completion("<p>Second</p>"),
        ]

        first = self.generator.generate("Enzymes")
        second = self.generator.generate("Enzymes")

        self.assertEqual((first, second), ("<p>First</p>", "<p>Second</p>"))
        self.assertEqual(self.client.chat.completions.create.call_count, 2)


if __name__ == "__main__":
    unittest.main()
