import json
import os
import tempfile
import threading
import unittest
from pathlib import Path
from unittest.mock import patch

from utils.config import AppConfig
from utils.file_storage import GenerationLogger, read_json_file, write_json_file
from utils.model_config import (
    FALLBACK_PLAN_MODEL,
    LESSON_MODEL,
    PRIMARY_PLAN_MODEL,
    ModelConfig,
)


class TestModelConfig(unittest.TestCase):

    def test_plan_models(self):
        self.assertEqual(ModelConfig.get_config(PRIMARY_PLAN_MODEL)["max_content_chars"], 30000)
        self.assertEqual(ModelConfig.get_config(FALLBACK_PLAN_MODEL)["max_content_chars"], 500000)

    def test_default_is_primary(self):
        self.assertIs(ModelConfig.get_config(), ModelConfig.get_config(PRIMARY_PLAN_MODEL))

    def test_unknown_model(self):
        with self.assertRaises(ValueError):
            ModelConfig.get_config("gpt-2")

    def test_lesson_model(self):
        config = ModelConfig.get_config(LESSON_MODEL)
        self.assertEqual((config["temperature"], config["max_tokens"]), (0.5, 2048))


class TestGenerationLogger(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "logs" / "generations.json"

    def tearDown(self):
        self.tmp.cleanup()

    def test_appends_entries_with_timestamp(self):
        log = GenerationLogger(str(self.path))

        self.assertTrue(log.log_generation({"backend": "Groq", "status": "error"}))
        self.assertTrue(log.log_generation({"backend": "Gemini", "status": "success"}))

        items = json.loads(self.path.read_text())["items"]
        self.assertEqual([i["backend"] for i in items], ["Groq", "Gemini"])
        self.assertIn("timestamp", items[0])

    def test_concurrent_writers_keep_every_entry(self):
        log = GenerationLogger(str(self.path))

        def worker(n):
            for i in range(25):
                log.log_generation({"worker": n, "attempt": i})

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        items = read_json_file(self.path)["items"]
        self.assertEqual(len(items), 200)
        self.assertEqual(list(self.path.parent.glob("*.tmp")), [])

    def test_disabled_without_path(self):
        log = GenerationLogger()
        self.assertFalse(log.enabled)
        self.assertFalse(log.log_generation({"status": "success"}))

    def test_read_missing_or_corrupt_file(self):
        self.assertIsNone(read_json_file(self.path))
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json")
        self.assertIsNone(read_json_file(self.path))

    def test_write_then_read(self):
        self.assertTrue(write_json_file(self.path, {"items": [1]}))
        self.assertEqual(read_json_file(self.path), {"items": [1]})


class TestAppConfig(unittest.TestCase):

    def test_from_env_reads_aliases(self):
        env = {
            "GROQ_API_KEY": "groq-key",
            "GOOGLE_API_KEY": "google-key",
            "NEXT_PUBLIC_SUPABASE_URL": "https://example.supabase.co",
            "SUPABASE_KEY": "service-key",
            "CORS_ORIGINS": "http://localhost:3000, https://app.example.com",
            "LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            config = AppConfig.from_env(load_dotenv_file=False)

        self.assertEqual(config.groq_content_api_key, "groq-key")
        self.assertEqual(config.gemini_api_key, "google-key")
        self.assertTrue(config.supabase_enabled)
        self.assertEqual(config.cors_origins, ["http://localhost:3000", "https://app.example.com"])
        self.assertEqual(config.log_level, "DEBUG")

    def test_separate_lesson_key(self):
        env = {"GROQ_API_KEY": "plan-key", "GROQ_CONTENT_API_KEY": "lesson-key"}
        with patch.dict(os.environ, env, clear=True):
            config = AppConfig.from_env(load_dotenv_file=False)
        self.assertEqual(config.groq_content_api_key, "lesson-key")

    def test_empty_environment(self):
        with patch.dict(os.environ, {}, clear=True):
            config = AppConfig.from_env(load_dotenv_file=False)

        self.assertFalse(config.supabase_enabled)
        self.assertIsNone(config.groq_api_key)
        self.assertEqual(config.cors_origins, ["*"])


if __name__ == "__main__":
    unittest.main()
