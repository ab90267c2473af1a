import os
import tempfile
import unittest
from pathlib import Path
from textwrap import dedent
from unittest import mock

from suggest_harvester.config import DEFAULT_CHROME_ARGUMENTS, load_config


class TestLoadConfig(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, text: str) -> Path:
        path = self.tmp_path / "config.yaml"
        path.write_text(dedent(text), encoding="utf-8")
        return path

    def test_minimal_config_uses_defaults(self) -> None:
        config = load_config(self._write("workbook:\n  path: keywords.xlsx\n"))

        self.assertEqual(config.workbook.resolved_path, (self.tmp_path / "keywords.xlsx").resolve())
        self.assertEqual(
            (
                config.workbook.header_row,
                config.workbook.keyword_column,
                config.workbook.longest_column,
                config.workbook.shortest_column,
            ),
            (0, 1, 2, 3),
        )
        self.assertEqual(config.browser.home_url, "https://www.google.com")
        self.assertEqual(config.browser.search_input_name, "q")
        self.assertEqual(config.browser.wait_timeout, 10.0)
        self.assertEqual(config.browser.chrome_arguments, DEFAULT_CHROME_ARGUMENTS)
        self.assertEqual(config.pacing.keystroke_delay_ms, (200.0, 500.0))
        self.assertEqual(config.pacing.keyword_delay_ms, (3000.0, 7000.0))

    def test_yaml_lists_become_pacing_bounds(self) -> None:
        config = load_config(
            self._write(
                """
                workbook:
                  path: /data/keywords.xlsx
                pacing:
                  keystroke_delay_ms: [0, 0]
                  keyword_delay_ms: [10, 20]
                """
            )
        )
        self.assertEqual(config.pacing.keystroke_delay_ms, (0.0, 0.0))
        self.assertEqual(config.pacing.keyword_delay_ms, (10.0, 20.0))

    def test_environment_overrides_paths(self) -> None:
        config = load_config(
            self._write(
                """
                workbook:
                  path: keywords.xlsx
                  path_env: HARVESTER_TEST_WORKBOOK
                browser:
                  driver_path_env: HARVESTER_TEST_DRIVER
                """
            )
        )
        override = self.tmp_path / "other.xlsx"
        driver = self.tmp_path / "chromedriver"
        env = {"HARVESTER_TEST_WORKBOOK": str(override), "HARVESTER_TEST_DRIVER": str(driver)}
        with mock.patch.dict(os.environ, env):
            self.assertEqual(config.workbook.resolved_path, override.resolve())
            self.assertEqual(config.browser.resolved_driver_path, driver.resolve())
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(config.browser.resolved_driver_path)

    def test_invalid_values_are_rejected(self) -> None:
        cases = {
            "inverted pacing": """
                workbook: {path: k.xlsx}
                pacing: {keyword_delay_ms: [7000, 3000]}
            """,
            "negative pacing": """
                workbook: {path: k.xlsx}
                pacing: {keystroke_delay_ms: [-1, 5]}
            """,
            "output over keyword": """
                workbook: {path: k.xlsx, longest_column: 1}
            """,
            "same output column": """
                workbook: {path: k.xlsx, longest_column: 3}
            """,
            "zero timeout": """
                workbook: {path: k.xlsx}
                browser: {wait_timeout: 0}
            """,
            "missing workbook": """
                browser: {headless: true}
            """,
        }
        for name, text in cases.items():
            with self.subTest(name):
                with self.assertRaises(ValueError):
                    load_config(self._write(text))

    def test_missing_and_empty_files(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_config(self.tmp_path / "absent.yaml")
        with self.assertRaises(ValueError):
            load_config(self._write(""))


if __name__ == "__main__":
    unittest.main()
