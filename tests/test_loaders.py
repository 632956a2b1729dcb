"""Tests for the file-based data loader."""

import pytest

from pageforge.errors import DataLoadError
from pageforge.loaders import DataLoader


class TestDataLoader:
    def test_load_json(self, data_dir):
        assert DataLoader().load(data_dir, "data.json") == {"foo": "bar", "items": [1, 2, 3]}

    def test_load_yaml(self, data_dir):
        assert DataLoader().load(data_dir, "data.yaml") == {
            "foo": "bar",
            "nested": {"key": "value"},
        }

    def test_yml_suffix(self, tmp_path):
        (tmp_path / "site.yml").write_text("title: Example\n")
        assert DataLoader().load(tmp_path, "site.yml") == {"title": "Example"}

    def test_suffix_is_case_insensitive(self, tmp_path):
        (tmp_path / "DATA.JSON").write_text("[1]")
        assert DataLoader().load(tmp_path, "DATA.JSON") == [1]

    def test_nested_file_name(self, tmp_path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "nav.json").write_text('{"links": []}')
        assert DataLoader().load(tmp_path, "sub/nav.json") == {"links": []}

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError, match="file not found"):
            DataLoader().load(tmp_path, "nope.json")

    def test_malformed_json(self, data_dir):
        with pytest.raises(DataLoadError, match="malformed") as exc_info:
            DataLoader().load(data_dir, "broken.json")
        assert exc_info.value.__cause__ is not None

    def test_malformed_yaml(self, data_dir):
        with pytest.raises(DataLoadError, match="malformed"):
            DataLoader().load(data_dir, "broken.yaml")

    def test_unsupported_format(self, tmp_path):
        (tmp_path / "data.csv").write_text("a,b\n")
        with pytest.raises(DataLoadError, match="unsupported format"):
            DataLoader().load(tmp_path, "data.csv")

    def test_extra_parser(self, tmp_path):
        (tmp_path / "words.txt").write_text("a\nb\n")
        loader = DataLoader(parsers={".TXT": lambda text: text.split()})
        assert loader.load(tmp_path, "words.txt") == ["a", "b"]

    async def test_load_async(self, data_dir):
        assert (await DataLoader().load_async(data_dir, "data.json"))["foo"] == "bar"
