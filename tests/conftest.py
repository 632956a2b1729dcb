"""Shared test fixtures for pageforge."""

import json

import pytest

from pageforge.config.models import PageforgeConfig
from pageforge.page import create_page
from pageforge.transformer import Transformer


@pytest.fixture
def transformer():
    return Transformer(log_level="silent")


@pytest.fixture
def sample_pages():
    return [
        create_page("index.html", "<h1>Home</h1>"),
        create_page("about.html", "<h1>About</h1>", {"title": "About us"}),
        create_page("blog/2024/first-post.md", "# First", {"tags": ["intro"]}),
        create_page("blog/2024/second-post.md", "# Second"),
    ]


@pytest.fixture
def sample_config():
    return PageforgeConfig()


@pytest.fixture
def data_dir(tmp_path):
    """A source directory with JSON and YAML data files."""
    source = tmp_path / "data"
    source.mkdir()
    (source / "data.json").write_text(json.dumps({"foo": "bar", "items": [1, 2, 3]}))
    (source / "data.yaml").write_text("foo: bar\nnested:\n  key: value\n")
    (source / "broken.json").write_text("{not json")
    (source / "broken.yaml").write_text("foo: [unclosed\n")
    return source


@pytest.fixture
def site_dir(tmp_path):
    """A page source tree with front matter."""
    site = tmp_path / "site"
    (site / "blog").mkdir(parents=True)
    (site / "index.html").write_text("---\ntitle: Home\n---\n<h1>Home</h1>\n")
    (site / "about.md").write_text("# About\n")
    (site / "blog" / "post.md").write_text(
        "---\ntitle: Post\ntags: [news]\n---\n\nBody text\n"
    )
    return site
