"""Tests for building pages from files with front matter."""

import pytest

from pageforge.sources import collect_pages, load_page, split_front_matter


class TestSplitFrontMatter:
    def test_no_front_matter(self):
        assert split_front_matter("# Title\n") == ({}, "# Title\n")

    def test_front_matter_and_body(self):
        metadata, body = split_front_matter("---\ntitle: Home\n---\n\nHello\n")
        assert metadata == {"title": "Home"}
        assert body == "Hello\n"

    def test_unterminated_front_matter_is_body(self):
        content = "---\ntitle: Home\n"
        assert split_front_matter(content) == ({}, content)

    def test_empty_front_matter(self):
        assert split_front_matter("---\n---\nBody") == ({}, "Body")

    def test_non_mapping_front_matter(self):
        with pytest.raises(ValueError, match="mapping"):
            split_front_matter("---\n- a\n- b\n---\nBody")


class TestLoadPage:
    def test_src_is_relative_posix_path(self, site_dir):
        page = load_page(site_dir / "blog" / "post.md", site_dir)
        assert page.src == "blog/post.md"
        assert page.metadata == {"title": "Post", "tags": ["news"]}
        assert page.content == "Body text\n"

    def test_invalid_front_matter(self, tmp_path):
        (tmp_path / "bad.md").write_text("---\ntitle: [oops\n---\n")
        with pytest.raises(ValueError, match="bad.md"):
            load_page(tmp_path / "bad.md", tmp_path)


class TestCollectPages:
    def test_collects_all_files_sorted(self, site_dir):
        pages = collect_pages(site_dir)
        assert [p.src for p in pages] == ["about.md", "blog/post.md", "index.html"]

    def test_pattern_filters(self, site_dir):
        pages = collect_pages(site_dir, "**/*.md")
        assert [p.src for p in pages] == ["about.md", "blog/post.md"]

    def test_local_metadata_from_front_matter(self, site_dir):
        pages = {p.src: p for p in collect_pages(site_dir)}
        assert pages["index.html"]["title"] == "Home"
        assert pages["about.md"].metadata == {}

    def test_missing_directory(self, tmp_path):
        with pytest.raises(NotADirectoryError):
            collect_pages(tmp_path / "nope")
