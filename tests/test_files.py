"""
Tests for SiteRoot and the serialization helpers
"""

import json

import pytest
import tomlkit
import yaml

from dato_hugo.markdown import compose_markdown, dump_data, merge_data, normalize_format


class TestMarkdown:

    def test_yaml_frontmatter(self):
        text = compose_markdown({"title": "About", "menu": {"main": {"weight": 100}}}, "Bio text\n\n")

        assert text == "---\ntitle: About\nmenu:\n  main:\n    weight: 100\n---\n\nBio text\n"

    def test_body_leading_whitespace_kept(self):
        text = compose_markdown({"title": "x"}, "    indented code\n")

        assert text == "---\ntitle: x\n---\n\n    indented code\n"

    def test_missing_content(self):
        assert compose_markdown({"title": "About"}, None) == "---\ntitle: About\n---\n"

    def test_toml_frontmatter(self):
        text = compose_markdown({"title": "About", "photo": None}, "Body", "toml")

        assert text == '+++\ntitle = "About"\n+++\n\nBody\n'

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            normalize_format("xml")

    def test_yaml_keeps_key_order(self):
        dumped = dump_data({"name": "x", "language": "en", "intro": None}, "yml")

        assert dumped == "name: x\nlanguage: en\nintro: null\n"

    def test_json_merge(self):
        merged = merge_data('{"a": 1, "b": 2}', "json", {"b": 3})

        assert json.loads(merged) == {"a": 1, "b": 3}


class TestSiteRoot:

    def test_add_to_toml_keeps_unrelated_keys(self, site_root, tmp_path):
        config = tmp_path / "config.dev.toml"
        config.write_text(
            '# Hugo config\nbaseURL = "https://example.org/"\ntitle = "Old"\n',
            encoding="utf-8",
        )

        site_root.add_to_data_file("config.dev.toml", "toml", {"title": "New", "languageCode": "en"})

        text = config.read_text(encoding="utf-8")
        parsed = tomlkit.parse(text)
        assert "# Hugo config" in text
        assert parsed["baseURL"] == "https://example.org/"
        assert parsed["title"] == "New"
        assert parsed["languageCode"] == "en"

    def test_add_to_missing_file_creates_it(self, site_root, tmp_path):
        site_root.add_to_data_file("data/extra.yml", "yaml", {"a": 1})

        assert yaml.safe_load((tmp_path / "data" / "extra.yml").read_text()) == {"a": 1}

    def test_create_data_file_replaces(self, site_root, tmp_path):
        target = tmp_path / "data" / "settings.yml"
        target.parent.mkdir()
        target.write_text("stale: true\n")

        site_root.create_data_file("data/settings.yml", "yaml", {"name": "Harbor"})

        assert yaml.safe_load(target.read_text()) == {"name": "Harbor"}
        assert site_root.written == [target]

    def test_create_post(self, site_root, tmp_path, read_post):
        site_root.create_post("content/about.md", "yaml", {
            "frontmatter": {"title": "About"},
            "content": "Hello",
        })

        frontmatter, body = read_post(tmp_path / "content" / "about.md")
        assert frontmatter == {"title": "About"}
        assert body == "Hello"

    def test_directory_clears_previous_content(self, site_root, tmp_path):
        stale = tmp_path / "content" / "services" / "old.md"
        stale.parent.mkdir(parents=True)
        stale.write_text("old")

        with site_root.directory("content/services") as services:
            services.create_post("new.md", "yaml", {"frontmatter": {"title": "New"}})

        assert sorted(p.name for p in stale.parent.iterdir()) == ["new.md"]
        assert site_root.written == [stale.parent / "new.md"]
