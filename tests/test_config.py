from pathlib import Path

import pytest

from gumwood.config import GumwoodConfig, load_config, parse_front_matter, parse_headers
from gumwood.errors import ConfigurationError


class TestParseFrontMatter:
    def test_pairs_in_order(self):
        assert list(parse_front_matter("key1:value1;key2:value2").items()) == [
            ("key1", "value1"),
            ("key2", "value2"),
        ]

    def test_value_may_contain_colons(self):
        assert parse_front_matter("permalink:/api/:title") == {"permalink": "/api/:title"}

    def test_whitespace_and_blank_entries(self):
        assert parse_front_matter(" a : b ;; c:d; ") == {"a": "b", "c": "d"}

    def test_empty(self):
        assert parse_front_matter(None) == {}
        assert parse_front_matter("") == {}

    @pytest.mark.parametrize("text", ["novalue", ":value", "a:b;broken"])
    def test_invalid_entries(self, text):
        with pytest.raises(ConfigurationError):
            parse_front_matter(text)


class TestParseHeaders:
    def test_headers(self):
        assert parse_headers(["Authorization: Bearer abc", "X-Team:docs"]) == {
            "Authorization": "Bearer abc",
            "X-Team": "docs",
        }

    def test_invalid_header(self):
        with pytest.raises(ConfigurationError):
            parse_headers(["Authorization"])


class TestGumwoodConfig:
    def test_defaults(self):
        config = GumwoodConfig()
        assert config.url is None
        assert config.front_matter == {}
        assert config.include_introspection_types is True
        assert config.include_directives is False

    def test_string_forms_are_parsed(self):
        config = GumwoodConfig(headers=["X-Team: docs"], front_matter="layout:api")
        assert config.headers == {"X-Team": "docs"}
        assert config.front_matter == {"layout": "api"}

    def test_merged_overrides_only_given_values(self):
        base = GumwoodConfig(url="https://example.com/graphql", front_matter={"layout": "api"})
        merged = base.merged(front_matter={}, out_dir=Path("docs"), include_directives=None)
        assert merged.url == "https://example.com/graphql"
        assert merged.front_matter == {"layout": "api"}
        assert merged.out_dir == Path("docs")
        assert merged.include_directives is False

    def test_merged_rejects_two_sources(self):
        base = GumwoodConfig(url="https://example.com/graphql")
        with pytest.raises(ConfigurationError, match="only one"):
            base.merged(json_path=Path("schema.json"))


class TestLoadConfig:
    def test_none_gives_defaults(self):
        assert load_config(None) == GumwoodConfig()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "gumwood.yaml"
        path.write_text(
            "url: https://example.com/graphql\n"
            "headers:\n"
            "  - 'Authorization: Bearer abc'\n"
            "front_matter: 'layout:api;nav_order:3'\n"
            "out_dir: docs/api\n"
            "include_directives: true\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.url == "https://example.com/graphql"
        assert config.headers == {"Authorization": "Bearer abc"}
        assert list(config.front_matter) == ["layout", "nav_order"]
        assert config.out_dir == Path("docs/api")
        assert config.include_directives is True

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / "gumwood.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == GumwoodConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "gumwood.yaml"
        path.write_text("url: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "gumwood.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "gumwood.yaml"
        path.write_text("timeout: soon\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)
