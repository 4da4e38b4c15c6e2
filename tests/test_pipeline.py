import json
from pathlib import Path

import pytest

from gumwood.errors import SchemaParseError, SourceError
from gumwood.pipeline import UNIT_SEPARATOR, RunOptions, combine, run

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def library_bytes() -> bytes:
    return (FIXTURES / "library.json").read_bytes()


class TestRunSplit:
    def test_returns_mapping_per_kind(self, library_bytes):
        result = run(library_bytes, RunOptions(split_by_kind=True))
        assert isinstance(result, dict)
        assert "objects" in result
        assert "subscriptions" not in result

    def test_front_matter_on_each_unit(self, library_bytes):
        options = RunOptions(split_by_kind=True, front_matter={"key1": "value1", "key2": "value2"})
        result = run(library_bytes, options)
        for text in result.values():
            assert text.startswith("---\nkey1: value1\nkey2: value2\n---\n\n# ")

    def test_book_and_author_scenario(self):
        payload = {
            "data": {
                "__schema": {
                    "types": [
                        {
                            "kind": "OBJECT",
                            "name": "Book",
                            "fields": [
                                {"name": "title", "args": [], "type": {"kind": "NON_NULL", "ofType": {"kind": "SCALAR", "name": "String"}}},
                                {"name": "author", "args": [], "type": {"kind": "OBJECT", "name": "Author"}},
                            ],
                        },
                        {
                            "kind": "OBJECT",
                            "name": "Author",
                            "fields": [
                                {"name": "name", "args": [], "type": {"kind": "NON_NULL", "ofType": {"kind": "SCALAR", "name": "String"}}},
                            ],
                        },
                    ]
                }
            }
        }
        result = run(json.dumps(payload).encode(), RunOptions(split_by_kind=True))
        assert list(result) == ["objects"]
        objects = result["objects"]
        assert objects.index("Author") < objects.index('name="book"')
        assert "[`Author`](#author)" in objects


class TestRunCombined:
    def test_returns_single_document(self, library_bytes):
        result = run(library_bytes)
        assert isinstance(result, str)
        assert result.startswith("# Queries\n")
        assert result.index("# Queries") < result.index("# Mutations") < result.index("# Scalars")

    def test_units_separated_by_rule(self, library_bytes):
        result = run(library_bytes)
        assert "\n\n---\n\n# Mutations\n" in result

    def test_front_matter_once_at_top(self, library_bytes):
        result = run(library_bytes, RunOptions(front_matter={"title": "Library API"}))
        assert result.startswith("---\ntitle: Library API\n---\n\n# Queries\n")
        assert result.count("title: Library API") == 1

    def test_combined_links_stay_in_document(self, library_bytes):
        assert ".md#" not in run(library_bytes)


class TestCombine:
    def test_combine_joins_in_mapping_order(self):
        assert combine({"objects": "# Objects\n", "scalars": "# Scalars\n"}) == (
            "# Objects\n" + UNIT_SEPARATOR + "# Scalars\n"
        )

    def test_combine_empty(self):
        assert combine({}) == ""


class TestRunErrors:
    @pytest.mark.parametrize("source", [b"", b"   \n", ""])
    def test_empty_source(self, source):
        with pytest.raises(SourceError):
            run(source)

    def test_malformed_source(self):
        with pytest.raises(SchemaParseError) as exc_info:
            run(b'{"data": {"__schema": {}}}', RunOptions(split_by_kind=True))
        assert exc_info.value.path == "types"
