"""
Metadata decode/sanitize tests.
"""

import pytest

from core.logic.metadata import decode_metadata, sanitize_metadata, prepare_metadata
from exceptions import MetadataDecodeError, BusinessLogicError


class TestDecodeMetadata:

    def test_object_of_strings(self):
        assert decode_metadata('{"a": "1", "b": "2"}') == {"a": "1", "b": "2"}

    def test_null_values_kept_for_sanitize(self):
        assert decode_metadata('{"a": null}') == {"a": None}

    def test_empty_object(self):
        assert decode_metadata("{}") == {}

    @pytest.mark.parametrize("raw", ["", "not json", "{'a': '1'}", '{"a": "1"'])
    def test_malformed_json_rejected(self, raw):
        with pytest.raises(MetadataDecodeError, match="not valid JSON"):
            decode_metadata(raw)

    @pytest.mark.parametrize("raw", ["[]", '["a"]', '"text"', "42", "null"])
    def test_non_object_rejected(self, raw):
        with pytest.raises(MetadataDecodeError, match="JSON object"):
            decode_metadata(raw)

    @pytest.mark.parametrize("raw", ['{"a": 1}', '{"a": true}', '{"a": ["x"]}', '{"a": {"b": "c"}}'])
    def test_non_string_value_rejected(self, raw):
        with pytest.raises(MetadataDecodeError, match="'a' must be a string"):
            decode_metadata(raw)

    def test_non_text_input_rejected(self):
        with pytest.raises(MetadataDecodeError, match="JSON text"):
            decode_metadata({"a": "1"})

    def test_decode_error_is_business_logic_error(self):
        with pytest.raises(BusinessLogicError):
            decode_metadata("nope")


class TestSanitizeMetadata:

    def test_drops_empty_and_null(self):
        assert sanitize_metadata({"a": "1", "b": "", "c": None}) == {"a": "1"}

    def test_whitespace_value_kept(self):
        assert sanitize_metadata({"a": " "}) == {"a": " "}

    def test_does_not_mutate_input(self):
        original = {"a": "", "b": "2"}
        sanitize_metadata(original)
        assert original == {"a": "", "b": "2"}


class TestPrepareMetadata:

    def test_decode_then_sanitize(self):
        assert prepare_metadata('{"k1":"v1","k2":""}') == {"k1": "v1"}

    def test_all_empty_gives_empty_map(self):
        assert prepare_metadata('{"k1":"","k2":null}') == {}
