from datetime import datetime, timezone

import pytest

from gcontacts.integration.parameters import WIRE_KEYS, translate_parameters


def test_offset_is_translated_to_one_based_start_index():
    assert translate_parameters({"offset": 0}) == {"start-index": 1}
    assert translate_parameters({"offset": "40"}) == {"start-index": 41}


def test_limit_becomes_max_results():
    assert translate_parameters({"limit": 200}) == {"max-results": 200}


def test_order_alone_defaults_to_descending():
    assert translate_parameters({"order": "lastmodified"}) == {
        "orderby": "lastmodified",
        "sortorder": "descending",
    }


def test_explicit_descending_false_wins_over_order_default():
    result = translate_parameters({"order": "lastmodified", "descending": False})
    assert result == {"orderby": "lastmodified", "sortorder": "ascending"}


def test_descending_before_order_is_not_overwritten():
    result = translate_parameters({"descending": False, "order": "lastmodified"})
    assert result == {"sortorder": "ascending", "orderby": "lastmodified"}


def test_descending_none_counts_as_absent():
    result = translate_parameters({"order": "lastmodified", "descending": None})
    assert result == {"sortorder": "descending", "orderby": "lastmodified"}


def test_updated_after_formats_datetimes():
    moment = datetime(2008, 3, 5, 12, 36, 38, tzinfo=timezone.utc)
    assert translate_parameters({"updated_after": moment}) == {
        "updated-min": "2008-03-05T12:36:38UTC"
    }


def test_updated_after_passes_strings_through():
    assert translate_parameters({"updated_after": "2008-03-05T12:36:38Z"}) == {
        "updated-min": "2008-03-05T12:36:38Z"
    }


def test_unknown_keys_pass_through_and_none_is_dropped():
    options = {"group": "http://example.com/groups/1", "limit": None}
    assert translate_parameters(options) == {"group": "http://example.com/groups/1"}


def test_translation_does_not_mutate_input():
    options = {"offset": 5, "order": "lastmodified"}
    translate_parameters(options)
    assert options == {"offset": 5, "order": "lastmodified"}


def test_wire_keys_are_read_only():
    with pytest.raises(TypeError):
        WIRE_KEYS["limit"] = "num"
