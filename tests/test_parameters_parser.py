"""
Tests for CobolParametersParser
"""
import logging

import pytest

from mf_cobol.config.parameters import Parameters
from mf_cobol.config.settings import MultisegmentParameters
from mf_cobol.core.base import (
    FloatingPointFormat,
    SchemaRetentionPolicy,
    StringTrimmingPolicy,
)
from mf_cobol.core.exceptions import (
    InvalidOptionValue,
    MalformedRedefineMapping,
    UnrecognizedOptions,
)
from mf_cobol.parsers.parameters_parser import CobolParametersParser


class TestDefaults:

    def test_fixed_length_defaults(self, base_options):
        params = CobolParametersParser.parse(base_options)

        assert params.copybook_path == "CUSTREC.cpy"
        assert params.multi_copybook_path == ()
        assert params.copybook_content is None
        assert params.source_path == "input/AWS.M2.CARDDEMO.CUSTDATA.PS"
        assert params.is_ebcdic
        assert params.ebcdic_code_page == "common"
        assert params.ebcdic_code_page_class is None
        assert params.floating_point_format == FloatingPointFormat.IBM
        assert params.record_start_offset == 0
        assert params.record_end_offset == 0
        assert params.variable_length_params is None
        assert params.schema_retention_policy == SchemaRetentionPolicy.KEEP_ORIGINAL
        assert params.string_trimming_policy == StringTrimmingPolicy.TRIM_BOTH
        assert params.multisegment_params is None
        assert not params.drop_group_fillers
        assert params.non_terminals == ()
        assert not params.debug_ignore_file_size

    def test_list_options_are_split_and_trimmed(self):
        params = CobolParametersParser.parse({
            "copybooks": "A.cpy, B.cpy",
            "non_terminals": "NAME,ADDRESS ",
        })

        assert params.multi_copybook_path == ("A.cpy", "B.cpy")
        assert params.non_terminals == ("NAME", "ADDRESS")

    def test_parsing_twice_gives_equal_results(self, multisegment_options):
        first = CobolParametersParser.parse(multisegment_options)
        second = CobolParametersParser.parse(multisegment_options)

        assert first == second
        assert first is not second


class TestPolicies:

    @pytest.mark.parametrize("value,expected", [
        ("", True),
        ("ebcdic", True),
        ("EBCDIC", True),
        ("ascii", False),
        ("Ascii", False),
    ])
    def test_encoding(self, value, expected):
        params = CobolParametersParser.parse({"encoding": value})
        assert params.is_ebcdic is expected

    def test_invalid_encoding(self):
        with pytest.raises(InvalidOptionValue) as exc_info:
            CobolParametersParser.parse({"encoding": "utf-8"})

        assert exc_info.value.key == "encoding"
        assert exc_info.value.value == "utf-8"

    def test_invalid_schema_retention_policy(self):
        with pytest.raises(InvalidOptionValue) as exc_info:
            CobolParametersParser.parse({"schema_retention_policy": "bogus"})

        assert exc_info.value.key == "schema_retention_policy"
        assert exc_info.value.value == "bogus"

    def test_policies_are_case_insensitive(self):
        params = CobolParametersParser.parse({
            "schema_retention_policy": "Collapse_Root",
            "string_trimming_policy": "NONE",
            "floating_point_format": "ieee754_little_endian",
        })

        assert params.schema_retention_policy == SchemaRetentionPolicy.COLLAPSE_ROOT
        assert params.string_trimming_policy == StringTrimmingPolicy.TRIM_NONE
        assert params.floating_point_format == FloatingPointFormat.IEEE754_LE

    @pytest.mark.parametrize("key", ["string_trimming_policy", "floating_point_format"])
    def test_invalid_policy_values(self, key):
        with pytest.raises(InvalidOptionValue) as exc_info:
            CobolParametersParser.parse({key: "sideways"})

        assert exc_info.value.key == key

    def test_code_page_options_are_kept(self):
        params = CobolParametersParser.parse({
            "ebcdic_code_page": "cp037",
            "ebcdic_code_page_class": "custom.pages:Greek",
        })

        assert params.ebcdic_code_page == "cp037"
        assert params.ebcdic_code_page_class == "custom.pages:Greek"

    def test_negative_record_offset_is_rejected(self):
        with pytest.raises(InvalidOptionValue):
            CobolParametersParser.parse({"record_start_offset": "-1"})

    def test_non_numeric_record_offset_is_rejected(self):
        with pytest.raises(InvalidOptionValue) as exc_info:
            CobolParametersParser.parse({"record_end_offset": "abc"})

        assert exc_info.value.key == "record_end_offset"

    def test_record_offset_with_digit_separator_is_rejected(self):
        with pytest.raises(InvalidOptionValue) as exc_info:
            CobolParametersParser.parse({"record_start_offset": "1_0"})

        assert exc_info.value.value == "1_0"

    @pytest.mark.parametrize("value", [" ascii ", "ebcdic "])
    def test_padded_encoding_is_rejected(self, value):
        with pytest.raises(InvalidOptionValue):
            CobolParametersParser.parse({"encoding": value})


class TestVariableLength:

    def test_no_trigger_means_fixed_length(self, base_options):
        params = CobolParametersParser.parse({
            **base_options,
            "is_rdw_big_endian": "true",
            "rdw_adjustment": "-4",
        })

        assert params.variable_length_params is None
        assert not params.is_variable_length

    def test_record_length_field(self, base_options):
        params = CobolParametersParser.parse({**base_options, "record_length_field": "X"})

        var_len = params.variable_length_params
        assert var_len is not None
        assert var_len.record_length_field == "X"
        assert not var_len.is_record_sequence

    @pytest.mark.parametrize("options", [
        {"is_record_sequence": "true"},
        {"is_xcom": "true"},
        {"generate_record_id": "true"},
        {"file_start_offset": "10"},
        {"file_end_offset": "2"},
    ])
    def test_each_trigger_enables_variable_length(self, base_options, options):
        params = CobolParametersParser.parse({**base_options, **options})
        assert params.variable_length_params is not None

    def test_zero_file_offsets_do_not_trigger(self, base_options):
        params = CobolParametersParser.parse({
            **base_options,
            "file_start_offset": "0",
            "file_end_offset": "0",
            "is_record_sequence": "false",
        })

        assert params.variable_length_params is None

    def test_is_xcom_takes_precedence(self, base_options):
        params = CobolParametersParser.parse({
            **base_options,
            "is_xcom": "false",
            "is_record_sequence": "true",
        })

        assert params.variable_length_params is None

    def test_variable_length_defaults(self, base_options):
        params = CobolParametersParser.parse({**base_options, "is_record_sequence": "true"})
        var_len = params.variable_length_params

        assert var_len.is_record_sequence
        assert not var_len.is_rdw_big_endian
        assert not var_len.is_rdw_part_rec_length
        assert var_len.rdw_adjustment == 0
        assert var_len.record_header_parser is None
        assert var_len.rhp_additional_info is None
        assert var_len.record_length_field == ""
        assert var_len.is_using_index
        assert var_len.input_split_records is None
        assert var_len.input_split_size_mb is None
        assert var_len.improve_locality
        assert not var_len.optimize_allocation

    def test_all_variable_length_options(self, base_options):
        params = CobolParametersParser.parse({
            **base_options,
            "is_record_sequence": "true",
            "is_rdw_big_endian": "true",
            "is_rdw_part_of_record_length": "true",
            "rdw_adjustment": "-4",
            "record_header_parser": "com.example.Parser",
            "rhp_additional_info": "opaque",
            "file_start_offset": "100",
            "file_end_offset": "20",
            "generate_record_id": "true",
            "allow_indexing": "false",
            "input_split_records": "50000",
            "input_split_size_mb": "64",
            "improve_locality": "false",
            "optimize_allocation": "true",
        })
        var_len = params.variable_length_params

        assert var_len.is_rdw_big_endian
        assert var_len.is_rdw_part_rec_length
        assert var_len.rdw_adjustment == -4
        assert var_len.record_header_parser == "com.example.Parser"
        assert var_len.rhp_additional_info == "opaque"
        assert var_len.file_start_offset == 100
        assert var_len.file_end_offset == 20
        assert var_len.generate_record_id
        assert not var_len.is_using_index
        assert var_len.input_split_records == 50000
        assert var_len.input_split_size_mb == 64
        assert not var_len.improve_locality
        assert var_len.optimize_allocation

    def test_invalid_split_size(self, base_options):
        with pytest.raises(InvalidOptionValue) as exc_info:
            CobolParametersParser.parse({
                **base_options,
                "is_record_sequence": "true",
                "input_split_size_mb": "big",
            })

        assert exc_info.value.key == "input_split_size_mb"


class TestSegmentLevels:

    def test_gap_truncates_levels(self):
        params = Parameters({
            "segment_id_level0": "A",
            "segment_id_level1": "B",
            "segment_id_level3": "D",
        })

        assert CobolParametersParser.parse_segment_levels(params) == ["A", "B"]

    def test_root_key_stands_in_for_level_zero(self):
        params = Parameters({"segment_id_root": "R"})

        assert CobolParametersParser.parse_segment_levels(params) == ["R"]

    def test_root_key_followed_by_levels(self):
        params = Parameters({"segment_id_root": "R", "segment_id_level1": "C"})

        assert CobolParametersParser.parse_segment_levels(params) == ["R", "C"]

    def test_level_zero_wins_over_root_key(self):
        params = Parameters({"segment_id_root": "R", "segment_id_level0": "L0"})

        assert CobolParametersParser.parse_segment_levels(params) == ["L0"]

    def test_no_levels(self):
        assert CobolParametersParser.parse_segment_levels(Parameters({})) == []


class TestRedefineMapping:

    def test_mapping_entries(self):
        params = Parameters({
            "redefine-segment-id-map:0": "COMPANY => C, D",
            "redefine-segment-id-map:1": "PERSON => P",
        })

        mapping = CobolParametersParser.get_segment_id_redefine_mapping(params)

        assert mapping == {"C": "COMPANY", "D": "COMPANY", "P": "PERSON"}

    def test_both_spellings_and_any_case(self):
        params = Parameters({
            "Redefine_Segment_Id_Map:a": "STATIC-DETAILS => S",
            "REDEFINE-SEGMENT-ID-MAP": "CONTACTS => P",
        })

        mapping = CobolParametersParser.get_segment_id_redefine_mapping(params)

        assert mapping == {"S": "STATIC_DETAILS", "P": "CONTACTS"}
        assert params.is_key_used("Redefine_Segment_Id_Map:a")
        assert params.is_key_used("REDEFINE-SEGMENT-ID-MAP")

    def test_last_duplicate_wins(self):
        params = Parameters({
            "redefine-segment-id-map:0": "COMPANY => C",
            "redefine-segment-id-map:1": "PERSON => C",
        })

        mapping = CobolParametersParser.get_segment_id_redefine_mapping(params)

        assert mapping == {"C": "PERSON"}

    @pytest.mark.parametrize("value", ["COMPANY C,D", "A => B => C", "COMPANY =>", "COMPANY =>  "])
    def test_malformed_entry(self, value):
        params = Parameters({"redefine-segment-id-map:0": value})

        with pytest.raises(MalformedRedefineMapping) as exc_info:
            CobolParametersParser.get_segment_id_redefine_mapping(params)

        assert exc_info.value.raw_value == value


class TestMultisegment:

    def test_multisegment_parameters(self, multisegment_options):
        params = CobolParametersParser.parse({
            **multisegment_options,
            "segment_filter": "C,P",
            "segment_id_prefix": "ID",
        })
        segment = params.multisegment_params

        assert segment.segment_id_field == "SEGMENT-ID"
        assert segment.segment_id_filter == ("C", "P")
        assert segment.segment_level_ids == ("C", "P")
        assert segment.segment_id_prefix == "ID"
        assert segment.segment_id_redefine_map == {"C": "COMPANY", "P": "PERSON"}

    def test_multisegment_defaults(self, base_options):
        params = CobolParametersParser.parse({**base_options, "segment_field": "SEG"})
        segment = params.multisegment_params

        assert segment.segment_id_filter is None
        assert segment.segment_level_ids == ()
        assert segment.segment_id_prefix == ""
        assert segment.segment_id_redefine_map == {}

    def test_without_segment_field_levels_are_unrecognized(self, base_options):
        with pytest.raises(UnrecognizedOptions) as exc_info:
            CobolParametersParser.parse({
                **base_options,
                "pedantic": "true",
                "segment_id_level0": "A",
                "redefine-segment-id-map:0": "COMPANY => C",
            })

        assert exc_info.value.keys == ["segment_id_level0", "redefine-segment-id-map:0"]

    def test_malformed_mapping_fails_parse(self, multisegment_options):
        with pytest.raises(MalformedRedefineMapping):
            CobolParametersParser.parse({
                **multisegment_options,
                "redefine-segment-id-map:2": "BROKEN",
            })


class TestUnusedOptions:

    def test_pedantic_rejects_unknown_key(self, base_options):
        with pytest.raises(UnrecognizedOptions) as exc_info:
            CobolParametersParser.parse({**base_options, "foo": "bar", "pedantic": "true"})

        assert exc_info.value.keys == ["foo"]

    def test_non_pedantic_warns(self, base_options, caplog):
        with caplog.at_level(logging.WARNING):
            params = CobolParametersParser.parse({**base_options, "foo": "bar"})

        assert params.source_path == base_options["path"]
        assert "unrecognized option(s)" in caplog.text
        assert "foo" in caplog.text

    def test_known_keys_do_not_warn(self, multisegment_options, caplog):
        with caplog.at_level(logging.WARNING):
            CobolParametersParser.parse({**multisegment_options, "pedantic": "true"})

        assert caplog.text == ""

    def test_accepts_parameters_instance(self, base_options):
        params = Parameters({**base_options, "foo": "bar"})

        CobolParametersParser.parse(params)

        assert params.is_key_used("path")
        assert not params.is_key_used("foo")


class TestImmutability:

    def test_redefine_map_is_read_only(self, multisegment_options):
        params = CobolParametersParser.parse(multisegment_options)
        redefine_map = params.multisegment_params.segment_id_redefine_map

        with pytest.raises(TypeError):
            redefine_map["X"] = "OTHER"

        assert dict(redefine_map) == {"C": "COMPANY", "P": "PERSON"}

    def test_redefine_map_passed_as_dict_is_copied(self):
        mapping = {"C": "COMPANY"}
        segment = MultisegmentParameters(segment_id_field="SEG", segment_id_redefine_map=mapping)
        mapping["P"] = "PERSON"

        assert dict(segment.segment_id_redefine_map) == {"C": "COMPANY"}

    def test_resolved_parameters_are_hashable(self, multisegment_options):
        first = CobolParametersParser.parse(multisegment_options)
        second = CobolParametersParser.parse(multisegment_options)

        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_to_dict_returns_plain_dict(self, multisegment_options):
        params = CobolParametersParser.parse(multisegment_options)

        data = params.to_dict()["multisegment_params"]["segment_id_redefine_map"]

        assert type(data) is dict
        assert data == {"C": "COMPANY", "P": "PERSON"}
