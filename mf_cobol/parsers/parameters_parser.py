"""
COBOL Data Source Options Parser.

Turns the flat string options of a `spark.read.format("cobol")` request
into a typed CobolParameters object.

Example:
    >>> params = CobolParametersParser.parse({
    ...     "copybook": "EXPORT.cpy",
    ...     "path": "data/export.dat",
    ...     "is_record_sequence": "true",
    ...     "segment_field": "SEGMENT-ID",
    ...     "segment_id_level0": "C",
    ...     "segment_id_level1": "P",
    ...     "redefine-segment-id-map:0": "COMPANY => C",
    ...     "redefine-segment-id-map:1": "PERSON => P",
    ... })
    >>> params.multisegment_params.segment_level_ids
    ('C', 'P')

Supported Features:
    - Fixed-length and variable-length (RDW / length field) files
    - Multisegment files with a segment hierarchy
    - Segment id to redefine group mapping
    - Pedantic mode rejecting unknown options
"""

from typing import Mapping, Optional, Union

from mf_cobol.config.parameters import Parameters
from mf_cobol.config.settings import (
    CobolParameters,
    MultisegmentParameters,
    VariableLengthParameters,
)
from mf_cobol.core.base import (
    Encoding,
    FloatingPointFormat,
    SchemaRetentionPolicy,
    StringTrimmingPolicy,
)
from mf_cobol.core.exceptions import InvalidOptionValue, MalformedRedefineMapping
from mf_cobol.parsers.identifiers import transform_identifier
from mf_cobol.validators.parameters_validator import validate_unused_options

SHORT_NAME = "cobol"
PARAM_COPYBOOK_PATH = "copybook"
PARAM_MULTI_COPYBOOK_PATH = "copybooks"
PARAM_COPYBOOK_CONTENTS = "copybook_contents"
PARAM_SOURCE_PATH = "path"
PARAM_ENCODING = "encoding"
PARAM_PEDANTIC = "pedantic"
PARAM_RECORD_LENGTH = "record_length_field"
PARAM_RECORD_START_OFFSET = "record_start_offset"
PARAM_RECORD_END_OFFSET = "record_end_offset"
PARAM_FILE_START_OFFSET = "file_start_offset"
PARAM_FILE_END_OFFSET = "file_end_offset"

# Schema transformation
PARAM_GENERATE_RECORD_ID = "generate_record_id"
PARAM_SCHEMA_RETENTION_POLICY = "schema_retention_policy"
PARAM_GROUP_FILLERS = "drop_group_fillers"
PARAM_GROUP_NOT_TERMINALS = "non_terminals"

# Data decoding
PARAM_STRING_TRIMMING_POLICY = "string_trimming_policy"
PARAM_EBCDIC_CODE_PAGE = "ebcdic_code_page"
PARAM_EBCDIC_CODE_PAGE_CLASS = "ebcdic_code_page_class"
PARAM_FLOATING_POINT_FORMAT = "floating_point_format"

# Variable-length and multisegment files
PARAM_IS_XCOM = "is_xcom"
PARAM_IS_RECORD_SEQUENCE = "is_record_sequence"
PARAM_IS_RDW_BIG_ENDIAN = "is_rdw_big_endian"
PARAM_IS_RDW_PART_REC_LENGTH = "is_rdw_part_of_record_length"
PARAM_RDW_ADJUSTMENT = "rdw_adjustment"
PARAM_SEGMENT_FIELD = "segment_field"
PARAM_SEGMENT_ID_ROOT = "segment_id_root"
PARAM_SEGMENT_FILTER = "segment_filter"
PARAM_SEGMENT_ID_LEVEL_PREFIX = "segment_id_level"
PARAM_RECORD_HEADER_PARSER = "record_header_parser"
PARAM_RHP_ADDITIONAL_INFO = "rhp_additional_info"
PARAM_REDEFINE_SEGMENT_ID_MAP_PREFIXES = ("redefine-segment-id-map", "redefine_segment_id_map")

# Indexing and input splits
PARAM_ALLOW_INDEXING = "allow_indexing"
PARAM_INPUT_SPLIT_RECORDS = "input_split_records"
PARAM_INPUT_SPLIT_SIZE_MB = "input_split_size_mb"
PARAM_SEGMENT_ID_PREFIX = "segment_id_prefix"
PARAM_OPTIMIZE_ALLOCATION = "optimize_allocation"
PARAM_IMPROVE_LOCALITY = "improve_locality"

# Debugging
PARAM_DEBUG_IGNORE_FILE_SIZE = "debug_ignore_file_size"

REDEFINE_SEPARATOR = "=>"

RECOGNIZED_OPTIONS = [
    PARAM_COPYBOOK_PATH,
    PARAM_MULTI_COPYBOOK_PATH,
    PARAM_COPYBOOK_CONTENTS,
    PARAM_SOURCE_PATH,
    PARAM_ENCODING,
    PARAM_PEDANTIC,
    PARAM_RECORD_LENGTH,
    PARAM_RECORD_START_OFFSET,
    PARAM_RECORD_END_OFFSET,
    PARAM_FILE_START_OFFSET,
    PARAM_FILE_END_OFFSET,
    PARAM_GENERATE_RECORD_ID,
    PARAM_SCHEMA_RETENTION_POLICY,
    PARAM_GROUP_FILLERS,
    PARAM_GROUP_NOT_TERMINALS,
    PARAM_STRING_TRIMMING_POLICY,
    PARAM_EBCDIC_CODE_PAGE,
    PARAM_EBCDIC_CODE_PAGE_CLASS,
    PARAM_FLOATING_POINT_FORMAT,
    PARAM_IS_XCOM,
    PARAM_IS_RECORD_SEQUENCE,
    PARAM_IS_RDW_BIG_ENDIAN,
    PARAM_IS_RDW_PART_REC_LENGTH,
    PARAM_RDW_ADJUSTMENT,
    PARAM_SEGMENT_FIELD,
    PARAM_SEGMENT_ID_ROOT,
    f"{PARAM_SEGMENT_ID_LEVEL_PREFIX}<N>",
    PARAM_SEGMENT_FILTER,
    PARAM_SEGMENT_ID_PREFIX,
    f"{PARAM_REDEFINE_SEGMENT_ID_MAP_PREFIXES[0]}<suffix>",
    f"{PARAM_REDEFINE_SEGMENT_ID_MAP_PREFIXES[1]}<suffix>",
    PARAM_RECORD_HEADER_PARSER,
    PARAM_RHP_ADDITIONAL_INFO,
    PARAM_ALLOW_INDEXING,
    PARAM_INPUT_SPLIT_RECORDS,
    PARAM_INPUT_SPLIT_SIZE_MB,
    PARAM_IMPROVE_LOCALITY,
    PARAM_OPTIMIZE_ALLOCATION,
    PARAM_DEBUG_IGNORE_FILE_SIZE,
]


class CobolParametersParser:
    """
    Parser for COBOL data source options.

    Each option group is resolved by its own method. `parse` runs them all
    and then checks that every supplied option was consulted.

    Example:
        >>> params = CobolParametersParser.parse({"copybook": "A.cpy", "path": "a.dat"})
        >>> params.schema_retention_policy
        <SchemaRetentionPolicy.KEEP_ORIGINAL: 'keep_original'>
    """

    @classmethod
    def parse(cls, options: Union[Parameters, Mapping[str, str]]) -> CobolParameters:
        """
        Resolve all options of a read request.

        Args:
            options: Raw options, or a Parameters wrapper around them

        Returns:
            CobolParameters

        Raises:
            InvalidOptionValue: If an option value cannot be parsed
            MalformedRedefineMapping: If a redefine mapping entry is malformed
            UnrecognizedOptions: If unknown options are passed in pedantic mode
        """
        params = options if isinstance(options, Parameters) else Parameters(options)

        cobol_parameters = CobolParameters(
            copybook_path=params.get(PARAM_COPYBOOK_PATH),
            multi_copybook_path=_split_list(params.get_or_else(PARAM_MULTI_COPYBOOK_PATH, "")),
            copybook_content=params.get(PARAM_COPYBOOK_CONTENTS),
            source_path=params.get(PARAM_SOURCE_PATH),
            is_ebcdic=cls.get_encoding(params) == Encoding.EBCDIC,
            ebcdic_code_page=params.get_or_else(PARAM_EBCDIC_CODE_PAGE, "common"),
            ebcdic_code_page_class=params.get(PARAM_EBCDIC_CODE_PAGE_CLASS),
            floating_point_format=cls.get_floating_point_format(params),
            record_start_offset=_non_negative(params, PARAM_RECORD_START_OFFSET),
            record_end_offset=_non_negative(params, PARAM_RECORD_END_OFFSET),
            variable_length_params=cls.parse_variable_length_parameters(params),
            schema_retention_policy=cls.get_schema_retention_policy(params),
            string_trimming_policy=cls.get_string_trimming_policy(params),
            multisegment_params=cls.parse_multisegment_parameters(params),
            drop_group_fillers=params.get_bool(PARAM_GROUP_FILLERS, False),
            non_terminals=_split_list(params.get_or_else(PARAM_GROUP_NOT_TERMINALS, "")),
            debug_ignore_file_size=params.get_bool(PARAM_DEBUG_IGNORE_FILE_SIZE, False),
        )

        is_pedantic = params.get_bool(PARAM_PEDANTIC, False)
        validate_unused_options(params, is_pedantic)
        return cobol_parameters

    @staticmethod
    def get_encoding(params: Parameters) -> Encoding:
        """Resolve the encoding family. An empty value means EBCDIC."""
        encoding = params.get_or_else(PARAM_ENCODING, "")
        if not encoding:
            return Encoding.EBCDIC
        resolved = Encoding.from_name(encoding)
        if resolved is None:
            raise InvalidOptionValue(
                PARAM_ENCODING, encoding, "Should be either 'EBCDIC' or 'ASCII'."
            )
        return resolved

    @staticmethod
    def get_schema_retention_policy(params: Parameters) -> SchemaRetentionPolicy:
        name = params.get_or_else(PARAM_SCHEMA_RETENTION_POLICY, "keep_original")
        policy = SchemaRetentionPolicy.from_name(name)
        if policy is None:
            raise InvalidOptionValue(PARAM_SCHEMA_RETENTION_POLICY, name)
        return policy

    @staticmethod
    def get_string_trimming_policy(params: Parameters) -> StringTrimmingPolicy:
        name = params.get_or_else(PARAM_STRING_TRIMMING_POLICY, "both")
        policy = StringTrimmingPolicy.from_name(name)
        if policy is None:
            raise InvalidOptionValue(PARAM_STRING_TRIMMING_POLICY, name)
        return policy

    @staticmethod
    def get_floating_point_format(params: Parameters) -> FloatingPointFormat:
        name = params.get_or_else(PARAM_FLOATING_POINT_FORMAT, "IBM")
        fmt = FloatingPointFormat.from_name(name)
        if fmt is None:
            raise InvalidOptionValue(PARAM_FLOATING_POINT_FORMAT, name)
        return fmt

    @staticmethod
    def parse_variable_length_parameters(params: Parameters) -> Optional[VariableLengthParameters]:
        """
        Resolve variable-length settings.

        Variable-length mode is on when a record length field is given,
        records are RDW-prefixed, record ids are generated, or a file
        start/end offset is set. Otherwise returns None.
        """
        record_length_field = params.get(PARAM_RECORD_LENGTH)
        # 'is_xcom' is the older name of 'is_record_sequence' and wins if both are set
        params.mark_used(PARAM_IS_RECORD_SEQUENCE)
        if params.contains(PARAM_IS_XCOM):
            is_record_sequence = params.get_bool(PARAM_IS_XCOM, False)
        else:
            is_record_sequence = params.get_bool(PARAM_IS_RECORD_SEQUENCE, False)
        generate_record_id = params.get_bool(PARAM_GENERATE_RECORD_ID, False)
        file_start_offset = params.get_int(PARAM_FILE_START_OFFSET, 0)
        file_end_offset = params.get_int(PARAM_FILE_END_OFFSET, 0)

        is_variable_length = (
            record_length_field is not None
            or is_record_sequence
            or generate_record_id
            or file_start_offset > 0
            or file_end_offset > 0
        )
        if not is_variable_length:
            return None

        return VariableLengthParameters(
            is_record_sequence=is_record_sequence,
            is_rdw_big_endian=params.get_bool(PARAM_IS_RDW_BIG_ENDIAN, False),
            is_rdw_part_rec_length=params.get_bool(PARAM_IS_RDW_PART_REC_LENGTH, False),
            rdw_adjustment=params.get_int(PARAM_RDW_ADJUSTMENT, 0),
            record_header_parser=params.get(PARAM_RECORD_HEADER_PARSER),
            rhp_additional_info=params.get(PARAM_RHP_ADDITIONAL_INFO),
            record_length_field=record_length_field or "",
            file_start_offset=file_start_offset,
            file_end_offset=file_end_offset,
            generate_record_id=generate_record_id,
            is_using_index=params.get_bool(PARAM_ALLOW_INDEXING, True),
            input_split_records=params.get_optional_int(PARAM_INPUT_SPLIT_RECORDS),
            input_split_size_mb=params.get_optional_int(PARAM_INPUT_SPLIT_SIZE_MB),
            improve_locality=params.get_bool(PARAM_IMPROVE_LOCALITY, True),
            optimize_allocation=params.get_bool(PARAM_OPTIMIZE_ALLOCATION, False),
        )

    @classmethod
    def parse_multisegment_parameters(cls, params: Parameters) -> Optional[MultisegmentParameters]:
        """
        Resolve multisegment settings.

        Only active when 'segment_field' is given. Without it the level,
        filter and redefine options are left unconsulted.
        """
        if not params.contains(PARAM_SEGMENT_FIELD):
            return None

        segment_filter = params.get(PARAM_SEGMENT_FILTER)
        return MultisegmentParameters(
            segment_id_field=params[PARAM_SEGMENT_FIELD],
            segment_id_filter=(
                tuple(segment_filter.split(",")) if segment_filter is not None else None
            ),
            segment_level_ids=tuple(cls.parse_segment_levels(params)),
            segment_id_prefix=params.get_or_else(PARAM_SEGMENT_ID_PREFIX, ""),
            segment_id_redefine_map=cls.get_segment_id_redefine_mapping(params),
        )

    @staticmethod
    def parse_segment_levels(params: Parameters) -> list[str]:
        """
        Collect segment id fields ordered by hierarchy depth.

        Example:
            segment_id_level0=SEGID-ROOT, segment_id_level1=SEGID-CHD1
            gives ["SEGID-ROOT", "SEGID-CHD1"].

        'segment_id_root' stands in for level 0 when that is missing. The
        scan stops at the first missing level, so levels after a gap are
        ignored.
        """
        levels = []
        depth = 0
        while True:
            name = f"{PARAM_SEGMENT_ID_LEVEL_PREFIX}{depth}"
            if params.contains(name):
                levels.append(params[name])
            elif depth == 0 and params.contains(PARAM_SEGMENT_ID_ROOT):
                levels.append(params[PARAM_SEGMENT_ID_ROOT])
            else:
                return levels
            depth += 1

    @staticmethod
    def get_segment_id_redefine_mapping(params: Parameters) -> dict[str, str]:
        """
        Build the segment id -> redefine group mapping.

        Example:
            redefine-segment-id-map:0 = "COMPANY => C,D"
            redefine-segment-id-map:1 = "PERSON => P"
            gives {"C": "COMPANY", "D": "COMPANY", "P": "PERSON"}.

        If a segment id is listed more than once, the last entry wins.

        Raises:
            MalformedRedefineMapping: If an entry has no single '=>' or no segment ids
        """
        mapping = {}
        for key in params.all_keys():
            if not key.lower().startswith(PARAM_REDEFINE_SEGMENT_ID_MAP_PREFIXES):
                continue
            params.mark_used(key)
            value = params[key]
            parts = value.split(REDEFINE_SEPARATOR)
            if len(parts) != 2 or not parts[1].strip():
                raise MalformedRedefineMapping(value)
            redefine = transform_identifier(parts[0].strip())
            for segment_id in parts[1].split(","):
                mapping[segment_id.strip()] = redefine
        return mapping


def _split_list(value: str) -> tuple[str, ...]:
    """Split a comma-separated option into trimmed, non-empty items."""
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _non_negative(params: Parameters, key: str) -> int:
    value = params.get_int(key, 0)
    if value < 0:
        raise InvalidOptionValue(key, str(value), "Should be a non-negative integer.")
    return value
