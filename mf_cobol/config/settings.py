"""
Resolved Settings.

Provides the typed configuration produced from the raw options of a COBOL
read request.

Example:
    >>> from mf_cobol.parsers import CobolParametersParser
    >>> params = CobolParametersParser.parse({"copybook": "CUSTREC.cpy", "path": "data/"})
    >>> params.variable_length_params is None
    True
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional, Any, Mapping

from mf_cobol.core.base import (
    Encoding,
    FloatingPointFormat,
    SchemaRetentionPolicy,
    StringTrimmingPolicy,
)


@dataclass(frozen=True)
class VariableLengthParameters:
    """
    Settings for variable-length record files.

    The presence of this object on CobolParameters is what selects the
    variable-length reader.

    Attributes:
        is_record_sequence: Records are prefixed by an RDW header
        is_rdw_big_endian: RDW length is big-endian
        is_rdw_part_rec_length: RDW length includes the header itself
        rdw_adjustment: Value added to every RDW length
        record_header_parser: Custom record header parser selector
        rhp_additional_info: Opaque string passed to the header parser
        record_length_field: Copybook field holding the record length ("" if none)
        file_start_offset: Bytes to skip at the beginning of each file
        file_end_offset: Bytes to skip at the end of each file
        generate_record_id: Whether to add file/record id columns
        is_using_index: Whether a sparse index may be built for splitting
        input_split_records: Records per input split
        input_split_size_mb: Size of an input split in megabytes
        improve_locality: Ask the split planner to prefer data-local executors
        optimize_allocation: Ask the split planner to balance executors
    """
    is_record_sequence: bool = False
    is_rdw_big_endian: bool = False
    is_rdw_part_rec_length: bool = False
    rdw_adjustment: int = 0
    record_header_parser: Optional[str] = None
    rhp_additional_info: Optional[str] = None
    record_length_field: str = ""
    file_start_offset: int = 0
    file_end_offset: int = 0
    generate_record_id: bool = False
    is_using_index: bool = True
    input_split_records: Optional[int] = None
    input_split_size_mb: Optional[int] = None
    improve_locality: bool = True
    optimize_allocation: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_record_sequence": self.is_record_sequence,
            "is_rdw_big_endian": self.is_rdw_big_endian,
            "is_rdw_part_rec_length": self.is_rdw_part_rec_length,
            "rdw_adjustment": self.rdw_adjustment,
            "record_header_parser": self.record_header_parser,
            "rhp_additional_info": self.rhp_additional_info,
            "record_length_field": self.record_length_field,
            "file_start_offset": self.file_start_offset,
            "file_end_offset": self.file_end_offset,
            "generate_record_id": self.generate_record_id,
            "is_using_index": self.is_using_index,
            "input_split_records": self.input_split_records,
            "input_split_size_mb": self.input_split_size_mb,
            "improve_locality": self.improve_locality,
            "optimize_allocation": self.optimize_allocation,
        }


@dataclass(frozen=True)
class MultisegmentParameters:
    """
    Settings for files mixing several record layouts.

    Attributes:
        segment_id_field: Field whose value tells which segment a record is
        segment_id_filter: Only keep records with one of these segment ids
        segment_level_ids: Segment id field per hierarchy depth (0 = root)
        segment_id_prefix: Prefix for generated segment ids
        segment_id_redefine_map: Segment id value -> redefine group name (read-only)
    """
    segment_id_field: str
    segment_id_filter: Optional[tuple[str, ...]] = None
    segment_level_ids: tuple[str, ...] = ()
    segment_id_prefix: str = ""
    segment_id_redefine_map: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def __post_init__(self):
        object.__setattr__(
            self, "segment_id_redefine_map", MappingProxyType(dict(self.segment_id_redefine_map))
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "segment_id_field": self.segment_id_field,
            "segment_id_filter": (
                list(self.segment_id_filter) if self.segment_id_filter is not None else None
            ),
            "segment_level_ids": list(self.segment_level_ids),
            "segment_id_prefix": self.segment_id_prefix,
            "segment_id_redefine_map": dict(self.segment_id_redefine_map),
        }


@dataclass(frozen=True)
class CobolParameters:
    """
    Fully resolved options of one COBOL read request.

    Only one of copybook_path, multi_copybook_path and copybook_content is
    expected to be set. Which one wins when several are given is up to the
    copybook loader.

    Attributes:
        copybook_path: Path to a single copybook
        multi_copybook_path: Paths to several copybooks
        copybook_content: Inline copybook text
        source_path: Path to the data files
        is_ebcdic: Data is EBCDIC (False means ASCII)
        ebcdic_code_page: Code page name
        ebcdic_code_page_class: Custom code page class, overrides the name
        floating_point_format: Layout of floating point fields
        record_start_offset: Bytes to skip before each record
        record_end_offset: Bytes to skip after each record
        variable_length_params: Set for variable-length files
        schema_retention_policy: Root group handling in the schema
        string_trimming_policy: String trimming mode
        multisegment_params: Set for multisegment files
        drop_group_fillers: Whether to drop FILLER groups
        non_terminals: Groups to also expose as a single string field
        debug_ignore_file_size: Do not check file size against record size
    """
    copybook_path: Optional[str] = None
    multi_copybook_path: tuple[str, ...] = ()
    copybook_content: Optional[str] = None
    source_path: Optional[str] = None
    is_ebcdic: bool = True
    ebcdic_code_page: str = "common"
    ebcdic_code_page_class: Optional[str] = None
    floating_point_format: FloatingPointFormat = FloatingPointFormat.IBM
    record_start_offset: int = 0
    record_end_offset: int = 0
    variable_length_params: Optional[VariableLengthParameters] = None
    schema_retention_policy: SchemaRetentionPolicy = SchemaRetentionPolicy.KEEP_ORIGINAL
    string_trimming_policy: StringTrimmingPolicy = StringTrimmingPolicy.TRIM_BOTH
    multisegment_params: Optional[MultisegmentParameters] = None
    drop_group_fillers: bool = False
    non_terminals: tuple[str, ...] = ()
    debug_ignore_file_size: bool = False

    @property
    def encoding(self) -> Encoding:
        """Encoding family of the data."""
        return Encoding.EBCDIC if self.is_ebcdic else Encoding.ASCII

    @property
    def is_variable_length(self) -> bool:
        """Check if the data has to be read as variable-length records."""
        return self.variable_length_params is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "copybook_path": self.copybook_path,
            "multi_copybook_path": list(self.multi_copybook_path),
            "copybook_content": self.copybook_content,
            "source_path": self.source_path,
            "encoding": self.encoding.value,
            "ebcdic_code_page": self.ebcdic_code_page,
            "ebcdic_code_page_class": self.ebcdic_code_page_class,
            "floating_point_format": self.floating_point_format.value,
            "record_start_offset": self.record_start_offset,
            "record_end_offset": self.record_end_offset,
            "variable_length_params": (
                self.variable_length_params.to_dict()
                if self.variable_length_params else None
            ),
            "schema_retention_policy": self.schema_retention_policy.value,
            "string_trimming_policy": self.string_trimming_policy.value,
            "multisegment_params": (
                self.multisegment_params.to_dict() if self.multisegment_params else None
            ),
            "drop_group_fillers": self.drop_group_fillers,
            "non_terminals": list(self.non_terminals),
            "debug_ignore_file_size": self.debug_ignore_file_size,
        }


@dataclass(frozen=True)
class LocalityParameters:
    """
    Hints for the split planner about executor placement.

    Attributes:
        improve_locality: Prefer executors local to the data blocks
        optimize_allocation: Balance splits across executors
    """
    improve_locality: bool = False
    optimize_allocation: bool = False

    @classmethod
    def extract(cls, params: CobolParameters) -> "LocalityParameters":
        """
        Take the locality hints from resolved parameters.

        Fixed-length files carry no hints, so both flags are off for them.
        """
        var_len = params.variable_length_params
        if var_len is None:
            return cls()
        return cls(
            improve_locality=var_len.improve_locality,
            optimize_allocation=var_len.optimize_allocation,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "improve_locality": self.improve_locality,
            "optimize_allocation": self.optimize_allocation,
        }
