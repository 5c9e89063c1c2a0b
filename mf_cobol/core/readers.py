"""
Reader Strategy Selection.

Picks the fixed-length or variable-length reader for resolved options and
builds the parameter set that reader needs.

Example:
    >>> from mf_cobol.parsers import CobolParametersParser
    >>> selection = select_reader(CobolParametersParser.parse({"copybook": "A.cpy"}))
    >>> selection.reader_type
    <ReaderType.FIXED_LENGTH: 'fixed_length'>
"""

from dataclasses import dataclass
from typing import Optional, Any, Union

from mf_cobol.config.settings import CobolParameters, MultisegmentParameters
from mf_cobol.core.base import (
    FloatingPointFormat,
    ReaderType,
    SchemaRetentionPolicy,
    StringTrimmingPolicy,
)


@dataclass(frozen=True)
class FixedLenReaderParameters:
    """
    Parameters of the fixed-length reader.

    Attributes:
        is_ebcdic: Data is EBCDIC (False means ASCII)
        ebcdic_code_page: Code page name
        ebcdic_code_page_class: Custom code page class, overrides the name
        floating_point_format: Layout of floating point fields
        start_offset: Bytes to skip before each record
        end_offset: Bytes to skip after each record
        schema_policy: Root group handling in the schema
        string_trimming_policy: String trimming mode
        drop_group_fillers: Whether to drop FILLER groups
        non_terminals: Groups to also expose as a single string field
    """
    is_ebcdic: bool
    ebcdic_code_page: str
    ebcdic_code_page_class: Optional[str]
    floating_point_format: FloatingPointFormat
    start_offset: int
    end_offset: int
    schema_policy: SchemaRetentionPolicy
    string_trimming_policy: StringTrimmingPolicy
    drop_group_fillers: bool
    non_terminals: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_ebcdic": self.is_ebcdic,
            "ebcdic_code_page": self.ebcdic_code_page,
            "ebcdic_code_page_class": self.ebcdic_code_page_class,
            "floating_point_format": self.floating_point_format.value,
            "start_offset": self.start_offset,
            "end_offset": self.end_offset,
            "schema_policy": self.schema_policy.value,
            "string_trimming_policy": self.string_trimming_policy.value,
            "drop_group_fillers": self.drop_group_fillers,
            "non_terminals": list(self.non_terminals),
        }


@dataclass(frozen=True)
class VarLenReaderParameters(FixedLenReaderParameters):
    """
    Parameters of the variable-length reader.

    Extends the fixed-length parameters with record header handling,
    input split hints and the multisegment layout.

    Attributes:
        length_field_name: Copybook field holding the record length
        is_record_sequence: Records are prefixed by an RDW header
        is_rdw_big_endian: RDW length is big-endian
        is_rdw_part_rec_length: RDW length includes the header itself
        rdw_adjustment: Value added to every RDW length
        is_index_generation_needed: Whether a sparse index may be built
        input_split_records: Records per input split
        input_split_size_mb: Size of an input split in megabytes
        hdfs_default_block_size: HDFS block size in megabytes, if known
        file_start_offset: Bytes to skip at the beginning of each file
        file_end_offset: Bytes to skip at the end of each file
        generate_record_id: Whether to add file/record id columns
        multisegment: Multisegment layout, if any
        record_header_parser: Custom record header parser selector
        rhp_additional_info: Opaque string passed to the header parser
    """
    length_field_name: Optional[str] = None
    is_record_sequence: bool = False
    is_rdw_big_endian: bool = False
    is_rdw_part_rec_length: bool = False
    rdw_adjustment: int = 0
    is_index_generation_needed: bool = False
    input_split_records: Optional[int] = None
    input_split_size_mb: Optional[int] = None
    hdfs_default_block_size: Optional[int] = None
    file_start_offset: int = 0
    file_end_offset: int = 0
    generate_record_id: bool = False
    multisegment: Optional[MultisegmentParameters] = None
    record_header_parser: Optional[str] = None
    rhp_additional_info: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = super().to_dict()
        data.update({
            "length_field_name": self.length_field_name,
            "is_record_sequence": self.is_record_sequence,
            "is_rdw_big_endian": self.is_rdw_big_endian,
            "is_rdw_part_rec_length": self.is_rdw_part_rec_length,
            "rdw_adjustment": self.rdw_adjustment,
            "is_index_generation_needed": self.is_index_generation_needed,
            "input_split_records": self.input_split_records,
            "input_split_size_mb": self.input_split_size_mb,
            "hdfs_default_block_size": self.hdfs_default_block_size,
            "file_start_offset": self.file_start_offset,
            "file_end_offset": self.file_end_offset,
            "generate_record_id": self.generate_record_id,
            "multisegment": self.multisegment.to_dict() if self.multisegment else None,
            "record_header_parser": self.record_header_parser,
            "rhp_additional_info": self.rhp_additional_info,
        })
        return data


ReaderParameters = Union[FixedLenReaderParameters, VarLenReaderParameters]


@dataclass(frozen=True)
class ReaderSelection:
    """
    The chosen reader and its parameters.

    Attributes:
        reader_type: Fixed-length or variable-length
        parameters: Parameters for that reader
    """
    reader_type: ReaderType
    parameters: ReaderParameters

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "reader_type": self.reader_type.value,
            "parameters": self.parameters.to_dict(),
        }


def select_reader(
    params: CobolParameters,
    hdfs_default_block_size: Optional[int] = None,
) -> ReaderSelection:
    """
    Choose the reader for resolved parameters.

    Variable-length parameters being present is what selects the
    variable-length reader.

    Args:
        params: Resolved options
        hdfs_default_block_size: HDFS block size in MB, used for split planning

    Returns:
        ReaderSelection
    """
    if params.variable_length_params is None:
        return ReaderSelection(
            reader_type=ReaderType.FIXED_LENGTH,
            parameters=build_fixed_length_parameters(params),
        )
    return ReaderSelection(
        reader_type=ReaderType.VARIABLE_LENGTH,
        parameters=build_variable_length_parameters(params, hdfs_default_block_size),
    )


def build_fixed_length_parameters(params: CobolParameters) -> FixedLenReaderParameters:
    return FixedLenReaderParameters(**_common_arguments(params))


def build_variable_length_parameters(
    params: CobolParameters,
    hdfs_default_block_size: Optional[int] = None,
) -> VarLenReaderParameters:
    """
    Build variable-length reader parameters.

    Raises:
        ValueError: If the parameters are not in variable-length mode
    """
    var_len = params.variable_length_params
    if var_len is None:
        raise ValueError("Variable-length parameters are required for the variable-length reader")

    return VarLenReaderParameters(
        **_common_arguments(params),
        length_field_name=var_len.record_length_field or None,
        is_record_sequence=var_len.is_record_sequence,
        is_rdw_big_endian=var_len.is_rdw_big_endian,
        is_rdw_part_rec_length=var_len.is_rdw_part_rec_length,
        rdw_adjustment=var_len.rdw_adjustment,
        is_index_generation_needed=var_len.is_using_index,
        input_split_records=var_len.input_split_records,
        input_split_size_mb=var_len.input_split_size_mb,
        hdfs_default_block_size=hdfs_default_block_size,
        file_start_offset=var_len.file_start_offset,
        file_end_offset=var_len.file_end_offset,
        generate_record_id=var_len.generate_record_id,
        multisegment=params.multisegment_params,
        record_header_parser=var_len.record_header_parser,
        rhp_additional_info=var_len.rhp_additional_info,
    )


def _common_arguments(params: CobolParameters) -> dict[str, Any]:
    return {
        "is_ebcdic": params.is_ebcdic,
        "ebcdic_code_page": params.ebcdic_code_page,
        "ebcdic_code_page_class": params.ebcdic_code_page_class,
        "floating_point_format": params.floating_point_format,
        "start_offset": params.record_start_offset,
        "end_offset": params.record_end_offset,
        "schema_policy": params.schema_retention_policy,
        "string_trimming_policy": params.string_trimming_policy,
        "drop_group_fillers": params.drop_group_fillers,
        "non_terminals": params.non_terminals,
    }
