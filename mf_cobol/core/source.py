"""
COBOL Data Source.

Entry point used when a read request arrives: resolves the options,
checks them, and plans which reader the decode engine should run.

Example:
    >>> source = CobolSource()
    >>> plan = source.create_reader({
    ...     "copybook": "CUSTREC.cpy",
    ...     "path": "input/CUSTDATA.PS",
    ...     "record_length_field": "REC-LEN",
    ... })
    >>> plan.reader.reader_type
    <ReaderType.VARIABLE_LENGTH: 'variable_length'>
"""

import logging
from dataclasses import dataclass
from typing import Optional, Any, Mapping

from pyspark.sql import SparkSession

from mf_cobol import __version__
from mf_cobol.config.settings import CobolParameters, LocalityParameters
from mf_cobol.core.readers import ReaderSelection, select_reader
from mf_cobol.core.session import get_hdfs_default_block_size_mb
from mf_cobol.parsers.parameters_parser import SHORT_NAME, CobolParametersParser
from mf_cobol.utils.encoding import CodePage, get_code_page
from mf_cobol.validators.parameters_validator import check_sanity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReaderPlan:
    """
    Everything the decode engine needs to read one data source.

    Attributes:
        source_path: Path to the data files
        parameters: Resolved options
        reader: Selected reader and its parameters
        locality: Split planner hints
        code_page: Resolved EBCDIC code page (None for ASCII data)
        debug_ignore_file_size: Do not check file size against record size
    """
    source_path: str
    parameters: CobolParameters
    reader: ReaderSelection
    locality: LocalityParameters
    code_page: Optional[CodePage]
    debug_ignore_file_size: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "source_path": self.source_path,
            "reader": self.reader.to_dict(),
            "locality": self.locality.to_dict(),
            "code_page": self.code_page.to_dict() if self.code_page else None,
            "debug_ignore_file_size": self.debug_ignore_file_size,
        }


class CobolSource:
    """
    The 'cobol' data source.

    Attributes:
        spark: Optional Spark session, used to look up the HDFS block size
    """

    def __init__(self, spark: Optional[SparkSession] = None):
        self.spark = spark

    @staticmethod
    def short_name() -> str:
        return SHORT_NAME

    def create_reader(self, options: Mapping[str, str]) -> ReaderPlan:
        """
        Resolve options and plan the reader.

        Args:
            options: Raw options of the read request

        Returns:
            ReaderPlan

        Raises:
            CobolOptionError: If the options are invalid or incomplete
        """
        logger.info("mf_cobol '%s' data source %s", SHORT_NAME, __version__)

        params = CobolParametersParser.parse(options)
        check_sanity(params)

        code_page = None
        if params.is_ebcdic:
            code_page = get_code_page(params.ebcdic_code_page, params.ebcdic_code_page_class)

        block_size = None
        if params.is_variable_length and self.spark is not None:
            block_size = get_hdfs_default_block_size_mb(self.spark)

        reader = select_reader(params, hdfs_default_block_size=block_size)
        logger.debug("Selected %s reader for %s", reader.reader_type.value, params.source_path)

        return ReaderPlan(
            source_path=params.source_path,
            parameters=params,
            reader=reader,
            locality=LocalityParameters.extract(params),
            code_page=code_page,
            debug_ignore_file_size=params.debug_ignore_file_size,
        )
