"""
Spark Session Helpers.

Reads cluster settings the reader needs from an active Spark session.

Example:
    >>> spark = SparkSession.builder.getOrCreate()
    >>> get_hdfs_default_block_size_mb(spark)
    128
"""

import logging
import re
from typing import Optional

from py4j.protocol import Py4JError
from pyspark.sql import SparkSession

logger = logging.getLogger(__name__)

HDFS_BLOCK_SIZE_KEY = "dfs.blocksize"

_SIZE_PATTERN = re.compile(r"^\s*(\d+)\s*([kmgtp]?)b?\s*$", re.IGNORECASE)

_SIZE_MULTIPLIERS = {
    "": 1,
    "k": 1024,
    "m": 1024 ** 2,
    "g": 1024 ** 3,
    "t": 1024 ** 4,
    "p": 1024 ** 5,
}


def parse_block_size_mb(value: Optional[str]) -> Optional[int]:
    """
    Convert a Hadoop size setting to whole megabytes.

    Args:
        value: Size as bytes ("134217728") or with a unit suffix ("128m")

    Returns:
        Size in MB, or None if the value is missing, malformed or not positive
    """
    if value is None:
        return None
    match = _SIZE_PATTERN.match(value)
    if not match:
        return None
    size_bytes = int(match.group(1)) * _SIZE_MULTIPLIERS[match.group(2).lower()]
    size_mb = size_bytes // (1024 ** 2)
    return size_mb if size_mb > 0 else None


def get_hdfs_default_block_size_mb(spark: SparkSession) -> Optional[int]:
    """
    Get the HDFS default block size from the session's Hadoop configuration.

    Args:
        spark: Active Spark session

    Returns:
        Block size in MB, or None if it cannot be determined
    """
    try:
        hadoop_conf = spark.sparkContext._jsc.hadoopConfiguration()
        raw_value = hadoop_conf.get(HDFS_BLOCK_SIZE_KEY)
    except Py4JError as e:
        logger.info("Unable to get HDFS default block size: %s", e)
        return None

    block_size = parse_block_size_mb(raw_value)
    if block_size is None:
        logger.info("Unable to get HDFS default block size.")
    else:
        logger.info("HDFS default block size = %d MB.", block_size)
    return block_size
