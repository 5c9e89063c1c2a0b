"""
Pytest configuration and fixtures
"""
import pytest


@pytest.fixture
def base_options():
    """Minimal options for a readable fixed-length source"""
    return {
        "copybook": "CUSTREC.cpy",
        "path": "input/AWS.M2.CARDDEMO.CUSTDATA.PS",
    }


@pytest.fixture
def multisegment_options(base_options):
    """Options for an RDW-prefixed multisegment export file"""
    return {
        **base_options,
        "is_record_sequence": "true",
        "segment_field": "SEGMENT-ID",
        "segment_id_level0": "C",
        "segment_id_level1": "P",
        "redefine-segment-id-map:0": "COMPANY => C",
        "redefine-segment-id-map:1": "PERSON => P",
    }
