import io

import pytest

from nfs3wire.errors import InvalidEnumValue, XdrIoError
from nfs3wire.portmap import (
    IPPROTO_TCP,
    IPPROTO_UDP,
    PMAP_LIST_CODEC,
    PMAP_PORT,
    PROGRAM,
    VERSION,
    CallArgs,
    CallResult,
    Mapping,
    PmapProc,
)


def test_mapping_wire_layout():
    mapping = Mapping(prog=PROGRAM, vers=VERSION, prot=IPPROTO_TCP, port=PMAP_PORT)
    raw = mapping.to_bytes()
    assert mapping.packed_size() == 16
    assert raw[:4] == PROGRAM.to_bytes(4, "big")
    assert raw[8:12] == bytes([0, 0, 0, 6])
    assert raw[12:16] == bytes([0, 0, 0, 111])


def test_mapping_round_trip():
    mapping = Mapping(prog=100_003, vers=3, prot=IPPROTO_UDP, port=2049)
    decoded, size = Mapping.unpack(io.BytesIO(mapping.to_bytes()))
    assert decoded == mapping
    assert size == mapping.packed_size()


def test_pmaplist_round_trip():
    mappings = [
        Mapping(prog=PROGRAM, vers=VERSION, prot=IPPROTO_TCP, port=PMAP_PORT),
        Mapping(prog=100_005, vers=3, prot=IPPROTO_TCP, port=2049),
    ]
    raw = PMAP_LIST_CODEC.encode(mappings)
    assert len(raw) == PMAP_LIST_CODEC.packed_size(mappings)
    assert PMAP_LIST_CODEC.decode(raw) == mappings


def test_empty_pmaplist():
    assert PMAP_LIST_CODEC.encode([]) == bytes(4)
    assert PMAP_LIST_CODEC.decode(bytes(4)) == []


def test_call_args_round_trip_with_padding():
    args = CallArgs(prog=100_003, vers=3, proc=0, args=b"abcde")
    raw = args.to_bytes()
    assert len(raw) == args.packed_size()
    assert raw[-3:] == bytes(3)
    assert CallArgs.from_bytes(raw) == args


def test_call_result_round_trip():
    result = CallResult(port=2049, res=b"\x01\x02\x03\x04")
    raw = result.to_bytes()
    assert len(raw) == result.packed_size()
    assert CallResult.from_bytes(raw) == result


def test_truncated_mapping_fails():
    raw = Mapping(prog=1, vers=2, prot=IPPROTO_TCP, port=3).to_bytes()
    with pytest.raises(XdrIoError):
        Mapping.from_bytes(raw[:10])


def test_procedure_encoding_and_names():
    assert PmapProc.PMAPPROC_GETPORT.to_bytes() == bytes([0, 0, 0, 3])
    assert PmapProc.from_bytes(bytes([0, 0, 0, 5])) is PmapProc.PMAPPROC_CALLIT
    assert str(PmapProc.PMAPPROC_DUMP) == "PMAPPROC_DUMP"


@pytest.mark.parametrize("proc", list(PmapProc))
def test_procedure_round_trip(proc):
    assert PmapProc.from_bytes(proc.to_bytes()) is proc


def test_unknown_procedure_rejected():
    with pytest.raises(InvalidEnumValue):
        PmapProc.from_bytes(bytes([0, 0, 0, 6]))