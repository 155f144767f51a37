import datetime as dt
import io

import pytest

from nfs3wire.errors import InvalidEnumValue
from nfs3wire.nfs3_base import (
    CreateHow3,
    CreateMode3,
    DeviceData3,
    DirList3,
    DirListPlus3,
    DirOpArgs3,
    Entry3,
    EntryPlus3,
    FAttr3,
    FType3,
    MknodData3,
    Nfs3Error,
    Nfs3Result,
    Nfs3ResultCodec,
    NfsFh3,
    NfsProgram,
    NfsStat3,
    NfsTime3,
    OptionalCodec,
    SAttr3,
    SetTime,
    SpecData3,
    StableHow,
    SymlinkData3,
    TimeHow,
    WccAttr,
    WccData,
)
from nfs3wire.xdr import Opaque, Uint32Codec, Void

UTC = dt.timezone.utc


def _void_result_codec():
    return Nfs3ResultCodec(Void, Void)


def _u32_result_codec():
    return Nfs3ResultCodec(Uint32Codec(), Uint32Codec())


def _roundtrip(codec, value):
    buffer = io.BytesIO()
    written = codec.pack(value, buffer)
    assert written == codec.packed_size(value)
    decoded, read = codec.unpack(io.BytesIO(buffer.getvalue()))
    assert read == written
    return decoded


def test_nfs3_result_success_void():
    codec = _void_result_codec()
    original = Nfs3Result.ok(Void())
    data = codec.encode(original)
    assert len(data) == 4
    assert codec.packed_size(original) == 4
    assert data == bytes([0, 0, 0, 0])


def test_nfs3_result_error_void():
    codec = _void_result_codec()
    original = Nfs3Result.error(NfsStat3.NFS3ERR_IO, Void())
    data = codec.encode(original)
    assert codec.packed_size(original) == 4
    assert data == bytes([0, 0, 0, 5])


def test_nfs3_result_success_with_data():
    codec = _u32_result_codec()
    original = Nfs3Result.ok(0x1234_5678)
    data = codec.encode(original)
    assert codec.packed_size(original) == 8
    assert data == bytes([0, 0, 0, 0, 0x12, 0x34, 0x56, 0x78])


def test_nfs3_result_error_with_data():
    codec = _u32_result_codec()
    original = Nfs3Result.error(NfsStat3.NFS3ERR_IO, 0x8765_4321)
    data = codec.encode(original)
    assert codec.packed_size(original) == 8
    assert data == bytes([0, 0, 0, 5, 0x87, 0x65, 0x43, 0x21])


def test_nfs3_option_some_void():
    codec = OptionalCodec(Void)
    assert codec.encode(Void()) == bytes([0, 0, 0, 1])
    assert codec.packed_size(Void()) == 4


def test_nfs3_option_none_void():
    codec = OptionalCodec(Void)
    assert codec.encode(None) == bytes([0, 0, 0, 0])
    assert codec.packed_size(None) == 4


def test_nfs3_option_some_with_data():
    codec = OptionalCodec(Uint32Codec())
    assert codec.encode(0x1234_5678) == bytes([0, 0, 0, 1, 0x12, 0x34, 0x56, 0x78])
    assert codec.packed_size(0x1234_5678) == 8


def test_nfs3_option_none_with_data():
    codec = OptionalCodec(Uint32Codec())
    assert codec.encode(None) == bytes([0, 0, 0, 0])
    assert codec.packed_size(None) == 4


def test_option_roundtrip_and_bad_flag():
    codec = OptionalCodec(Uint32Codec())
    assert _roundtrip(codec, 42) == 42
    assert _roundtrip(codec, None) is None
    with pytest.raises(InvalidEnumValue):
        codec.decode(bytes([0, 0, 0, 2, 0, 0, 0, 0]))


def test_empty_dirlist3_serialization():
    original = DirList3(entries=[], eof=True)
    data = original.to_bytes()
    assert original.packed_size() == 8
    assert data == bytes([0, 0, 0, 0, 0, 0, 0, 1])
    decoded, read = DirList3.unpack(io.BytesIO(data))
    assert read == 8
    assert decoded.entries == []
    assert decoded.eof is True


def test_dirlist3_with_entries_serialization():
    original = DirList3(
        entries=[
            Entry3(fileid=0x1234, name=Opaque(b"file1"), cookie=0x5678),
            Entry3(fileid=0x9ABC, name=Opaque(b"file2"), cookie=0xDEF0),
        ],
        eof=False,
    )
    expected = bytes(
        [
            0x00, 0x00, 0x00, 0x01,
            0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x12, 0x34,
            0x00, 0x00, 0x00, 0x05,
            0x66, 0x69, 0x6C, 0x65, 0x31, 0x00, 0x00, 0x00,
            0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x56, 0x78,
            0x00, 0x00, 0x00, 0x01,
            0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x9A, 0xBC,
            0x00, 0x00, 0x00, 0x05,
            0x66, 0x69, 0x6C, 0x65, 0x32, 0x00, 0x00, 0x00,
            0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0xDE, 0xF0,
            0x00, 0x00, 0x00, 0x00,
            0x00, 0x00, 0x00, 0x00,
        ]
    )
    assert original.packed_size() == 72
    data = original.to_bytes()
    assert data == expected
    decoded, read = DirList3.unpack(io.BytesIO(data))
    assert read == 72
    assert decoded.entries == original.entries
    assert decoded.eof is False


@pytest.mark.parametrize(
    "name, encoded",
    [
        (b"", bytes([0, 0, 0, 0])),
        (b"a", bytes([0, 0, 0, 1, ord("a"), 0, 0, 0])),
        (b"test", bytes([0, 0, 0, 4]) + b"test"),
    ],
)
def test_filename3_edge_cases(name, encoded):
    args = DirOpArgs3(dir=NfsFh3(), name=Opaque(name))
    data = args.to_bytes()
    # empty file handle takes four bytes, the name follows
    assert data[:4] == bytes(4)
    assert data[4:] == encoded
    assert DirOpArgs3.from_bytes(data) == args


@pytest.mark.parametrize(
    "codec, original",
    [
        (_void_result_codec(), Nfs3Result.ok(Void())),
        (_void_result_codec(), Nfs3Result.error(NfsStat3.NFS3ERR_PERM, Void())),
        (_u32_result_codec(), Nfs3Result.ok(0x1234_5678)),
        (_u32_result_codec(), Nfs3Result.error(NfsStat3.NFS3ERR_NOENT, 0x8765_4321)),
    ],
)
def test_nfs3_result_roundtrip(codec, original):
    assert _roundtrip(codec, original) == original


@pytest.mark.parametrize(
    "status", [status for status in NfsStat3 if status is not NfsStat3.NFS3_OK]
)
def test_nfs3_error_codes(status):
    codec = _void_result_codec()
    result = Nfs3Result.error(status, Void())
    data = codec.encode(result)
    assert len(data) == 4
    decoded = codec.decode(data)
    assert decoded == result
    assert not decoded.is_ok()


def test_nfs3_ok_decodes_as_success():
    codec = _void_result_codec()
    decoded = codec.decode(codec.encode(Nfs3Result.ok(Void())))
    assert decoded.expect("Expected success result for NFS3_OK") == Void()


def test_unwrap_and_expect_raise_on_error():
    result = Nfs3Result.error(NfsStat3.NFS3ERR_STALE, 7)
    with pytest.raises(Nfs3Error) as info:
        result.unwrap()
    assert info.value.status is NfsStat3.NFS3ERR_STALE
    assert info.value.value == 7
    with pytest.raises(Nfs3Error, match="^lookup failed: NFS3 error"):
        result.expect("lookup failed")


def test_error_rejects_ok_status():
    with pytest.raises(ValueError):
        Nfs3Result.error(NfsStat3.NFS3_OK, None)


def test_unknown_status_is_rejected():
    with pytest.raises(InvalidEnumValue):
        _void_result_codec().decode(bytes([0, 0, 0, 3]))


def test_enum_display_names():
    assert str(NfsStat3(2)) == "NFS3ERR_NOENT"
    assert str(FType3(2)) == "NF3DIR"
    assert str(NfsProgram(17)) == "NFSPROC3_READDIRPLUS"


def test_program_values():
    assert NfsProgram(21) is NfsProgram.NFSPROC3_COMMIT
    assert NfsProgram.from_bytes(bytes([0, 0, 0, 6])) is NfsProgram.NFSPROC3_READ
    with pytest.raises(InvalidEnumValue):
        NfsProgram.from_bytes(bytes([0, 0, 0, 22]))


def test_nfstime_from_datetime():
    moment = dt.datetime(2001, 9, 9, 1, 46, 40, 123456, tzinfo=UTC)
    time = NfsTime3.from_datetime(moment)
    assert time == NfsTime3(1_000_000_000, 123_456_000)
    assert time.to_datetime() == moment


def test_nfstime_naive_is_utc():
    assert NfsTime3.from_datetime(dt.datetime(1970, 1, 1, 0, 0, 5)) == NfsTime3(5, 0)


def test_nfstime_saturates_and_rejects_before_epoch():
    assert NfsTime3.from_datetime(dt.datetime(2200, 1, 1, tzinfo=UTC)).seconds == 0xFFFF_FFFF
    with pytest.raises(ValueError):
        NfsTime3.from_datetime(dt.datetime(1969, 12, 31, tzinfo=UTC))


def test_fattr3_size_and_roundtrip():
    attr = FAttr3(
        type=FType3.NF3DIR,
        mode=0o755,
        nlink=2,
        uid=1000,
        gid=1000,
        size=4096,
        used=4096,
        rdev=SpecData3(1, 2),
        fsid=9,
        fileid=77,
        atime=NfsTime3(1, 2),
        mtime=NfsTime3(3, 4),
        ctime=NfsTime3(5, 6),
    )
    assert attr.packed_size() == 84
    data = attr.to_bytes()
    assert len(data) == 84
    assert data[:4] == bytes([0, 0, 0, 2])
    assert FAttr3.from_bytes(data) == attr


def test_wcc_data_default_and_full():
    assert WccData().to_bytes() == bytes(8)
    wcc = WccData(before=WccAttr(10, NfsTime3(1, 0), NfsTime3(2, 0)), after=FAttr3())
    assert wcc.packed_size() == 4 + 24 + 4 + 84
    assert WccData.from_bytes(wcc.to_bytes()) == wcc


def test_sattr3_default_encoding():
    assert SAttr3().to_bytes() == bytes(24)
    assert SAttr3.from_bytes(bytes(24)) == SAttr3()


def test_sattr3_roundtrip_with_values():
    attrs = SAttr3(
        mode=0o644,
        size=123,
        atime=SetTime(TimeHow.SET_TO_SERVER_TIME),
        mtime=SetTime(TimeHow.SET_TO_CLIENT_TIME, NfsTime3(100, 200)),
    )
    decoded = SAttr3.from_bytes(attrs.to_bytes())
    assert decoded == attrs
    assert decoded.mtime.tag is TimeHow.SET_TO_CLIENT_TIME


def test_create_how_exclusive():
    how = CreateHow3(CreateMode3.EXCLUSIVE, b"\x01\x02\x03\x04\x05\x06\x07\x08")
    data = how.to_bytes()
    assert data == bytes([0, 0, 0, 2, 1, 2, 3, 4, 5, 6, 7, 8])
    assert CreateHow3.from_bytes(data) == how


def test_create_how_guarded_roundtrip():
    how = CreateHow3(CreateMode3.GUARDED, SAttr3(uid=5))
    assert CreateHow3.from_bytes(how.to_bytes()) == how


def test_mknod_roundtrip():
    node = MknodData3(FType3.NF3CHR, DeviceData3(SAttr3(), SpecData3(4, 64)))
    data = node.to_bytes()
    assert len(data) == 4 + 24 + 8
    assert MknodData3.from_bytes(data) == node
    fifo = MknodData3(FType3.NF3FIFO, SAttr3())
    assert MknodData3.from_bytes(fifo.to_bytes()) == fifo


def test_mknod_other_type_decodes_without_data_and_cannot_encode():
    decoded, read = MknodData3.unpack(io.BytesIO(bytes([0, 0, 0, 1, 9, 9, 9, 9])))
    assert read == 4
    assert decoded.value is None
    assert decoded.packed_size() == 4
    with pytest.raises(InvalidEnumValue):
        decoded.to_bytes()


def test_symlink_data_roundtrip():
    link = SymlinkData3(SAttr3(), Opaque(b"target"))
    assert SymlinkData3.from_bytes(link.to_bytes()) == link


def test_dirlistplus_roundtrip():
    listing = DirListPlus3(
        entries=[
            EntryPlus3(1, Opaque(b"a"), 1, FAttr3(fileid=1), NfsFh3(Opaque(b"fh1"))),
            EntryPlus3(2, Opaque(b"b"), 2),
        ],
        eof=True,
    )
    decoded = DirListPlus3.from_bytes(listing.to_bytes())
    assert decoded == listing
    assert decoded.entries[1].name_handle is None


def test_file_handle_is_hashable_and_comparable():
    first = NfsFh3(Opaque(b"\x01\x02"))
    second = NfsFh3.from_bytes(first.to_bytes())
    assert first == second
    assert len({first, second}) == 1


def test_stable_how_values():
    assert StableHow.from_bytes(bytes([0, 0, 0, 2])) is StableHow.FILE_SYNC
    with pytest.raises(InvalidEnumValue):
        StableHow.from_bytes(bytes([0, 0, 0, 3]))