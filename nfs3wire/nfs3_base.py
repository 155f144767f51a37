"""NFS version 3 protocol constants, status codes and shared data types (RFC 1813)."""

from __future__ import annotations

import dataclasses
import datetime as _dt
from typing import Any, Optional

from nfs3wire.errors import InvalidEnumValue
from nfs3wire.xdr import (
    Codec,
    FixedBytesCodec,
    ListCodec,
    Opaque,
    Uint32Codec,
    Uint64Codec,
    XdrEnum,
    XdrRecord,
    XdrUnion,
    codec_for,
    xfield,
)

PROGRAM = 100_003
VERSION = 3

ACCESS3_READ = 1
ACCESS3_LOOKUP = 2
ACCESS3_MODIFY = 4
ACCESS3_EXTEND = 8
ACCESS3_DELETE = 16
ACCESS3_EXECUTE = 32

FSF3_LINK = 1
FSF3_SYMLINK = 2
FSF3_HOMOGENEOUS = 8
FSF3_CANSETTIME = 16

NFS3_COOKIEVERFSIZE = 8
NFS3_CREATEVERFSIZE = 8
NFS3_FHSIZE = 64
NFS3_WRITEVERFSIZE = 8

_U32 = Uint32Codec()
_U64 = Uint64Codec()
_U32_MAX = 0xFFFF_FFFF
_EPOCH = _dt.datetime(1970, 1, 1, tzinfo=_dt.timezone.utc)

COOKIEVERF3 = FixedBytesCodec(NFS3_COOKIEVERFSIZE)
CREATEVERF3 = FixedBytesCodec(NFS3_CREATEVERFSIZE)
WRITEVERF3 = FixedBytesCodec(NFS3_WRITEVERFSIZE)


class NfsStat3(XdrEnum):
    NFS3_OK = 0
    NFS3ERR_PERM = 1
    NFS3ERR_NOENT = 2
    NFS3ERR_IO = 5
    NFS3ERR_NXIO = 6
    NFS3ERR_ACCES = 13
    NFS3ERR_EXIST = 17
    NFS3ERR_XDEV = 18
    NFS3ERR_NODEV = 19
    NFS3ERR_NOTDIR = 20
    NFS3ERR_ISDIR = 21
    NFS3ERR_INVAL = 22
    NFS3ERR_FBIG = 27
    NFS3ERR_NOSPC = 28
    NFS3ERR_ROFS = 30
    NFS3ERR_MLINK = 31
    NFS3ERR_NAMETOOLONG = 63
    NFS3ERR_NOTEMPTY = 66
    NFS3ERR_DQUOT = 69
    NFS3ERR_STALE = 70
    NFS3ERR_REMOTE = 71
    NFS3ERR_BADHANDLE = 10001
    NFS3ERR_NOT_SYNC = 10002
    NFS3ERR_BAD_COOKIE = 10003
    NFS3ERR_NOTSUPP = 10004
    NFS3ERR_TOOSMALL = 10005
    NFS3ERR_SERVERFAULT = 10006
    NFS3ERR_BADTYPE = 10007
    NFS3ERR_JUKEBOX = 10008

    def __str__(self):
        return self.name


class FType3(XdrEnum):
    NF3REG = 1
    NF3DIR = 2
    NF3BLK = 3
    NF3CHR = 4
    NF3LNK = 5
    NF3SOCK = 6
    NF3FIFO = 7

    def __str__(self):
        return self.name


class StableHow(XdrEnum):
    UNSTABLE = 0
    DATA_SYNC = 1
    FILE_SYNC = 2


class CreateMode3(XdrEnum):
    UNCHECKED = 0
    GUARDED = 1
    EXCLUSIVE = 2


class TimeHow(XdrEnum):
    DONT_CHANGE = 0
    SET_TO_SERVER_TIME = 1
    SET_TO_CLIENT_TIME = 2


class NfsProgram(XdrEnum):
    NFSPROC3_NULL = 0
    NFSPROC3_GETATTR = 1
    NFSPROC3_SETATTR = 2
    NFSPROC3_LOOKUP = 3
    NFSPROC3_ACCESS = 4
    NFSPROC3_READLINK = 5
    NFSPROC3_READ = 6
    NFSPROC3_WRITE = 7
    NFSPROC3_CREATE = 8
    NFSPROC3_MKDIR = 9
    NFSPROC3_SYMLINK = 10
    NFSPROC3_MKNOD = 11
    NFSPROC3_REMOVE = 12
    NFSPROC3_RMDIR = 13
    NFSPROC3_RENAME = 14
    NFSPROC3_LINK = 15
    NFSPROC3_READDIR = 16
    NFSPROC3_READDIRPLUS = 17
    NFSPROC3_FSSTAT = 18
    NFSPROC3_FSINFO = 19
    NFSPROC3_PATHCONF = 20
    NFSPROC3_COMMIT = 21

    def __str__(self):
        return self.name


class Nfs3Error(Exception):
    """An NFS3 call returned a status other than NFS3_OK."""

    def __init__(self, status, value=None, message=None):
        text = f"NFS3 error: {status!r}, result: {value!r}"
        if message:
            text = f"{message}: {text}"
        super().__init__(text)
        self.status = status
        self.value = value


class OptionalCodec(Codec):
    """Optional value: FALSE for ``None``, TRUE followed by the value otherwise."""

    def __init__(self, item):
        self.item = codec_for(item)

    def packed_size(self, value):
        return 4 if value is None else 4 + self.item.packed_size(value)

    def pack(self, value, out):
        if value is None:
            return _U32.pack(0, out)
        return _U32.pack(1, out) + self.item.pack(value, out)

    def unpack(self, stream):
        flag, read = _U32.unpack(stream)
        if flag == 0:
            return None, read
        if flag != 1:
            raise InvalidEnumValue(flag)
        value, size = self.item.unpack(stream)
        return value, read + size


@dataclasses.dataclass
class Nfs3Result:
    """Outcome of an NFS3 procedure: a status with the data that goes with it."""

    status: NfsStat3
    value: Any = None

    @classmethod
    def ok(cls, value):
        return cls(NfsStat3.NFS3_OK, value)

    @classmethod
    def error(cls, status, value):
        status = NfsStat3(status)
        if status is NfsStat3.NFS3_OK:
            raise ValueError("NFS3_OK is not an error status")
        return cls(status, value)

    def is_ok(self):
        return self.status == NfsStat3.NFS3_OK

    def unwrap(self):
        """Return the success value or raise ``Nfs3Error``."""
        if self.is_ok():
            return self.value
        raise Nfs3Error(self.status, self.value)

    def expect(self, message):
        """Return the success value or raise ``Nfs3Error`` prefixed with ``message``."""
        if self.is_ok():
            return self.value
        raise Nfs3Error(self.status, self.value, message)


class Nfs3ResultCodec(Codec):
    """Encodes ``Nfs3Result``: the status, then the success or failure body."""

    def __init__(self, ok, err):
        self.ok = codec_for(ok)
        self.err = codec_for(err)

    def _body(self, status):
        return self.ok if status == NfsStat3.NFS3_OK else self.err

    def packed_size(self, value):
        return 4 + self._body(value.status).packed_size(value.value)

    def pack(self, value, out):
        status = NfsStat3(value.status)
        return status.pack(out) + self._body(status).pack(value.value, out)

    def unpack(self, stream):
        status, read = NfsStat3.unpack(stream)
        body, size = self._body(status).unpack(stream)
        return Nfs3Result(status, body), read + size


@dataclasses.dataclass
class NfsTime3(XdrRecord):
    """Seconds and nanoseconds since the Unix epoch."""

    seconds: int = xfield(_U32, default=0)
    nseconds: int = xfield(_U32, default=0)

    @classmethod
    def from_datetime(cls, moment):
        """Convert a datetime (naive values are taken as UTC); seconds saturate at 2**32-1."""
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=_dt.timezone.utc)
        delta = moment - _EPOCH
        if delta < _dt.timedelta(0):
            raise ValueError(f"{moment!r} is before the Unix epoch")
        seconds = delta.days * 86_400 + delta.seconds
        return cls(min(seconds, _U32_MAX), delta.microseconds * 1000)

    def to_datetime(self):
        """Return the time as an aware UTC datetime, truncated to microseconds."""
        return _EPOCH + _dt.timedelta(
            seconds=self.seconds, microseconds=self.nseconds // 1000
        )


@dataclasses.dataclass
class SpecData3(XdrRecord):
    """Major and minor device numbers."""

    specdata1: int = xfield(_U32, default=0)
    specdata2: int = xfield(_U32, default=0)


@dataclasses.dataclass
class FAttr3(XdrRecord):
    """File attributes."""

    type: FType3 = xfield(FType3, default=FType3.NF3REG)
    mode: int = xfield(_U32, default=0)
    nlink: int = xfield(_U32, default=0)
    uid: int = xfield(_U32, default=0)
    gid: int = xfield(_U32, default=0)
    size: int = xfield(_U64, default=0)
    used: int = xfield(_U64, default=0)
    rdev: SpecData3 = xfield(SpecData3, default_factory=SpecData3)
    fsid: int = xfield(_U64, default=0)
    fileid: int = xfield(_U64, default=0)
    atime: NfsTime3 = xfield(NfsTime3, default_factory=NfsTime3)
    mtime: NfsTime3 = xfield(NfsTime3, default_factory=NfsTime3)
    ctime: NfsTime3 = xfield(NfsTime3, default_factory=NfsTime3)


@dataclasses.dataclass
class WccAttr(XdrRecord):
    """Attributes captured before an operation for weak cache consistency."""

    size: int = xfield(_U64, default=0)
    mtime: NfsTime3 = xfield(NfsTime3, default_factory=NfsTime3)
    ctime: NfsTime3 = xfield(NfsTime3, default_factory=NfsTime3)


@dataclasses.dataclass(frozen=True)
class NfsFh3(XdrRecord):
    """An opaque NFS3 file handle."""

    data: bytes = xfield(bytes, default=Opaque(b""))


PRE_OP_ATTR = OptionalCodec(WccAttr)
POST_OP_ATTR = OptionalCodec(FAttr3)
POST_OP_FH3 = OptionalCodec(NfsFh3)
SATTRGUARD3 = OptionalCodec(NfsTime3)
SET_MODE3 = OptionalCodec(_U32)
SET_UID3 = OptionalCodec(_U32)
SET_GID3 = OptionalCodec(_U32)
SET_SIZE3 = OptionalCodec(_U64)


@dataclasses.dataclass
class WccData(XdrRecord):
    """Attributes before and after an operation; either may be absent."""

    before: Optional[WccAttr] = xfield(PRE_OP_ATTR, default=None)
    after: Optional[FAttr3] = xfield(POST_OP_ATTR, default=None)


class SetTime(XdrUnion):
    """How to set a timestamp: leave it, use the server's clock, or a given time."""

    tag_type = TimeHow
    arms = {
        TimeHow.DONT_CHANGE: None,
        TimeHow.SET_TO_SERVER_TIME: None,
        TimeHow.SET_TO_CLIENT_TIME: NfsTime3,
    }


def _dont_change():
    return SetTime(TimeHow.DONT_CHANGE)


@dataclasses.dataclass
class SAttr3(XdrRecord):
    """Attributes to set; ``None`` leaves a value unchanged."""

    mode: Optional[int] = xfield(SET_MODE3, default=None)
    uid: Optional[int] = xfield(SET_UID3, default=None)
    gid: Optional[int] = xfield(SET_GID3, default=None)
    size: Optional[int] = xfield(SET_SIZE3, default=None)
    atime: SetTime = xfield(SetTime, default_factory=_dont_change)
    mtime: SetTime = xfield(SetTime, default_factory=_dont_change)


@dataclasses.dataclass
class DirOpArgs3(XdrRecord):
    """A directory handle and a name within it."""

    dir: NfsFh3 = xfield(NfsFh3, default_factory=NfsFh3)
    name: bytes = xfield(bytes, default=Opaque(b""))


class CreateHow3(XdrUnion):
    """Creation mode: attributes for UNCHECKED/GUARDED, a verifier for EXCLUSIVE."""

    tag_type = CreateMode3
    arms = {
        CreateMode3.UNCHECKED: SAttr3,
        CreateMode3.GUARDED: SAttr3,
        CreateMode3.EXCLUSIVE: CREATEVERF3,
    }


@dataclasses.dataclass
class DeviceData3(XdrRecord):
    """Attributes and device numbers for a new device node."""

    dev_attributes: SAttr3 = xfield(SAttr3, default_factory=SAttr3)
    spec: SpecData3 = xfield(SpecData3, default_factory=SpecData3)


class MknodData3(XdrUnion):
    """Data for MKNOD, selected by file type.

    Other file types decode to a variant without data that cannot be encoded.
    """

    tag_type = FType3
    arms = {
        FType3.NF3CHR: DeviceData3,
        FType3.NF3BLK: DeviceData3,
        FType3.NF3SOCK: SAttr3,
        FType3.NF3FIFO: SAttr3,
    }

    def packed_size(self):
        if self.tag in self.arms:
            return super().packed_size()
        return 4

    def pack(self, out):
        if self.tag not in self.arms:
            raise InvalidEnumValue(_U32_MAX)
        return super().pack(out)

    @classmethod
    def unpack(cls, stream):
        raw, read = _U32.unpack(stream)
        if raw not in cls.arms:
            try:
                tag = FType3(raw)
            except ValueError:
                tag = raw
            return cls(tag), read
        value, size = codec_for(cls.arms[raw]).unpack(stream)
        return cls(FType3(raw), value), read + size


@dataclasses.dataclass
class SymlinkData3(XdrRecord):
    """Attributes and target path of a new symbolic link."""

    symlink_attributes: SAttr3 = xfield(SAttr3, default_factory=SAttr3)
    symlink_data: bytes = xfield(bytes, default=Opaque(b""))


@dataclasses.dataclass
class Entry3(XdrRecord):
    """A READDIR entry."""

    fileid: int = xfield(_U64, default=0)
    name: bytes = xfield(bytes, default=Opaque(b""))
    cookie: int = xfield(_U64, default=0)


@dataclasses.dataclass
class EntryPlus3(XdrRecord):
    """A READDIRPLUS entry with optional attributes and handle."""

    fileid: int = xfield(_U64, default=0)
    name: bytes = xfield(bytes, default=Opaque(b""))
    cookie: int = xfield(_U64, default=0)
    name_attributes: Optional[FAttr3] = xfield(POST_OP_ATTR, default=None)
    name_handle: Optional[NfsFh3] = xfield(POST_OP_FH3, default=None)


@dataclasses.dataclass
class DirList3(XdrRecord):
    """Directory entries returned by READDIR and whether the listing is complete."""

    entries: list = xfield(ListCodec(Entry3), default_factory=list)
    eof: bool = xfield(bool, default=False)


@dataclasses.dataclass
class DirListPlus3(XdrRecord):
    """Directory entries returned by READDIRPLUS and whether the listing is complete."""

    entries: list = xfield(ListCodec(EntryPlus3), default_factory=list)
    eof: bool = xfield(bool, default=False)