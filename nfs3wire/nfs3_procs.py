"""Arguments and results of the NFS version 3 procedures (RFC 1813)."""

from __future__ import annotations

import dataclasses
from typing import Optional

from nfs3wire.nfs3_base import (
    COOKIEVERF3,
    POST_OP_ATTR,
    POST_OP_FH3,
    SATTRGUARD3,
    WRITEVERF3,
    CreateHow3,
    CreateMode3,
    DirList3,
    DirListPlus3,
    DirOpArgs3,
    FAttr3,
    MknodData3,
    NfsFh3,
    NfsProgram,
    Nfs3ResultCodec,
    NfsTime3,
    SAttr3,
    StableHow,
    SymlinkData3,
    WccData,
)
from nfs3wire.xdr import Opaque, Uint32Codec, Uint64Codec, Void, xfield, XdrRecord

_U32 = Uint32Codec()
_U64 = Uint64Codec()
_ZERO_VERF = b"\x00" * 8


def _unchecked():
    return CreateHow3(CreateMode3.UNCHECKED, SAttr3())


def _attrs(**kwargs):
    return xfield(POST_OP_ATTR, default=None, **kwargs)


def _wcc():
    return xfield(WccData, default_factory=WccData)


def _fh():
    return xfield(NfsFh3, default_factory=NfsFh3)


def _dirop():
    return xfield(DirOpArgs3, default_factory=DirOpArgs3)


# ACCESS


@dataclasses.dataclass
class Access3Args(XdrRecord):
    object: NfsFh3 = _fh()
    access: int = xfield(_U32, default=0)


@dataclasses.dataclass
class Access3ResOk(XdrRecord):
    obj_attributes: Optional[FAttr3] = _attrs()
    access: int = xfield(_U32, default=0)


@dataclasses.dataclass
class Access3ResFail(XdrRecord):
    obj_attributes: Optional[FAttr3] = _attrs()


# COMMIT


@dataclasses.dataclass
class Commit3Args(XdrRecord):
    file: NfsFh3 = _fh()
    offset: int = xfield(_U64, default=0)
    count: int = xfield(_U32, default=0)


@dataclasses.dataclass
class Commit3ResOk(XdrRecord):
    file_wcc: WccData = _wcc()
    verf: bytes = xfield(WRITEVERF3, default=_ZERO_VERF)


@dataclasses.dataclass
class Commit3ResFail(XdrRecord):
    file_wcc: WccData = _wcc()


# CREATE


@dataclasses.dataclass
class Create3Args(XdrRecord):
    where: DirOpArgs3 = _dirop()
    how: CreateHow3 = xfield(CreateHow3, default_factory=_unchecked)


@dataclasses.dataclass
class Create3ResOk(XdrRecord):
    obj: Optional[NfsFh3] = xfield(POST_OP_FH3, default=None)
    obj_attributes: Optional[FAttr3] = _attrs()
    dir_wcc: WccData = _wcc()


@dataclasses.dataclass
class Create3ResFail(XdrRecord):
    dir_wcc: WccData = _wcc()


# FSINFO


@dataclasses.dataclass
class FsInfo3Args(XdrRecord):
    fsroot: NfsFh3 = _fh()


@dataclasses.dataclass
class FsInfo3ResOk(XdrRecord):
    obj_attributes: Optional[FAttr3] = _attrs()
    rtmax: int = xfield(_U32, default=0)
    rtpref: int = xfield(_U32, default=0)
    rtmult: int = xfield(_U32, default=0)
    wtmax: int = xfield(_U32, default=0)
    wtpref: int = xfield(_U32, default=0)
    wtmult: int = xfield(_U32, default=0)
    dtpref: int = xfield(_U32, default=0)
    maxfilesize: int = xfield(_U64, default=0)
    time_delta: NfsTime3 = xfield(NfsTime3, default_factory=NfsTime3)
    properties: int = xfield(_U32, default=0)


@dataclasses.dataclass
class FsInfo3ResFail(XdrRecord):
    obj_attributes: Optional[FAttr3] = _attrs()


# FSSTAT


@dataclasses.dataclass
class FsStat3Args(XdrRecord):
    fsroot: NfsFh3 = _fh()


@dataclasses.dataclass
class FsStat3ResOk(XdrRecord):
    obj_attributes: Optional[FAttr3] = _attrs()
    tbytes: int = xfield(_U64, default=0)
    fbytes: int = xfield(_U64, default=0)
    abytes: int = xfield(_U64, default=0)
    tfiles: int = xfield(_U64, default=0)
    ffiles: int = xfield(_U64, default=0)
    afiles: int = xfield(_U64, default=0)
    invarsec: int = xfield(_U32, default=0)


@dataclasses.dataclass
class FsStat3ResFail(XdrRecord):
    obj_attributes: Optional[FAttr3] = _attrs()


# GETATTR


@dataclasses.dataclass
class GetAttr3Args(XdrRecord):
    object: NfsFh3 = _fh()


@dataclasses.dataclass
class GetAttr3ResOk(XdrRecord):
    obj_attributes: FAttr3 = xfield(FAttr3, default_factory=FAttr3)


# LINK


@dataclasses.dataclass
class Link3Args(XdrRecord):
    file: NfsFh3 = _fh()
    link: DirOpArgs3 = _dirop()


@dataclasses.dataclass
class Link3ResOk(XdrRecord):
    file_attributes: Optional[FAttr3] = _attrs()
    linkdir_wcc: WccData = _wcc()


@dataclasses.dataclass
class Link3ResFail(XdrRecord):
    file_attributes: Optional[FAttr3] = _attrs()
    linkdir_wcc: WccData = _wcc()


# LOOKUP


@dataclasses.dataclass
class Lookup3Args(XdrRecord):
    what: DirOpArgs3 = _dirop()


@dataclasses.dataclass
class Lookup3ResOk(XdrRecord):
    object: NfsFh3 = _fh()
    obj_attributes: Optional[FAttr3] = _attrs()
    dir_attributes: Optional[FAttr3] = _attrs()


@dataclasses.dataclass
class Lookup3ResFail(XdrRecord):
    dir_attributes: Optional[FAttr3] = _attrs()


# MKDIR


@dataclasses.dataclass
class Mkdir3Args(XdrRecord):
    where: DirOpArgs3 = _dirop()
    attributes: SAttr3 = xfield(SAttr3, default_factory=SAttr3)


@dataclasses.dataclass
class Mkdir3ResOk(XdrRecord):
    obj: Optional[NfsFh3] = xfield(POST_OP_FH3, default=None)
    obj_attributes: Optional[FAttr3] = _attrs()
    dir_wcc: WccData = _wcc()


@dataclasses.dataclass
class Mkdir3ResFail(XdrRecord):
    dir_wcc: WccData = _wcc()


# MKNOD


@dataclasses.dataclass
class Mknod3Args(XdrRecord):
    where: DirOpArgs3 = xfield(DirOpArgs3)
    what: MknodData3 = xfield(MknodData3)


@dataclasses.dataclass
class Mknod3ResOk(XdrRecord):
    obj: Optional[NfsFh3] = xfield(POST_OP_FH3, default=None)
    obj_attributes: Optional[FAttr3] = _attrs()
    dir_wcc: WccData = _wcc()


@dataclasses.dataclass
class Mknod3ResFail(XdrRecord):
    dir_wcc: WccData = _wcc()


# PATHCONF


@dataclasses.dataclass
class PathConf3Args(XdrRecord):
    object: NfsFh3 = _fh()


@dataclasses.dataclass
class PathConf3ResOk(XdrRecord):
    obj_attributes: Optional[FAttr3] = _attrs()
    linkmax: int = xfield(_U32, default=0)
    name_max: int = xfield(_U32, default=0)
    no_trunc: bool = xfield(bool, default=False)
    chown_restricted: bool = xfield(bool, default=False)
    case_insensitive: bool = xfield(bool, default=False)
    case_preserving: bool = xfield(bool, default=False)


@dataclasses.dataclass
class PathConf3ResFail(XdrRecord):
    obj_attributes: Optional[FAttr3] = _attrs()


# READ


@dataclasses.dataclass
class Read3Args(XdrRecord):
    file: NfsFh3 = _fh()
    offset: int = xfield(_U64, default=0)
    count: int = xfield(_U32, default=0)


@dataclasses.dataclass
class Read3ResOk(XdrRecord):
    file_attributes: Optional[FAttr3] = _attrs()
    count: int = xfield(_U32, default=0)
    eof: bool = xfield(bool, default=False)
    data: bytes = xfield(bytes, default=Opaque(b""))


@dataclasses.dataclass
class Read3ResFail(XdrRecord):
    file_attributes: Optional[FAttr3] = _attrs()


# READDIR


@dataclasses.dataclass
class ReadDir3Args(XdrRecord):
    dir: NfsFh3 = _fh()
    cookie: int = xfield(_U64, default=0)
    cookieverf: bytes = xfield(COOKIEVERF3, default=_ZERO_VERF)
    count: int = xfield(_U32, default=0)


@dataclasses.dataclass
class ReadDir3ResOk(XdrRecord):
    dir_attributes: Optional[FAttr3] = _attrs()
    cookieverf: bytes = xfield(COOKIEVERF3, default=_ZERO_VERF)
    reply: DirList3 = xfield(DirList3, default_factory=DirList3)


@dataclasses.dataclass
class ReadDir3ResFail(XdrRecord):
    dir_attributes: Optional[FAttr3] = _attrs()


# READDIRPLUS


@dataclasses.dataclass
class ReadDirPlus3Args(XdrRecord):
    dir: NfsFh3 = _fh()
    cookie: int = xfield(_U64, default=0)
    cookieverf: bytes = xfield(COOKIEVERF3, default=_ZERO_VERF)
    dircount: int = xfield(_U32, default=0)
    maxcount: int = xfield(_U32, default=0)


@dataclasses.dataclass
class ReadDirPlus3ResOk(XdrRecord):
    dir_attributes: Optional[FAttr3] = _attrs()
    cookieverf: bytes = xfield(COOKIEVERF3, default=_ZERO_VERF)
    reply: DirListPlus3 = xfield(DirListPlus3, default_factory=DirListPlus3)


@dataclasses.dataclass
class ReadDirPlus3ResFail(XdrRecord):
    dir_attributes: Optional[FAttr3] = _attrs()


# READLINK


@dataclasses.dataclass
class ReadLink3Args(XdrRecord):
    symlink: NfsFh3 = _fh()


@dataclasses.dataclass
class ReadLink3ResOk(XdrRecord):
    symlink_attributes: Optional[FAttr3] = _attrs()
    data: bytes = xfield(bytes, default=Opaque(b""))


@dataclasses.dataclass
class ReadLink3ResFail(XdrRecord):
    symlink_attributes: Optional[FAttr3] = _attrs()


# REMOVE


@dataclasses.dataclass
class Remove3Args(XdrRecord):
    object: DirOpArgs3 = _dirop()


@dataclasses.dataclass
class Remove3ResOk(XdrRecord):
    dir_wcc: WccData = _wcc()


@dataclasses.dataclass
class Remove3ResFail(XdrRecord):
    dir_wcc: WccData = _wcc()


# RENAME


@dataclasses.dataclass
class Rename3Args(XdrRecord):
    from_: DirOpArgs3 = _dirop()
    to: DirOpArgs3 = _dirop()


@dataclasses.dataclass
class Rename3ResOk(XdrRecord):
    fromdir_wcc: WccData = _wcc()
    todir_wcc: WccData = _wcc()


@dataclasses.dataclass
class Rename3ResFail(XdrRecord):
    fromdir_wcc: WccData = _wcc()
    todir_wcc: WccData = _wcc()


# RMDIR


@dataclasses.dataclass
class Rmdir3Args(XdrRecord):
    object: DirOpArgs3 = _dirop()


@dataclasses.dataclass
class Rmdir3ResOk(XdrRecord):
    dir_wcc: WccData = _wcc()


@dataclasses.dataclass
class Rmdir3ResFail(XdrRecord):
    dir_wcc: WccData = _wcc()


# SETATTR


@dataclasses.dataclass
class SetAttr3Args(XdrRecord):
    object: NfsFh3 = _fh()
    new_attributes: SAttr3 = xfield(SAttr3, default_factory=SAttr3)
    guard: Optional[NfsTime3] = xfield(SATTRGUARD3, default=None)


@dataclasses.dataclass
class SetAttr3ResOk(XdrRecord):
    obj_wcc: WccData = _wcc()


@dataclasses.dataclass
class SetAttr3ResFail(XdrRecord):
    obj_wcc: WccData = _wcc()


# SYMLINK


@dataclasses.dataclass
class Symlink3Args(XdrRecord):
    where: DirOpArgs3 = _dirop()
    symlink: SymlinkData3 = xfield(SymlinkData3, default_factory=SymlinkData3)


@dataclasses.dataclass
class Symlink3ResOk(XdrRecord):
    obj: Optional[NfsFh3] = xfield(POST_OP_FH3, default=None)
    obj_attributes: Optional[FAttr3] = _attrs()
    dir_wcc: WccData = _wcc()


@dataclasses.dataclass
class Symlink3ResFail(XdrRecord):
    dir_wcc: WccData = _wcc()


# WRITE


@dataclasses.dataclass
class Write3Args(XdrRecord):
    file: NfsFh3 = _fh()
    offset: int = xfield(_U64, default=0)
    count: int = xfield(_U32, default=0)
    stable: StableHow = xfield(StableHow, default=StableHow.UNSTABLE)
    data: bytes = xfield(bytes, default=Opaque(b""))


@dataclasses.dataclass
class Write3ResOk(XdrRecord):
    file_wcc: WccData = _wcc()
    count: int = xfield(_U32, default=0)
    committed: StableHow = xfield(StableHow, default=StableHow.UNSTABLE)
    verf: bytes = xfield(WRITEVERF3, default=_ZERO_VERF)


@dataclasses.dataclass
class Write3ResFail(XdrRecord):
    file_wcc: WccData = _wcc()


ACCESS3_RES = Nfs3ResultCodec(Access3ResOk, Access3ResFail)
COMMIT3_RES = Nfs3ResultCodec(Commit3ResOk, Commit3ResFail)
CREATE3_RES = Nfs3ResultCodec(Create3ResOk, Create3ResFail)
FSINFO3_RES = Nfs3ResultCodec(FsInfo3ResOk, FsInfo3ResFail)
FSSTAT3_RES = Nfs3ResultCodec(FsStat3ResOk, FsStat3ResFail)
GETATTR3_RES = Nfs3ResultCodec(GetAttr3ResOk, Void)
LINK3_RES = Nfs3ResultCodec(Link3ResOk, Link3ResFail)
LOOKUP3_RES = Nfs3ResultCodec(Lookup3ResOk, Lookup3ResFail)
MKDIR3_RES = Nfs3ResultCodec(Mkdir3ResOk, Mkdir3ResFail)
MKNOD3_RES = Nfs3ResultCodec(Mknod3ResOk, Mknod3ResFail)
PATHCONF3_RES = Nfs3ResultCodec(PathConf3ResOk, PathConf3ResFail)
READ3_RES = Nfs3ResultCodec(Read3ResOk, Read3ResFail)
READDIR3_RES = Nfs3ResultCodec(ReadDir3ResOk, ReadDir3ResFail)
READDIRPLUS3_RES = Nfs3ResultCodec(ReadDirPlus3ResOk, ReadDirPlus3ResFail)
READLINK3_RES = Nfs3ResultCodec(ReadLink3ResOk, ReadLink3ResFail)
REMOVE3_RES = Nfs3ResultCodec(Remove3ResOk, Remove3ResFail)
RENAME3_RES = Nfs3ResultCodec(Rename3ResOk, Rename3ResFail)
RMDIR3_RES = Nfs3ResultCodec(Rmdir3ResOk, Rmdir3ResFail)
SETATTR3_RES = Nfs3ResultCodec(SetAttr3ResOk, SetAttr3ResFail)
SYMLINK3_RES = Nfs3ResultCodec(Symlink3ResOk, Symlink3ResFail)
WRITE3_RES = Nfs3ResultCodec(Write3ResOk, Write3ResFail)

# Argument type and result codec of each procedure other than NULL.
PROCEDURES = {
    NfsProgram.NFSPROC3_GETATTR: (GetAttr3Args, GETATTR3_RES),
    NfsProgram.NFSPROC3_SETATTR: (SetAttr3Args, SETATTR3_RES),
    NfsProgram.NFSPROC3_LOOKUP: (Lookup3Args, LOOKUP3_RES),
    NfsProgram.NFSPROC3_ACCESS: (Access3Args, ACCESS3_RES),
    NfsProgram.NFSPROC3_READLINK: (ReadLink3Args, READLINK3_RES),
    NfsProgram.NFSPROC3_READ: (Read3Args, READ3_RES),
    NfsProgram.NFSPROC3_WRITE: (Write3Args, WRITE3_RES),
    NfsProgram.NFSPROC3_CREATE: (Create3Args, CREATE3_RES),
    NfsProgram.NFSPROC3_MKDIR: (Mkdir3Args, MKDIR3_RES),
    NfsProgram.NFSPROC3_SYMLINK: (Symlink3Args, SYMLINK3_RES),
    NfsProgram.NFSPROC3_MKNOD: (Mknod3Args, MKNOD3_RES),
    NfsProgram.NFSPROC3_REMOVE: (Remove3Args, REMOVE3_RES),
    NfsProgram.NFSPROC3_RMDIR: (Rmdir3Args, RMDIR3_RES),
    NfsProgram.NFSPROC3_RENAME: (Rename3Args, RENAME3_RES),
    NfsProgram.NFSPROC3_LINK: (Link3Args, LINK3_RES),
    NfsProgram.NFSPROC3_READDIR: (ReadDir3Args, READDIR3_RES),
    NfsProgram.NFSPROC3_READDIRPLUS: (ReadDirPlus3Args, READDIRPLUS3_RES),
    NfsProgram.NFSPROC3_FSSTAT: (FsStat3Args, FSSTAT3_RES),
    NfsProgram.NFSPROC3_FSINFO: (FsInfo3Args, FSINFO3_RES),
    NfsProgram.NFSPROC3_PATHCONF: (PathConf3Args, PATHCONF3_RES),
    NfsProgram.NFSPROC3_COMMIT: (Commit3Args, COMMIT3_RES),
}