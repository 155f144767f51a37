"""MOUNT version 3 protocol types (RFC 1813)."""

from __future__ import annotations

import dataclasses

from nfs3wire.xdr import ListCodec, Opaque, Uint32ArrayCodec, XdrEnum, XdrRecord, XdrUnion, xfield

PROGRAM = 100_005
VERSION = 3
MNTPATHLEN = 1024
MNTNAMLEN = 255
FHSIZE3 = 64


class MountStat3(XdrEnum):
    MNT3_OK = 0
    MNT3ERR_PERM = 1
    MNT3ERR_NOENT = 2
    MNT3ERR_IO = 5
    MNT3ERR_ACCES = 13
    MNT3ERR_NOTDIR = 20
    MNT3ERR_INVAL = 22
    MNT3ERR_NAMETOOLONG = 63
    MNT3ERR_NOTSUPP = 10004
    MNT3ERR_SERVERFAULT = 10006

    def __str__(self):
        return self.name


class MountProgram(XdrEnum):
    MOUNTPROC3_NULL = 0
    MOUNTPROC3_MNT = 1
    MOUNTPROC3_DUMP = 2
    MOUNTPROC3_UMNT = 3
    MOUNTPROC3_UMNTALL = 4
    MOUNTPROC3_EXPORT = 5

    def __str__(self):
        return self.name


@dataclasses.dataclass
class MountRes3Ok(XdrRecord):
    """Successful mount: the root file handle and accepted auth flavors."""

    fhandle: bytes = xfield(bytes)
    auth_flavors: list = xfield(Uint32ArrayCodec(), default_factory=list)


class MountRes3(XdrUnion):
    """Result of MNT: a ``MountRes3Ok`` on success, only the status otherwise."""

    tag_type = MountStat3
    arms = {
        status: (MountRes3Ok if status is MountStat3.MNT3_OK else None)
        for status in MountStat3
    }

    @classmethod
    def ok(cls, result):
        return cls(MountStat3.MNT3_OK, result)

    @classmethod
    def error(cls, status):
        status = MountStat3(status)
        if status is MountStat3.MNT3_OK:
            raise ValueError("MNT3_OK is not an error status")
        return cls(status)

    def is_ok(self):
        return self.tag == MountStat3.MNT3_OK


@dataclasses.dataclass
class MountBody(XdrRecord):
    """One entry of the mount list: client host and mounted directory."""

    ml_hostname: bytes = xfield(bytes, default=Opaque(b""))
    ml_directory: bytes = xfield(bytes, default=Opaque(b""))


@dataclasses.dataclass
class ExportNode(XdrRecord):
    """One exported directory with the groups allowed to mount it."""

    ex_dir: bytes = xfield(bytes, default=Opaque(b""))
    ex_groups: list = xfield(ListCodec(bytes), default_factory=list)


MOUNT_LIST_CODEC = ListCodec(MountBody)
EXPORTS_CODEC = ListCodec(ExportNode)