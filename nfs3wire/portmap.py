"""Port mapper version 2 protocol types (RFC 1057)."""

from __future__ import annotations

import dataclasses

from nfs3wire.xdr import ListCodec, Opaque, Uint32Codec, XdrEnum, XdrRecord, xfield

IPPROTO_TCP = 6
IPPROTO_UDP = 17
PROGRAM = 100_000
VERSION = 2
PMAP_PORT = 111

_U32 = Uint32Codec()


@dataclasses.dataclass
class Mapping(XdrRecord):
    """A registration of program, version and protocol to a port."""

    prog: int = xfield(_U32)
    vers: int = xfield(_U32)
    prot: int = xfield(_U32)
    port: int = xfield(_U32)


PMAP_LIST_CODEC = ListCodec(Mapping)


@dataclasses.dataclass
class CallArgs(XdrRecord):
    """Arguments of PMAPPROC_CALLIT."""

    prog: int = xfield(_U32)
    vers: int = xfield(_U32)
    proc: int = xfield(_U32)
    args: bytes = xfield(bytes, default=Opaque(b""))


@dataclasses.dataclass
class CallResult(XdrRecord):
    """Result of PMAPPROC_CALLIT."""

    port: int = xfield(_U32)
    res: bytes = xfield(bytes, default=Opaque(b""))


class PmapProc(XdrEnum):
    PMAPPROC_NULL = 0
    PMAPPROC_SET = 1
    PMAPPROC_UNSET = 2
    PMAPPROC_GETPORT = 3
    PMAPPROC_DUMP = 4
    PMAPPROC_CALLIT = 5

    def __str__(self):
        return self.name