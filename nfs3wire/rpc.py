"""ONC RPC message types (RFC 1057) and the record-marking fragment header."""

from __future__ import annotations

import dataclasses
from typing import Any, ClassVar

from nfs3wire.errors import InvalidLength
from nfs3wire.xdr import (
    Codec,
    Opaque,
    Uint32ArrayCodec,
    Uint32Codec,
    XdrEnum,
    XdrRecord,
    XdrUnion,
    xfield,
)

RPC_VERSION_2 = 2

_U32 = Uint32Codec()


class _VersionRangeCodec(Codec):
    """A ``(low, high)`` pair of unsigned 32-bit version numbers."""

    def packed_size(self, value):
        return 8

    def pack(self, value, out):
        low, high = value
        return _U32.pack(low, out) + _U32.pack(high, out)

    def unpack(self, stream):
        low, _ = _U32.unpack(stream)
        high, _ = _U32.unpack(stream)
        return (low, high), 8


@dataclasses.dataclass
class FragmentHeader(XdrRecord):
    """Record-marking header: a 31-bit fragment length and a last-fragment flag."""

    EOF_FLAG: ClassVar[int] = 0x8000_0000
    MASK: ClassVar[int] = 0x7FFF_FFFF

    header: int = xfield(_U32, default=0)

    @classmethod
    def build(cls, length, eof):
        """Create a header for a fragment of ``length`` bytes."""
        if not 0 <= length <= cls.MASK:
            raise ValueError(f"fragment length {length} exceeds {cls.MASK}")
        header = length | cls.EOF_FLAG if eof else length
        return cls(header)

    def eof(self):
        """Return whether this is the last fragment of a record."""
        return bool(self.header & self.EOF_FLAG)

    def fragment_length(self):
        """Return the length of the fragment in bytes."""
        return self.header & self.MASK

    def to_xdr_bytes(self):
        """Return the four big-endian bytes of the header."""
        return self.header.to_bytes(4, "big")

    @classmethod
    def from_xdr_bytes(cls, data):
        """Build a header from its four big-endian bytes."""
        if len(data) != 4:
            raise InvalidLength(len(data))
        return cls(int.from_bytes(data, "big"))


class MsgType(XdrEnum):
    CALL = 0
    REPLY = 1


class ReplyStat(XdrEnum):
    MSG_ACCEPTED = 0
    MSG_DENIED = 1


class AcceptStat(XdrEnum):
    SUCCESS = 0
    PROG_UNAVAIL = 1
    PROG_MISMATCH = 2
    PROC_UNAVAIL = 3
    GARBAGE_ARGS = 4
    SYSTEM_ERR = 5


class RejectStat(XdrEnum):
    RPC_MISMATCH = 0
    AUTH_ERROR = 1


class AuthStat(XdrEnum):
    AUTH_OK = 0
    AUTH_BADCRED = 1
    AUTH_REJECTEDCRED = 2
    AUTH_BADVERF = 3
    AUTH_REJECTEDVERF = 4
    AUTH_TOOWEAK = 5
    AUTH_INVALIDRESP = 6
    AUTH_FAILED = 7


class AuthFlavor(XdrEnum):
    AUTH_NULL = 0
    AUTH_UNIX = 1
    AUTH_SHORT = 2
    AUTH_DES = 3


@dataclasses.dataclass
class AuthUnix(XdrRecord):
    """AUTH_UNIX credentials."""

    stamp: int = xfield(_U32, default=0)
    machinename: bytes = xfield(bytes, default=Opaque(b""))
    uid: int = xfield(_U32, default=0)
    gid: int = xfield(_U32, default=0)
    gids: list = xfield(Uint32ArrayCodec(), default_factory=list)


@dataclasses.dataclass
class OpaqueAuth(XdrRecord):
    """Authentication flavor with its opaque body; AUTH_NULL and empty by default."""

    flavor: AuthFlavor = xfield(AuthFlavor, default=AuthFlavor.AUTH_NULL)
    body: bytes = xfield(bytes, default=Opaque(b""))

    @classmethod
    def from_auth_unix(cls, auth):
        """Wrap encoded AUTH_UNIX credentials."""
        return cls(AuthFlavor.AUTH_UNIX, Opaque(auth.to_bytes()))


@dataclasses.dataclass
class CallBody(XdrRecord):
    """Body of an RPC call message."""

    rpcvers: int = xfield(_U32)
    prog: int = xfield(_U32)
    vers: int = xfield(_U32)
    proc: int = xfield(_U32)
    cred: OpaqueAuth = xfield(OpaqueAuth, default_factory=OpaqueAuth)
    verf: OpaqueAuth = xfield(OpaqueAuth, default_factory=OpaqueAuth)


class AcceptStatData(XdrUnion):
    """Status of an accepted call; PROG_MISMATCH carries a ``(low, high)`` range."""

    tag_type = AcceptStat
    arms = {
        AcceptStat.SUCCESS: None,
        AcceptStat.PROG_UNAVAIL: None,
        AcceptStat.PROG_MISMATCH: _VersionRangeCodec(),
        AcceptStat.PROC_UNAVAIL: None,
        AcceptStat.GARBAGE_ARGS: None,
        AcceptStat.SYSTEM_ERR: None,
    }

    @classmethod
    def prog_mismatch(cls, low, high):
        return cls(AcceptStat.PROG_MISMATCH, (low, high))


@dataclasses.dataclass
class AcceptedReply(XdrRecord):
    verf: OpaqueAuth = xfield(OpaqueAuth)
    reply_data: AcceptStatData = xfield(AcceptStatData)


class RejectedReply(XdrUnion):
    """Reason a call was denied: an RPC version range or an auth status."""

    tag_type = RejectStat
    arms = {
        RejectStat.RPC_MISMATCH: _VersionRangeCodec(),
        RejectStat.AUTH_ERROR: AuthStat,
    }

    @classmethod
    def rpc_mismatch(cls, low, high):
        return cls(RejectStat.RPC_MISMATCH, (low, high))

    @classmethod
    def auth_error(cls, stat):
        return cls(RejectStat.AUTH_ERROR, AuthStat(stat))


class ReplyBody(XdrUnion):
    tag_type = ReplyStat
    arms = {
        ReplyStat.MSG_ACCEPTED: AcceptedReply,
        ReplyStat.MSG_DENIED: RejectedReply,
    }


class MsgBody(XdrUnion):
    tag_type = MsgType
    arms = {
        MsgType.CALL: CallBody,
        MsgType.REPLY: ReplyBody,
    }


@dataclasses.dataclass
class RpcMsg(XdrRecord):
    """An RPC message: transaction id and call or reply body."""

    xid: int = xfield(_U32)
    body: Any = xfield(MsgBody)