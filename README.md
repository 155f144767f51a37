# nfs3wire

Pure-Python data types and an XDR (RFC 1014) codec for the protocols an
NFSv3 client or server speaks:

- the codec itself and its building blocks: `nfs3wire.xdr`
- ONC RPC messages (RFC 1057): `nfs3wire.rpc`
- the port mapper, version 2: `nfs3wire.portmap`
- MOUNT version 3: `nfs3wire.mount`
- NFS version 3 (RFC 1813): `nfs3wire.nfs3_base` for status codes and
  shared structures, `nfs3wire.nfs3_procs` for each procedure's arguments
  and results
- decoding and encoding errors: `nfs3wire.errors`

There are no dependencies outside the standard library.

## Installing

```
pip install nfs3wire
```

## The codec

Every wire type can report its encoded size, write itself to a binary stream,
and be read back from one. Reading returns the value together with the number
of bytes it used.

```python
import io
from nfs3wire.xdr import Opaque

data = Opaque(b"ABC")
print(data.packed_size())        # 8: length word, 3 bytes, 1 byte of padding

buf = io.BytesIO()
data.pack(buf)                   # returns 8
print(buf.getvalue())            # b'\x00\x00\x00\x03ABC\x00'

value, used = Opaque.unpack(io.BytesIO(buf.getvalue()))   # (Opaque(b'ABC'), 8)
```

Structured types are built on three bases:

- `XdrRecord`: a dataclass whose fields, declared with `xfield(codec, ...)`,
  are encoded in order.
- `XdrEnum`: an `IntEnum` encoded as an unsigned 32-bit value; decoding an
  unknown value raises `InvalidEnumValue`.
- `XdrUnion`: a dataclass of `tag` and `value`, where the tag selects which
  arm, if any, follows it on the wire.

All three offer `packed_size()`, `pack(out)`, `unpack(stream)`, `to_bytes()`
and `from_bytes(data)`.

Plain values go through codecs: `Uint32Codec`, `Uint64Codec`, `BoolCodec`,
`OpaqueCodec`, `FixedBytesCodec(size)`, `Uint32ArrayCodec` and
`ListCodec(item)`, the last being XDR's linked list (each item preceded by
TRUE, ended by FALSE) decoded to a Python list. Each codec has
`packed_size(value)`, `pack(value, out)`, `unpack(stream)`, `encode(value)`
and `decode(data)`. `codec_for(kind)` turns `bool`, `bytes` or any XDR type
into a codec, and `Void` is the empty type.

`BoundedList(codec, max_size)` collects items for a list while its encoded
size stays within `max_size` bytes: `try_push(item)` returns `False` and leaves
the list unchanged once an item would not fit, and `into_inner()` returns the
items.

```python
from nfs3wire.xdr import BoundedList, Uint32Codec

items = BoundedList(Uint32Codec(), 28)   # room for three u32 items
print([items.try_push(n) for n in (1, 2, 3, 4)])   # [True, True, True, False]
```

The helpers `add_padding`, `get_padding` and `zero_padding` handle XDR's
four-byte alignment.

## RPC messages

```python
from nfs3wire.rpc import CallBody, MsgBody, MsgType, OpaqueAuth, RpcMsg

call = CallBody(rpcvers=2, prog=100003, vers=3, proc=0,
                cred=OpaqueAuth(), verf=OpaqueAuth())
msg = RpcMsg(xid=123, body=MsgBody(MsgType.CALL, call))
wire = msg.to_bytes()            # 40 bytes

decoded = RpcMsg.from_bytes(wire)
print(decoded.body.tag)          # MsgType.CALL
```

Replies are `ReplyBody` unions holding an `AcceptedReply` or a
`RejectedReply`. `AcceptStatData.prog_mismatch(low, high)`,
`RejectedReply.rpc_mismatch(low, high)` and `RejectedReply.auth_error(stat)`
build the variants that carry data. `OpaqueAuth.from_auth_unix(AuthUnix(...))`
wraps AUTH_UNIX credentials.

`FragmentHeader` handles the record-marking word that precedes each message
on a TCP stream: `FragmentHeader.build(length, eof)`, `eof()`,
`fragment_length()`, `to_xdr_bytes()` and `FragmentHeader.from_xdr_bytes(data)`.

## MOUNT and the port mapper

`nfs3wire.mount` has `MountStat3`, `MountProgram`, `MountRes3Ok`, `MountRes3`
(with `MountRes3.ok(result)`, `MountRes3.error(status)` and `is_ok()`),
`MountBody` and `ExportNode`, plus `MOUNT_LIST_CODEC` and `EXPORTS_CODEC` for
the list replies.

`nfs3wire.portmap` has `Mapping`, `CallArgs`, `CallResult`, `PmapProc` and
`PMAP_LIST_CODEC`.

## NFSv3

`nfs3wire.nfs3_base` holds `NfsStat3`, `FType3`, `NfsProgram` and the other
enums, and the shared structures: `NfsFh3`, `FAttr3`, `SAttr3`, `WccData`,
`DirOpArgs3`, `CreateHow3`, `MknodData3`, `DirList3` and others. Optional
fields are `None` when absent and are encoded with `OptionalCodec`.
`NfsTime3.from_datetime()` and `to_datetime()` convert to and from aware UTC
datetimes.

Procedure results are `Nfs3Result` values: a status and the success or failure
structure. `Nfs3Result.unwrap()` and `expect(message)` return the success
value, or raise `Nfs3Error` carrying the status and the failure structure.

```python
from nfs3wire.nfs3_base import DirOpArgs3, NfsFh3, NfsStat3, Nfs3Result
from nfs3wire.nfs3_procs import LOOKUP3_RES, Lookup3Args, Lookup3ResFail

args = Lookup3Args(what=DirOpArgs3(dir=NfsFh3(b"\x01\x02"), name=b"a.txt"))
request = args.to_bytes()

reply = LOOKUP3_RES.encode(Nfs3Result.error(NfsStat3.NFS3ERR_NOENT, Lookup3ResFail()))
result = LOOKUP3_RES.decode(reply)
print(result.is_ok(), result.status)    # False NFS3ERR_NOENT
```

`nfs3wire.nfs3_procs` defines the `...3Args`, `...3ResOk` and `...3ResFail`
records of every procedure, an `Nfs3ResultCodec` for each result
(`GETATTR3_RES`, `LOOKUP3_RES`, `READ3_RES` and so on), and `PROCEDURES`,
which maps each `NfsProgram` value other than `NFSPROC3_NULL` to its argument
type and result codec.

## Errors

Failures raise subclasses of `XdrError` from `nfs3wire.errors`: `XdrIoError`
for truncated input or a failing stream, `InvalidEnumValue` for a value an
enum, union or bool does not allow, `InvalidLength` for fixed-size data of the
wrong length, and `ObjectTooLarge` for data whose length does not fit in 32
bits.

## What it does not do

The package only encodes and decodes. It opens no sockets and contains no NFS
client, server, mount daemon or port mapper; sending, receiving and splitting
a TCP stream into records are left to the caller.

## Running the tests

```
pip install -e .[test]
pytest
```