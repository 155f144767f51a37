"""XDR encoding primitives, containers and declarative record/enum/union types."""

from __future__ import annotations

import abc
import dataclasses
import enum
import functools
import io
import struct
from typing import Any, ClassVar, Mapping, Optional

from nfs3wire.errors import InvalidEnumValue, InvalidLength, ObjectTooLarge, XdrIoError

_U32_MAX = 0xFFFF_FFFF


def add_padding(size):
    """Round ``size`` up to the next multiple of four."""
    return (size + 3) & ~3


def get_padding(length):
    """Return the number of pad bytes needed after ``length`` bytes of data."""
    return (-length) & 3


def zero_padding(length):
    """Return the zero bytes that follow ``length`` bytes of data."""
    return b"\x00" * get_padding(length)


def _read_exact(stream, size):
    chunks = []
    remaining = size
    while remaining > 0:
        try:
            chunk = stream.read(remaining)
        except OSError as exc:
            raise XdrIoError(exc) from exc
        if not chunk:
            raise XdrIoError(
                f"unexpected end of data: needed {size} bytes, got {size - remaining}"
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def _write(out, data):
    try:
        out.write(data)
    except OSError as exc:
        raise XdrIoError(exc) from exc


class Codec(abc.ABC):
    """Encodes and decodes values of one XDR type."""

    @abc.abstractmethod
    def packed_size(self, value):
        """Return the encoded size of ``value`` in bytes, padding included."""

    @abc.abstractmethod
    def pack(self, value, out):
        """Write ``value`` to the binary stream ``out``; return bytes written."""

    @abc.abstractmethod
    def unpack(self, stream):
        """Read a value from ``stream``; return ``(value, bytes_read)``."""

    def encode(self, value):
        """Return ``value`` encoded as bytes."""
        buffer = io.BytesIO()
        self.pack(value, buffer)
        return buffer.getvalue()

    def decode(self, data):
        """Decode one value from the start of ``data``."""
        value, _ = self.unpack(io.BytesIO(data))
        return value


class Uint32Codec(Codec):
    """Unsigned 32-bit big-endian integer."""

    _FORMAT = struct.Struct(">I")

    def packed_size(self, value):
        return 4

    def pack(self, value, out):
        try:
            raw = self._FORMAT.pack(value)
        except struct.error as exc:
            raise ValueError(f"{value!r} is not an unsigned 32-bit integer") from exc
        _write(out, raw)
        return 4

    def unpack(self, stream):
        (value,) = self._FORMAT.unpack(_read_exact(stream, 4))
        return value, 4


class Uint64Codec(Codec):
    """Unsigned 64-bit big-endian integer."""

    _FORMAT = struct.Struct(">Q")

    def packed_size(self, value):
        return 8

    def pack(self, value, out):
        try:
            raw = self._FORMAT.pack(value)
        except struct.error as exc:
            raise ValueError(f"{value!r} is not an unsigned 64-bit integer") from exc
        _write(out, raw)
        return 8

    def unpack(self, stream):
        (value,) = self._FORMAT.unpack(_read_exact(stream, 8))
        return value, 8


class BoolCodec(Codec):
    """Boolean encoded as the 32-bit integers 0 and 1."""

    def packed_size(self, value):
        return 4

    def pack(self, value, out):
        return Uint32Codec().pack(1 if value else 0, out)

    def unpack(self, stream):
        raw, size = Uint32Codec().unpack(stream)
        if raw == 0:
            return False, size
        if raw == 1:
            return True, size
        raise InvalidEnumValue(raw)


class OpaqueCodec(Codec):
    """Variable-length opaque data: a 32-bit length, the bytes and zero padding."""

    def packed_size(self, value):
        return 4 + add_padding(len(value))

    def pack(self, value, out):
        length = len(value)
        if length > _U32_MAX:
            raise ObjectTooLarge(length)
        written = Uint32Codec().pack(length, out)
        _write(out, bytes(value))
        padding = zero_padding(length)
        _write(out, padding)
        return written + length + len(padding)

    def unpack(self, stream):
        length, read = Uint32Codec().unpack(stream)
        data = _read_exact(stream, length)
        pad = get_padding(length)
        _read_exact(stream, pad)
        return Opaque(data), read + length + pad


class FixedBytesCodec(Codec):
    """Fixed-length opaque data of ``size`` bytes followed by zero padding."""

    def __init__(self, size):
        self.size = size

    def packed_size(self, value):
        return add_padding(self.size)

    def pack(self, value, out):
        if len(value) != self.size:
            raise InvalidLength(len(value))
        _write(out, bytes(value))
        padding = zero_padding(self.size)
        _write(out, padding)
        return self.size + len(padding)

    def unpack(self, stream):
        data = _read_exact(stream, self.size)
        pad = get_padding(self.size)
        _read_exact(stream, pad)
        return data, self.size + pad


class Uint32ArrayCodec(Codec):
    """Counted array of unsigned 32-bit integers."""

    def packed_size(self, value):
        return 4 + 4 * len(value)

    def pack(self, value, out):
        count = len(value)
        if count > _U32_MAX:
            raise ObjectTooLarge(count)
        item = Uint32Codec()
        written = item.pack(count, out)
        for element in value:
            written += item.pack(element, out)
        return written

    def unpack(self, stream):
        item = Uint32Codec()
        count, read = item.unpack(stream)
        values = []
        for _ in range(count):
            element, size = item.unpack(stream)
            values.append(element)
            read += size
        return values, read


class ListCodec(Codec):
    """Linked list: each item preceded by TRUE, the list ended by FALSE."""

    def __init__(self, item):
        self.item = codec_for(item)

    def packed_size(self, value):
        return sum(4 + self.item.packed_size(element) for element in value) + 4

    def pack(self, value, out):
        marker = BoolCodec()
        written = 0
        for element in value:
            written += marker.pack(True, out)
            written += self.item.pack(element, out)
        written += marker.pack(False, out)
        return written

    def unpack(self, stream):
        marker = BoolCodec()
        items = []
        read = 0
        while True:
            more, size = marker.unpack(stream)
            read += size
            if not more:
                return items, read
            element, size = self.item.unpack(stream)
            read += size
            items.append(element)


class TypeCodec(Codec):
    """Codec for a class whose instances pack themselves."""

    def __init__(self, kind):
        self.kind = kind

    def packed_size(self, value):
        return value.packed_size()

    def pack(self, value, out):
        return value.pack(out)

    def unpack(self, stream):
        return self.kind.unpack(stream)


def codec_for(kind):
    """Return the codec for ``kind``: a codec, ``bool``, ``bytes`` or an XDR type."""
    if isinstance(kind, Codec):
        return kind
    if kind is bool:
        return BoolCodec()
    if kind is bytes:
        return OpaqueCodec()
    if isinstance(kind, type) and callable(getattr(kind, "unpack", None)):
        return TypeCodec(kind)
    raise TypeError(f"no XDR codec for {kind!r}")


def xfield(codec, **kwargs):
    """Declare a dataclass field encoded with ``codec``."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata["xdr"] = codec
    return dataclasses.field(metadata=metadata, **kwargs)


@functools.lru_cache(maxsize=None)
def _record_layout(cls):
    layout = []
    for f in dataclasses.fields(cls):
        if "xdr" not in f.metadata:
            raise TypeError(f"field {cls.__name__}.{f.name} has no XDR codec")
        layout.append((f.name, codec_for(f.metadata["xdr"])))
    return tuple(layout)


class XdrRecord:
    """Base for dataclasses encoded as their fields in declaration order."""

    def packed_size(self):
        return sum(
            codec.packed_size(getattr(self, name))
            for name, codec in _record_layout(type(self))
        )

    def pack(self, out):
        return sum(
            codec.pack(getattr(self, name), out)
            for name, codec in _record_layout(type(self))
        )

    @classmethod
    def unpack(cls, stream):
        values = {}
        read = 0
        for name, codec in _record_layout(cls):
            values[name], size = codec.unpack(stream)
            read += size
        return cls(**values), read

    def to_bytes(self):
        buffer = io.BytesIO()
        self.pack(buffer)
        return buffer.getvalue()

    @classmethod
    def from_bytes(cls, data):
        value, _ = cls.unpack(io.BytesIO(data))
        return value


class XdrEnum(enum.IntEnum):
    """Integer enum encoded as an unsigned 32-bit value."""

    def packed_size(self):
        return 4

    def pack(self, out):
        return Uint32Codec().pack(int(self), out)

    @classmethod
    def unpack(cls, stream):
        raw, size = Uint32Codec().unpack(stream)
        try:
            return cls(raw), size
        except ValueError:
            raise InvalidEnumValue(raw) from None

    def to_bytes(self):
        buffer = io.BytesIO()
        self.pack(buffer)
        return buffer.getvalue()

    @classmethod
    def from_bytes(cls, data):
        value, _ = cls.unpack(io.BytesIO(data))
        return value


@dataclasses.dataclass
class XdrUnion:
    """Discriminated union: a 32-bit tag followed by the arm the tag selects.

    Subclasses set ``arms`` to a mapping from tag to the arm's codec, or to
    ``None`` for an arm that carries no data, and may set ``tag_type`` to an
    ``XdrEnum`` that decoded tags are converted to.
    """

    tag: int
    value: Any = None

    arms: ClassVar[Mapping[int, Any]] = {}
    tag_type: ClassVar[Optional[type]] = None

    @classmethod
    def _arm_codec(cls, tag):
        try:
            spec = cls.arms[tag]
        except KeyError:
            raise InvalidEnumValue(int(tag)) from None
        return None if spec is None else codec_for(spec)

    def packed_size(self):
        codec = self._arm_codec(self.tag)
        return 4 + (0 if codec is None else codec.packed_size(self.value))

    def pack(self, out):
        codec = self._arm_codec(self.tag)
        written = Uint32Codec().pack(int(self.tag), out)
        if codec is not None:
            written += codec.pack(self.value, out)
        return written

    @classmethod
    def unpack(cls, stream):
        raw, read = Uint32Codec().unpack(stream)
        codec = cls._arm_codec(raw)
        tag = raw
        if cls.tag_type is not None:
            try:
                tag = cls.tag_type(raw)
            except ValueError:
                raise InvalidEnumValue(raw) from None
        value = None
        if codec is not None:
            value, size = codec.unpack(stream)
            read += size
        return cls(tag, value), read

    def to_bytes(self):
        buffer = io.BytesIO()
        self.pack(buffer)
        return buffer.getvalue()

    @classmethod
    def from_bytes(cls, data):
        value, _ = cls.unpack(io.BytesIO(data))
        return value


class Opaque(bytes):
    """Variable-length opaque data."""

    __slots__ = ()

    def __repr__(self):
        return f"Opaque({bytes(self)!r})"

    def packed_size(self):
        return OpaqueCodec().packed_size(self)

    def pack(self, out):
        return OpaqueCodec().pack(self, out)

    @classmethod
    def unpack(cls, stream):
        data, size = OpaqueCodec().unpack(stream)
        return cls(data), size


@dataclasses.dataclass(frozen=True)
class Void:
    """The empty XDR type: encodes to nothing."""

    def packed_size(self):
        return 0

    def pack(self, out):
        return 0

    @classmethod
    def unpack(cls, stream):
        return cls(), 0


class BoundedList:
    """Collects items for an XDR list while keeping its encoded size within a limit."""

    def __init__(self, codec, max_size):
        self._codec = codec_for(codec)
        self._items = []
        self.max_size = max_size
        self.current_size = 4  # the end-of-list marker

    def __len__(self):
        return len(self._items)

    def try_push(self, item):
        """Append ``item`` if the list still fits; return whether it was added."""
        item_size = self._codec.packed_size(item) + 4
        if self.current_size + item_size > self.max_size:
            return False
        self._items.append(item)
        self.current_size += item_size
        return True

    def into_inner(self):
        """Return the collected items."""
        return list(self._items)