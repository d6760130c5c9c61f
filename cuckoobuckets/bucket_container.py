"""Bucket storage for a cuckoo hash table.

A container holds ``2 ** hashpower`` buckets. Each bucket has a fixed number
of slots, and each slot records whether it is live, a partial hash of its key,
and the key and mapped value themselves.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, BinaryIO, Iterator

_HASHPOWER = struct.Struct("<Q")


@dataclass(slots=True)
class Slot:
    """One key-value position inside a bucket."""

    occupied: bool = False
    partial: int = 0
    key: Any = None
    mapped: Any = None


class Bucket:
    """A fixed-size group of slots."""

    __slots__ = ("_slots",)

    def __init__(self, slot_per_bucket: int) -> None:
        self._slots = [Slot() for _ in range(slot_per_bucket)]

    def __getitem__(self, slot: int) -> Slot:
        return self._slots[slot]

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Slot]:
        return iter(self._slots)

    def __repr__(self) -> str:
        return f"Bucket({self._slots!r})"


class _Codec:
    """Packs and unpacks one value with a struct format."""

    def __init__(self, fmt: str) -> None:
        self._struct = struct.Struct("<" + fmt)
        self._fields = len(self._struct.unpack(bytes(self._struct.size)))

    @property
    def size(self) -> int:
        return self._struct.size

    def pack(self, value: Any) -> bytes:
        if self._fields == 1:
            return self._struct.pack(value)
        return self._struct.pack(*value)

    def unpack(self, data: bytes) -> Any:
        values = self._struct.unpack(data)
        return values[0] if self._fields == 1 else values


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise ValueError(f"stream truncated: expected {size} bytes, got {len(data)}")
    return data


class BucketContainer:
    """Power-of-two sized array of buckets holding key-value pairs."""

    def __init__(self, hashpower: int, slot_per_bucket: int) -> None:
        if hashpower < 0:
            raise ValueError("hashpower must not be negative")
        if slot_per_bucket < 1:
            raise ValueError("slot_per_bucket must be at least 1")
        self._hashpower = hashpower
        self._slot_per_bucket = slot_per_bucket
        self._buckets = [Bucket(slot_per_bucket) for _ in range(1 << hashpower)]

    @property
    def hashpower(self) -> int:
        return self._hashpower

    @property
    def slot_per_bucket(self) -> int:
        return self._slot_per_bucket

    @property
    def allocated(self) -> bool:
        """Whether the container currently owns bucket storage."""
        return bool(self._buckets)

    def __getitem__(self, index: int) -> Bucket:
        return self._buckets[index]

    def __len__(self) -> int:
        return len(self._buckets)

    def __iter__(self) -> Iterator[Bucket]:
        return iter(self._buckets)

    def __repr__(self) -> str:
        return (
            f"BucketContainer(hashpower={self._hashpower}, "
            f"slot_per_bucket={self._slot_per_bucket}, items={list(self.items())!r})"
        )

    def set_kv(self, index: int, slot: int, partial: int, key: Any, mapped: Any) -> None:
        """Store a live pair in an empty slot."""
        target = self._buckets[index][slot]
        if target.occupied:
            raise ValueError(f"slot {slot} of bucket {index} is already occupied")
        target.partial = partial
        target.key = key
        target.mapped = mapped
        # Marked live last, so a failure above leaves the slot empty.
        target.occupied = True

    def erase_kv(self, index: int, slot: int) -> None:
        """Remove the live pair in a slot; the partial hash is left as it was."""
        target = self._buckets[index][slot]
        if not target.occupied:
            raise ValueError(f"slot {slot} of bucket {index} is not occupied")
        target.occupied = False
        target.key = None
        target.mapped = None

    def clear(self) -> None:
        """Remove every live pair, keeping the buckets."""
        for index, bucket in enumerate(self._buckets):
            for slot_index, slot in enumerate(bucket):
                if slot.occupied:
                    self.erase_kv(index, slot_index)

    def clear_and_deallocate(self) -> None:
        """Remove every live pair and release all buckets."""
        self.clear()
        self._buckets = []

    def copy(self) -> BucketContainer:
        """Return a container with the same layout and the same live pairs."""
        duplicate = BucketContainer(self._hashpower, self._slot_per_bucket)
        for index, bucket in enumerate(self._buckets):
            for slot_index, slot in enumerate(bucket):
                if slot.occupied:
                    duplicate.set_kv(index, slot_index, slot.partial, slot.key, slot.mapped)
        return duplicate

    def __copy__(self) -> BucketContainer:
        return self.copy()

    def swap(self, other: BucketContainer) -> None:
        """Exchange contents and layout with another container."""
        self._hashpower, other._hashpower = other._hashpower, self._hashpower
        self._slot_per_bucket, other._slot_per_bucket = (
            other._slot_per_bucket,
            self._slot_per_bucket,
        )
        self._buckets, other._buckets = other._buckets, self._buckets

    def items(self) -> Iterator[tuple[Any, Any]]:
        """Yield ``(key, mapped)`` for every live slot, in storage order."""
        for bucket in self._buckets:
            for slot in bucket:
                if slot.occupied:
                    yield slot.key, slot.mapped

    def dump(self, stream: BinaryIO, key_format: str, mapped_format: str) -> None:
        """Write the container as binary data using struct formats for keys and values."""
        if not self._buckets:
            raise ValueError("container has no bucket storage to dump")
        key_codec = _Codec(key_format)
        mapped_codec = _Codec(mapped_format)
        empty_pair = bytes(key_codec.size + mapped_codec.size)
        flags = struct.Struct(f"<{self._slot_per_bucket}B{self._slot_per_bucket}?")
        stream.write(_HASHPOWER.pack(self._hashpower))
        for bucket in self._buckets:
            for slot in bucket:
                if slot.occupied:
                    stream.write(key_codec.pack(slot.key) + mapped_codec.pack(slot.mapped))
                else:
                    stream.write(empty_pair)
            stream.write(
                flags.pack(
                    *(slot.partial for slot in bucket),
                    *(slot.occupied for slot in bucket),
                )
            )

    @classmethod
    def load(
        cls,
        stream: BinaryIO,
        slot_per_bucket: int,
        key_format: str,
        mapped_format: str,
    ) -> BucketContainer:
        """Read a container written by :meth:`dump`."""
        key_codec = _Codec(key_format)
        mapped_codec = _Codec(mapped_format)
        (hashpower,) = _HASHPOWER.unpack(_read_exact(stream, _HASHPOWER.size))
        container = cls(hashpower, slot_per_bucket)
        flags = struct.Struct(f"<{slot_per_bucket}B{slot_per_bucket}?")
        pair_size = key_codec.size + mapped_codec.size
        for bucket in container:
            raw_pairs = [_read_exact(stream, pair_size) for _ in range(slot_per_bucket)]
            unpacked = flags.unpack(_read_exact(stream, flags.size))
            partials = unpacked[:slot_per_bucket]
            occupied = unpacked[slot_per_bucket:]
            for slot, raw, partial, live in zip(bucket, raw_pairs, partials, occupied):
                slot.partial = partial
                if live:
                    slot.key = key_codec.unpack(raw[: key_codec.size])
                    slot.mapped = mapped_codec.unpack(raw[key_codec.size :])
                    slot.occupied = True
        return container