# cuckoobuckets

`cuckoobuckets` provides the bucket storage layer of a cuckoo hash table.
A `BucketContainer` holds `2 ** hashpower` buckets. Each is a `Bucket` with a
fixed number of `Slot`s. A slot is either empty or holds a key, a mapped
value and a small partial hash of the key.

Everything lives in the module `cuckoobuckets.bucket_container`.

## Installation

```
pip install cuckoobuckets
```

## Usage

```python
from cuckoobuckets.bucket_container import BucketContainer

buckets = BucketContainer(hashpower=2, slot_per_bucket=4)
print(len(buckets))                      # 4 buckets
print(buckets.hashpower, buckets.slot_per_bucket)

buckets.set_kv(0, 0, partial=2, key="ten", mapped=5)
slot = buckets[0][0]
print(slot.occupied, slot.partial, slot.key, slot.mapped)

for key, mapped in buckets.items():      # live pairs in storage order
    print(key, mapped)

buckets.erase_kv(0, 0)
```

`BucketContainer` and `Bucket` support indexing, `len()` and iteration.
A `Slot` is a dataclass with the fields `occupied`, `partial`, `key` and
`mapped`.

`set_kv` raises `ValueError` if the slot is already occupied, and marks the
slot live only after storing the partial hash, key and value. `erase_kv`
raises `ValueError` if the slot is empty; it clears the key and value but
keeps the partial hash. A negative `hashpower` or a `slot_per_bucket` below 1
is rejected with `ValueError`.

### Copying and swapping

`copy()` (also used by `copy.copy`) returns a new container with the same
layout and the same live pairs. `swap(other)` exchanges the layout and
contents of two containers in place.

### Clearing

`clear()` empties every slot but keeps the buckets. `clear_and_deallocate()`
empties every slot and drops the buckets, after which `allocated` is `False`
and `len()` is 0; the container can still be swapped with another.

### Binary dump and load

When keys and mapped values are fixed-size plain values, the container can
be written to and read back from a binary stream, using `struct` format
strings (without a byte-order prefix; little-endian is used). A format with
several fields packs and unpacks tuples.

```python
import io

stream = io.BytesIO()
buckets.set_kv(1, 2, partial=7, key=42, mapped=99)
buckets.dump(stream, "q", "q")

stream.seek(0)
restored = BucketContainer.load(stream, 4, "q", "q")
print(restored[1][2].key, restored[1][2].mapped)
```

The stream starts with the hashpower as an unsigned 64-bit integer, followed
for each bucket by its slots' key/value bytes (zeros for empty slots), then
one byte of partial hash per slot and one occupied flag per slot. Partial
hashes must fit in a byte. `dump` raises `ValueError` on a container without
buckets, and `load` raises `ValueError` if the stream ends early.

## What it does not do

This package is only the storage underneath a hash table. It does not hash
keys, compute bucket indexes or partial keys, move entries between
alternative buckets, resize, or lock anything for concurrent use; the caller
decides where each pair goes.