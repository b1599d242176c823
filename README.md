# barky

Tools for working with hierarchical key/value data such as parsed JSON, YAML
or TOML configuration. Nested data is turned into a flat mapping of string
keys to string values, keys can be split into typed path segments and joined
back, and a `Storage` keeps flat values in memory while refusing structural
conflicts and remembering which file each value came from.

## Installation

```
pip install .
```

## Flattening (`barky.flat`)

```python
from barky.flat import flatten_map

flatten_map({"db": {"hosts": ["a", "b"], "port": 5432}})
# {"db.hosts[0]": "a", "db.hosts[1]": "b", "db.port": "5432"}
```

- Mappings are expanded with `.name`, sequences (lists, tuples and other
  sequences except `str`, `bytes` and `bytearray`) with `[index]`.
- `None` values are dropped, except as elements of a sequence, where they
  become `""` so the indices stay in place.
- Empty mappings and empty sequences become `""`.
- Scalars are converted with `to_string`: strings as they are, `True`/`False`
  as `"true"`/`"false"`, integers in decimal, floats in plain decimal notation
  (`3.14`, `NaN`, `+Inf`, `-Inf`), bytes decoded as UTF-8, exceptions by their
  message. Any other type gives `""`.

`flatten_value(key, val, result)` does the same for a single value, writing
into the `result` dict under `key`.

## Paths (`barky.path`)

```python
from barky.path import Path, PathType, PathError, split_path, join_path

split_path("foo.bar[0]")
# [Path(type=PathType.KEY, elem="foo"),
#  Path(type=PathType.KEY, elem="bar"),
#  Path(type=PathType.INDEX, elem="0")]

join_path(split_path("a[0].b"))  # "a[0].b"

split_path("a..b")
# PathError: invalid key "a..b" at pos 2: empty key between dots
```

Key segments must be non-empty and free of spaces; indices must be unsigned
decimal integers below 2**64. Malformed keys (empty key, spaces, unbalanced or
nested brackets, empty segments, a character right after `]`, a trailing dot)
raise `PathError`, a subclass of `ValueError`, whose message gives the byte
position of the problem.

## Storage (`barky.store`)

```python
from barky.store import Storage, PropertyConflictError

s = Storage()
f = s.add_file("app.yaml")       # 0; the same name always gets the same index
s.set("a.b[0].c", "123", f)
s.has("a.b")                     # True
s.sub_keys("a.b")                # ["0"]
s.sub_keys("")                   # ["a"]
s.get("a.b[0].c")                # "123"
s.get("missing", "default")      # "default"
s.get("missing")                 # ""
s.keys()                         # ["a.b[0].c"]

s.set("a.b", "x", f)             # raises PropertyConflictError
```

- `set(key, val, file)` raises `ValueError` for an empty key, `PathError` for
  a malformed one and `PropertyConflictError` (also a `ValueError`, with the
  clashing path in its `path` attribute) when the key would treat a value as
  a container, or a map as a list, or the other way round. Setting an
  existing key replaces its value.
- `has(key)` is true for stored values and for the containers above them;
  malformed or conflicting keys give `False`.
- `sub_keys(key)` returns the sorted names of the children directly under
  `key`, or `[]` when the path is unknown; it raises `PathError` or
  `PropertyConflictError` as `set` does.
- `data()` returns a new dict of key to value, `raw_data()` the internal dict
  of key to `ValueInfo` (with `file` and `value`), and `raw_file()` the
  internal dict of file name to index.
- `ordered_map_keys(m)` returns the keys of a mapping (or the items of any
  iterable) in sorted order.

## What it does not do

barky does not read or parse configuration files itself, and `Storage` holds
its data in memory only; feed it the already-parsed nested data through
`flatten_map`, or set keys directly.

## Running the tests

```
pip install ".[test]"
pytest
```