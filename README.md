# knotdi

A compact dependency injection container. Services are registered under a key,
usually their class, with one of three lifetimes. Each one is resolved when it
is asked for:

- **singleton** (`Strategy.SINGLETON`): built on the first `resolve`, then reused.
- **transient** (`Strategy.TRANSIENT`): built fresh on every `resolve`, and
  tracked until it is destroyed.
- **external** (`Strategy.EXTERNAL`): an object you already own. It is returned
  as is and never disposed of by the container.

`Strategy` also has a `SCOPED` member. `register_service` does not accept it.

The container holds at most 16 services and 32 live transients. Every factory,
singleton slot and transient takes a 16-byte slot from a bounded `MemoryPool`.
The default pool is 4096 bytes.

## Installation

```
pip install knotdi
```

## Usage

```python
from knotdi.container import Container
from knotdi.descriptor import Strategy


class Config:
    def __init__(self, level):
        self.level = level


class Service:
    def __init__(self, config):
        self.config = config


with Container() as container:
    container.register_service(Config, Strategy.SINGLETON, 3)
    container.register_service(
        Service, Strategy.TRANSIENT, container.resolve(Config)
    )

    first = container.resolve(Service)
    second = container.resolve(Service)
    assert first is not second
    assert first.config is second.config

    container.destroy_transient(first)
    container.destroy_all_transients()
```

### Registering services

`register_service(cls, strategy=Strategy.SINGLETON, *args)` stores a `Factory`.
The factory calls `cls(*args)`, and it takes at most 8 arguments. If you pass
more, `Factory` raises `TypeError`.

`register_service` raises `RegistrationError` in these cases:

- the key is already registered;
- the 16-service limit has been reached;
- the strategy is neither singleton nor transient;
- the pool has no room left for the slots.

`register_instance(key, instance)` stores an object you already own. It raises
`RegistrationError` when `instance` is `None`, when the key is taken, or when
the service limit has been reached:

```python
shared = Config(1)
container.register_instance(Config, shared)
assert container.resolve(Config) is shared
```

### Resolving and disposing

`resolve` behaves as follows:

- A key that was never registered raises `KeyError`.
- Resolving a transient beyond the 32-instance limit raises
  `PoolExhaustedError`.
- A transient that finds no pool space left also raises `PoolExhaustedError`.

Disposing of an instance calls its `close()` method, if it has one. External
instances are never disposed of.

- `destroy_all_singletons()` disposes of every singleton that has been built.
  The next `resolve` builds it again.
- `destroy_all_transients()` disposes of every transient handed out so far.
- `destroy_transient(instance)` disposes of that one transient. It ignores
  instances it does not know.
- `close()` disposes of everything and drops every registration. Leaving a
  `with Container()` block calls `close()` for you.

### Memory budget

`Container(max_bytes)` caps a heap pool. Blocks come and go one at a time, and
space is given back when they are freed.

`Container(buffer=...)` works as a fixed arena over a writable buffer you
supply. Here `max_bytes` defaults to the buffer's length and may not exceed it.
Arena space is never handed back on disposal, so a long-running container over
a buffer eventually runs out.

The pool can also be used on its own:

```python
from knotdi.memory_pool import MemoryPool

pool = MemoryPool(64, buffer=bytearray(64))
block = pool.allocate(16, 16)
print(block.offset, block.size, pool.used_bytes, pool.buffer_offset)
pool.reset()
```

- `allocate(size, align)` returns a `Block`. The block has a writable `view`,
  its `offset` into the buffer, and the `size` charged to the pool, padding
  included.
- An allocation that does not fit raises `PoolExhaustedError`, a subclass of
  `MemoryError`.
- A size or alignment of zero or less raises `ValueError`.
- `deallocate(block)` returns the space of a heap block. On a buffer pool it
  does nothing, and only `reset()` makes room again.

## What it does not do

The container does not build dependencies by itself. Every constructor argument
is given when the service is registered, often by resolving another service
first.

## Running the tests

```
pip install -e ".[test]"
pytest
```