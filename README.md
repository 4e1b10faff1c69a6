# kickframe

Building blocks for composing an application out of typed services:

- a **dependency-injection container** (`kickframe.container`) with
  singleton, lazy-singleton and transient providers;
- **modules** (`kickframe.modules`) that bundle providers, context
  contributors and sub-modules;
- **context contributors** (`kickframe.contributor`) and the
  **contributor pipeline** (`kickframe.pipeline`): async producers of
  per-request values with declared dependencies, ordered once by a
  topological sort;
- a generic **mount sort** (`kickframe.mount_sort`) for anything with a
  name and `depends_on`;
- **configuration helpers**: dotenv loading and prefixed environment
  reading (`kickframe.envfile`) and a JSON-style deep merge
  (`kickframe.merge`);
- named DI keys and scope names (`kickframe.tokens`).

The package has no third-party runtime dependencies and needs Python 3.11
or later.

## Errors

Framework failures are raised as `kickframe.errors.KickError`. It carries a
stable machine-readable `code`, a human `message`, an optional `fix_hint`,
an optional `source` exception and a `context` dict. `with_hint`,
`with_source` and `with_context` set these and return the error, so they
chain. `str(err)` is `"<code>: <message>"`.

| Code | Raised when |
| --- | --- |
| `RK_E_AMBIGUOUS_BIND` | two providers are registered for the same key |
| `RK_E_MISSING_CONTRIBUTOR` | a contributor needs a value nothing produces |
| `RK_E_CONTRIBUTOR_CYCLE` | contributor dependencies form a cycle |
| `RK_E_DUPLICATE_CONTRIBUTOR` | two contributors produce the same key |
| `RK_E_DUPLICATE_MOUNT` | two mount items share a name |
| `RK_E_MISSING_MOUNT_DEP` | a mount item depends on an unknown name |
| `RK_E_MOUNT_CYCLE` | mount dependencies form a cycle |
| `RK_C_IO` | a required dotenv file cannot be read |
| `RK_C_PARSE` | a dotenv line is not `KEY=VALUE` or has an empty key |

## The container

```python
from dataclasses import dataclass

from kickframe.container import Container


@dataclass
class Database:
    url: str


@dataclass
class Repository:
    db_url: str


container = (
    Container.builder()
    .singleton(Database("postgres://localhost"))
    .singleton_factory(Repository, lambda c: Repository(c.resolve(Database).url))
    .build()
)

repo = container.resolve(Repository)      # built once, then cached
assert repo is container.resolve(Repository)
assert container.try_resolve(int) is None
assert container.contains(Database)
```

`singleton(value)` keys the value by its type unless `key=` is given.
Singleton factories run at most once per container; transient factories
(`transient(key, factory)`) run on every `resolve`. Factories receive the
container so they can resolve other providers.

`resolve` raises `LookupError` for an unregistered key; `try_resolve`
returns `None`. Registering the same key twice makes `build()` raise
`KickError` with code `RK_E_AMBIGUOUS_BIND`.

Any hashable works as a key. To hold two bindings for one type, use a
`kickframe.tokens.Token`:

```python
from kickframe.tokens import Token

READS = Token("db/reads", Database)
WRITES = Token("db/writes", Database)

container = (
    Container.builder()
    .singleton(Database("postgres://replica"), key=READS)
    .singleton(Database("postgres://primary"), key=WRITES)
    .build()
)
```

`kickframe.tokens.Scope` names the provider lifetimes (`SINGLETON`,
`TRANSIENT`, `REQUEST`).

## Modules

```python
from kickframe.container import Container
from kickframe.modules import define_module

users = (
    define_module("users")
    .prefix("/users")
    .service_value(Database("postgres://localhost"))
    .build()
)
app = define_module("app").sub_module(users).build()

container = app.register_into(Container.builder()).build()
```

A `ModuleBuilder` offers `service_value`, `service_factory`, `transient`,
`service` (for a `kickframe.modules.ServiceImpl` subclass, whose
`build(container)` classmethod becomes a lazy singleton factory),
`contribute`, `sub_module` and `prefix`. On the built `Module`,
`provider_count()`, `provider_type_names()` and `collect_contributors()`
walk the whole sub-module tree. Conflicting providers across modules
surface at `ContainerBuilder.build()` as `RK_E_AMBIGUOUS_BIND`.

## Context contributors

A `ContextContributor` sets a `key` (what it produces) and `deps` (keys it
reads, in order), and implements `async resolve(ctx, deps)`:

```python
import asyncio
from dataclasses import dataclass

from kickframe.contributor import ContextContributor, ContributorStore, erase
from kickframe.pipeline import ContributorPipeline


@dataclass
class Tenant:
    id: int


@dataclass
class Project:
    tenant_id: int


class LoadTenant(ContextContributor):
    key = Tenant

    async def resolve(self, ctx, deps):
        return Tenant(42)


class LoadProject(ContextContributor):
    key = Project
    deps = (Tenant,)

    async def resolve(self, ctx, deps):
        (tenant,) = deps
        return Project(tenant.id)


pipeline = ContributorPipeline.build([erase(LoadProject()), erase(LoadTenant())])
store = ContributorStore()
asyncio.run(pipeline.run(store))
assert store.get(Project) == Project(42)
```

The pipeline orders contributors so every dependency runs first;
`order()` lists the produced key names in run order. Missing producers,
duplicate producers and cycles are reported when the pipeline is built.
`build_with_ambient(items, ambient)` treats the given keys as already
present in the store.

`ContributorStore(container)` attaches a container, so a contributor can
call `ctx.inject(key)` (raising `RuntimeError` when no container is
attached) or `ctx.try_inject(key)` (returning `None`).

When `resolve` raises a `KickError`, the contributor's `on_error` decides
what happens: `Propagate()` (the default) re-raises, `Skip()` leaves the
value absent, and `Recover(value)` stores a fallback.

## Mount sort

`kickframe.mount_sort.topo_sort(items)` orders any items exposing `name()`
and `depends_on()` (for example subclasses of `MountItem`) so that each
comes after everything it depends on, raising `RK_E_DUPLICATE_MOUNT`,
`RK_E_MISSING_MOUNT_DEP` or `RK_E_MOUNT_CYCLE` for a bad graph.

## Environment and dotenv

```python
from kickframe.envfile import load_dotenv, read_env_with_prefix
from kickframe.merge import deep_merge

load_dotenv(".env", optional=True)
settings = deep_merge({"port": 3000, "db": {"pool_size": "5"}}, read_env_with_prefix("APP_"))
```

`load_dotenv` reads `KEY=VALUE` lines, skips blank lines and `#` comments
(a `#` counts only at line start or after whitespace), strips one pair of
matching quotes, and sets each variable in `os.environ` unless it is
already set.

`read_env_with_prefix` keeps variables starting with the prefix, strips it,
lower-cases the rest and splits on `__` for nesting, so `APP_DB__URL`
becomes `{"db": {"url": ...}}`. All leaf values are strings.

`deep_merge(base, overlay)` merges dicts key by key, replaces lists whole,
lets any other value replace the base, and never lets `None` override.

## What this package does not do

There are no adapters or plugins with lifecycle hooks, no configuration
builder that reads TOML or JSON files or converts merged settings into
typed objects, no introspection snapshots, and no HTTP server or routing.
Settings are assembled by calling the helpers above directly.