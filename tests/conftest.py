"""
Test fixtures shared across all modgate tests.
"""

import pytest

from modgate.models.module_models import Export, Function, FunctionType, Import, Module


def _fn(name, params=(), results=()):
    return Function(name=name, signature=FunctionType(params=params, results=results))


@pytest.fixture
def make_module():
    """Build a fact sheet from (namespace, name, params, results) / (name, params, results) tuples."""

    def build(imports=(), exports=(), size=1024, complexity=None, hash="sha256:test"):
        return Module(
            hash=hash,
            imports=[Import(namespace=ns, function=_fn(name, p, r)) for ns, name, p, r in imports],
            exports=[Export(function=_fn(name, p, r)) for name, p, r in exports],
            size=size,
            complexity=complexity,
        )

    return build


@pytest.fixture
def sample_module(make_module):
    """A typical module: env + WASI imports, two exports, ~1.9 MiB, low complexity."""
    return make_module(
        imports=[
            ("env", "abort", ["i32", "i32", "i32", "i32"], []),
            ("env", "log", ["i32"], []),
            ("wasi_snapshot_preview1", "fd_write", ["i32", "i32", "i32", "i32"], ["i32"]),
        ],
        exports=[
            ("_start", [], []),
            ("alloc", ["i32"], ["i32"]),
        ],
        size=2_000_000,
        complexity=1200,
        hash="sha256:sample",
    )


@pytest.fixture
def plain_module(make_module):
    """A module without WASI and without a complexity score."""
    return make_module(
        imports=[("env", "host_call", ["i64"], ["i64"])],
        exports=[("run", [], ["i32"])],
        size=4096,
        hash="sha256:plain",
    )


@pytest.fixture
def module_file(tmp_path):
    """Write a fact sheet to disk as the extractor would and return its path."""

    def write(module, name="facts.json"):
        path = tmp_path / name
        path.write_text(module.model_dump_json())
        return str(path)

    return write
