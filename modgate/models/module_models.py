"""
Module Fact Models — The read-only fact sheet describing one binary module.

These models are the output of the external module extractor and the input to
the policy engine, the checkfile generator and the differ.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ValType(str, Enum):
    """Primitive and reference value kinds appearing in function signatures."""

    I32 = "i32"
    I64 = "i64"
    F32 = "f32"
    F64 = "f64"
    V128 = "v128"
    FUNC_REF = "funcref"
    EXTERN_REF = "externref"
    # Component model scalars
    BOOL = "bool"
    S8 = "s8"
    U8 = "u8"
    S16 = "s16"
    U16 = "u16"
    S32 = "s32"
    U32 = "u32"
    S64 = "s64"
    U64 = "u64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    CHAR = "char"
    STRING = "string"

    @classmethod
    def _missing_(cls, value):
        # Older checkfiles spell types capitalized: I32, FuncRef, ExternRef
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class SourceLanguage(str, Enum):
    UNKNOWN = "Unknown"
    RUST = "Rust"
    GO = "Go"
    C = "C"
    CPP = "C++"
    ASSEMBLY_SCRIPT = "AssemblyScript"


class FunctionType(BaseModel):
    """Parameter and result types of a function."""

    model_config = ConfigDict(frozen=True)

    params: tuple[ValType, ...] = ()
    results: tuple[ValType, ...] = ()


class Function(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    signature: FunctionType = Field(default_factory=FunctionType)


class Import(BaseModel):
    """A function imported from a namespace (the import's module name)."""

    model_config = ConfigDict(frozen=True)

    namespace: str
    function: Function


class Export(BaseModel):
    model_config = ConfigDict(frozen=True)

    function: Function


class Module(BaseModel):
    """Immutable snapshot of one binary module as seen by the extractor."""

    model_config = ConfigDict(frozen=True)

    hash: str = Field(..., description="Content digest of the module bytes")
    imports: tuple[Import, ...] = ()
    exports: tuple[Export, ...] = ()
    size: int = Field(default=0, ge=0, description="Module size in bytes")
    complexity: int | None = Field(
        default=None, ge=0, description="Cyclomatic complexity, absent if unknown"
    )
    location: str = ""
    source_language: SourceLanguage = SourceLanguage.UNKNOWN
    metadata: dict[str, str] | None = None
    strings: tuple[str, ...] = ()

    def get_import_namespaces(self) -> list[str]:
        """Distinct namespaces this module imports functions from, sorted."""
        return sorted({imp.namespace for imp in self.imports})
