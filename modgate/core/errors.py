"""
modgate errors — fatal conditions that stop an evaluation.

Rule violations are never raised; they are collected into the Report.
"""

from __future__ import annotations


class ModgateError(Exception):
    """Base class for all fatal modgate errors."""


class CheckfileSchemaError(ModgateError):
    """The checkfile is malformed, has unknown keys, or asks for an unsupported check."""


class ModuleFactError(ModgateError):
    """A check needs a fact that the module's fact sheet does not carry."""


class RemoteCheckfileError(ModgateError):
    """The checkfile referenced by `url` could not be fetched."""


class ConfigurationError(ModgateError):
    """A setting read from the environment is invalid."""
