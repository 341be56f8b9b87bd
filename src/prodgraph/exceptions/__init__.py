"""
prodgraph exception classes.

This package provides all exception types used throughout prodgraph for
consistent error handling and reporting.
"""

from prodgraph.exceptions.core import (
    AmbiguousOrMissingSeedError,
    AmbiguousOrMultiplePathsError,
    CommandParseError,
    ErrorContext,
    LinkCycleError,
    MalformedRuleError,
    NoPathError,
    PathResolutionError,
    ProdGraphError,
    RuleLookupError,
    SelectionError,
    TrivialTargetError,
    UnknownNodeError,
)

__all__ = [
    "ProdGraphError",
    "ErrorContext",
    "MalformedRuleError",
    "UnknownNodeError",
    "LinkCycleError",
    "PathResolutionError",
    "TrivialTargetError",
    "AmbiguousOrMissingSeedError",
    "AmbiguousOrMultiplePathsError",
    "NoPathError",
    "RuleLookupError",
    "SelectionError",
    "CommandParseError",
]
