"""Join pipeline stages: protocols and built-in implementations.

Every stage is independently replaceable. Built-ins are registered with the
StageManager under their ``kind`` and ``name``.
"""

from joindata.core.paths import PathResolver
from joindata.stages.protocols import (
    FieldValidatorProtocol,
    FromStandardizerProtocol,
    JoinEngineProtocol,
    LocalStandardizerProtocol,
    PathResolverProtocol,
    ResultAssemblerProtocol,
    StageProtocol,
    ValueGeneratorProtocol,
)
from joindata.stages.results import DetailedResultAssembler, ResultAssembler
from joindata.stages.standardize import FromStandardizer, LocalStandardizer, ShadowCloneLocalStandardizer
from joindata.stages.validation import FieldValidator
from joindata.stages.values import ValueGenerator

BUILTIN_STAGES: tuple[type, ...] = (
    PathResolver,
    FieldValidator,
    LocalStandardizer,
    ShadowCloneLocalStandardizer,
    FromStandardizer,
    ValueGenerator,
    ResultAssembler,
    DetailedResultAssembler,
)

__all__ = [
    # Protocols
    "FieldValidatorProtocol",
    "FromStandardizerProtocol",
    "JoinEngineProtocol",
    "LocalStandardizerProtocol",
    "PathResolverProtocol",
    "ResultAssemblerProtocol",
    "StageProtocol",
    "ValueGeneratorProtocol",
    # Built-ins
    "BUILTIN_STAGES",
    "DetailedResultAssembler",
    "FieldValidator",
    "FromStandardizer",
    "LocalStandardizer",
    "PathResolver",
    "ResultAssembler",
    "ShadowCloneLocalStandardizer",
    "ValueGenerator",
]
