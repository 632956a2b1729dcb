"""Stage executors, one per operation kind."""

from .base import Stage, StageContext
from .data import DataStage
from .directives import IgnoreStage, LayoutStage, MetadataStage
from .generation import GenerateStage
from .queries import QueryStage
from .transforms import TransformAllStage, TransformStage

# Fixed execution order of a run
DEFAULT_STAGES: tuple[Stage, ...] = (
    DataStage(),
    IgnoreStage(),
    MetadataStage(),
    LayoutStage(),
    QueryStage(),
    TransformStage(),
    TransformAllStage(),
    GenerateStage(),
)

__all__ = [
    "DEFAULT_STAGES",
    "DataStage",
    "GenerateStage",
    "IgnoreStage",
    "LayoutStage",
    "MetadataStage",
    "QueryStage",
    "Stage",
    "StageContext",
    "TransformAllStage",
    "TransformStage",
]
