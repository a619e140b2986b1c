from .pipeline import (
    BuildContext,
    BuildPipeline,
    BuildPipelineResult,
    BuildState,
    BuildStep,
    PipelineState,
    default_pipeline,
)

__all__ = [
    "BuildContext",
    "BuildPipeline",
    "BuildPipelineResult",
    "BuildState",
    "BuildStep",
    "PipelineState",
    "default_pipeline",
]
