"""Pipelines wiring agents, validator and store into end-to-end runs.

Pipelines:
- ClaimGenerationPipeline: feeds -> facts -> claim pairs -> store
"""

from newsquiz_system.pipelines.generation_pipeline import (
    ClaimGenerationPipeline,
    GenerationResult,
    RunStage,
)

__all__ = [
    "ClaimGenerationPipeline",
    "GenerationResult",
    "RunStage",
]
