"""Pipeline module for preparing evidence-backed civic queries."""

from civic_evidence.pipeline.base import Pipeline, PipelineResult
from civic_evidence.pipeline.evidence import EvidencePipeline

__all__ = [
    "EvidencePipeline",
    "Pipeline",
    "PipelineResult",
]
