"""Pipeline orchestration for feed builds."""

from .models import PipelineRunResult
from .runner import FeedPipeline

__all__ = ["FeedPipeline", "PipelineRunResult"]
