"""Emoji list generator pipeline package."""
from .processing import run_pipeline
from .local_testing import run_local_pipeline

__all__ = ['run_pipeline', 'run_local_pipeline']
