"""Dependency extraction and resolution."""

from .extractor import DependencyExtractor
from .grammar import build_dependency_regex
from .resolver import DependencyResolver

__all__ = ["DependencyExtractor", "DependencyResolver", "build_dependency_regex"]
