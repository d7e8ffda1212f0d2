"""Runtime module for accessor synthesis and the builder entry point."""

from lazy_resources.runtime.accessor import (
    AccessorSynthesizer,
    ResourceAccessor,
    describe_shape,
)
from lazy_resources.runtime.builder import ResourceBuilder

__all__ = ["AccessorSynthesizer", "ResourceAccessor", "ResourceBuilder", "describe_shape"]
