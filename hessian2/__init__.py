"""Hessian 2.0 scalar serialization and Dubbo header parsing."""

__version__ = "0.1.0"

__all__ = ["constants", "packing", "encoder", "decoder", "java8_time", "dubbo"]