"""Services wrapping the external tools driven by nativecheck."""

from .process import ProcessRunner

__all__ = ["ProcessRunner"]
