"""
nativecheck: Build-and-test orchestration for native C/C++ projects.

Regenerates derived sources, configures and compiles the project with CMake,
runs the optional clang-tidy lint pass and then both test binaries, stopping
at the first step that fails.
"""

__version__ = "1.0.0"
__author__ = "nativecheck Team"
