"""
Foundation layer: backend kernels for the quadratic ranking operations.
"""

from __future__ import annotations

from .backend import KernelBackend
from .numpy_backend import NumPyKernel
from .registry import KERNELS, resolve_kernel

__all__ = ["KERNELS", "KernelBackend", "NumPyKernel", "resolve_kernel"]
