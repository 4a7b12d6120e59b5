"""
Kernel backend registry.

Maps backend names to kernel factories so selection code can resolve kernels
without hard-coding if/elif chains. The numba backend relies on an optional
dependency and is lazy-loaded so `import moselect` stays safe on a minimal install.
"""

from __future__ import annotations

from collections.abc import Callable
from importlib import import_module
from typing import cast

from moselect.foundation.exceptions import InvalidEngineError
from moselect.foundation.registry import Registry

from .backend import KernelBackend
from .numpy_backend import NumPyKernel


def _load_numba() -> KernelBackend:
    try:
        module = import_module("moselect.foundation.kernel.numba_backend")
        return cast(KernelBackend, module.NumbaKernel())
    except ImportError as exc:
        raise ImportError(
            "Kernel 'numba' requires the [compute] extra (numba>=0.57). Install with `pip install -e \".[compute]\"`."
        ) from exc


KERNELS: Registry[Callable[[], KernelBackend]] = Registry("kernels")
KERNELS.register("numpy", NumPyKernel)
KERNELS.register("numba", _load_numba)


def resolve_kernel(name: str | KernelBackend | None) -> KernelBackend:
    """Return a kernel instance for ``name``; instances pass through, None means numpy."""
    if name is None:
        return NumPyKernel()
    if isinstance(name, KernelBackend):
        return name
    if name not in KERNELS:
        raise InvalidEngineError(name, available=KERNELS.list())
    return KERNELS.get(name)()


__all__ = ["KERNELS", "resolve_kernel"]
