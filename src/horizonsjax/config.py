"""Module-wide floating-point precision configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
for converted positions throughout horizonsjax.  The default is
``jnp.float64``, which keeps converted unit vectors within 1e-9 of unit
length; importing horizonsjax therefore enables JAX's 64-bit mode
(``jax_enable_x64``).  Lower precisions can be selected for throughput
when that tolerance is not needed.

Call ``set_dtype`` **before** any JIT compilation of the coordinate
helpers.  Under JIT, ``get_dtype()`` runs during tracing and its result is
baked into the compiled program.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

DEFAULT_DTYPE = jnp.float64
"""Float dtype in effect until ``set_dtype`` is called."""

jax.config.update("jax_enable_x64", True)
_dtype = DEFAULT_DTYPE


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for horizonsjax.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is (re-)enabled via
    ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype
