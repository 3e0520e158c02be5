# -*- coding: utf-8 -*-
"""
Tincta: Typed color encodings and exact conversions between them
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Runtime Configuration
=====================
Process-wide switches for the Numba kernels behind every conversion.

Strict IEEE mode is the default here: the conversion contract requires
NaN / inf inputs to propagate through the transfer curves unchanged, which
``fastmath=True`` kernels do not guarantee.  Fast mode can still be enabled
for throughput-bound batch work on data known to be finite.

Toggle at runtime via:
    import tincta_config as cfg
    cfg.set_strict_ieee(False)  # fast-math transfer kernels
    cfg.set_num_threads(4)      # cap the bulk conversion thread pool
"""

import logging
import warnings

import numba

__all__ = [
    "set_strict_ieee",
    "is_strict_ieee",
    "set_num_threads",
    "get_num_threads",
]

_log = logging.getLogger(__name__)

# When True, transfer-function kernels use fastmath=False variants that
# preserve strict IEEE 754 semantics (inf / NaN propagation, no FP
# reassociation).
_STRICT_IEEE: bool = True


def set_strict_ieee(enabled: bool = True) -> None:
    """
    Toggle between strict IEEE 754 (default) and fast-math Numba kernels.

    When ``enabled=False``, transfer-function kernels are compiled with
    ``fastmath=True``.  They are measurably faster on large buffers, but
    non-finite inputs may no longer propagate.

    Args:
        enabled: If True, use strict IEEE mode.
    """
    global _STRICT_IEEE
    _STRICT_IEEE = bool(enabled)
    if not _STRICT_IEEE:
        warnings.warn(
            "Fast-math transfer kernels enabled; NaN and inf inputs are no "
            "longer guaranteed to propagate through conversions.",
            RuntimeWarning,
            stacklevel=2,
        )
    _log.debug("Strict IEEE kernels %s", "enabled" if _STRICT_IEEE else "disabled")


def is_strict_ieee() -> bool:
    """Returns True when strict IEEE 754 kernels are active."""
    return _STRICT_IEEE


def set_num_threads(n: int) -> None:
    """
    Sets the number of threads used by the parallel bulk-conversion kernels.

    Args:
        n: Thread count, between 1 and ``numba.config.NUMBA_NUM_THREADS``.

    Raises:
        ValueError: If ``n`` is outside the range supported by the Numba
            thread pool.
    """
    limit = numba.config.NUMBA_NUM_THREADS
    if not 1 <= int(n) <= limit:
        raise ValueError(f"Thread count must be between 1 and {limit}, got {n}")
    numba.set_num_threads(int(n))
    _log.debug("Numba thread pool set to %d threads", int(n))


def get_num_threads() -> int:
    """Returns the number of threads the bulk-conversion kernels will use."""
    return int(numba.get_num_threads())
