"""
Kernel layer.

`pbcurve/kernels/python/` holds the integer-only curve kernels. The typed engine
in `pbcurve/core/` is a thin wrapper that maps kernel failures onto the curve's
error taxonomy.
"""
