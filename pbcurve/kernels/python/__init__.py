"""
Production Python kernels.

These modules are designed to be:
- deterministic (integer-only, bounded to the u128 domain),
- easy to audit (explicit intermediate variables),
- small surface-area (pure functions, typed results).
"""
