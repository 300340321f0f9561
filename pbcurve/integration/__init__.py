"""
Boundary layer for callers that cannot hold u128 natively.

- `codec`: lossless base-10 string encoding of u128 amounts.
- `operations`: JSON-shaped request dispatch returning boxed results.
"""
