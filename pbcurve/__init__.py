"""
pbcurve: deterministic pricing engine for a virtual-reserve bonding-curve sale.
"""
