"""
volfee: volatility-driven dynamic fees for exchange pools.

- `volfee.core`: fixed-point math, the sigmoid fee curve, oracle contract.
- `volfee.state`: per-pool market data registrations and pool keys.
- `volfee.integration`: the host-facing registry, feed adapters, config.
"""
