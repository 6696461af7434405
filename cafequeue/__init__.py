"""Order queue package for SMART coffee-shop dispatch.

Modules:
- config: load and validate configuration (YAML or JSON)
- domain: drink/customer catalogue, orders and baristas
- services: priority scoring, workload balancing, arrivals, analytics
- engine: FIFO/SMART policies, live order queue, shop orchestrator, rush-hour simulator
- io: configuration re-export and CSV export
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "domain",
    "services",
    "engine",
    "io",
    "cli",
]
