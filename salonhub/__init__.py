"""SalonHub: multi-tenant salon booking backend."""

__version__ = "0.1.0"
