"""Route group exports."""

from . import appointments, cache, extra_charges, health, salons, transactions

__all__ = ["appointments", "cache", "extra_charges", "health", "salons", "transactions"]
