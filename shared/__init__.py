"""
Shared Kernel

Base classes and utilities shared across the yacht club apps:
value objects, domain events and the transaction-aware event publishing.
"""
