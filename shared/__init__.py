"""
Shared Kernel

Base classes and utilities shared across the locations, vehicles and
bookings apps: value objects, the error taxonomy, the unit of work and
the message bus.
"""
