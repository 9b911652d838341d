"""Vehicles app package.

Cars and trucks share a concrete `Vehicle` base so that bookings and the
per-vehicle availability ledger can reference either kind through one
foreign key. The ledger (`AvailabilityPeriod`) stores operator-declared
open windows, manual blocks and the blocks owned by bookings.
"""
