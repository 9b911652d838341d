"""Bookings app package.

This app encapsulates the booking domain: the booking model, the explicit
status state machine, the overlap detector, pricing and the lifecycle
handlers that keep the per-vehicle availability ledger in step with the
booking table. Bookings are created under a row lock on the vehicle so
the availability check and the write form one critical section.
"""
