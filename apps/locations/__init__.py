"""Locations app package.

Pickup and drop-off points where cars and trucks are stationed.
"""
