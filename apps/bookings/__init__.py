"""Bookings app package.

This app encapsulates the booking domain: the booking model, the interval
index used to detect double bookings and the transaction manager that
combines the product stock lock, the overlap check and the booking write
into one atomic unit of work.
"""
