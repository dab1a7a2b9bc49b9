"""
Shared Kernel

Base classes and utilities shared by the products and bookings contexts:
value objects and the transactional unit of work.
"""
