"""Products app package.

Rooms listed by sellers. Each product carries a stock of interchangeable
bookable units; the inventory store in ``inventory.py`` is the only code
allowed to change that stock, and only while holding the product row lock.
"""
