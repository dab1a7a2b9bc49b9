"""Users app package.

Defines the email-login custom user model shared by customers, sellers
and guest accounts created on the fly by bookings. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
