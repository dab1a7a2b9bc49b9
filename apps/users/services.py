"""Account provisioning used by the booking workflow."""

from __future__ import annotations

import logging
import secrets

from django.db import IntegrityError, transaction  # type: ignore

from .models import CustomUser

logger = logging.getLogger(__name__)

GUEST_PASSWORD_BYTES = 16


class AccountProvisioner:
    """Resolves a booking contact email to a principal.

    Existing accounts are matched case-insensitively on email. Unknown
    emails get a guest account with a random password that nobody knows;
    the guest can claim it later through a password reset.
    """

    def resolve(self, email: str, name: str = "") -> CustomUser:
        email = CustomUser.objects.normalize_email(email)
        user = CustomUser.objects.filter(email__iexact=email).first()
        if user is not None:
            return user
        return self._create_guest(email, name)

    def _create_guest(self, email: str, name: str) -> CustomUser:
        try:
            with transaction.atomic():
                user = CustomUser.objects.create_user(
                    email=email,
                    password=secrets.token_urlsafe(GUEST_PASSWORD_BYTES),
                    username=name[:150],
                    role=CustomUser.RoleChoices.GUEST,
                )
        except IntegrityError:
            # Another request created the same account in the meantime
            return CustomUser.objects.get(email__iexact=email)
        logger.info("Provisioned guest account %s for %s", user.pk, email)
        return user
