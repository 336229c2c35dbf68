"""
Session resolution

Every page and API call starts here:
    resolve_profile(request.user) → Profile | None

A logged-in user without a profile gets one on the spot (auto-healing):
1. Names come from the sign-up metadata (fallback: 'Usuario Nuevo')
2. provision_default_organization() picks the tenant
3. The profile is inserted once; if that fails we re-read it once,
   in case a parallel request created it first

Callers treat None as "show empty/safe data", never as an error page.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.db import DatabaseError, IntegrityError, transaction

from apps.core.models import Organization
from .models import Profile
from .schema import METADATA_FIELD_VARIANTS, canonical_row

logger = logging.getLogger(__name__)


DEFAULT_FIRST_NAME = 'Usuario'
DEFAULT_LAST_NAME = 'Nuevo'
DEFAULT_COMPANY_NAME = 'Mi Empresa'


@dataclass
class ProvisioningResult:
    organization: Optional[Organization] = None
    created: bool = False
    error: Optional[str] = None

    @property
    def success(self):
        return self.organization is not None


def provision_default_organization(user, company_name=DEFAULT_COMPANY_NAME):
    """
    Pick the organization a new profile joins

    - Any existing organization (oldest first) is used as the default tenant
    - Otherwise an organization whose id is the user's uid is created
      (get_or_create, so calling this twice never makes two rows)

    Returns:
        ProvisioningResult: organization (or None), created flag, error text
    """
    try:
        existing = Organization.objects.order_by('created_at').first()
    except DatabaseError:
        logger.warning("Could not read organizations, using the user's uid as organization id", exc_info=True)
        existing = None

    if existing is not None:
        return ProvisioningResult(organization=existing)

    try:
        with transaction.atomic():
            organization, created = Organization.objects.get_or_create(
                pk=user.uid,
                defaults={'name': company_name or DEFAULT_COMPANY_NAME},
            )
    except DatabaseError as e:
        logger.error(f"Could not provision organization for {user.email}: {e}")
        return ProvisioningResult(error=str(e))

    if created:
        logger.info(f"Created organization {organization.pk} for {user.email}")

    return ProvisioningResult(organization=organization, created=created)


def get_profile(user):
    """Existing profile of the user or None (no auto-healing)."""
    return Profile.objects.select_related('organization', 'user').filter(user_id=user.pk).first()


def resolve_profile(user):
    """
    Return the profile of the current user, creating it if missing

    Args:
        user: request.user (may be AnonymousUser or None)

    Returns:
        Profile or None (anonymous, store failure, creation failed)
    """
    if user is None or not user.is_authenticated:
        return None

    try:
        profile = get_profile(user)
    except DatabaseError:
        logger.exception(f"Error fetching profile for {user.email}")
        return None

    if profile is not None:
        return profile

    return _create_profile(user)


def _create_profile(user):
    metadata = canonical_row(user.metadata, METADATA_FIELD_VARIANTS)
    first_name = metadata.get('first_name') or user.first_name or DEFAULT_FIRST_NAME
    last_name = metadata.get('last_name') or user.last_name or DEFAULT_LAST_NAME
    company_name = metadata.get('company_name') or DEFAULT_COMPANY_NAME

    provisioning = provision_default_organization(user, company_name=company_name)
    if not provisioning.success:
        logger.error(f"No organization available for {user.email}, profile not created")
        return None

    try:
        with transaction.atomic():
            profile = Profile.objects.create(
                user=user,
                organization=provisioning.organization,
                role=Profile.ROLE_ADMIN,  # First user is Admin
                first_name=first_name,
                last_name=last_name,
            )
    except IntegrityError:
        logger.warning(f"Profile for {user.email} already exists, re-reading it")
        return _refetch_profile(user)
    except DatabaseError:
        logger.exception(f"Error creating profile for {user.email}")
        return _refetch_profile(user)

    logger.info(f"Created profile for {user.email} in organization {provisioning.organization.pk}")
    return profile


def _refetch_profile(user):
    try:
        profile = get_profile(user)
    except DatabaseError:
        logger.exception(f"Error re-reading profile for {user.email}")
        return None

    if profile is None:
        logger.error(f"Could not create or retrieve profile for {user.email}")
    return profile
