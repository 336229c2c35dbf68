# Models:
# 1. User - Custom user model (the login identity)
# 2. Profile - Tenant membership and role (created lazily on first request)

import uuid

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _



# USER MANAGER (handles user creation)
class UserManager(BaseUserManager):
    """
    Custom user manager for User model

    Provides methods to:
    - Create regular users
    - Create superusers (admins)
    - Handle email-based authentication
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a regular user

        Args:
            email (str): User's email address (required)
            password (str): User's password (required)
            **extra_fields: Additional fields (first_name, metadata, etc.)

        Returns:
            User: The created user object

        Raises:
            ValueError: If email is not provided

        Example:
            user = User.objects.create_user(
                email='ana@inmobiliaria.es',
                password='securepass123',
                first_name='Ana',
                last_name='García',
                metadata={'company_name': 'Inmobiliaria Sol'}
            )
        """
        if not email:
            raise ValueError(_('Users must have an email address'))

        email = self.normalize_email(email)

        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True'))

        return self.create_user(email, password, **extra_fields)


# USER MODEL
class User(AbstractBaseUser, PermissionsMixin):
    """
    Login identity

    Features:
    - Email-based authentication (no username)
    - Opaque unique id (uid) used as identity reference
    - Sign-up metadata (names, phone, city, country, company name)

    Tenant membership and role live on Profile, not here.
    """

    uid = models.UUIDField(_('unique id'), default=uuid.uuid4, unique=True, editable=False,
                           help_text=_('Opaque identity id (also used as fallback organization id)'))
    email = models.EmailField(_('email address'), unique=True, max_length=255, help_text=_('Required. Used for login.'))
    first_name = models.CharField(_('first name'), max_length=50, blank=True)
    last_name = models.CharField(_('last name'), max_length=50, blank=True)
    phone = models.CharField(_('phone number'), max_length=20, blank=True)

    # Raw sign-up data; keys may come in snake_case or camelCase
    metadata = models.JSONField(_('metadata'), default=dict, blank=True,
                                help_text=_('Sign-up data: first_name, last_name, phone, city, country, company_name'))

    is_active = models.BooleanField(_('active'), default=True)
    is_staff = models.BooleanField(_('staff status'), default=False, help_text=_('Designates whether the user can log into admin site.'))
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    # MANAGER & SETTINGS
    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-date_joined']

    def __str__(self):
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name} ({self.email})"
        return self.email

    def get_full_name(self):
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        elif self.first_name:
            return self.first_name
        return self.email

    def get_short_name(self):

        return self.first_name if self.first_name else self.email


# PROFILE MODEL (tenant membership + role)
class Profile(models.Model):
    """
    Account of a user inside an organization

    Created on the first request of a new user (see services.resolve_profile).
    The organization never changes once the profile exists.

    Roles:
    - Admin: sees every row of the organization
    - Agente: sees only the rows they created
    """

    ROLE_ADMIN = 'Admin'
    ROLE_AGENT = 'Agente'
    ROLE_CHOICES = [
        (ROLE_ADMIN, _('Administrador')),
        (ROLE_AGENT, _('Agente')),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile', verbose_name=_('user'))
    organization = models.ForeignKey('core.Organization', on_delete=models.PROTECT, related_name='profiles',
                                     verbose_name=_('organization'))
    role = models.CharField(_('role'), max_length=20, choices=ROLE_CHOICES, default=ROLE_AGENT, db_index=True)
    first_name = models.CharField(_('first name'), max_length=50, blank=True)
    last_name = models.CharField(_('last name'), max_length=50, blank=True)
    created_at = models.DateTimeField(_('created at'), default=timezone.now)

    class Meta:
        verbose_name = _('profile')
        verbose_name_plural = _('profiles')
        ordering = ['created_at']

    def __str__(self):
        return f"{self.get_full_name()} ({self.role})"

    def _check_organization_unchanged(self):
        # Organization is fixed at creation; there is no move/merge path
        if self._state.adding:
            return
        stored = Profile.objects.filter(pk=self.pk).values_list('organization_id', flat=True).first()
        if stored is not None and stored != self.organization_id:
            raise ValidationError({'organization': _('Profile organization cannot be changed')})

    def clean(self):
        super().clean()
        self._check_organization_unchanged()

    def save(self, *args, **kwargs):
        self._check_organization_unchanged()
        super().save(*args, **kwargs)

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}".strip() or self.user.email

    @property
    def is_elevated(self):
        return self.role == self.ROLE_ADMIN
