import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class Prospect(models.Model):
    """
    Sales lead moving through the pipeline

    Status is free text: the Kanban only knows the three PIPELINE
    stages, the prospect table also uses 'Fase inicial' / 'Fase avanzada'.
    """

    # Kanban stages (exact strings)
    STATUS_INITIAL = 'Fase Inicial'
    STATUS_IN_PROGRESS = 'En proceso'
    STATUS_CLOSING = 'Fase de cierre'

    # Prospect table stages
    STATUS_TABLE_INITIAL = 'Fase inicial'
    STATUS_TABLE_ADVANCED = 'Fase avanzada'

    STATUS_CHOICES = [
        (STATUS_INITIAL, 'Fase Inicial'),
        (STATUS_IN_PROGRESS, 'En proceso'),
        (STATUS_CLOSING, 'Fase de cierre'),
        (STATUS_TABLE_INITIAL, 'Fase inicial'),
        (STATUS_TABLE_ADVANCED, 'Fase avanzada'),
    ]

    SUBSTATUS_CHOICES = [
        ('Primer contacto', 'Primer contacto'),
        ('Seguimiento', 'Seguimiento'),
        ('Visita programada', 'Visita programada'),
        ('Negociación', 'Negociación'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Basic Information
    organization = models.ForeignKey('core.Organization', on_delete=models.CASCADE, related_name='prospects',
                                     help_text='Which organization owns this prospect')
    name = models.CharField(max_length=200, help_text="Prospect's full name")
    email = models.EmailField(blank=True, null=True)
    phone = models.CharField(max_length=30, blank=True, null=True)
    location = models.CharField(max_length=200, blank=True, null=True, help_text='Free text, e.g. "Madrid, España"')

    # Pipeline
    score = models.FloatField(null=True, blank=True, db_index=True, help_text='Urgency score 0-100')
    status = models.CharField(max_length=50, default=STATUS_TABLE_INITIAL, db_index=True)
    substatus = models.CharField(max_length=50, blank=True, null=True)

    # Ownership
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='prospects', help_text='Agent who owns this prospect')

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Prospect'
        verbose_name_plural = 'Prospects'
        ordering = ['-score', '-created_at']
        indexes = [
            models.Index(fields=['organization', 'status'], name='prospect_org_status_idx'),
            models.Index(fields=['organization', 'created_by'], name='prospect_org_owner_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.status})"


class Interaction(models.Model):

    TYPE_CHOICES = [
        ('Llamada', 'Llamada'),
        ('Email', 'Email'),
        ('WhatsApp', 'WhatsApp'),
        ('Visita', 'Visita'),
        ('Reunión', 'Reunión'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey('core.Organization', on_delete=models.CASCADE, related_name='interactions')
    prospect = models.ForeignKey(Prospect, on_delete=models.CASCADE, related_name='interactions')
    type = models.CharField(max_length=50, blank=True, null=True)
    impact = models.FloatField(null=True, blank=True, help_text='Impact on the score, 0-100')
    cta = models.CharField(max_length=255, blank=True, null=True, help_text='Suggested next action')
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='interactions')
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        verbose_name = 'Interaction'
        verbose_name_plural = 'Interactions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['prospect', '-created_at'], name='interaction_prospect_idx'),
        ]

    def __str__(self):
        return f"{self.type or 'Sin tipo'} - {self.prospect.name}"


class Property(models.Model):
    """Real-estate listing; 'Vendida' + closed_at feed the dashboard."""

    STATUS_AVAILABLE = 'Disponible'
    STATUS_RESERVED = 'Reservada'
    STATUS_SOLD = 'Vendida'

    STATUS_CHOICES = [
        (STATUS_AVAILABLE, 'Disponible'),
        (STATUS_RESERVED, 'Reservada'),
        (STATUS_SOLD, 'Vendida'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey('core.Organization', on_delete=models.CASCADE, related_name='properties')
    title = models.CharField(max_length=200)
    address = models.CharField(max_length=255, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_AVAILABLE, db_index=True)
    closed_at = models.DateField(null=True, blank=True, help_text='Date the sale was closed')
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='properties')
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = 'Property'
        verbose_name_plural = 'Properties'
        ordering = ['-created_at']

    def __str__(self):
        return self.title
