import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class Task(models.Model):
    """Follow-up work item, optionally linked to a prospect"""

    STATUS_PENDING = 'Pendiente'
    STATUS_IN_PROGRESS = 'En curso'
    STATUS_COMPLETED = 'Completada'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pendiente'),
        (STATUS_IN_PROGRESS, 'En curso'),
        (STATUS_COMPLETED, 'Completada'),
    ]

    TYPE_CALL = 'Llamada'

    TYPE_CHOICES = [
        (TYPE_CALL, 'Llamada'),
        ('Email', 'Email'),
        ('Visita', 'Visita'),
        ('Reunión', 'Reunión'),
        ('WhatsApp', 'WhatsApp'),
    ]

    PRIORITY_HIGH = 'Alta'
    PRIORITY_MEDIUM = 'Media'
    PRIORITY_LOW = 'Baja'

    PRIORITY_CHOICES = [
        (PRIORITY_HIGH, 'Alta'),
        (PRIORITY_MEDIUM, 'Media'),
        (PRIORITY_LOW, 'Baja'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey('core.Organization', on_delete=models.CASCADE, related_name='tasks')

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    due_date = models.DateField(null=True, blank=True, db_index=True)
    status = models.CharField(max_length=30, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    type = models.CharField(max_length=30, choices=TYPE_CHOICES, blank=True, null=True)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, blank=True, null=True)

    prospect = models.ForeignKey('prospects.Prospect', on_delete=models.SET_NULL, null=True, blank=True,
                                 related_name='tasks')
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='tasks', help_text='Agent who owns this task')

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Task'
        verbose_name_plural = 'Tasks'
        ordering = ['due_date', '-created_at']
        indexes = [
            models.Index(fields=['organization', 'status'], name='task_org_status_idx'),
            models.Index(fields=['organization', 'due_date'], name='task_org_due_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.status})"

    def is_completed(self):
        return self.status == self.STATUS_COMPLETED

    def is_overdue(self):
        return bool(self.due_date) and not self.is_completed() and self.due_date < timezone.localdate()
