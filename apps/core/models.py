import uuid

from django.db import models


class Organization(models.Model):
    """
    Tenant bucket: every prospect, task, interaction and property row
    carries an organization reference and is only visible inside it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Basic Information
    name = models.CharField(max_length=200, help_text="Company name (e.g. Mi Empresa)")

    # Status
    is_active = models.BooleanField(default=True, help_text="Is organization active?")

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Organization"
        verbose_name_plural = "Organizations"
        ordering = ['created_at']

    def __str__(self):
        return self.name

    def get_members_count(self):

        return self.profiles.count()

    def get_admins_count(self):

        return self.profiles.filter(role='Admin').count()
