from django.contrib import admin
from django.utils.html import format_html
from .models import Organization


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):

    list_display = [
        'name',
        'status_badge',
        'members_count',
        'admins_count',
        'created_at'
    ]
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'id']
    readonly_fields = ['id', 'created_at', 'updated_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('id', 'name')
        }),
        ('Status', {
            'fields': ('is_active',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def status_badge(self, obj):
        color = '#28a745' if obj.is_active else '#6c757d'
        label = 'Active' if obj.is_active else 'Inactive'
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; border-radius: 3px;">{}</span>',
            color,
            label
        )

    status_badge.short_description = 'Status'

    def members_count(self, obj):
        return obj.get_members_count()

    members_count.short_description = 'Members'

    def admins_count(self, obj):
        return obj.get_admins_count()

    admins_count.short_description = 'Admins'
