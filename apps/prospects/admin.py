from django.contrib import admin
from django.utils.html import format_html

from .models import Interaction, Property, Prospect


class InteractionInline(admin.TabularInline):
    model = Interaction
    extra = 0
    fields = ('type', 'impact', 'cta', 'created_by', 'created_at')
    readonly_fields = ('created_at',)
    ordering = ('-created_at',)


@admin.register(Prospect)
class ProspectAdmin(admin.ModelAdmin):

    list_display = [
        'name',
        'email',
        'phone',
        'score_badge',
        'status',
        'substatus',
        'organization',
        'created_by',
        'created_at'
    ]
    list_filter = ['status', 'substatus', 'organization', 'created_at']
    search_fields = ['name', 'email', 'phone', 'location']
    list_select_related = ['organization', 'created_by']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [InteractionInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('id', 'name', 'email', 'phone', 'location')
        }),
        ('Pipeline', {
            'fields': ('score', 'status', 'substatus')
        }),
        ('Ownership', {
            'fields': ('organization', 'created_by')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def score_badge(self, obj):
        score = obj.score or 0
        if score >= 70:
            color = '#dc3545'
        elif score >= 40:
            color = '#ffc107'
        else:
            color = '#6c757d'
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; border-radius: 3px;">{}</span>',
            color,
            round(score, 1)
        )

    score_badge.short_description = 'Score'
    score_badge.admin_order_field = 'score'


@admin.register(Interaction)
class InteractionAdmin(admin.ModelAdmin):
    list_display = ['prospect', 'type', 'impact', 'cta', 'organization', 'created_at']
    list_filter = ['type', 'organization', 'created_at']
    search_fields = ['prospect__name', 'cta']
    list_select_related = ['prospect', 'organization']
    date_hierarchy = 'created_at'


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ['title', 'address', 'status', 'closed_at', 'organization', 'created_by']
    list_filter = ['status', 'organization', 'closed_at']
    search_fields = ['title', 'address']
    list_select_related = ['organization', 'created_by']
