from django.contrib import admin

from .models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['title', 'due_date', 'status', 'type', 'priority', 'prospect', 'organization', 'created_by']
    list_filter = ['status', 'type', 'priority', 'organization', 'due_date']
    search_fields = ['title', 'description', 'prospect__name']
    list_select_related = ['prospect', 'organization', 'created_by']
    readonly_fields = ['id', 'created_at', 'updated_at']
    date_hierarchy = 'due_date'
    actions = ['mark_completed']

    @admin.action(description='Mark selected tasks as completed')
    def mark_completed(self, request, queryset):
        updated = queryset.update(status=Task.STATUS_COMPLETED)
        self.message_user(request, f'{updated} task(s) marked as completed')
