from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _
from django.utils.html import format_html
from .models import User, Profile


# PROFILE INLINE (Edit profile inside user form)
class ProfileInline(admin.StackedInline):

    model = Profile

    # Show only 1 profile (since it's OneToOne relationship)
    can_delete = False
    verbose_name = _('Profile')
    verbose_name_plural = _('Profile')

    fk_name = "user"
    extra = 0
    max_num = 1

    fields = ('organization', 'role', 'first_name', 'last_name', 'created_at')
    readonly_fields = ('created_at',)

    def get_readonly_fields(self, request, obj=None):
        # Organization is fixed once the profile exists
        if obj is not None and hasattr(obj, 'profile'):
            return self.readonly_fields + ('organization',)
        return self.readonly_fields


# CUSTOM USER ADMIN
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = (
        'email',
        'get_full_name',
        'organization_display',
        'role_badge',
        'is_active',
        'date_joined',
    )

    list_display_links = ('email', 'get_full_name')

    list_filter = (
        'is_active',
        'is_staff',
        'is_superuser',
        'profile__role',
        'date_joined',
    )
    search_fields = (
        'email',
        'first_name',
        'last_name',
        'phone',
    )
    ordering = ('-date_joined',)

    fieldsets = (
        (None, {'fields': ('email', 'password', 'uid')}),
        (_('Personal Information'), {'fields': ('first_name', 'last_name', 'phone')}),
        (_('Sign-up metadata'), {'fields': ('metadata',), 'classes': ('collapse',)}),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        (_('Important Dates'), {'fields': ('last_login', 'date_joined', 'updated_at')}),
    )

    # Fieldsets for "Add User" form
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'first_name', 'last_name', 'password1', 'password2'),
        }),
    )

    readonly_fields = ('uid', 'last_login', 'date_joined', 'updated_at')
    inlines = [ProfileInline]

    def organization_display(self, obj):
        profile = getattr(obj, 'profile', None)
        return profile.organization if profile else '-'
    organization_display.short_description = _('Organization')

    def role_badge(self, obj):
        profile = getattr(obj, 'profile', None)
        if profile is None:
            return '-'
        color = '#dc3545' if profile.is_elevated else '#17a2b8'
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; border-radius: 3px;">{}</span>',
            color,
            profile.get_role_display()
        )
    role_badge.short_description = _('Role')


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'organization', 'role', 'first_name', 'last_name', 'created_at')
    list_filter = ('role', 'organization')
    search_fields = ('user__email', 'first_name', 'last_name')
    list_select_related = ('user', 'organization')
    readonly_fields = ('created_at',)

    def get_readonly_fields(self, request, obj=None):
        # Organization is fixed once the profile exists
        if obj is not None:
            return self.readonly_fields + ('organization',)
        return self.readonly_fields
