"""
Multi-tenant / RBAC scoping for every query

- Admin profiles: see every row of their organization
- Agent profiles: see only the rows they created inside their organization

The same scope is applied before reads and before writes; there is no
separate authorization layer.
"""


class TenantScope:
    """Query constraint derived from a resolved profile."""

    def __init__(self, organization_id, owner_id=None):
        self.organization_id = organization_id
        self.owner_id = owner_id

    def __repr__(self):
        return f"TenantScope(organization_id={self.organization_id!r}, owner_id={self.owner_id!r})"

    def __eq__(self, other):
        if not isinstance(other, TenantScope):
            return NotImplemented
        return (self.organization_id, self.owner_id) == (other.organization_id, other.owner_id)

    @property
    def restricted_to_owner(self):
        return self.owner_id is not None

    def as_filter(self):
        """
        Keyword arguments for QuerySet.filter()

        Example:
            {'organization_id': UUID('...'), 'created_by_id': 7}
        """
        lookup = {'organization_id': self.organization_id}
        if self.restricted_to_owner:
            lookup['created_by_id'] = self.owner_id
        return lookup

    def apply(self, queryset):
        return queryset.filter(**self.as_filter())


def build_tenant_scope(profile):
    """
    Build the scope for a profile

    Args:
        profile (Profile): Resolved profile of the current user

    Returns:
        TenantScope: organization always, owner only for non-admins
    """
    if profile.is_elevated:
        return TenantScope(profile.organization_id)
    return TenantScope(profile.organization_id, owner_id=profile.user_id)
