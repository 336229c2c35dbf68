"""
Field-name translation for rows coming from outside the ORM

Sign-up metadata and rows exported from the old hosted store did not
always use the same keys (e.g. 'role' vs 'rol', 'first_name' vs
'firstName'). Everything is translated here into one canonical shape
before it reaches the models.
"""

# canonical name → every spelling seen so far (canonical first)
PROFILE_FIELD_VARIANTS = {
    'id': ('id',),
    'user_id': ('user_id', 'userId'),
    'organization_id': ('enterprise_id', 'organization_id', 'enterpriseId'),
    'role': ('role', 'rol'),
    'first_name': ('first_name', 'firstName'),
    'last_name': ('last_name', 'lastName'),
    'created_at': ('created_at', 'createdAt'),
}

METADATA_FIELD_VARIANTS = {
    'first_name': ('first_name', 'firstName'),
    'last_name': ('last_name', 'lastName'),
    'company_name': ('company_name', 'companyName'),
    'phone': ('phone',),
    'city': ('city',),
    'country': ('country',),
}

# Role values seen for the elevated role; anything else is an agent
ELEVATED_ROLE_VALUES = ('admin', 'administrador', 'administrator')


def canonical_row(row, variants):
    """
    Translate a dict into the canonical field names

    The first non-empty spelling wins. Keys that are not listed in
    variants are dropped.

    Args:
        row (dict | None): Raw row (may be None)
        variants (dict): canonical name → tuple of accepted spellings

    Returns:
        dict: Only canonical keys, only for values that were present

    Example:
        >>> canonical_row({'rol': 'Admin', 'firstName': 'Ana'}, PROFILE_FIELD_VARIANTS)
        {'role': 'Admin', 'first_name': 'Ana'}
    """
    row = row or {}
    result = {}
    for canonical, spellings in variants.items():
        for spelling in spellings:
            value = row.get(spelling)
            if value not in (None, ''):
                result[canonical] = value
                break
    return result


def canonical_role(value):
    """'admin', 'Administrador', 'Admin' → 'Admin'; anything else → 'Agente'"""
    from .models import Profile

    if value and str(value).strip().lower() in ELEVATED_ROLE_VALUES:
        return Profile.ROLE_ADMIN
    return Profile.ROLE_AGENT


def profile_fields_from_row(row):
    """
    Canonical profile fields for a raw store row

    The role falls back to the agent role when no spelling is present.
    """
    fields = canonical_row(row, PROFILE_FIELD_VARIANTS)
    fields['role'] = canonical_role(fields.get('role'))
    return fields


# Hosted-store export tables (see the import_store_export command)
ENTERPRISE_FIELD_VARIANTS = {
    'id': ('id',),
    'name': ('name', 'company_name', 'companyName'),
}

USER_FIELD_VARIANTS = {
    'id': ('id',),
    'email': ('email',),
    'metadata': ('user_metadata', 'raw_user_meta_data', 'metadata'),
}

PROSPECT_FIELD_VARIANTS = {
    'id': ('id',),
    'organization_id': ('enterprise_id', 'organization_id'),
    'name': ('name',),
    'email': ('email',),
    'phone': ('phone',),
    'location': ('location',),
    'score': ('urgency_score', 'score'),
    'status': ('status',),
    'substatus': ('substatus',),
    'created_by': ('created_by',),
    'created_at': ('created_at',),
}

INTERACTION_FIELD_VARIANTS = {
    'id': ('id',),
    'organization_id': ('enterprise_id', 'organization_id'),
    'prospect_id': ('prospect_id',),
    'type': ('type',),
    'impact': ('impact',),
    'cta': ('cta',),
    'created_by': ('created_by',),
    'created_at': ('created_at',),
}

TASK_FIELD_VARIANTS = {
    'id': ('id',),
    'organization_id': ('enterprise_id', 'organization_id'),
    'prospect_id': ('prospect_id',),
    'title': ('title',),
    'description': ('description',),
    'due_date': ('due_date',),
    'status': ('status',),
    'type': ('type',),
    'priority': ('priority',),
    'created_by': ('created_by',),
    'created_at': ('created_at',),
}

PROPERTY_FIELD_VARIANTS = {
    'id': ('id',),
    'organization_id': ('enterprise_id', 'organization_id'),
    'title': ('title', 'name'),
    'address': ('address',),
    'status': ('status',),
    'closed_at': ('closed_at',),
    'created_by': ('created_by',),
    'created_at': ('created_at',),
}
