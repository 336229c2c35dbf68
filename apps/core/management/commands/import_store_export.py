"""
Load a JSON export of the old hosted store

Usage:
    python manage.py import_store_export export.json
    python manage.py import_store_export export.json --dry-run

The export is one JSON object with a list of rows per table:

    {
        "enterprises": [...],
        "users": [...],
        "profiles": [...],
        "prospects": [...],
        "interactions": [...],
        "tasks": [...],
        "properties": [...]
    }

Rows are upserted by id, so running the same export twice is harmless.
Identity references (profiles.user_id, *.created_by) point to the
hosted identity id, which is User.uid here.
"""

import json
import logging
import uuid

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, transaction

from apps.accounts.models import Profile, User
from apps.accounts.schema import (
    ENTERPRISE_FIELD_VARIANTS,
    INTERACTION_FIELD_VARIANTS,
    METADATA_FIELD_VARIANTS,
    PROPERTY_FIELD_VARIANTS,
    PROSPECT_FIELD_VARIANTS,
    TASK_FIELD_VARIANTS,
    USER_FIELD_VARIANTS,
    canonical_row,
    profile_fields_from_row,
)
from apps.core.models import Organization
from apps.prospects.models import Interaction, Property, Prospect
from apps.tasks.models import Task

logger = logging.getLogger(__name__)


# Parents before children
TABLE_ORDER = ('enterprises', 'users', 'profiles', 'prospects', 'interactions', 'tasks', 'properties')


class SkipRow(Exception):
    """Row cannot be loaded (missing id, unknown parent, ...)."""


class StoreExportImporter:
    """
    Upserts the rows of one export

    Each row is loaded inside its own savepoint: a bad row is skipped
    and logged, the rest of the export still loads.
    """

    def __init__(self, export):
        self.export = export
        self.counts = {}
        self._users_by_uid = {}
        self._organization_ids = set()

    def run(self):
        for table in TABLE_ORDER:
            loader = getattr(self, f'load_{table}')
            imported = skipped = 0

            for row in self.export.get(table) or []:
                try:
                    with transaction.atomic():
                        loader(row)
                    imported += 1
                except SkipRow as e:
                    skipped += 1
                    logger.warning(f"Skipping {table} row {row.get('id') if isinstance(row, dict) else row!r}: {e}")
                except (ValidationError, ValueError, TypeError, DatabaseError) as e:
                    skipped += 1
                    logger.warning(f"Invalid {table} row {row.get('id') if isinstance(row, dict) else row!r}: {e}")

            self.counts[table] = (imported, skipped)

        return self.counts

    # Lookups

    def _user(self, uid):
        """User for a hosted identity id, or None."""
        if not uid:
            return None
        key = str(uid)
        if key not in self._users_by_uid:
            try:
                self._users_by_uid[key] = User.objects.filter(uid=key).first()
            except ValidationError:
                self._users_by_uid[key] = None
        return self._users_by_uid[key]

    def _owner_id(self, fields):
        user = self._user(fields.pop('created_by', None))
        return user.pk if user else None

    def _require_organization(self, fields):
        organization_id = fields.get('organization_id')
        if not organization_id:
            raise SkipRow('no organization')

        key = str(organization_id)
        if key not in self._organization_ids:
            if not Organization.objects.filter(pk=key).exists():
                raise SkipRow(f'unknown organization {key}')
            self._organization_ids.add(key)

    @staticmethod
    def _require_id(fields):
        row_id = fields.pop('id', None)
        if not row_id:
            raise SkipRow('no id')
        return row_id

    # Loaders (one per table)

    def load_enterprises(self, row):
        fields = canonical_row(row, ENTERPRISE_FIELD_VARIANTS)
        organization_id = self._require_id(fields)

        organization, _created = Organization.objects.update_or_create(pk=organization_id, defaults=fields)
        self._organization_ids.add(str(organization.pk))

    def load_users(self, row):
        fields = canonical_row(row, USER_FIELD_VARIANTS)
        uid = self._require_id(fields)
        email = fields.get('email')
        if not email:
            raise SkipRow('no email')

        email = User.objects.normalize_email(email).lower()
        metadata = fields.get('metadata') or {}
        names = canonical_row(metadata, METADATA_FIELD_VARIANTS)

        if User.objects.filter(email__iexact=email).exclude(uid=uid).exists():
            raise SkipRow(f'email {email} belongs to another user')

        user = User.objects.filter(uid=uid).first()
        if user is None:
            # Imported users cannot log in until they reset their password
            user = User.objects.create_user(
                email=email,
                password=None,
                uid=uid,
                first_name=names.get('first_name', ''),
                last_name=names.get('last_name', ''),
                phone=names.get('phone', ''),
                metadata=metadata,
            )
        else:
            user.email = email
            user.metadata = metadata
            user.save(update_fields=['email', 'metadata', 'updated_at'])

        self._users_by_uid[str(uid)] = user

    def load_profiles(self, row):
        fields = profile_fields_from_row(row)
        self._require_organization(fields)

        user = self._user(fields.get('user_id'))
        if user is None:
            raise SkipRow(f"unknown user {fields.get('user_id')}")

        profile = Profile.objects.filter(user=user).first()

        if profile is None:
            profile = Profile(id=fields.get('id') or uuid.uuid4(), user=user)
            profile.organization_id = fields['organization_id']
        elif str(profile.organization_id) != str(fields['organization_id']):
            raise SkipRow('profile already belongs to another organization')

        profile.role = fields['role']
        profile.first_name = fields.get('first_name', profile.first_name)
        profile.last_name = fields.get('last_name', profile.last_name)
        if fields.get('created_at'):
            profile.created_at = fields['created_at']
        profile.save()

    def load_prospects(self, row):
        fields = canonical_row(row, PROSPECT_FIELD_VARIANTS)
        prospect_id = self._require_id(fields)
        self._require_organization(fields)

        fields.setdefault('name', 'Sin nombre')
        fields['created_by_id'] = self._owner_id(fields)

        Prospect.objects.update_or_create(pk=prospect_id, defaults=fields)

    def load_interactions(self, row):
        fields = canonical_row(row, INTERACTION_FIELD_VARIANTS)
        interaction_id = self._require_id(fields)

        prospect = Prospect.objects.filter(pk=fields.get('prospect_id')).first() if fields.get('prospect_id') else None
        if prospect is None:
            raise SkipRow(f"unknown prospect {fields.get('prospect_id')}")

        fields.setdefault('organization_id', prospect.organization_id)
        self._require_organization(fields)
        fields['created_by_id'] = self._owner_id(fields)

        Interaction.objects.update_or_create(pk=interaction_id, defaults=fields)

    def load_tasks(self, row):
        fields = canonical_row(row, TASK_FIELD_VARIANTS)
        task_id = self._require_id(fields)
        self._require_organization(fields)

        if not fields.get('title'):
            raise SkipRow('no title')

        prospect_id = fields.pop('prospect_id', None)
        fields['prospect_id'] = prospect_id if prospect_id and Prospect.objects.filter(pk=prospect_id).exists() else None
        fields['created_by_id'] = self._owner_id(fields)

        Task.objects.update_or_create(pk=task_id, defaults=fields)

    def load_properties(self, row):
        fields = canonical_row(row, PROPERTY_FIELD_VARIANTS)
        property_id = self._require_id(fields)
        self._require_organization(fields)

        fields.setdefault('title', fields.get('address') or 'Propiedad')
        fields['created_by_id'] = self._owner_id(fields)

        Property.objects.update_or_create(pk=property_id, defaults=fields)


class Command(BaseCommand):
    help = 'Import organizations, profiles, prospects, interactions, tasks and properties from a hosted-store JSON export'

    def add_arguments(self, parser):
        parser.add_argument('path', help='Path to the JSON export')
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Load everything, print the counts, then roll back',
        )

    def handle(self, *args, **options):
        path = options['path']

        try:
            with open(path, encoding='utf-8') as export_file:
                export = json.load(export_file)
        except (OSError, json.JSONDecodeError) as e:
            raise CommandError(f'Cannot read export {path}: {e}')

        if not isinstance(export, dict):
            raise CommandError('The export must be a JSON object with one list per table')

        importer = StoreExportImporter(export)

        with transaction.atomic():
            counts = importer.run()
            if options['dry_run']:
                transaction.set_rollback(True)

        for table in TABLE_ORDER:
            imported, skipped = counts[table]
            line = f'{table}: {imported} imported'
            if skipped:
                line += f', {skipped} skipped'
            self.stdout.write(line)

        if options['dry_run']:
            self.stdout.write(self.style.WARNING('Dry run: nothing was saved'))
        else:
            self.stdout.write(self.style.SUCCESS('Import finished'))
        logger.info(f"Store export {path} imported: {counts}")
