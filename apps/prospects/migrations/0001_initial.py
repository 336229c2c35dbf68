import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Prospect',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(help_text="Prospect's full name", max_length=200)),
                ('email', models.EmailField(blank=True, max_length=254, null=True)),
                ('phone', models.CharField(blank=True, max_length=30, null=True)),
                ('location', models.CharField(blank=True, help_text='Free text, e.g. "Madrid, España"', max_length=200, null=True)),
                ('score', models.FloatField(blank=True, db_index=True, help_text='Urgency score 0-100', null=True)),
                ('status', models.CharField(db_index=True, default='Fase inicial', max_length=50)),
                ('substatus', models.CharField(blank=True, max_length=50, null=True)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, help_text='Agent who owns this prospect', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='prospects', to=settings.AUTH_USER_MODEL)),
                ('organization', models.ForeignKey(help_text='Which organization owns this prospect', on_delete=django.db.models.deletion.CASCADE, related_name='prospects', to='core.organization')),
            ],
            options={
                'verbose_name': 'Prospect',
                'verbose_name_plural': 'Prospects',
                'ordering': ['-score', '-created_at'],
                'indexes': [
                    models.Index(fields=['organization', 'status'], name='prospect_org_status_idx'),
                    models.Index(fields=['organization', 'created_by'], name='prospect_org_owner_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Interaction',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(blank=True, max_length=50, null=True)),
                ('impact', models.FloatField(blank=True, help_text='Impact on the score, 0-100', null=True)),
                ('cta', models.CharField(blank=True, help_text='Suggested next action', max_length=255, null=True)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='interactions', to=settings.AUTH_USER_MODEL)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='interactions', to='core.organization')),
                ('prospect', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='interactions', to='prospects.prospect')),
            ],
            options={
                'verbose_name': 'Interaction',
                'verbose_name_plural': 'Interactions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['prospect', '-created_at'], name='interaction_prospect_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Property',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('status', models.CharField(choices=[('Disponible', 'Disponible'), ('Reservada', 'Reservada'), ('Vendida', 'Vendida')], db_index=True, default='Disponible', max_length=20)),
                ('closed_at', models.DateField(blank=True, help_text='Date the sale was closed', null=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='properties', to=settings.AUTH_USER_MODEL)),
                ('organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='properties', to='core.organization')),
            ],
            options={
                'verbose_name': 'Property',
                'verbose_name_plural': 'Properties',
                'ordering': ['-created_at'],
            },
        ),
    ]
