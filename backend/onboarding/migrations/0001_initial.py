import uuid

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Submission',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('entity_type', models.CharField(choices=[('vendor', 'Vendor'), ('client', 'Client')], db_index=True, max_length=16)),
                ('company_name', models.CharField(blank=True, max_length=255)),
                ('contact_name', models.CharField(blank=True, max_length=255)),
                ('email', models.CharField(blank=True, db_index=True, max_length=254)),
                ('phone', models.CharField(blank=True, max_length=64)),
                ('tax_id', models.CharField(blank=True, db_index=True, max_length=64)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('city', models.CharField(blank=True, max_length=128)),
                ('state', models.CharField(blank=True, max_length=128)),
                ('zip_code', models.CharField(blank=True, max_length=32)),
                ('country', models.CharField(blank=True, max_length=128)),
                ('industry', models.CharField(blank=True, max_length=128)),
                ('website', models.CharField(blank=True, max_length=255)),
                ('annual_revenue', models.CharField(blank=True, max_length=64)),
                ('employee_count', models.CharField(blank=True, max_length=64)),
                ('business_type', models.CharField(blank=True, max_length=64)),
                ('service_type', models.CharField(blank=True, max_length=128)),
                ('contract_value', models.CharField(blank=True, max_length=64)),
                ('compliance_certifications', models.JSONField(blank=True, default=list)),
                ('client_tier', models.CharField(blank=True, max_length=64)),
                ('expected_volume', models.CharField(blank=True, max_length=128)),
                ('payment_terms', models.CharField(blank=True, max_length=64)),
                ('has_encryption', models.CharField(blank=True, choices=[('Yes', 'Yes'), ('No', 'No'), ('Partial', 'Partial')], max_length=8)),
                ('has_access_control', models.CharField(blank=True, choices=[('Yes', 'Yes'), ('No', 'No'), ('Partial', 'Partial')], max_length=8)),
                ('has_logging', models.CharField(blank=True, choices=[('Yes', 'Yes'), ('No', 'No'), ('Partial', 'Partial')], max_length=8)),
                ('has_network_security', models.CharField(blank=True, choices=[('Yes', 'Yes'), ('No', 'No'), ('Partial', 'Partial')], max_length=8)),
                ('description', models.TextField(blank=True)),
                ('document', models.FileField(blank=True, upload_to='submissions/%Y/%m/')),
                ('risk_score', models.IntegerField(default=0, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('risk_level', models.CharField(choices=[('low', 'Low'), ('medium', 'Medium'), ('high', 'High')], default='medium', max_length=16)),
                ('status', models.CharField(choices=[('approved', 'Approved'), ('review', 'Review'), ('flagged', 'Flagged')], db_index=True, default='review', max_length=16)),
                ('status_overridden', models.BooleanField(default=False)),
                ('risk_factors', models.JSONField(blank=True, default=list)),
                ('duplicate_warnings', models.JSONField(blank=True, default=list)),
                ('assessed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['risk_score'], name='submission_risk_score_idx')],
            },
        ),
    ]
