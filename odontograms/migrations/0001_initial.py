from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('patients', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Odontogram',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('version', models.PositiveIntegerField(verbose_name='version')),
                ('type', models.CharField(choices=[('permanent', 'Permanent'), ('temporary', 'Temporary'), ('mixed', 'Mixed')], default='permanent', max_length=10, verbose_name='dentition')),
                ('date', models.DateField(verbose_name='date')),
                ('general_notes', models.TextField(blank=True, null=True, verbose_name='general notes')),
                ('is_current', models.BooleanField(default=True, verbose_name='current version')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('doctor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='odontograms', to=settings.AUTH_USER_MODEL)),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='odontograms', to='patients.patient')),
            ],
            options={
                'verbose_name': 'odontogram',
                'verbose_name_plural': 'odontograms',
                'db_table': 'odontogram',
                'ordering': ['patient_id', '-version'],
                'constraints': [models.UniqueConstraint(fields=('patient', 'version'), name='unique_patient_odontogram_version')],
            },
        ),
        migrations.CreateModel(
            name='Tooth',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tooth_number', models.PositiveSmallIntegerField(verbose_name='tooth number (FDI)')),
                ('status', models.CharField(choices=[('healthy', 'Healthy'), ('caries', 'Caries'), ('filled', 'Filled'), ('missing', 'Missing'), ('crown', 'Crown'), ('bridge', 'Bridge'), ('implant', 'Implant'), ('root_canal', 'Root canal'), ('extraction_needed', 'Extraction needed'), ('fractured', 'Fractured'), ('sealant', 'Sealant'), ('other', 'Other')], default='healthy', max_length=20, verbose_name='status')),
                ('surfaces', models.JSONField(blank=True, default=dict, verbose_name='surfaces')),
                ('notes', models.TextField(blank=True, null=True, verbose_name='notes')),
                ('odontogram', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='teeth', to='odontograms.odontogram')),
            ],
            options={
                'verbose_name': 'tooth',
                'verbose_name_plural': 'teeth',
                'db_table': 'tooth',
                'ordering': ['tooth_number'],
                'constraints': [models.UniqueConstraint(fields=('odontogram', 'tooth_number'), name='unique_tooth_per_odontogram')],
            },
        ),
    ]
