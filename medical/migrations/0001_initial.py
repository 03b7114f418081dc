from decimal import Decimal

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
            name='Cie10Code',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=10, unique=True, verbose_name='code')),
                ('description', models.CharField(max_length=255, verbose_name='description')),
                ('category', models.CharField(max_length=100, verbose_name='category')),
            ],
            options={
                'verbose_name': 'CIE-10 code',
                'verbose_name_plural': 'CIE-10 codes',
                'db_table': 'cie10_code',
                'ordering': ['code'],
            },
        ),
        migrations.CreateModel(
            name='TreatmentCatalog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=20, unique=True, verbose_name='code')),
                ('name', models.CharField(max_length=150, verbose_name='name')),
                ('category', models.CharField(max_length=100, verbose_name='category')),
                ('default_price', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='default price')),
                ('duration_minutes', models.PositiveIntegerField(default=30, verbose_name='duration (minutes)')),
                ('is_active', models.BooleanField(default=True, verbose_name='active')),
            ],
            options={
                'verbose_name': 'catalog treatment',
                'verbose_name_plural': 'treatment catalog',
                'db_table': 'treatment_catalog',
                'ordering': ['category', 'name'],
            },
        ),
        migrations.CreateModel(
            name='MedicalHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('allergies', models.JSONField(blank=True, default=list, verbose_name='allergies')),
                ('chronic_diseases', models.JSONField(blank=True, default=list, verbose_name='chronic diseases')),
                ('current_medications', models.JSONField(blank=True, default=list, verbose_name='current medications')),
                ('previous_surgeries', models.JSONField(blank=True, default=list, verbose_name='previous surgeries')),
                ('family_history', models.JSONField(blank=True, default=list, verbose_name='family history')),
                ('last_dental_visit', models.DateField(blank=True, null=True, verbose_name='last dental visit')),
                ('brushing_frequency', models.PositiveSmallIntegerField(blank=True, null=True, verbose_name='brushes per day')),
                ('uses_floss', models.BooleanField(default=False, verbose_name='uses floss')),
                ('uses_mouthwash', models.BooleanField(default=False, verbose_name='uses mouthwash')),
                ('smoking_habit', models.CharField(blank=True, choices=[('never', 'Never'), ('former', 'Former smoker'), ('occasional', 'Occasional'), ('daily', 'Daily')], max_length=20, null=True, verbose_name='smoking')),
                ('alcohol_consumption', models.CharField(blank=True, choices=[('never', 'Never'), ('occasional', 'Occasional'), ('frequent', 'Frequent')], max_length=20, null=True, verbose_name='alcohol')),
                ('bruxism', models.BooleanField(default=False, verbose_name='bruxism')),
                ('nail_biting', models.BooleanField(default=False, verbose_name='nail biting')),
                ('is_pregnant', models.BooleanField(default=False, verbose_name='pregnant')),
                ('gestation_weeks', models.PositiveSmallIntegerField(blank=True, null=True, verbose_name='gestation weeks')),
                ('notes', models.TextField(blank=True, null=True, verbose_name='notes')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('patient', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='medical_history', to='patients.patient')),
            ],
            options={
                'verbose_name': 'medical history',
                'verbose_name_plural': 'medical histories',
                'db_table': 'medical_history',
            },
        ),
        migrations.CreateModel(
            name='Diagnosis',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tooth_number', models.CharField(blank=True, max_length=10, null=True, verbose_name='tooth number')),
                ('description', models.TextField(blank=True, null=True, verbose_name='description')),
                ('severity', models.CharField(blank=True, choices=[('mild', 'Mild'), ('moderate', 'Moderate'), ('severe', 'Severe')], max_length=10, null=True, verbose_name='severity')),
                ('date', models.DateField(verbose_name='date')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('cie10', models.ForeignKey(db_column='cie10_code', on_delete=django.db.models.deletion.PROTECT, related_name='diagnoses', to='medical.cie10code', to_field='code')),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='diagnoses', to=settings.AUTH_USER_MODEL)),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='diagnoses', to='patients.patient')),
            ],
            options={
                'verbose_name': 'diagnosis',
                'verbose_name_plural': 'diagnoses',
                'db_table': 'diagnosis',
                'ordering': ['-date', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Treatment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tooth_number', models.CharField(blank=True, max_length=10, null=True, verbose_name='tooth number')),
                ('description', models.TextField(blank=True, null=True, verbose_name='description')),
                ('status', models.CharField(choices=[('planned', 'Planned'), ('in_progress', 'In progress'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='planned', max_length=20, verbose_name='status')),
                ('cost', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='cost')),
                ('paid', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, verbose_name='paid')),
                ('balance', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, verbose_name='balance')),
                ('planned_date', models.DateField(blank=True, null=True, verbose_name='planned date')),
                ('completed_date', models.DateField(blank=True, null=True, verbose_name='completed date')),
                ('notes', models.TextField(blank=True, null=True, verbose_name='notes')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('catalog', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='treatments', to='medical.treatmentcatalog')),
                ('diagnosis', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='treatments', to='medical.diagnosis')),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='treatments', to=settings.AUTH_USER_MODEL)),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='treatments', to='patients.patient')),
            ],
            options={
                'verbose_name': 'treatment',
                'verbose_name_plural': 'treatments',
                'db_table': 'treatment',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='TreatmentPlan',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255, verbose_name='title')),
                ('description', models.TextField(blank=True, null=True, verbose_name='description')),
                ('total_cost', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='total cost')),
                ('status', models.CharField(choices=[('draft', 'Draft'), ('presented', 'Presented'), ('approved', 'Approved'), ('rejected', 'Rejected'), ('in_progress', 'In progress'), ('completed', 'Completed')], default='draft', max_length=20, verbose_name='status')),
                ('pdf_url', models.URLField(blank=True, null=True, verbose_name='PDF')),
                ('approved_at', models.DateTimeField(blank=True, null=True, verbose_name='approved at')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='treatment_plans', to=settings.AUTH_USER_MODEL)),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='treatment_plans', to='patients.patient')),
            ],
            options={
                'verbose_name': 'treatment plan',
                'verbose_name_plural': 'treatment plans',
                'db_table': 'treatment_plan',
                'ordering': ['-created_at'],
            },
        ),
    ]
