from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Patient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('deleted_at', models.DateTimeField(blank=True, null=True, verbose_name='deleted at')),
                ('first_name', models.CharField(max_length=50, verbose_name='first name')),
                ('last_name', models.CharField(max_length=50, verbose_name='last name')),
                ('date_of_birth', models.DateField(verbose_name='date of birth')),
                ('gender', models.CharField(choices=[('male', 'Male'), ('female', 'Female'), ('other', 'Other')], max_length=10, verbose_name='gender')),
                ('identification', models.CharField(max_length=20, unique=True, verbose_name='identification')),
                ('identification_type', models.CharField(choices=[('cedula', 'Cédula'), ('passport', 'Passport'), ('ruc', 'RUC')], default='cedula', max_length=10, verbose_name='identification type')),
                ('phone', models.CharField(max_length=20, verbose_name='phone')),
                ('email', models.EmailField(blank=True, max_length=254, null=True, verbose_name='email')),
                ('address', models.CharField(blank=True, max_length=200, null=True, verbose_name='address')),
                ('city', models.CharField(blank=True, max_length=100, null=True, verbose_name='city')),
                ('province', models.CharField(blank=True, max_length=100, null=True, verbose_name='province')),
                ('has_insurance', models.BooleanField(default=False, verbose_name='has insurance')),
                ('insurance_provider', models.CharField(blank=True, max_length=100, null=True, verbose_name='insurance provider')),
                ('insurance_number', models.CharField(blank=True, max_length=50, null=True, verbose_name='insurance number')),
                ('occupation', models.CharField(blank=True, max_length=100, null=True, verbose_name='occupation')),
                ('marital_status', models.CharField(blank=True, choices=[('single', 'Single'), ('married', 'Married'), ('divorced', 'Divorced'), ('widowed', 'Widowed'), ('common_law', 'Common law')], max_length=20, null=True, verbose_name='marital status')),
                ('blood_type', models.CharField(blank=True, choices=[('A+', 'A+'), ('A-', 'A-'), ('B+', 'B+'), ('B-', 'B-'), ('AB+', 'AB+'), ('AB-', 'AB-'), ('O+', 'O+'), ('O-', 'O-')], max_length=3, null=True, verbose_name='blood type')),
                ('emergency_contact', models.JSONField(blank=True, null=True, verbose_name='emergency contact')),
                ('is_active', models.BooleanField(default=True, verbose_name='active')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
            ],
            options={
                'verbose_name': 'patient',
                'verbose_name_plural': 'patients',
                'db_table': 'patient',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['last_name', 'first_name'], name='patient_name_idx')],
            },
        ),
    ]
