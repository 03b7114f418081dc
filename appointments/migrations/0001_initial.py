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
            name='RecurringAppointment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('start_time', models.CharField(max_length=5, verbose_name='start time')),
                ('duration', models.PositiveIntegerField(verbose_name='duration (minutes)')),
                ('type', models.CharField(max_length=20, verbose_name='type')),
                ('reason', models.CharField(max_length=500, verbose_name='reason')),
                ('frequency', models.CharField(choices=[('daily', 'Daily'), ('weekly', 'Weekly'), ('biweekly', 'Biweekly'), ('monthly', 'Monthly')], max_length=10, verbose_name='frequency')),
                ('interval', models.PositiveSmallIntegerField(default=1, verbose_name='interval')),
                ('days_of_week', models.JSONField(blank=True, default=list, verbose_name='days of week')),
                ('start_date', models.DateField(verbose_name='start date')),
                ('end_date', models.DateField(blank=True, null=True, verbose_name='end date')),
                ('occurrences', models.PositiveSmallIntegerField(blank=True, null=True, verbose_name='occurrences')),
                ('active', models.BooleanField(default=True, verbose_name='active')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='recurring_appointments', to=settings.AUTH_USER_MODEL)),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='recurring_appointments', to='patients.patient')),
            ],
            options={
                'verbose_name': 'recurring appointment',
                'verbose_name_plural': 'recurring appointments',
                'db_table': 'recurring_appointment',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Appointment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(verbose_name='date')),
                ('start_time', models.CharField(help_text='HH:MM', max_length=5, verbose_name='start time')),
                ('end_time', models.CharField(help_text='HH:MM', max_length=5, verbose_name='end time')),
                ('duration', models.PositiveIntegerField(verbose_name='duration (minutes)')),
                ('type', models.CharField(choices=[('consultation', 'Consultation'), ('cleaning', 'Cleaning'), ('filling', 'Filling'), ('extraction', 'Extraction'), ('root_canal', 'Root canal'), ('orthodontics', 'Orthodontics'), ('emergency', 'Emergency'), ('follow_up', 'Follow-up'), ('other', 'Other')], default='consultation', max_length=20, verbose_name='type')),
                ('status', models.CharField(choices=[('scheduled', 'Scheduled'), ('confirmed', 'Confirmed'), ('in_progress', 'In progress'), ('completed', 'Completed'), ('cancelled', 'Cancelled'), ('no_show', 'No show')], default='scheduled', max_length=20, verbose_name='status')),
                ('reason', models.CharField(max_length=500, verbose_name='reason')),
                ('notes', models.TextField(blank=True, null=True, verbose_name='notes')),
                ('color', models.CharField(blank=True, max_length=7, null=True, verbose_name='color')),
                ('reminder_sent', models.BooleanField(default=False, verbose_name='reminder sent')),
                ('reminder_sent_at', models.DateTimeField(blank=True, null=True, verbose_name='reminder sent at')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_appointments', to=settings.AUTH_USER_MODEL)),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='appointments', to=settings.AUTH_USER_MODEL)),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='appointments', to='patients.patient')),
                ('recurring_appointment', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='appointments', to='appointments.recurringappointment')),
            ],
            options={
                'verbose_name': 'appointment',
                'verbose_name_plural': 'appointments',
                'db_table': 'appointment',
                'ordering': ['date', 'start_time'],
                'indexes': [
                    models.Index(fields=['doctor', 'date'], name='appointment_doctor_date_idx'),
                    models.Index(fields=['patient', 'date'], name='appointment_patient_date_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('status__in', ['cancelled', 'no_show']), _negated=True), fields=('doctor', 'date', 'start_time'), name='unique_live_doctor_slot'),
                ],
            },
        ),
    ]
