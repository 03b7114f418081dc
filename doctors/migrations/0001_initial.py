from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='WorkSchedule',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('day_of_week', models.PositiveSmallIntegerField(choices=[(0, 'Sunday'), (1, 'Monday'), (2, 'Tuesday'), (3, 'Wednesday'), (4, 'Thursday'), (5, 'Friday'), (6, 'Saturday')], verbose_name='day of week')),
                ('start_time', models.CharField(help_text='HH:MM, e.g. 08:00', max_length=5, verbose_name='start time')),
                ('end_time', models.CharField(help_text='HH:MM, e.g. 18:00', max_length=5, verbose_name='end time')),
                ('break_start', models.CharField(blank=True, max_length=5, null=True, verbose_name='break start')),
                ('break_end', models.CharField(blank=True, max_length=5, null=True, verbose_name='break end')),
                ('is_active', models.BooleanField(default=True, verbose_name='active')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='work_schedules', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'work schedule',
                'verbose_name_plural': 'work schedules',
                'db_table': 'work_schedule',
                'ordering': ['doctor_id', 'day_of_week'],
                'constraints': [models.UniqueConstraint(fields=('doctor', 'day_of_week'), name='unique_doctor_weekday_schedule')],
            },
        ),
        migrations.CreateModel(
            name='BlockedTime',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(verbose_name='date')),
                ('start_time', models.CharField(max_length=5, verbose_name='start time')),
                ('end_time', models.CharField(max_length=5, verbose_name='end time')),
                ('reason', models.CharField(max_length=200, verbose_name='reason')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_blocked_times', to=settings.AUTH_USER_MODEL)),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='blocked_times', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'blocked time',
                'verbose_name_plural': 'blocked times',
                'db_table': 'blocked_time',
                'ordering': ['date', 'start_time'],
                'indexes': [models.Index(fields=['doctor', 'date'], name='blocked_doctor_date_idx')],
            },
        ),
    ]
