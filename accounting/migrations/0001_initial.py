from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion

PAYMENT_METHODS = [('cash', 'Cash'), ('card', 'Card'), ('transfer', 'Bank transfer'), ('check', 'Check'), ('other', 'Other')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('patients', '0001_initial'),
        ('appointments', '0001_initial'),
        ('medical', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Transaction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('deleted_at', models.DateTimeField(blank=True, null=True, verbose_name='deleted at')),
                ('date', models.DateField(verbose_name='date')),
                ('type', models.CharField(choices=[('income', 'Income'), ('expense', 'Expense')], max_length=10, verbose_name='type')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='amount')),
                ('description', models.CharField(max_length=500, verbose_name='description')),
                ('category', models.CharField(max_length=100, verbose_name='category')),
                ('payment_method', models.CharField(blank=True, choices=PAYMENT_METHODS, max_length=20, null=True, verbose_name='payment method')),
                ('invoice_number', models.CharField(blank=True, max_length=50, null=True, verbose_name='invoice number')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('appointment', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='transactions', to='appointments.appointment')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='transactions', to=settings.AUTH_USER_MODEL)),
                ('patient', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='transactions', to='patients.patient')),
            ],
            options={
                'verbose_name': 'transaction',
                'verbose_name_plural': 'transactions',
                'db_table': 'transaction',
                'ordering': ['-date', '-created_at'],
                'indexes': [models.Index(fields=['type', 'date'], name='transaction_type_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='PaymentPlan',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('total_amount', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='total amount')),
                ('total_installments', models.PositiveSmallIntegerField(verbose_name='installments')),
                ('installment_amount', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='installment amount')),
                ('paid_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, verbose_name='paid')),
                ('balance', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='balance')),
                ('frequency', models.CharField(choices=[('weekly', 'Weekly'), ('biweekly', 'Biweekly'), ('monthly', 'Monthly')], max_length=10, verbose_name='frequency')),
                ('start_date', models.DateField(verbose_name='first due date')),
                ('status', models.CharField(choices=[('active', 'Active'), ('completed', 'Completed'), ('cancelled', 'Cancelled'), ('defaulted', 'Defaulted')], default='active', max_length=20, verbose_name='status')),
                ('notes', models.TextField(blank=True, null=True, verbose_name='notes')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='payment_plans', to=settings.AUTH_USER_MODEL)),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payment_plans', to='patients.patient')),
                ('treatment', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payment_plans', to='medical.treatment')),
            ],
            options={
                'verbose_name': 'payment plan',
                'verbose_name_plural': 'payment plans',
                'db_table': 'payment_plan',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Installment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('number', models.PositiveSmallIntegerField(verbose_name='number')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='amount')),
                ('due_date', models.DateField(verbose_name='due date')),
                ('paid_date', models.DateField(blank=True, null=True, verbose_name='paid date')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('paid', 'Paid'), ('overdue', 'Overdue'), ('cancelled', 'Cancelled')], default='pending', max_length=10, verbose_name='status')),
                ('payment_plan', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='installments', to='accounting.paymentplan')),
            ],
            options={
                'verbose_name': 'installment',
                'verbose_name_plural': 'installments',
                'db_table': 'installment',
                'ordering': ['payment_plan', 'number'],
                'constraints': [models.UniqueConstraint(fields=('payment_plan', 'number'), name='unique_plan_installment_number')],
            },
        ),
        migrations.CreateModel(
            name='PatientPayment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='amount')),
                ('payment_method', models.CharField(choices=PAYMENT_METHODS, max_length=20, verbose_name='payment method')),
                ('date', models.DateField(verbose_name='date')),
                ('concept', models.CharField(max_length=255, verbose_name='concept')),
                ('notes', models.TextField(blank=True, null=True, verbose_name='notes')),
                ('receipt_number', models.CharField(blank=True, max_length=50, null=True, verbose_name='receipt number')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('appointment', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='payments', to='appointments.appointment')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='patient_payments', to=settings.AUTH_USER_MODEL)),
                ('installment', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='payments', to='accounting.installment')),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payments', to='patients.patient')),
                ('treatment', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='payments', to='medical.treatment')),
            ],
            options={
                'verbose_name': 'patient payment',
                'verbose_name_plural': 'patient payments',
                'db_table': 'patient_payment',
                'ordering': ['-date', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('deleted_at', models.DateTimeField(blank=True, null=True, verbose_name='deleted at')),
                ('date', models.DateField(verbose_name='date')),
                ('category', models.CharField(choices=[('rent', 'Rent'), ('salaries', 'Salaries'), ('supplies', 'Supplies'), ('equipment', 'Equipment'), ('utilities', 'Utilities'), ('maintenance', 'Maintenance'), ('marketing', 'Marketing'), ('insurance', 'Insurance'), ('taxes', 'Taxes'), ('other', 'Other')], max_length=20, verbose_name='category')),
                ('description', models.CharField(max_length=500, verbose_name='description')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='amount')),
                ('supplier', models.CharField(blank=True, max_length=200, null=True, verbose_name='supplier')),
                ('invoice_number', models.CharField(blank=True, max_length=50, null=True, verbose_name='invoice number')),
                ('payment_method', models.CharField(choices=PAYMENT_METHODS, max_length=20, verbose_name='payment method')),
                ('recurring', models.BooleanField(default=False, verbose_name='recurring')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='expenses', to=settings.AUTH_USER_MODEL)),
                ('transaction', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='expense', to='accounting.transaction')),
            ],
            options={
                'verbose_name': 'expense',
                'verbose_name_plural': 'expenses',
                'db_table': 'expense',
                'ordering': ['-date', '-created_at'],
            },
        ),
    ]
