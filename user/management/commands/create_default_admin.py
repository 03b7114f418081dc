from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from decouple import config


class Command(BaseCommand):
    help = 'Create a default clinic administrator if none exists (idempotent).'

    def handle(self, *args, **options):
        User = get_user_model()
        if User.objects.filter(role=User.ROLE_ADMIN).exists():
            self.stdout.write(self.style.WARNING('Admin already exists. No action taken.'))
            return
        email = config('ADMIN_EMAIL', default='admin@clinic.local')
        password = config('ADMIN_PASSWORD', default='ChangeMe!2024')
        user = User.objects.create_superuser(
            email=email,
            password=password,
            first_name=config('ADMIN_FIRST_NAME', default='Clinic'),
            last_name=config('ADMIN_LAST_NAME', default='Administrator'),
        )
        self.stdout.write(self.style.SUCCESS(f'Created admin: {user.email}'))
