# Generated manually for the initial User schema
from django.db import migrations, models
import django.core.validators
import django.utils.timezone

import accounts.models
import core.ids


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('id', models.CharField(default=core.ids.IdGenerator(''), editable=False, max_length=20, primary_key=True, serialize=False)),
                ('username', models.CharField(help_text='Login name (3-50 characters)', max_length=50, unique=True, validators=[django.core.validators.MinLengthValidator(3)])),
                ('email', models.EmailField(max_length=100, unique=True)),
                ('full_name', models.CharField(max_length=100)),
                ('phone_number', models.CharField(blank=True, max_length=20, null=True, validators=[django.core.validators.RegexValidator(message='Invalid phone number format', regex='^[+]?[0-9\\-\\s()]*$')])),
                ('role', models.CharField(choices=[('FARMER', 'Farmer'), ('BUYER', 'Buyer'), ('ADMIN', 'Administrator'), ('ANALYST', 'Analyst'), ('GOVERNMENT', 'Government')], db_index=True, help_text="User's primary role in the system", max_length=20)),
                ('is_active', models.BooleanField(default=True)),
                ('profile_image_url', models.CharField(blank=True, max_length=255, null=True)),
                ('profile_image_data', models.BinaryField(blank=True, null=True)),
                ('reset_token', models.CharField(blank=True, help_text='Token for password reset', max_length=100, null=True)),
                ('reset_token_expiration', models.DateTimeField(blank=True, help_text='Expiration time for password reset token', null=True)),
            ],
            options={
                'verbose_name': 'User',
                'verbose_name_plural': 'Users',
                'db_table': 'users',
                'indexes': [models.Index(fields=['role', 'is_active'], name='users_role_active_idx')],
            },
            managers=[
                ('objects', accounts.models.UserManager()),
            ],
        ),
    ]
