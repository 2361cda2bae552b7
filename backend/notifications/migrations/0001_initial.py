import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import notifications.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Notification',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('notification_id', models.CharField(default=notifications.models.generate_notification_id, max_length=64, unique=True)),
                ('type', models.CharField(choices=[('ride_request', 'Ride request'), ('ride_accepted', 'Ride accepted'), ('ride_declined', 'Ride declined'), ('ride_started', 'Ride started'), ('ride_completed', 'Ride completed'), ('ride_cancelled', 'Ride cancelled'), ('driver_approaching', 'Driver approaching'), ('driver_nearby', 'Driver nearby'), ('driver_arrived', 'Driver arrived'), ('passenger_at_stop', 'Passenger at stop')], max_length=32)),
                ('title', models.CharField(max_length=200)),
                ('message', models.TextField()),
                ('priority', models.CharField(choices=[('low', 'Low'), ('medium', 'Medium'), ('high', 'High'), ('urgent', 'Urgent')], default='medium', max_length=10)),
                ('ride_id', models.CharField(blank=True, default='', max_length=64)),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('is_read', models.BooleanField(default=False)),
                ('is_push', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('read_at', models.DateTimeField(blank=True, null=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'notifications',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user', 'type', 'ride_id', 'created_at'], name='notif_debounce_idx')],
            },
        ),
    ]
