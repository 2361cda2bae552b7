import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Route',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('route_id', models.CharField(max_length=64, unique=True)),
                ('name', models.CharField(max_length=200)),
                ('fare', models.DecimalField(decimal_places=2, max_digits=8)),
                ('estimated_duration', models.PositiveIntegerField(help_text='Minutes end to end')),
                ('estimated_distance', models.FloatField(blank=True, help_text='Kilometres end to end', null=True)),
                ('taxi_association', models.CharField(max_length=200)),
                ('is_active', models.BooleanField(default=True)),
            ],
            options={
                'db_table': 'routes',
                'ordering': ['route_id'],
            },
        ),
        migrations.CreateModel(
            name='RouteStop',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('stop_id', models.CharField(max_length=64)),
                ('name', models.CharField(max_length=200)),
                ('latitude', models.FloatField()),
                ('longitude', models.FloatField()),
                ('order', models.PositiveIntegerField()),
                ('is_enriched', models.BooleanField(default=False)),
                ('route', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stops', to='routes.route')),
            ],
            options={
                'db_table': 'route_stops',
                'ordering': ['route', 'is_enriched', 'order'],
            },
        ),
        migrations.AddConstraint(
            model_name='routestop',
            constraint=models.UniqueConstraint(fields=('route', 'is_enriched', 'order'), name='unique_route_stop_order'),
        ),
    ]
