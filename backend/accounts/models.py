from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """Extended user model with role selection"""
    ROLE_CHOICES = [
        ('passenger', 'Passenger'),
        ('driver', 'Taxi Driver'),
        ('both', 'Passenger & Driver'),
    ]

    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='passenger')
    phone_number = models.CharField(max_length=15, blank=True)

    class Meta:
        db_table = 'users'

    @property
    def display_name(self):
        return self.get_full_name() or self.username

    @property
    def is_driver(self):
        return self.role in ('driver', 'both')

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"
