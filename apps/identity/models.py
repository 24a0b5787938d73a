import uuid
from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """
    Application user. Logs in with email; `username` mirrors the email.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, blank=True)
    email = models.EmailField(unique=True)

    class Meta:
        ordering = ['email']

    def __str__(self):
        return self.name or self.email
