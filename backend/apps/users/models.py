import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    # username, password, is_active, is_staff, is_superuser, groups, user_permissions are inherited.
    # The UUID primary key is the opaque owner identifier used by the cart.
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=200, blank=True)

    def __str__(self):
        return self.username
