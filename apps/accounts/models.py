from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


class UserType(models.TextChoices):
    """Pool affinity of a team user."""
    HSV = 'HSV', 'HSV'
    OSV = 'OSV', 'OSV'


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    @classmethod
    def normalize_email(cls, email):
        return super().normalize_email(email or '').strip().lower()

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('team_name', 'Admin')

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Team account that claims Ek-codes; staff users administer the pools."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    team_name = models.CharField(max_length=100)
    user_type = models.CharField(
        max_length=3,
        choices=UserType.choices,
        default=UserType.HSV
    )

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['created_at'], name='users_created_at_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.team_name} <{self.email}>"
