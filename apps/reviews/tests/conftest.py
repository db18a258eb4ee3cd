import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def review_user(db):
    """Create and return a user who leaves feedback."""
    return User.objects.create_user(
        email='reviewer@example.com',
        password='TestPass123!',
        display_name='Reviewer',
    )


@pytest.fixture
def authenticated_client(review_user):
    """API client authenticated as review_user."""
    client = APIClient()
    refresh = RefreshToken.for_user(review_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client
