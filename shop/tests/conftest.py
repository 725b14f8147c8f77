import logging

import pytest
from rest_framework.test import APIClient

from shop.tests.factories import CartFactory, ProductFactory, UserFactory, point_north_of_origin

# ==========================================
# 1. Global setup (session scope)
# ==========================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging_for_tests():
    """Let caplog see the service loggers"""
    for logger_name in ["shop", "shop.services", "shop.views"]:
        logging.getLogger(logger_name).propagate = True


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache

    cache.clear()
    yield
    cache.clear()


# ==========================================
# 2. API clients
# ==========================================


@pytest.fixture
def api_client():
    """Anonymous DRF client"""
    return APIClient()


@pytest.fixture
def authenticated_client(api_client, user):
    """Client signed in as the default customer"""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


# ==========================================
# 3. Users
# ==========================================


@pytest.fixture
def user(db):
    """Default customer"""
    return UserFactory(username="kofi", email="kofi@example.com")


@pytest.fixture
def other_user(db):
    return UserFactory(username="abena", email="abena@example.com")


@pytest.fixture
def admin_user(db):
    """Back office account (is_staff)"""
    return UserFactory.admin()


# ==========================================
# 4. Catalogue and cart
# ==========================================


@pytest.fixture
def product(db):
    return ProductFactory(name="Palace Loafer")


@pytest.fixture
def cart(db, user):
    return CartFactory(user=user)


# ==========================================
# 5. Map helpers
# ==========================================


@pytest.fixture
def point_at():
    return point_north_of_origin
