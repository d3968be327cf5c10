# sr_core/conftest.py
import copy

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.management import call_command
from rest_framework.test import APIClient

from sr_core.common.permissions import ROLE_ADMIN, ROLE_PARENT, ROLE_READONLY, ROLE_STAFF

PARENT_EMAIL = "parent@example.com"

REGISTRATION_PAYLOAD = {
    "email": PARENT_EMAIL,
    "childInfo": {
        "firstName": "Mia",
        "middleName": "Rose",
        "lastName": "Lopez",
        "gender": "Female",
        "dateOfBirth": "2022-03-14",
        "placeOfBirth": "Austin",
    },
    "parentGuardianInfo": {
        "firstName": "Ana",
        "middleName": "",
        "lastName": "Lopez",
        "relationship": "Mother",
        "email": "ana.lopez@example.com",
        "address1": "12 Oak St",
        "address2": "Apt 4",
        "city": "Austin",
        "state": "TX",
        "country": "USA",
        "zipCode": "78701",
        "countryCode": "+1",
        "phoneType": "Mobile",
        "phoneNumber": "5125550100",
        "alternateCountryCode": "+1",
        "alternatePhoneType": "Work",
        "alternatePhoneNumber": "5125550101",
    },
    "medicalInfo": {
        "physicianFirstName": "Sam",
        "physicianMiddleName": "J",
        "physicianLastName": "Reed",
        "address1": "400 Clinic Rd",
        "address2": "",
        "city": "Austin",
        "state": "TX",
        "country": "USA",
        "zipCode": "78702",
        "countryCode": "+1",
        "phoneType": "Office",
        "phoneNumber": "5125550200",
    },
    "careFacilityInfo": {
        "emergencyContactName": "Luis Lopez",
        "emergencyPhoneNumber": "5125550300",
        "address1": "9 Elm Ave",
        "address2": "",
        "city": "Austin",
        "state": "TX",
        "country": "USA",
        "zipCode": "78703",
        "countryCode": "+1",
        "phoneType": "Home",
    },
    "enrollmentProgramDetails": {
        "programType": "Full Time",
        "roomType": "Toddler",
        "planType": "Monthly",
        "enrollmentDate": "2024-09-02",
    },
}


def _make_user(username: str, email: str, role: str):
    User = get_user_model()
    user = User.objects.create_user(
        username=username,
        email=email,
        password="testpass",
        is_active=True,
    )
    group, _ = Group.objects.get_or_create(name=role)
    user.groups.add(group)
    return user


def _client_for(user) -> APIClient:
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def user(db):
    """Test user in the ADMIN group."""
    return _make_user("testadmin", "admin@example.com", ROLE_ADMIN)


@pytest.fixture
def api_client(user):
    return _client_for(user)


@pytest.fixture
def parent_user(db):
    return _make_user("testparent", PARENT_EMAIL, ROLE_PARENT)


@pytest.fixture
def parent_client(parent_user):
    return _client_for(parent_user)


@pytest.fixture
def staff_client(db):
    return _client_for(_make_user("teststaff", "staff@example.com", ROLE_STAFF))


@pytest.fixture
def readonly_client(db):
    return _client_for(_make_user("testreadonly", "viewer@example.com", ROLE_READONLY))


@pytest.fixture
def catalog(db):
    """Default programs, room types, payment plans and enrollment plans."""
    call_command("seed_catalog", verbosity=0)


@pytest.fixture
def registration_payload():
    return copy.deepcopy(REGISTRATION_PAYLOAD)


@pytest.fixture
def registered_child_id(api_client, parent_user, catalog, registration_payload):
    res = api_client.post("/api/registrations/", registration_payload, format="json")
    assert res.status_code == 201, res.data
    return res.data["childId"]
