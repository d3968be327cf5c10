# sr_core/iam/tests/test_auth_and_me.py
import pytest
from django.contrib.auth.models import Group
from rest_framework.test import APIClient

from sr_core.common.permissions import ROLE_PARENT

pytestmark = pytest.mark.django_db


def test_login_returns_user_summary_and_sets_cookies(parent_user, settings):
    c = APIClient()
    res = c.post("/api/login/", {"email": "parent@example.com", "password": "testpass"}, format="json")
    assert res.status_code == 200, res.data

    assert res.data == {
        "success": True,
        "message": "Login successful",
        "user": {
            "userid": parent_user.id,
            "email": "parent@example.com",
            "roleid": Group.objects.get(name=ROLE_PARENT).id,
        },
    }

    assert settings.SIMPLE_JWT["AUTH_COOKIE"] in res.cookies
    assert settings.SIMPLE_JWT["AUTH_COOKIE_REFRESH"] in res.cookies
    assert res.cookies[settings.SIMPLE_JWT["AUTH_COOKIE"]]["httponly"]


def test_login_email_is_case_insensitive(parent_user):
    res = APIClient().post("/api/login/", {"email": "Parent@Example.COM", "password": "testpass"}, format="json")
    assert res.status_code == 200


def test_login_wrong_password_is_401(parent_user):
    res = APIClient().post("/api/login/", {"email": "parent@example.com", "password": "nope"}, format="json")
    assert res.status_code == 401
    assert res.data["error"]["message"] == "Invalid email or password"


def test_login_unknown_email_is_401(db):
    res = APIClient().post("/api/login/", {"email": "ghost@example.com", "password": "x"}, format="json")
    assert res.status_code == 401


@pytest.mark.parametrize("payload", [{}, {"email": "parent@example.com"}, {"password": "testpass"}])
def test_login_missing_fields_is_400(parent_user, payload):
    res = APIClient().post("/api/login/", payload, format="json")
    assert res.status_code == 400
    assert res.data["error"]["message"] == "Email and password are required"


def test_login_user_without_role_has_null_roleid(django_user_model):
    django_user_model.objects.create_user(username="norole", email="norole@example.com", password="pw")

    res = APIClient().post("/api/login/", {"email": "norole@example.com", "password": "pw"}, format="json")
    assert res.status_code == 200
    assert res.data["user"]["roleid"] is None


def test_cookie_session_reaches_me(parent_user):
    c = APIClient()
    login = c.post("/api/login/", {"email": "parent@example.com", "password": "testpass"}, format="json")
    assert login.status_code == 200

    res = c.get("/api/me/")
    assert res.status_code == 200
    assert res.data["user"]["id"] == parent_user.id
    assert res.data["roles"] == [ROLE_PARENT]


def test_refresh_reissues_cookies(parent_user, settings):
    c = APIClient()
    c.post("/api/login/", {"email": "parent@example.com", "password": "testpass"}, format="json")

    res = c.post("/api/auth/refresh/")
    assert res.status_code == 200
    assert settings.SIMPLE_JWT["AUTH_COOKIE"] in res.cookies


def test_logout_clears_cookies(parent_user, settings):
    c = APIClient()
    c.post("/api/login/", {"email": "parent@example.com", "password": "testpass"}, format="json")

    res = c.post("/api/auth/logout/")
    assert res.status_code == 200
    assert res.cookies[settings.SIMPLE_JWT["AUTH_COOKIE"]].value == ""


def test_me_requires_auth(db):
    res = APIClient().get("/api/me/")
    assert res.status_code in (401, 403)


def test_users_list_is_admin_only(api_client, parent_client, user, parent_user):
    assert parent_client.get("/api/users/").status_code == 403

    res = api_client.get("/api/users/")
    assert res.status_code == 200
    assert res.data["success"] is True
    by_id = {u["userid"]: u for u in res.data["users"]}
    assert by_id[parent_user.id]["email"] == "parent@example.com"
    assert by_id[parent_user.id]["roleid"] == Group.objects.get(name=ROLE_PARENT).id
    assert by_id[user.id]["roleid"] is not None
