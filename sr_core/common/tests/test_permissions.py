# sr_core/common/tests/test_permissions.py
from types import SimpleNamespace

import pytest
from django.contrib.auth.models import AnonymousUser, Group
from django.core.management import call_command
from rest_framework.test import APIClient

from sr_core.common.permissions import (
    ALL_ROLES,
    ROLE_ADMIN,
    ROLE_PARENT,
    ROLE_READONLY,
    RegistrationPermission,
    StudentPermission,
    user_roles,
    view_action,
)
from sr_core.students.models import Child

pytestmark = pytest.mark.django_db


def _check(permission, user, *, action, method="GET"):
    request = SimpleNamespace(user=user, method=method)
    view = SimpleNamespace(action=action, kwargs={})
    return permission().has_permission(request, view)


def test_ensure_roles_creates_every_group():
    call_command("ensure_roles", verbosity=0)
    call_command("ensure_roles", verbosity=0)
    assert sorted(Group.objects.values_list("name", flat=True)) == sorted(ALL_ROLES)


def test_user_without_groups_is_readonly(django_user_model):
    u = django_user_model.objects.create_user(username="plain", password="pw")
    assert user_roles(u) == {ROLE_READONLY}


def test_superuser_is_admin(django_user_model):
    u = django_user_model.objects.create_superuser(username="root", password="pw", email="root@example.com")
    assert user_roles(u) == {ROLE_ADMIN}


def test_anonymous_has_no_roles():
    assert user_roles(AnonymousUser()) == set()
    assert not _check(StudentPermission, AnonymousUser(), action="list")


def test_parent_registers_but_does_not_browse_roster(parent_user):
    assert _check(RegistrationPermission, parent_user, action="create", method="POST")
    assert _check(RegistrationPermission, parent_user, action="enrollment", method="PUT")
    assert not _check(StudentPermission, parent_user, action="list")


def test_unknown_unsafe_action_is_denied(parent_user):
    assert not _check(StudentPermission, parent_user, action="destroy", method="DELETE")


def test_plain_view_action_comes_from_method(user):
    request = SimpleNamespace(user=user, method="PUT")
    view = SimpleNamespace(kwargs={"pk": 1})
    assert view_action(request, view) == "update"

    request.method = "GET"
    assert view_action(request, SimpleNamespace(kwargs={})) == "list"


def test_parent_reaches_own_child(parent_client, registered_child_id):
    res = parent_client.get(f"/api/registrations/{registered_child_id}/")
    assert res.status_code == 200


def test_parent_cannot_reach_another_familys_child(django_user_model, registered_child_id):
    other = django_user_model.objects.create_user(username="otherparent", email="other@example.com", password="pw")
    other.groups.add(Group.objects.get_or_create(name=ROLE_PARENT)[0])
    c = APIClient()
    c.force_authenticate(user=other)

    assert c.get(f"/api/registrations/{registered_child_id}/").status_code == 403
    res = c.patch(
        f"/api/registrations/{registered_child_id}/",
        {"childInfo": {"gender": "Male"}},
        format="json",
    )
    assert res.status_code == 403


def test_staff_reaches_any_child(staff_client, registered_child_id):
    assert staff_client.get(f"/api/registrations/{registered_child_id}/").status_code == 200


def test_parent_cannot_register_under_another_account(django_user_model, parent_client, catalog, registration_payload):
    django_user_model.objects.create_user(username="otherparent", email="other@example.com", password="pw")
    registration_payload["email"] = "other@example.com"

    res = parent_client.post("/api/registrations/", registration_payload, format="json")
    assert res.status_code == 403
    assert res.data["error"]["code"] == "permission_denied"
    assert Child.objects.count() == 0


def test_parent_email_check_ignores_case(parent_client, parent_user, catalog, registration_payload):
    registration_payload["email"] = "  PARENT@example.com "

    res = parent_client.post("/api/registrations/", registration_payload, format="json")
    assert res.status_code == 201
    assert parent_user.children.count() == 1


def test_staff_registers_for_any_parent(staff_client, parent_user, catalog, registration_payload):
    res = staff_client.post("/api/registrations/", registration_payload, format="json")
    assert res.status_code == 201
