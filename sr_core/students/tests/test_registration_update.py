# sr_core/students/tests/test_registration_update.py
import pytest

from sr_core.catalog.models import PaymentPlan, Program
from sr_core.students.models import CareFacility, ChildGuardian, MedicalContact, Registration

pytestmark = pytest.mark.django_db

SECTIONS = ("childInfo", "parentGuardianInfo", "medicalInfo", "careFacilityInfo", "enrollmentProgramDetails")


def _get(client, child_id):
    res = client.get(f"/api/registrations/{child_id}/")
    assert res.status_code == 200, res.data
    return res.json()


def test_medical_only_update_leaves_other_sections(api_client, registered_child_id):
    before = _get(api_client, registered_child_id)

    res = api_client.put(
        f"/api/registrations/{registered_child_id}/",
        {"medicalInfo": {"phoneNumber": "5125559999", "city": "Round Rock"}},
        format="json",
    )
    assert res.status_code == 200, res.data
    assert res.data == {
        "success": True,
        "message": "Registration updated successfully",
        "childId": registered_child_id,
    }

    after = _get(api_client, registered_child_id)
    for section in SECTIONS:
        if section != "medicalInfo":
            assert after[section] == before[section], section

    assert after["medicalInfo"]["phoneNumber"] == "5125559999"
    assert after["medicalInfo"]["city"] == "Round Rock"
    # untouched keys inside the section keep their values
    assert after["medicalInfo"]["physicianLastName"] == "Reed"
    assert after["medicalInfo"]["zipCode"] == "78702"


def test_patch_is_handled_like_put(api_client, registered_child_id):
    res = api_client.patch(
        f"/api/registrations/{registered_child_id}/",
        {"childInfo": {"placeOfBirth": "Dallas"}},
        format="json",
    )
    assert res.status_code == 200, res.data
    assert _get(api_client, registered_child_id)["childInfo"]["placeOfBirth"] == "Dallas"


def test_guardian_update_changes_relationship_on_primary_link(api_client, registered_child_id):
    res = api_client.put(
        f"/api/registrations/{registered_child_id}/",
        {"parentGuardianInfo": {"relationship": "Guardian", "lastName": "Lopez-Diaz"}},
        format="json",
    )
    assert res.status_code == 200, res.data

    after = _get(api_client, registered_child_id)["parentGuardianInfo"]
    assert after["relationship"] == "Guardian"
    assert after["lastName"] == "Lopez-Diaz"
    assert after["firstName"] == "Ana"

    assert ChildGuardian.objects.filter(child_id=registered_child_id, is_primary=True).count() == 1


def test_guardian_update_without_primary_link_is_rejected(api_client, registered_child_id):
    ChildGuardian.objects.filter(child_id=registered_child_id).update(is_primary=False)

    res = api_client.put(
        f"/api/registrations/{registered_child_id}/",
        {"parentGuardianInfo": {"phoneNumber": "5125550999"}},
        format="json",
    )
    assert res.status_code == 400
    assert res.data["error"]["message"] == "Guardian not found for this child"


def test_medical_section_is_created_when_missing(api_client, registered_child_id):
    MedicalContact.objects.filter(child_id=registered_child_id).delete()
    assert _get(api_client, registered_child_id)["medicalInfo"]["medicalContactId"] is None

    res = api_client.put(
        f"/api/registrations/{registered_child_id}/",
        {"medicalInfo": {"physicianName": "Lee Chen", "phoneNumber": "5125551111"}},
        format="json",
    )
    assert res.status_code == 200, res.data

    medical = _get(api_client, registered_child_id)["medicalInfo"]
    assert medical["medicalContactId"] is not None
    assert medical["physicianName"] == "Lee Chen"
    assert medical["phoneNumber"] == "5125551111"


def test_care_facility_section_is_created_when_missing(api_client, registered_child_id):
    CareFacility.objects.filter(child_id=registered_child_id).delete()

    res = api_client.put(
        f"/api/registrations/{registered_child_id}/",
        {"careFacilityInfo": {"emergencyContactName": "Rosa Lopez"}},
        format="json",
    )
    assert res.status_code == 200, res.data
    assert CareFacility.objects.get(child_id=registered_child_id).emergency_contact_name == "Rosa Lopez"


def test_enrollment_section_reresolves_selection(api_client, registered_child_id):
    res = api_client.put(
        f"/api/registrations/{registered_child_id}/",
        {"enrollmentProgramDetails": {"programType": "Part Time", "roomType": "Infant", "planType": "Weekly"}},
        format="json",
    )
    assert res.status_code == 200, res.data

    details = _get(api_client, registered_child_id)["enrollmentProgramDetails"]
    assert details["programType"] == "Part Time"
    assert details["roomType"] == "Infant"
    assert details["planType"] == "Weekly"
    # not sent, so unchanged
    assert details["enrollmentDate"] == "2024-09-02"
    assert details["status"] == "Pending Approval"


def test_enrollment_endpoint_keeps_unsent_choices(api_client, registered_child_id):
    res = api_client.put(
        f"/api/registrations/{registered_child_id}/enrollment/",
        {"enrollmentProgramDetails": {"roomType": "Preschool", "enrollmentDate": "2025-01-06"}},
        format="json",
    )
    assert res.status_code == 200, res.data
    assert res.data["childId"] == registered_child_id

    details = _get(api_client, registered_child_id)["enrollmentProgramDetails"]
    assert details["programType"] == "Full Time"
    assert details["roomType"] == "Preschool"
    assert details["planType"] == "Monthly"
    assert details["enrollmentDate"] == "2025-01-06"


def test_enrollment_endpoint_requires_section(api_client, registered_child_id):
    res = api_client.put(f"/api/registrations/{registered_child_id}/enrollment/", {}, format="json")
    assert res.status_code == 400


def test_enrollment_is_created_when_missing(api_client, registered_child_id):
    Registration.objects.filter(child_id=registered_child_id).delete()

    res = api_client.put(
        f"/api/registrations/{registered_child_id}/enrollment/",
        {
            "enrollmentProgramDetails": {
                "programType": Program.objects.get(name="Part Time").id,
                "roomType": "Toddler",
                "planType": PaymentPlan.objects.get(plan_type="Bi-Weekly").id,
            }
        },
        format="json",
    )
    assert res.status_code == 200, res.data

    reg = Registration.objects.get(child_id=registered_child_id)
    assert reg.status == "Pending Approval"
    assert reg.amount == 0
    assert reg.enrollment_date is None
    assert reg.payment_plan.plan_type == "Bi-Weekly"


def test_enrollment_without_registration_needs_full_selection(api_client, registered_child_id):
    Registration.objects.filter(child_id=registered_child_id).delete()

    res = api_client.put(
        f"/api/registrations/{registered_child_id}/enrollment/",
        {"enrollmentProgramDetails": {"programType": "Part Time"}},
        format="json",
    )
    assert res.status_code == 400
    assert res.data["error"]["message"] == "Invalid program or room type"
    assert not Registration.objects.filter(child_id=registered_child_id).exists()


def test_update_unknown_child_returns_404(api_client, catalog):
    res = api_client.put("/api/registrations/424242/", {"childInfo": {"firstName": "X"}}, format="json")
    assert res.status_code == 404
    assert res.data["error"]["message"] == "Student not found"


def test_update_with_no_sections_is_rejected(api_client, registered_child_id):
    res = api_client.put(f"/api/registrations/{registered_child_id}/", {}, format="json")
    assert res.status_code == 400


def test_blank_required_name_is_rejected_on_update(api_client, registered_child_id):
    res = api_client.put(
        f"/api/registrations/{registered_child_id}/",
        {"childInfo": {"firstName": ""}},
        format="json",
    )
    assert res.status_code == 400
    assert _get(api_client, registered_child_id)["childInfo"]["firstName"] == "Mia"


@pytest.mark.parametrize(
    "full_name,parts",
    [
        ("Kim Park", ("Kim", "", "Park")),
        ("Kim", ("Kim", "", "")),
    ],
)
def test_physician_full_name_replaces_every_part(api_client, registered_child_id, full_name, parts):
    res = api_client.put(
        f"/api/registrations/{registered_child_id}/",
        {"medicalInfo": {"physicianName": full_name}},
        format="json",
    )
    assert res.status_code == 200, res.data

    medical = _get(api_client, registered_child_id)["medicalInfo"]
    assert medical["physicianName"] == full_name
    assert (
        medical["physicianFirstName"],
        medical["physicianMiddleName"],
        medical["physicianLastName"],
    ) == parts
