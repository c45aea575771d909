from tests.conftest import add_course, enrolled_counter, registration_count


def enroll(client, course_id: int):
    return client.post("/api/registrations", json={"course_id": course_id})


def test_enrollment_requires_login(client):
    course_id = add_course("CS101")

    assert enroll(client, course_id).status_code == 401
    assert client.get("/api/registrations").status_code == 401
    assert client.delete("/api/registrations/1").status_code == 401


def test_student_enrolls_in_course(client_for):
    student = client_for("alice")
    course_id = add_course("CS101")

    r = enroll(student, course_id)

    assert r.status_code == 200, r.text
    assert r.json()["success"] is True
    assert enrolled_counter(course_id) == 1
    assert registration_count(course_id) == 1


def test_enrollment_failures_map_to_status_codes(client_for):
    alice = client_for("alice")
    bob = client_for("bob")
    small = add_course("CS101", day="Monday", start="09:00", end="10:30", capacity=1)
    clashing = add_course("CS102", day="Monday", start="10:00", end="11:00")

    assert enroll(alice, small).status_code == 200

    r = enroll(bob, small)
    assert r.status_code == 400
    assert r.json() == {"error": "Course is full"}

    r = enroll(alice, clashing)
    assert r.status_code == 400
    assert r.json() == {"error": "Schedule conflict with CS101 on Monday"}

    r = enroll(bob, 999999)
    assert r.status_code == 404
    assert r.json() == {"error": "Course not found"}


def test_second_enrollment_in_same_course_is_rejected(client_for):
    student = client_for("alice")
    course_id = add_course("CS101")
    assert enroll(student, course_id).status_code == 200

    r = enroll(student, course_id)

    assert r.status_code == 400
    assert r.json() == {"error": "Already registered for this course"}
    assert enrolled_counter(course_id) == 1


def test_enrollment_body_is_validated(client_for):
    student = client_for("alice")

    assert student.post("/api/registrations", json={}).status_code == 400
    assert student.post("/api/registrations", json={"course_id": "abc"}).status_code == 400


def test_students_see_only_their_registrations(client_for):
    alice = client_for("alice")
    bob = client_for("bob")
    admin = client_for("admin")
    math = add_course("MATH101", day="Tuesday")
    cs = add_course("CS101", day="Monday")
    assert enroll(alice, math).status_code == 200
    assert enroll(alice, cs).status_code == 200
    assert enroll(bob, cs).status_code == 200

    rows = alice.get("/api/registrations").json()
    assert [r["code"] for r in rows] == ["CS101", "MATH101"]
    assert {r["username"] for r in rows} == {"alice"}
    assert rows[0]["status"] == "enrolled"
    assert rows[0]["instructor"] == "Dr. Smith"
    assert rows[0]["start_time"] == "09:00"

    all_rows = admin.get("/api/registrations").json()
    assert len(all_rows) == 3
    assert [r["code"] for r in all_rows] == ["CS101", "CS101", "MATH101"]
    assert {r["username"] for r in all_rows} == {"alice", "bob"}


def test_student_drops_own_registration(client_for):
    student = client_for("alice")
    course_id = add_course("CS101")
    enroll(student, course_id)
    registration_id = student.get("/api/registrations").json()[0]["id"]

    r = student.delete(f"/api/registrations/{registration_id}")

    assert r.status_code == 200
    assert r.json() == {"success": True}
    assert enrolled_counter(course_id) == 0
    assert student.delete(f"/api/registrations/{registration_id}").status_code == 404


def test_student_cannot_drop_another_students_registration(client_for):
    alice = client_for("alice")
    bob = client_for("bob")
    course_id = add_course("CS101")
    enroll(alice, course_id)
    registration_id = alice.get("/api/registrations").json()[0]["id"]

    r = bob.delete(f"/api/registrations/{registration_id}")

    assert r.status_code == 403
    assert r.json() == {"error": "Forbidden"}
    assert enrolled_counter(course_id) == 1


def test_admin_drops_any_registration(client_for):
    alice = client_for("alice")
    admin = client_for("admin")
    course_id = add_course("CS101")
    enroll(alice, course_id)
    registration_id = alice.get("/api/registrations").json()[0]["id"]

    r = admin.delete(f"/api/registrations/{registration_id}")

    assert r.status_code == 200
    assert enrolled_counter(course_id) == 0
    assert registration_count(course_id) == 0


def test_full_then_freed_seat_scenario(client_for):
    s1 = client_for("alice")
    s2 = client_for("bob")
    course_id = add_course("CS101", day="Monday", start="09:00", end="10:00", capacity=1)

    assert enroll(s1, course_id).status_code == 200
    assert enroll(s2, course_id).json() == {"error": "Course is full"}

    registration_id = s1.get("/api/registrations").json()[0]["id"]
    assert s1.delete(f"/api/registrations/{registration_id}").status_code == 200
    assert enrolled_counter(course_id) == 0

    assert enroll(s2, course_id).status_code == 200
    assert enrolled_counter(course_id) == registration_count(course_id) == 1
