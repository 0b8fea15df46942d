from tutorhub.services.enrollment_service import fulfill_enrollment


def test_course_listing_pages(client, make_course, tutor):
    for n in range(12):
        make_course(tutor, title=f"Course {n}")

    first = client.get("/courses", params={"limit": 5}).json()["data"]
    assert first["total_items"] == 12
    assert first["total_pages"] == 3
    assert first["has_next"] is True
    assert len(first["results"]) == 5

    last = client.get("/courses", params={"limit": 5, "page": 3}).json()["data"]
    assert len(last["results"]) == 2
    assert last["has_next"] is False


def test_course_listing_clamps_bad_paging(client, course):
    data = client.get("/courses", params={"limit": 0, "page": -3}).json()["data"]

    assert data["current_page"] == 1
    assert data["limit"] == 10
    assert [c["id"] for c in data["results"]] == [course.id]


def test_course_listing_by_tutor(client, make_tutor, make_course, course, tutor):
    other = make_tutor(name="Other Tutor")
    make_course(other, title="Chemistry")

    data = client.get("/courses", params={"tutor_id": tutor.id}).json()["data"]

    assert [c["title"] for c in data["results"]] == ["Intro to Python"]


def test_course_detail(client, course):
    assert client.get(f"/courses/{course.id}").json()["data"]["title"] == "Intro to Python"
    assert client.get("/courses/999").status_code == 404


def test_tutor_updates_own_course(client, tutor, course, make_category, auth_headers):
    science = make_category("Computer Science")

    res = client.put(
        f"/courses/{course.id}",
        json={"title": "Python Foundations", "trial_rate": 30, "category_id": science.id},
        headers=auth_headers(tutor.user),
    )

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["title"] == "Python Foundations"
    assert data["trial_rate"] == 30
    assert data["full_course_rate"] == 800
    assert data["category"] == {"id": science.id, "name": "Computer Science"}


def test_update_with_unknown_category(client, tutor, course, auth_headers):
    res = client.put(
        f"/courses/{course.id}",
        json={"category_id": 404},
        headers=auth_headers(tutor.user),
    )

    assert res.status_code == 404
    assert res.json()["error"] == "Category not found"


def test_update_cannot_clear_required_fields(client, tutor, course, auth_headers):
    res = client.put(
        f"/courses/{course.id}",
        json={"title": None},
        headers=auth_headers(tutor.user),
    )

    assert res.status_code == 400


def test_other_tutor_cannot_update_or_delete(client, make_tutor, course, auth_headers):
    other = make_tutor(name="Other Tutor")

    update = client.put(f"/courses/{course.id}", json={"title": "Mine now"}, headers=auth_headers(other.user))
    delete = client.delete(f"/courses/{course.id}", headers=auth_headers(other.user))

    assert update.status_code == 403
    assert update.json()["error"] == "You can only update your own courses"
    assert delete.status_code == 403


def test_learner_cannot_update_course(client, learner, course, auth_headers):
    res = client.put(f"/courses/{course.id}", json={"title": "x"}, headers=auth_headers(learner))

    assert res.status_code == 403


def test_update_unknown_course(client, tutor, auth_headers):
    res = client.put("/courses/999", json={"title": "x"}, headers=auth_headers(tutor.user))

    assert res.status_code == 404


def test_delete_course_without_students(client, tutor, course, auth_headers):
    res = client.delete(f"/courses/{course.id}", headers=auth_headers(tutor.user))

    assert res.status_code == 200
    assert client.get(f"/courses/{course.id}").status_code == 404


def test_delete_course_drops_its_review_requests(client, session, tutor, course, learner, auth_headers):
    client.post(
        "/review-requests",
        json={"course_id": course.id, "student_ids": [learner.id]},
        headers=auth_headers(tutor.user),
    )

    res = client.delete(f"/courses/{course.id}", headers=auth_headers(tutor.user))

    assert res.status_code == 200
    assert client.get("/review-requests/student", headers=auth_headers(learner)).json()["data"] == []


def test_delete_course_with_enrollments(client, session, tutor, course, learner, auth_headers):
    fulfill_enrollment(session, learner_id=learner.id, course_id=course.id)

    res = client.delete(f"/courses/{course.id}", headers=auth_headers(tutor.user))

    assert res.status_code == 400
    assert res.json()["error"] == "Cannot delete course with active enrollments or bookings"
    assert res.json()["details"] == {"enrollments": 1, "bookings": 0}


def test_create_course_in_category(client, tutor, make_category, auth_headers):
    math = make_category("Mathematics")

    res = client.post(
        "/courses",
        json={"title": "Algebra I", "trial_rate": 30, "full_course_rate": 900, "category_id": math.id},
        headers=auth_headers(tutor.user),
    )

    assert res.status_code == 201
    listing = client.get("/courses", params={"category_id": math.id}).json()["data"]
    assert [c["title"] for c in listing["results"]] == ["Algebra I"]


def test_course_categories_with_counts(client, tutor, make_course, make_category):
    math = make_category("Mathematics", description="Numbers and shapes")
    make_category("Art")
    make_course(tutor, title="Algebra I", category=math)
    make_course(tutor, title="Geometry", category=math)

    data = client.get("/course-categories").json()["data"]

    assert [c["name"] for c in data] == ["Art", "Mathematics"]
    assert data[0]["course_count"] == 0
    assert data[1]["course_count"] == 2
    assert data[1]["description"] == "Numbers and shapes"
