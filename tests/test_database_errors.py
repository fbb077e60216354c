from coursereviews.models import Bookmark, Course, Review


def assert_database_error(response, prefix):
    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail.startswith(prefix)
    assert "database is unavailable" in detail


class TestFailedWrites:
    """A failed commit reports the database message and leaves the data unchanged."""

    def test_submit_review(self, client, headers, sample_courses, failing_commit, db):
        failing_commit()
        response = client.post(
            "/reviews", json={"course_code": "CS F111", "rec": "Good"}, headers=headers
        )
        assert_database_error(response, "Error creating review")
        assert db.query(Review).count() == 0

    def test_update_review(self, client, headers, student, sample_courses, make_review, failing_commit, db):
        review = make_review(student, rec="Before")
        failing_commit()
        response = client.patch(f"/reviews/{review.review_id}", json={"rec": "After"}, headers=headers)
        assert_database_error(response, "Error updating review")

        db.expire_all()
        assert db.query(Review).filter(Review.review_id == review.review_id).one().rec == "Before"

    def test_delete_review(self, client, headers, student, sample_courses, make_review, failing_commit, db):
        review = make_review(student)
        failing_commit()
        response = client.delete(
            f"/reviews/{review.review_id}", params={"confirm": "true"}, headers=headers
        )
        assert_database_error(response, "Error deleting review")
        assert db.query(Review).filter(Review.review_id == review.review_id).count() == 1

    def test_add_bookmark_failure_is_not_a_duplicate(self, client, headers, sample_courses, failing_commit, db):
        failing_commit()
        response = client.post("/bookmarks", json={"course_code": "CS F111"}, headers=headers)
        assert_database_error(response, "Error adding bookmark")
        assert db.query(Bookmark).count() == 0

    def test_remove_bookmark(self, client, headers, student, sample_courses, failing_commit, db):
        db.add(Bookmark(user_id=student.id, course_code="CS F111"))
        db.commit()

        failing_commit()
        response = client.delete("/bookmarks/CS F111", headers=headers)
        assert_database_error(response, "Error removing bookmark")

        db.expire_all()
        assert db.query(Bookmark).filter(Bookmark.user_id == student.id).count() == 1


class TestFailedReads:
    """A failed first load returns the error text and no partial data."""

    def test_browse(self, client, headers, sample_courses, failing_query):
        failing_query(Course)
        response = client.get("/courses", headers=headers)
        assert_database_error(response, "Error loading courses")
        assert "courses" not in response.json()

    def test_course_detail(self, client, headers, sample_courses, failing_query):
        failing_query(Course)
        response = client.get("/courses/CS F111", headers=headers)
        assert_database_error(response, "Error loading course")
        assert "reviews" not in response.json()

    def test_my_reviews(self, client, headers, student, sample_courses, make_review, failing_query):
        make_review(student)
        failing_query(Review)
        response = client.get("/reviews/mine", headers=headers)
        assert_database_error(response, "Error loading reviews")
        assert "reviews" not in response.json()

    def test_bookmarks(self, client, headers, sample_courses, failing_query):
        failing_query(Course)
        response = client.get("/bookmarks", headers=headers)
        assert_database_error(response, "Error loading bookmarks")
        assert "courses" not in response.json()
