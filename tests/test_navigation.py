from coursereviews.services.navigation import after_submit_redirect, back_link, course_path


class TestBackLink:
    """Origin parameters decide where "back" goes."""

    def test_from_course_goes_back_to_course(self):
        link = back_link("course", "CS F111")
        assert link.href == "/course/CS%20F111"
        assert link.label == "Back to Reviews"

    def test_from_course_without_code_goes_home(self):
        assert back_link("course", None).href == "/home"

    def test_from_profile(self):
        link = back_link("profile")
        assert link.href == "/profile"
        assert link.label == "Back to Profile"

    def test_unknown_origin_goes_home(self):
        assert back_link("somewhere").href == "/home"
        assert back_link(None).label == "Back to Home"


class TestSubmitRedirect:
    def test_redirect_matches_origin(self):
        assert after_submit_redirect("course", "CS F111") == "/course/CS%20F111"
        assert after_submit_redirect("profile") == "/profile"
        assert after_submit_redirect("home") == "/home"

    def test_course_path_escapes_slashes(self):
        assert course_path("BITS/F112") == "/course/BITS%2FF112"
