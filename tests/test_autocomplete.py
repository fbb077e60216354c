import pytest

from coursereviews.services.autocomplete import (
    CourseFieldsState,
    click_outside,
    select_suggestion,
    suggestions,
    type_code,
    type_name,
    visible_suggestions,
)


@pytest.fixture
def courses():
    return [
        {"course_code": "CS F111", "course_name": "Computer Programming", "nickname": "CP"},
        {"course_code": "CS F211", "course_name": "Data Structures and Algorithms", "nickname": "DSA"},
        {"course_code": "MATH F111", "course_name": "Mathematics I", "nickname": None},
    ]


def codes(courses):
    return [c["course_code"] for c in courses]


class TestSuggestions:
    """Suggestions follow whichever input was typed into last."""

    def test_no_active_field_suggests_nothing(self, courses):
        assert suggestions(courses, CourseFieldsState()) == []

    def test_code_field_matches_code_substring(self, courses):
        state = type_code(CourseFieldsState(), "f111")
        assert codes(suggestions(courses, state)) == ["CS F111", "MATH F111"]

    def test_code_field_ignores_name(self, courses):
        state = type_code(CourseFieldsState(), "program")
        assert suggestions(courses, state) == []

    def test_name_field_matches_name(self, courses):
        state = type_name(CourseFieldsState(), "mathem")
        assert codes(suggestions(courses, state)) == ["MATH F111"]

    def test_name_field_matches_nickname(self, courses):
        state = type_name(CourseFieldsState(), "dsa")
        assert codes(suggestions(courses, state)) == ["CS F211"]

    def test_visible_suggestions_capped_at_eight(self):
        many = [
            {"course_code": f"CS F{i:03d}", "course_name": f"Course {i}", "nickname": None}
            for i in range(12)
        ]
        state = type_code(CourseFieldsState(), "cs")
        assert len(visible_suggestions(many, state)) == 8

    def test_closed_dropdown_shows_nothing(self, courses):
        state = click_outside(type_code(CourseFieldsState(), "cs"))
        assert visible_suggestions(courses, state) == []


class TestFieldState:
    def test_typing_opens_suggestions_and_marks_field(self):
        state = type_name(CourseFieldsState(), "Comp")
        assert state.course_name == "Comp"
        assert state.active_field == "name"
        assert state.show_suggestions is True

    def test_selecting_fills_both_fields_and_closes(self, courses):
        state = type_code(CourseFieldsState(), "cs f2")
        state = select_suggestion(state, courses[1])
        assert state.course_code == "CS F211"
        assert state.course_name == "Data Structures and Algorithms"
        assert state.show_suggestions is False
        assert state.active_field is None

    def test_click_outside_clears_active_field(self):
        state = click_outside(type_code(CourseFieldsState(), "cs"))
        assert state.show_suggestions is False
        assert state.active_field is None
        assert state.course_code == "cs"
