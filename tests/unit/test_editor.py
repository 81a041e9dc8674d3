"""
Unit tests for lesson plan edit operations.
"""

import copy
from datetime import datetime

import pytest

from lesson_planner.models.catalog import ObjectiveDomain
from lesson_planner.models.lesson_plan import create_lesson_plan
from lesson_planner.planning.editor import (
    add_objective,
    new_objective_id,
    remove_objective,
    set_date,
    set_emblem,
    toggle_choice,
    update_field,
    update_objective,
)


@pytest.fixture
def plan():
    """Fresh plan created on Sunday 2024-03-03."""
    return create_lesson_plan(now=datetime(2024, 3, 3, 9, 0))


class TestUpdateField:
    """Test cases for update_field and set_date."""

    def test_sets_value(self, plan):
        """Test a field is set on a new plan."""
        updated = update_field(plan, "lesson_title", "الفاعل")

        assert updated["lesson_title"] == "الفاعل"
        assert plan["lesson_title"] == ""

    def test_unknown_field(self, plan):
        """Test an unknown field raises KeyError."""
        with pytest.raises(KeyError):
            update_field(plan, "no_such_field", "x")

    def test_date_updates_day(self, plan):
        """Test editing the date derives the weekday."""
        updated = update_field(plan, "date", "2024-03-07")

        assert updated["date"] == "2024-03-07"
        assert updated["day"] == "الخميس"

    def test_invalid_date_keeps_day(self, plan):
        """Test an invalid date is stored and the weekday is kept."""
        updated = set_date(plan, "2024-02-30")

        assert updated["date"] == "2024-02-30"
        assert updated["day"] == "الأحد"


class TestChoicesAndEmblems:
    """Test cases for toggle_choice and set_emblem."""

    def test_toggle_adds_then_removes(self, plan):
        """Test toggling a value twice restores the list."""
        added = toggle_choice(plan, "teaching_aids", "السبورة")
        removed = toggle_choice(added, "teaching_aids", "السبورة")

        assert added["teaching_aids"] == ["السبورة"]
        assert removed["teaching_aids"] == []

    def test_toggle_rejects_other_fields(self, plan):
        """Test toggle_choice only works on multi-choice fields."""
        with pytest.raises(ValueError):
            toggle_choice(plan, "subject", "العلوم")

    def test_toggle_rejects_unknown_entry(self, plan):
        """Test only catalog entries can be added."""
        with pytest.raises(ValueError, match="catalog"):
            toggle_choice(plan, "teaching_methods", "طريقة غير معروفة")

    def test_toggle_removes_entry_outside_catalog(self, plan):
        """Test an analyzed entry that is not in the catalog can still be removed."""
        plan["teaching_aids"] = ["ديوان شعري", "السبورة"]

        updated = toggle_choice(plan, "teaching_aids", "ديوان شعري")

        assert updated["teaching_aids"] == ["السبورة"]

    def test_set_emblem(self, plan):
        """Test an emblem is replaced and cleared."""
        with_emblem = set_emblem(plan, 2, "data:image/png;base64,AAAA")
        cleared = set_emblem(with_emblem, 2, None)

        assert with_emblem["emblem2"] == "data:image/png;base64,AAAA"
        assert cleared["emblem2"] is None

    def test_set_emblem_bad_number(self, plan):
        """Test only emblems 1 and 2 exist."""
        with pytest.raises(ValueError):
            set_emblem(plan, 3, None)


class TestObjectives:
    """Test cases for objective operations."""

    def test_new_objective_id_avoids_taken(self):
        """Test generated ids are distinct from taken ids."""
        ids = set()
        for _ in range(50):
            ids.add(new_objective_id("cog", ids))

        assert len(ids) == 50
        assert all(i.startswith("cog-") for i in ids)

    def test_add_objective(self, plan):
        """Test a blank objective is appended."""
        updated = add_objective(plan, ObjectiveDomain.COGNITIVE)

        objectives = updated["cognitive_objectives"]
        assert len(objectives) == 1
        assert objectives[0]["id"].startswith("new-cognitive-")
        assert objectives[0]["formulation"] == ""
        assert plan["cognitive_objectives"] == []

    def test_add_objective_by_name(self, plan):
        """Test the domain can be given by value."""
        updated = add_objective(add_objective(plan, "affective"), "affective")

        ids = [o["id"] for o in updated["affective_objectives"]]
        assert len(ids) == 2
        assert len(set(ids)) == 2

    def test_update_objective(self, plan):
        """Test one objective field is changed."""
        with_objective = add_objective(plan, ObjectiveDomain.PSYCHOMOTOR)

        updated = update_objective(with_objective, ObjectiveDomain.PSYCHOMOTOR, 0, "level", "الآلية")

        assert updated["psychomotor_objectives"][0]["level"] == "الآلية"
        assert with_objective["psychomotor_objectives"][0]["level"] == ""

    def test_update_objective_bad_field(self, plan):
        """Test the id cannot be edited."""
        with_objective = add_objective(plan, ObjectiveDomain.COGNITIVE)

        with pytest.raises(ValueError):
            update_objective(with_objective, ObjectiveDomain.COGNITIVE, 0, "id", "x")

    def test_update_objective_bad_index(self, plan):
        """Test a missing index raises IndexError."""
        with pytest.raises(IndexError):
            update_objective(plan, ObjectiveDomain.COGNITIVE, 0, "level", "تذكر")

    def test_update_objective_level_outside_taxonomy(self, plan):
        """Test a level from another domain is rejected."""
        with_objective = add_objective(plan, ObjectiveDomain.AFFECTIVE)

        with pytest.raises(ValueError, match="affective level"):
            update_objective(with_objective, ObjectiveDomain.AFFECTIVE, 0, "level", "تذكر")

    def test_update_objective_clears_level(self, plan):
        """Test an empty level is accepted."""
        with_objective = add_objective(plan, ObjectiveDomain.COGNITIVE)
        with_level = update_objective(with_objective, ObjectiveDomain.COGNITIVE, 0, "level", "تحليل")

        cleared = update_objective(with_level, ObjectiveDomain.COGNITIVE, 0, "level", "")

        assert cleared["cognitive_objectives"][0]["level"] == ""

    def test_remove_objective(self, plan):
        """Test an objective is removed by id without touching the input."""
        two = add_objective(add_objective(plan, ObjectiveDomain.COGNITIVE), ObjectiveDomain.COGNITIVE)
        before = copy.deepcopy(two)
        first_id, second_id = (o["id"] for o in two["cognitive_objectives"])

        updated = remove_objective(two, ObjectiveDomain.COGNITIVE, first_id)

        assert [o["id"] for o in updated["cognitive_objectives"]] == [second_id]
        assert two == before
