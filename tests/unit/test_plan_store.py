"""
Unit tests for JsonPlanStore.
"""

import json
from datetime import datetime

import pytest

from lesson_planner.errors import PersistenceError
from lesson_planner.models.lesson_plan import create_lesson_plan
from lesson_planner.storage.plan_store import JsonPlanStore


@pytest.fixture
def store(tmp_path):
    """Store in an empty temporary directory."""
    return JsonPlanStore(tmp_path)


@pytest.fixture
def plan():
    plan = create_lesson_plan(now=datetime(2024, 3, 3, 9, 0))
    plan["lesson_title"] = "الفاعل"
    return plan


class TestPlans:
    """Test cases for plan persistence."""

    def test_empty_store(self, store):
        """Test a missing plan file means no plans."""
        assert store.list_all() == []
        assert store.get("plan-1") is None

    def test_upsert_appends(self, store, plan):
        """Test a new plan is appended."""
        store.upsert(plan)

        assert store.list_all() == [plan]
        assert store.get(plan["id"]) == plan

    def test_upsert_replaces_same_id(self, store, plan):
        """Test saving a plan with an existing id replaces it in place."""
        other = create_lesson_plan(now=datetime(2024, 3, 4, 9, 0))
        store.upsert(plan)
        store.upsert(other)

        edited = dict(plan, lesson_title="المفعول به")
        store.upsert(edited)

        plans = store.list_all()
        assert [p["id"] for p in plans] == [plan["id"], other["id"]]
        assert plans[0]["lesson_title"] == "المفعول به"

    def test_upsert_without_id(self, store, plan):
        """Test a plan without id is rejected."""
        plan["id"] = ""

        with pytest.raises(ValueError):
            store.upsert(plan)

    def test_file_is_versioned(self, store, plan):
        """Test plans are written with the current schema version."""
        store.upsert(plan)

        raw = json.loads(store.plans_path.read_text(encoding="utf-8"))

        assert raw["schema_version"] == "1.1"
        assert raw["data"]["plans"][0]["lesson_title"] == "الفاعل"

    def test_arabic_is_stored_unescaped(self, store, plan):
        """Test Arabic text is written as UTF-8, not escaped."""
        store.upsert(plan)

        assert "الفاعل" in store.plans_path.read_text(encoding="utf-8")

    def test_corrupt_file_raises(self, store):
        """Test an unreadable plan file raises PersistenceError."""
        store.plans_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(PersistenceError):
            store.list_all()

    def test_unknown_version_raises(self, store):
        """Test an unknown schema version raises PersistenceError."""
        store.plans_path.write_text(
            json.dumps({"schema_version": "9.9", "data": {"plans": []}}),
            encoding="utf-8"
        )

        with pytest.raises(PersistenceError):
            store.list_all()

    def test_corrupt_file_is_not_overwritten(self, store, plan):
        """Test a failed read aborts the save and keeps the file."""
        store.plans_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(PersistenceError):
            store.upsert(plan)

        assert store.plans_path.read_text(encoding="utf-8") == "{not json"

    def test_file_without_envelope_is_not_overwritten(self, store, plan):
        """Test a plan file missing its data object is refused, not replaced."""
        content = json.dumps({"plans": [{"id": "plan-1704067200000"}]})
        store.plans_path.write_text(content, encoding="utf-8")

        with pytest.raises(PersistenceError):
            store.list_all()
        with pytest.raises(PersistenceError):
            store.upsert(plan)

        assert store.plans_path.read_text(encoding="utf-8") == content

    @pytest.mark.parametrize("plans", [
        [1],
        [{"id": "plan-1"}, "plan-2"],
        [{"id": "plan-1", "cognitive_objectives": ["تذكر"]}],
    ])
    def test_malformed_plan_entries_raise(self, store, plans):
        """Test non-object plan or objective entries raise PersistenceError."""
        store.plans_path.write_text(
            json.dumps({"schema_version": "1.1", "data": {"plans": plans}}),
            encoding="utf-8"
        )

        with pytest.raises(PersistenceError):
            store.get("plan-1")

    def test_legacy_file_is_migrated(self, store):
        """Test an unversioned file gets objective ids on read."""
        legacy = {
            "data": {
                "plans": [{
                    "id": "plan-1",
                    "cognitive_objectives": [
                        {"level": "تذكر", "formulation": "أ", "evaluation": "ب"},
                        {"id": "", "level": "فهم", "formulation": "ج", "evaluation": "د"},
                    ],
                }]
            }
        }
        store.plans_path.write_text(json.dumps(legacy), encoding="utf-8")

        objectives = store.get("plan-1")["cognitive_objectives"]

        ids = [o["id"] for o in objectives]
        assert all(i.startswith("cog-") for i in ids)
        assert len(set(ids)) == 2


class TestProfile:
    """Test cases for teacher profile persistence."""

    def test_missing_profile(self, store):
        """Test a missing profile is empty."""
        assert store.load_profile() == {}

    def test_round_trip(self, store):
        """Test the saved profile is loaded back."""
        store.save_profile({
            "education_area": "أمانة العاصمة",
            "school_name": "مدرسة الوحدة",
            "emblem1": None,
            "emblem2": "data:image/png;base64,AAAA",
            "teacher_name": "أحمد",
        })

        profile = store.load_profile()

        assert profile["school_name"] == "مدرسة الوحدة"
        assert profile["emblem2"] == "data:image/png;base64,AAAA"

    def test_corrupt_profile_is_ignored(self, store):
        """Test a corrupt profile loads as empty."""
        store.profile_path.write_text("[]", encoding="utf-8")

        assert store.load_profile() == {}

    def test_extra_keys_are_dropped(self, store):
        """Test only profile fields are returned."""
        store.profile_path.write_text(
            json.dumps({"school_name": "مدرسة", "lesson_title": "x"}),
            encoding="utf-8"
        )

        assert store.load_profile() == {"school_name": "مدرسة"}
