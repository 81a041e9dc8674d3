"""
Unit tests for schema versioning and migration.
"""

import pytest

from lesson_planner.models.schema_version import (
    CURRENT_VERSION,
    SchemaVersion,
    VersionedData,
    migrate,
)


class TestVersionedData:
    """Test cases for VersionedData."""

    def test_from_dict_without_version(self):
        """Test a missing version is read as 1.0."""
        versioned = VersionedData.from_dict({"data": {"plans": []}})

        assert versioned.version_enum == SchemaVersion.V1_0

    def test_to_dict(self):
        """Test the on-disk layout."""
        versioned = VersionedData(schema_version="1.1", data={"plans": []})

        assert versioned.to_dict() == {"schema_version": "1.1", "data": {"plans": []}}

    def test_unknown_version(self):
        """Test an unknown version raises ValueError."""
        with pytest.raises(ValueError):
            VersionedData(schema_version="2.0", data={}).version_enum

    def test_missing_data_object(self):
        """Test an envelope without a data object raises ValueError."""
        with pytest.raises(ValueError):
            VersionedData.from_dict({"plans": []})


class TestMigrate:
    """Test cases for migrate."""

    def test_current_version_unchanged(self):
        """Test current data is returned as is."""
        versioned = VersionedData(schema_version=CURRENT_VERSION.value, data={"plans": []})

        assert migrate(versioned) is versioned

    def test_assigns_missing_and_duplicate_ids(self):
        """Test objectives get unique prefixed ids."""
        plan = {
            "id": "plan-1",
            "psychomotor_objectives": [
                {"id": "psy-a", "level": "", "formulation": "", "evaluation": ""},
                {"id": "psy-a", "level": "", "formulation": "", "evaluation": ""},
            ],
            "affective_objectives": [{"level": "", "formulation": "", "evaluation": ""}],
        }

        migrated = migrate(VersionedData(schema_version="1.0", data={"plans": [plan]}))

        result = migrated.data["plans"][0]
        psy_ids = [o["id"] for o in result["psychomotor_objectives"]]
        assert migrated.schema_version == CURRENT_VERSION.value
        assert psy_ids[0] == "psy-a"
        assert psy_ids[1].startswith("psy-") and psy_ids[1] != "psy-a"
        assert result["affective_objectives"][0]["id"].startswith("aff-")

    def test_malformed_plan_list(self):
        """Test a non-list plans value raises ValueError."""
        with pytest.raises(ValueError):
            migrate(VersionedData(schema_version="1.0", data={"plans": {"id": "x"}}))

    def test_non_object_plan_at_current_version(self):
        """Test plan entries are checked even when no upgrade runs."""
        with pytest.raises(ValueError, match="Plan 0"):
            migrate(VersionedData(schema_version=CURRENT_VERSION.value, data={"plans": [1]}))
