"""
Versioned envelope for the plan file.

lesson_plans.json holds {"schema_version": ..., "data": {"plans": [...]}}.
Files written before the envelope existed have no version key and are
read as 1.0. migrate() upgrades one version at a time until the data is
current.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple
from uuid import uuid4

from .catalog import ObjectiveDomain


logger = logging.getLogger(__name__)


class SchemaVersion(Enum):
    """Plan file versions. 1.1 guarantees an id on every objective."""

    V1_0 = "1.0"
    V1_1 = "1.1"


CURRENT_VERSION = SchemaVersion.V1_1


@dataclass
class VersionedData:
    """Plan file contents with the version they were written at."""

    schema_version: str
    data: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {"schema_version": self.schema_version, "data": self.data}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'VersionedData':
        """
        Read the on-disk envelope.

        Raises:
            ValueError: If "data" is missing or not an object
        """
        data = raw.get("data")
        if not isinstance(data, dict):
            raise ValueError(f"Expected a \"data\" object, got {type(data).__name__}")

        return cls(
            schema_version=raw.get("schema_version", SchemaVersion.V1_0.value),
            data=data
        )

    @property
    def version_enum(self) -> SchemaVersion:
        """Raises ValueError for a version this build does not know."""
        return SchemaVersion(self.schema_version)


def _check_plans(plans: Any) -> List[Dict[str, Any]]:
    if not isinstance(plans, list):
        raise ValueError(f"Expected a list of plans, got {type(plans).__name__}")

    for index, plan in enumerate(plans):
        if not isinstance(plan, dict):
            raise ValueError(f"Plan {index} is a {type(plan).__name__}, not an object")
        for domain in ObjectiveDomain:
            objectives = plan.get(domain.field_name) or []
            if not isinstance(objectives, list) or not all(isinstance(o, dict) for o in objectives):
                raise ValueError(f"Plan {index} has malformed {domain.field_name}")

    return plans


def _assign_objective_ids(plans: List[Dict[str, Any]]) -> None:
    for plan in plans:
        for domain in ObjectiveDomain:
            seen = set()
            for objective in plan.get(domain.field_name) or []:
                if not objective.get("id") or objective["id"] in seen:
                    objective["id"] = f"{domain.id_prefix}-{uuid4().hex[:12]}"
                seen.add(objective["id"])


# version -> (next version, in-place upgrade of the plan list)
_UPGRADES: Dict[SchemaVersion, Tuple[SchemaVersion, Callable[[List[Dict[str, Any]]], None]]] = {
    SchemaVersion.V1_0: (SchemaVersion.V1_1, _assign_objective_ids),
}


def migrate(versioned: VersionedData) -> VersionedData:
    """
    Upgrade stored plan data to CURRENT_VERSION.

    Data already at the current version is returned unchanged once its
    plan entries are known to be objects.

    Raises:
        ValueError: If the version is unknown, "plans" is not a list, or
            a plan or objective entry is not an object
    """
    version = versioned.version_enum
    plans = _check_plans(versioned.data.get("plans", []))
    if version == CURRENT_VERSION:
        return versioned

    while version != CURRENT_VERSION:
        next_version, upgrade = _UPGRADES[version]
        logger.info(f"Migrating {len(plans)} plans from schema {version.value} to {next_version.value}")
        upgrade(plans)
        version = next_version

    return VersionedData(
        schema_version=version.value,
        data={**versioned.data, "plans": plans}
    )
