"""
Schema versioning for the student data file.

The data file is written as a versioned envelope. Version 1.0 files
are a bare list of students with camelCase keys.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List


class SchemaVersion(Enum):
    """
    Schema version identifiers.

    Versions:
        V1_0: Bare list of students, camelCase keys, Vietnamese labels
        V2_0: Envelope with snake_case keys and canonical labels
    """

    V1_0 = "1.0"
    V2_0 = "2.0"


CURRENT_VERSION = SchemaVersion.V2_0


@dataclass
class VersionedData:
    """
    Data with version information.

    Attributes:
        schema_version: Version identifier
        data: Actual data content ({"students": [...]})

    Examples:
        >>> versioned = VersionedData(
        ...     schema_version=SchemaVersion.V2_0.value,
        ...     data={"students": []}
        ... )
    """

    schema_version: str
    data: Dict[str, Any]

    @property
    def students(self) -> List[Dict[str, Any]]:
        """Raw student dictionaries, skipping malformed entries."""
        students = self.data.get("students") or []
        return [s for s in students if isinstance(s, dict)]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary with schema_version and data
        """
        return {
            "schema_version": self.schema_version,
            "data": self.data
        }

    @classmethod
    def from_raw(cls, raw: Any) -> 'VersionedData':
        """
        Create instance from the decoded content of a data file.

        Args:
            raw: Envelope dictionary, or a bare list (version 1.0)

        Returns:
            VersionedData instance

        Raises:
            ValueError: If the content is neither an envelope nor a list
        """
        if isinstance(raw, list):
            return cls(schema_version=SchemaVersion.V1_0.value, data={"students": raw})

        if isinstance(raw, dict) and isinstance(raw.get("data"), dict):
            return cls(
                schema_version=raw.get("schema_version", SchemaVersion.V1_0.value),
                data=raw["data"]
            )

        raise ValueError(f"Unrecognized data file layout: {type(raw).__name__}")

    @property
    def version_enum(self) -> SchemaVersion:
        """
        Get schema version as enum.

        Raises:
            ValueError: If the version is unknown
        """
        return SchemaVersion(self.schema_version)
