from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

import yaml
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from contractdiff.diff.endpoints import DiffResult

ENDPOINTS: Final[str] = "endpoints"
PARAMETERS: Final[str] = "parameters"
REQUEST_BODIES: Final[str] = "requestBodies"
RESPONSES: Final[str] = "responses"
CALLBACKS: Final[str] = "callbacks"
SCHEMAS: Final[str] = "schemas"


class SummaryDetails(BaseModel):
    added: int = Field(0, description="Number of added items")
    deleted: int = Field(0, description="Number of deleted items")
    modified: int = Field(0, description="Number of modified items")

    def is_empty(self) -> bool:
        return self.added == 0 and self.deleted == 0 and self.modified == 0

    def add(self, added: int = 0, deleted: int = 0, modified: int = 0) -> None:
        self.added += added
        self.deleted += deleted
        self.modified += modified


class DiffSummary(BaseModel):
    """Counts of changes per component, for quick human-facing reporting."""

    diff: bool = Field(..., description="Whether any change was found")
    details: dict[str, SummaryDetails] = {}

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)


def get_endpoints_summary(result: DiffResult) -> DiffSummary:
    details = {
        ENDPOINTS: SummaryDetails(
            added=len(result.added_endpoints),
            deleted=len(result.deleted_endpoints),
            modified=len(result.modified_endpoints),
        ),
        PARAMETERS: SummaryDetails(),
        REQUEST_BODIES: SummaryDetails(),
        RESPONSES: SummaryDetails(),
        CALLBACKS: SummaryDetails(),
    }

    for operation_diff in result.modified_endpoints.values():
        if (d := operation_diff.parameters_diff) is not None:
            details[PARAMETERS].add(
                added=sum(len(names) for names in d.added.values()),
                deleted=sum(len(names) for names in d.deleted.values()),
                modified=sum(len(diffs) for diffs in d.modified.values()),
            )

        if (d := operation_diff.request_body_diff) is not None:
            details[REQUEST_BODIES].add(
                added=int(d.added),
                deleted=int(d.deleted),
                modified=int(not d.added and not d.deleted),
            )

        if (d := operation_diff.responses_diff) is not None:
            details[RESPONSES].add(len(d.added), len(d.deleted), len(d.modified))

        if (d := operation_diff.callbacks_diff) is not None:
            details[CALLBACKS].add(len(d.added), len(d.deleted), len(d.modified))

    details = {
        name: counts
        for name, counts in details.items()
        if name == ENDPOINTS or not counts.is_empty()
    }
    return DiffSummary(diff=not result.is_empty(), details=details)
