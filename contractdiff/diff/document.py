from __future__ import annotations

from typing import Optional

from contractdiff.config import Config
from contractdiff.diff.base import DiffModel
from contractdiff.diff.endpoints import DiffResult, apply_path_filter, diff_endpoints
from contractdiff.diff.leaf import SequenceDiff, get_sequence_diff
from contractdiff.diff.schema import SchemasDiff, get_schemas_diff
from contractdiff.diff.state import DiffContext
from contractdiff.diff.summary import SCHEMAS, DiffSummary, SummaryDetails
from contractdiff.openapi.models import Document


class Diff(DiffModel):
    """Full document diff: endpoints, component schemas and servers."""

    endpoints: DiffResult = DiffResult()
    schemas_diff: Optional[SchemasDiff] = None
    servers_diff: Optional[SequenceDiff] = None

    def get_summary(self) -> DiffSummary:
        summary = self.endpoints.get_summary()
        if self.schemas_diff is not None:
            summary.details[SCHEMAS] = SummaryDetails(
                added=len(self.schemas_diff.added),
                deleted=len(self.schemas_diff.deleted),
                modified=len(self.schemas_diff.modified),
            )
        summary.diff = not self.is_empty()
        return summary


def get_diff(
    base: Document, revision: Document, config: Optional[Config] = None
) -> Diff:
    ctx = DiffContext(config=config or Config(), base=base, revision=revision)

    return Diff(
        endpoints=apply_path_filter(ctx.config, diff_endpoints(ctx)),
        schemas_diff=get_schemas_diff(
            ctx, base.components.schemas, revision.components.schemas
        ),
        servers_diff=get_sequence_diff(
            [s.url for s in base.servers], [s.url for s in revision.servers]
        ),
    )
