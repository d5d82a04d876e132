from __future__ import annotations

import logging
import re
from typing import Optional

from contractdiff.config import Config
from contractdiff.diff.base import DiffModel
from contractdiff.diff.keyed import diff_keyed
from contractdiff.diff.operation import OperationDiff, get_operation_diff
from contractdiff.diff.state import DiffContext
from contractdiff.diff.summary import DiffSummary, get_endpoints_summary
from contractdiff.errors import ConfigError
from contractdiff.openapi.models import Document

logger = logging.getLogger(__name__)


def compile_filter(pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConfigError("filter", pattern, str(exc)) from exc


class DiffResult(DiffModel):
    """
    Endpoint-level diff. Endpoints are identified by "METHOD PATH";
    a key appears in at most one of the three containers.
    """

    added_endpoints: list[str] = []
    deleted_endpoints: list[str] = []
    modified_endpoints: dict[str, OperationDiff] = {}

    def filter_by_regex(self, pattern: str) -> DiffResult:
        """
        Keep only the endpoints whose "METHOD PATH" matches `pattern`.
        Returns a new result; on an invalid pattern the error is logged and
        this result is returned unfiltered.
        """

        try:
            regex = compile_filter(pattern)
        except ConfigError as exc:
            logger.error("%s; endpoints are not filtered", exc)
            return self

        return DiffResult(
            added_endpoints=[e for e in self.added_endpoints if regex.search(e)],
            deleted_endpoints=[e for e in self.deleted_endpoints if regex.search(e)],
            modified_endpoints={
                endpoint: diff
                for endpoint, diff in self.modified_endpoints.items()
                if regex.search(endpoint)
            },
        )

    def get_summary(self) -> DiffSummary:
        return get_endpoints_summary(self)


def diff_endpoints(ctx: DiffContext) -> DiffResult:
    diff = diff_keyed(
        ctx.base.endpoints(),
        ctx.revision.endpoints(),
        lambda o1, o2: get_operation_diff(ctx, o1, o2),
    )
    return DiffResult(
        added_endpoints=diff.added,
        deleted_endpoints=diff.deleted,
        modified_endpoints=diff.modified,
    )


def get_endpoints_diff(
    base: Document, revision: Document, config: Optional[Config] = None
) -> DiffResult:
    """Diff the endpoints of two documents. Every call uses a fresh cycle guard."""

    ctx = DiffContext(config=config or Config(), base=base, revision=revision)
    return apply_path_filter(ctx.config, diff_endpoints(ctx))


def apply_path_filter(config: Config, result: DiffResult) -> DiffResult:
    if config.path_filter is None:
        return result
    return result.filter_by_regex(config.path_filter)
