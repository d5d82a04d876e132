from .document import Diff, get_diff
from .endpoints import DiffResult, compile_filter, get_endpoints_diff
from .operation import OperationDiff
from .schema import SchemaDiff, SchemaListDiff
from .state import DiffContext, State
from .summary import DiffSummary, SummaryDetails

__all__ = [
    "Diff",
    "DiffContext",
    "DiffResult",
    "DiffSummary",
    "OperationDiff",
    "SchemaDiff",
    "SchemaListDiff",
    "State",
    "SummaryDetails",
    "compile_filter",
    "get_diff",
    "get_endpoints_diff",
]
