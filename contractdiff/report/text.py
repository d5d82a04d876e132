from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Optional, TextIO

from contractdiff.diff.document import Diff
from contractdiff.diff.operation import OperationDiff
from contractdiff.diff.parameters import ParameterDiff, ParametersDiff
from contractdiff.diff.responses import ResponsesDiff
from contractdiff.diff.schema import SchemaDiff

PREFIXES: Final[dict[int, str]] = {1: "*", 2: "  -"}


def heading(title: str) -> list[str]:
    return [f"### {title}", "-" * (len(title) + 4)]


@dataclass
class TextReport:
    """Simplified diff report in text format."""

    writer: TextIO
    level: int = 0

    def indent(self) -> TextReport:
        return TextReport(writer=self.writer, level=self.level + 1)

    def print(self, *output: Any) -> None:
        prefix: Optional[str] = PREFIXES.get(self.level)
        if prefix is not None:
            output = (prefix, *output)
        print(*output, file=self.writer)

    def output(self, diff: Diff) -> None:
        if diff.is_empty():
            self.print("No changes")
            return

        endpoints = diff.endpoints
        if endpoints.is_empty():
            self.print("No endpoint changes")
        else:
            self._section("New Endpoints", endpoints.added_endpoints)
            self._section("Deleted Endpoints", endpoints.deleted_endpoints)

            for line in heading("Modified Endpoints"):
                self.print(line)
            for endpoint, operation_diff in endpoints.modified_endpoints.items():
                self.print(endpoint)
                self.indent().print_operation(operation_diff)
                self.print("")

        if diff.schemas_diff is not None:
            self._section("New Schemas", diff.schemas_diff.added)
            self._section("Deleted Schemas", diff.schemas_diff.deleted)
            self._section("Modified Schemas", list(diff.schemas_diff.modified))

    def _section(self, title: str, items: list[str]) -> None:
        for line in heading(title):
            self.print(line)
        for item in items:
            self.print(item)
        self.print("")

    def print_operation(self, diff: OperationDiff) -> None:
        if diff.is_empty():
            return

        if diff.description_diff is not None:
            self.print(
                "Description changed from:",
                diff.description_diff.from_,
                "To:",
                diff.description_diff.to,
            )

        if diff.deprecated_diff is not None:
            self.print("Deprecated changed to:", diff.deprecated_diff.to)

        self.print_parameters(diff.parameters_diff)

        if diff.request_body_diff is not None:
            self.print("Request body changed")

        if diff.responses_diff is not None:
            self.print("Responses changed")
            self.indent().print_responses(diff.responses_diff)

        if diff.callbacks_diff is not None:
            self.print("Callbacks changed")

        if diff.security_diff is not None:
            self.print("Security changed")

        if diff.servers_diff is not None:
            self.print("Servers changed")

    def print_parameters(self, diff: Optional[ParametersDiff]) -> None:
        if diff is None or diff.is_empty():
            return

        for location, names in diff.added.items():
            for name in names:
                self.print("New", location, "param:", name)

        for location, names in diff.deleted.items():
            for name in names:
                self.print("Deleted", location, "param:", name)

        for location, params in diff.modified.items():
            for name, param_diff in params.items():
                self.print("Modified", location, "param:", name)
                self.indent().print_parameter(param_diff)

    def print_parameter(self, diff: ParameterDiff) -> None:
        if diff.schema_diff is not None:
            self.print("Schema changed")
            self.print_schema(diff.schema_diff)

        if diff.content_diff is not None:
            self.print("Content changed")

    def print_schema(self, diff: SchemaDiff) -> None:
        if diff.type_diff is not None:
            self.print("Type changed from:", diff.type_diff.from_, "To:", diff.type_diff.to)
        if diff.required_diff is not None:
            for name in diff.required_diff.added:
                self.print("Required property added:", name)
            for name in diff.required_diff.deleted:
                self.print("Required property deleted:", name)

    def print_responses(self, diff: ResponsesDiff) -> None:
        for added in diff.added:
            self.print("New response:", added)

        for deleted in diff.deleted:
            self.print("Deleted response:", deleted)

        for response in diff.modified:
            self.print("Modified response:", response)
