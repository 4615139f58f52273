"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/report_service.py
Renders a ClusteringResult as plain text, JSON or CSV.
"""
import csv
import io
import json
from typing import TextIO

from filesim.core.models import ClusteringResult, OutputFormat
from filesim.utils.convert_utils import ConvertUtils


class ReportService:

    @staticmethod
    def render(result: ClusteringResult, fmt: OutputFormat = OutputFormat.TEXT,
               show_ungrouped: bool = True) -> str:
        """Return the result formatted as a string."""
        if fmt == OutputFormat.JSON:
            return ReportService.to_json(result, show_ungrouped)
        if fmt == OutputFormat.CSV:
            return ReportService.to_csv(result, show_ungrouped)
        return ReportService.to_text(result, show_ungrouped)

    @staticmethod
    def write(result: ClusteringResult, stream: TextIO, fmt: OutputFormat = OutputFormat.TEXT,
              show_ungrouped: bool = True) -> None:
        stream.write(ReportService.render(result, fmt, show_ungrouped))

    @staticmethod
    def to_text(result: ClusteringResult, show_ungrouped: bool = True) -> str:
        lines = []
        if not result.groups:
            lines.append("No similar file groups found.")
        else:
            for group in result.groups:
                tier = f" [{group.tier.value}]" if group.tier is not None else ""
                lines.append(f"Group {group.id} (similarity: {ConvertUtils.ratio_to_percent(group.similarity)}){tier}:")
                for file in group.files:
                    if file.size is not None and group.tier is not None:
                        lines.append(f"  - {file.path} [{ConvertUtils.bytes_to_human(file.size)}]")
                    else:
                        lines.append(f"  - {file.path}")
                lines.append("")

        if show_ungrouped and result.leftover:
            lines.append("Ungrouped files:")
            for path in result.ungrouped:
                lines.append(f"  - {path}")
            lines.append("")

        summary = result.summary
        lines.append("Summary:")
        lines.append(f"  Total files: {summary.total_files}")
        lines.append(f"  Groups found: {summary.groups_found}")
        lines.append(f"  Ungrouped files: {summary.ungrouped_files}")
        lines.append(f"  Threshold used: {ConvertUtils.ratio_to_percent(summary.threshold_used)}")
        return "\n".join(lines) + "\n"

    @staticmethod
    def to_json(result: ClusteringResult, show_ungrouped: bool = True) -> str:
        data = result.to_dict()
        if not show_ungrouped:
            data["ungrouped"] = []
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    @staticmethod
    def to_csv(result: ClusteringResult, show_ungrouped: bool = True) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(["group_id", "file_name", "similarity", "status"])

        for group in result.groups:
            for path in group.paths:
                writer.writerow([group.id, path, f"{group.similarity:.2f}", "grouped"])

        if show_ungrouped:
            for path in result.ungrouped:
                writer.writerow(["", path, "", "ungrouped"])

        return buffer.getvalue()
