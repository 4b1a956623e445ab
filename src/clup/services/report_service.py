"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/report_service.py
Plain-text report of a run: effective configuration, statistics summary,
and every duplicate group with its survivor first.
"""
import time
from pathlib import Path
from typing import List, Optional

from clup.core.models import CleanupParams, RunStatistics
from clup.core.statistics import summary_lines
from clup.utils.convert_utils import ConvertUtils

SEPARATOR = "========"


class ReportService:
    @staticmethod
    def render(params: CleanupParams, stats: RunStatistics, action_name: Optional[str] = None) -> List[str]:
        """Report lines, without trailing newlines."""
        lines = [SEPARATOR, params.source_dir]
        if action_name:
            lines.append(f"--action={action_name}")
        lines.extend([
            f"--include={','.join(params.include_extensions)}",
            f"--exclude={','.join(params.exclude_extensions)}",
            f"--minsize={params.min_size}",
            f"--maxsize={params.max_size}",
            f"--hash={params.hash_mode.value}",
            f"--algorithm={params.hash_algorithm}",
            SEPARATOR,
        ])
        lines.extend(summary_lines(stats, verbose=True))
        lines.append(SEPARATOR)

        for key, files in stats.groups.items():
            lines.append(f"[{key}]")
            lines.extend(f.path for f in files)
            lines.append("")
        return lines

    @staticmethod
    def write_report(
            target_dir: str,
            params: CleanupParams,
            stats: RunStatistics,
            action_name: Optional[str] = None
    ) -> str:
        """
        Writes clup_<timestamp>.txt into target_dir (created if needed).
        Returns the report path.
        """
        target = Path(target_dir)
        target.mkdir(parents=True, exist_ok=True)

        stamp = ConvertUtils.timestamp_to_human(time.time(), fmt="%Y-%m-%d_%H-%M-%S")
        report_path = target / f"clup_{stamp}.txt"
        suffix = 1
        while report_path.exists():
            report_path = target / f"clup_{stamp}_{suffix}.txt"
            suffix += 1

        with open(report_path, "w", encoding="utf-8") as f:
            for line in ReportService.render(params, stats, action_name):
                f.write(line + "\n")
        return str(report_path)
