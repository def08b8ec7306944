"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any

from .models import UpdateReport


def aggregate(report: UpdateReport) -> dict[str, Any]:
    """Serialise a report into a JSON-ready dict with totals and top-level flags."""

    total_updates = report.update_count

    data: dict[str, Any] = {
        "version": "1",
        "hasUpdates": total_updates > 0,
        "manifests": [result.to_dict() for result in report.manifests],
        "failures": [failure.to_dict() for failure in report.failures],
        "totals": {
            "manifests": len(report.manifests),
            "updates": total_updates,
            "failures": len(report.failures),
        },
    }

    return data
