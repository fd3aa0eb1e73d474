from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class LabelSpec:
    name: str
    description: str
    color: str
    category: str

    @classmethod
    def from_json(cls, row: dict[str, Any]) -> "LabelSpec":
        return cls(
            name=str(row["name"]),
            description=str(row.get("description", "")),
            color=str(row["color"]).lower().lstrip("#"),
            category=str(row.get("category", "Other")),
        )


@dataclass(frozen=True)
class FerrisConfig:
    project_name: str
    bench_package: str
    coverage_backend: str
    coverage_output_dir: str
    harness_package: str
    harness_binary: str
    docs_ignore_dirs: tuple[str, ...]
    link_check_config: str
    labels_repository: str | None
    labels: tuple[LabelSpec, ...]
    source: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_json(cls, payload: dict[str, Any], source: str | None = None) -> "FerrisConfig":
        cargo = payload["cargo"]
        coverage = payload["coverage"]
        harness = payload["harness"]
        docs = payload["docs"]
        labels = payload["labels"]
        return cls(
            project_name=str(payload["project_name"]),
            bench_package=str(cargo["bench_package"]),
            coverage_backend=str(coverage["backend"]),
            coverage_output_dir=str(coverage["output_dir"]),
            harness_package=str(harness["package"]),
            harness_binary=str(harness["binary"]),
            docs_ignore_dirs=tuple(str(item) for item in docs["ignore_dirs"]),
            link_check_config=str(docs["link_check_config"]),
            labels_repository=(str(labels["repository"]) if labels.get("repository") else None),
            labels=tuple(LabelSpec.from_json(row) for row in labels["catalog"]),
            source=source,
            raw=payload,
        )
