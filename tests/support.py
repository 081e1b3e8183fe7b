"""Entity types, tables, a recording session and metric readers shared by the tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from prometheus_client import REGISTRY
from sqlalchemy import Column, Integer, MetaData, String, Table

from arcrud.model import Model

metadata = MetaData()

users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(64)),
    Column("age", Integer),
    Column("email", String(128)),
)

tags_table = Table(
    "tags",
    metadata,
    Column("code", String(32), primary_key=True),
    Column("label", String(64)),
)


class User(Model):
    id: int | None = None
    name: str | None = None
    age: int | None = None
    email: str | None = None

    def primary_key(self) -> int | None:
        return self.id


class Tag(Model):
    code: str | None = None
    label: str | None = None
    # Not a column; ignored on write.
    note: str | None = None

    def primary_key(self) -> str | None:
        return self.code


@dataclass
class RecordingSession:
    """Session double that records every call and replays canned results."""

    calls: list[tuple[Any, ...]] = field(default_factory=list)
    affected: int = 1
    rows: list[Any] = field(default_factory=list)
    one: Any = None

    def insert(self, statement_id: str, payload: Any = None) -> int:
        self.calls.append(("insert", statement_id, payload))
        return self.affected

    def update(self, statement_id: str, payload: Any = None) -> int:
        self.calls.append(("update", statement_id, payload))
        return self.affected

    def delete(self, statement_id: str, payload: Any = None) -> int:
        self.calls.append(("delete", statement_id, payload))
        return self.affected

    def select_one(self, statement_id: str, payload: Any = None) -> Any:
        self.calls.append(("select_one", statement_id, payload))
        return self.one

    def select_list(self, statement_id: str, payload: Any = None, page: Any = None) -> list[Any]:
        self.calls.append(("select_list", statement_id, payload, page))
        return list(self.rows)


def get_counter_value(metric_name: str, labels: dict[str, str]) -> float:
    """Read the current value of a Prometheus counter from the default registry.

    For counters, metric.name == base name (without _total),
    but sample.name == base_name + "_total".
    """
    for metric in REGISTRY.collect():
        if metric.name == metric_name:
            for sample in metric.samples:
                if sample.name == f"{metric_name}_total" and sample.labels == labels:
                    return sample.value
    return 0.0


def get_histogram_count(metric_name: str, labels: dict[str, str]) -> float:
    for metric in REGISTRY.collect():
        if metric.name == metric_name:
            for sample in metric.samples:
                if sample.name == f"{metric_name}_count" and sample.labels == labels:
                    return sample.value
    return 0.0
