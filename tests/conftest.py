"""Shared fixtures for Data Alchemist tests."""

import pytest

from dataalchemist.models import Client, EntityType, Task, Worker
from dataalchemist.sample_data import get_sample
from dataalchemist.workspace import Workspace

# ---------------------------------------------------------------------------
# Record builders
# ---------------------------------------------------------------------------


def make_client(client_id: str = "C1", **overrides) -> Client:
    data = {
        "ClientID": client_id,
        "ClientName": f"Client {client_id}",
        "PriorityLevel": 3,
        "RequestedTaskIDs": "",
        "GroupTag": "enterprise",
        "AttributesJSON": "{}",
    }
    data.update(overrides)
    return Client.model_validate(data)


def make_worker(worker_id: str = "W1", **overrides) -> Worker:
    data = {
        "WorkerID": worker_id,
        "WorkerName": f"Worker {worker_id}",
        "Skills": "python",
        "AvailableSlots": "[1,2,3]",
        "MaxLoadPerPhase": 2,
        "WorkerGroup": "backend",
        "QualificationLevel": "senior",
    }
    data.update(overrides)
    return Worker.model_validate(data)


def make_task(task_id: str = "T1", **overrides) -> Task:
    data = {
        "TaskID": task_id,
        "TaskName": f"Task {task_id}",
        "Category": "development",
        "Duration": 1,
        "RequiredSkills": "python",
        "PreferredPhases": "[1,2]",
        "MaxConcurrent": 1,
    }
    data.update(overrides)
    return Task.model_validate(data)


# ---------------------------------------------------------------------------
# Dataset fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clean_clients() -> list[Client]:
    """Two valid clients requesting existing tasks."""
    return [
        make_client("C1", RequestedTaskIDs="T1,T2", PriorityLevel=5),
        make_client("C2", RequestedTaskIDs="T2", PriorityLevel=2, GroupTag="startup"),
    ]


@pytest.fixture
def clean_workers() -> list[Worker]:
    """Two valid workers covering every skill used by clean_tasks."""
    return [
        make_worker("W1", Skills="python,sql"),
        make_worker("W2", Skills="React,CSS", WorkerGroup="frontend", AvailableSlots="[2,3,4]"),
    ]


@pytest.fixture
def clean_tasks() -> list[Task]:
    """Two valid tasks."""
    return [
        make_task("T1", RequiredSkills="python"),
        make_task("T2", RequiredSkills="react", Category="design", Duration=2),
    ]


@pytest.fixture
def sample_workspace() -> Workspace:
    """Workspace loaded with the bundled sample data, validated and mined."""
    workspace = Workspace()
    workspace.set_clients(get_sample(EntityType.CLIENTS), "csv")
    workspace.set_workers(get_sample(EntityType.WORKERS), "csv")
    workspace.set_tasks(get_sample(EntityType.TASKS), "csv")
    workspace.run_validation()
    workspace.refresh_recommendations()
    return workspace
