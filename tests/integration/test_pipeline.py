"""End-to-end: upload, validate, mine, accept, author rules, export.

Runs entirely in memory against small CSV/Excel uploads.
"""

import json

import pytest

from dataalchemist.analysis import parse_rule_text, run_query
from dataalchemist.export import ExportConfiguration, build_export, export_issues_csv
from dataalchemist.ingestion import load_csv, load_file
from dataalchemist.models import EntityType, Severity
from dataalchemist.workspace import Workspace

CLIENTS_CSV = b"""ClientID,ClientName,PriorityLevel,RequestedTaskIDs,GroupTag,AttributesJSON
C1,Acme,5,"T1,T2",enterprise,{}
C2,Beta,4,"T1, T2, T3",startup,{}
C3,Gamma,3,T1;T2,enterprise,{}
C4,Delta,9,T9,enterprise,{bad
"""

WORKERS_CSV = b"""Worker ID,Name,Skills,Slots,Max Load,Team,Level
W1,Ana,"python, sql","1,2,3",2,backend,senior
W2,Bo,"python,react",[2-4],2,frontend,junior
"""

TASKS_CSV = b"""TaskID,TaskName,Category,Duration,RequiredSkills,PreferredPhases,MaxConcurrent
T1,Build API,development,1,python,"[1,2]",1
T2,Design UI,design,1,react,"[2,3]",1
T3,Compiler,development,1,rust,[3],1
"""


@pytest.fixture
def workspace() -> Workspace:
    ws = Workspace()
    for entity_type, filename, content in [
        (EntityType.CLIENTS, "clients.csv", CLIENTS_CSV),
        (EntityType.WORKERS, "workers.csv", WORKERS_CSV),
        (EntityType.TASKS, "tasks.csv", TASKS_CSV),
    ]:
        records, file_format = load_file(filename, content, entity_type)
        {
            EntityType.CLIENTS: ws.set_clients,
            EntityType.WORKERS: ws.set_workers,
            EntityType.TASKS: ws.set_tasks,
        }[entity_type](records, file_format)
    ws.run_validation()
    ws.refresh_recommendations()
    return ws


def test_uploads_are_normalized(workspace):
    assert workspace.clients[2].requested_tasks == ["T1", "T2"]
    assert workspace.workers[1].available_slots == "[2,3,4]"
    assert workspace.workers[1].qualification_level == "junior"
    assert workspace.tasks[2].preferred_phases == "[3]"


def test_validation_findings(workspace):
    found = {(i.entity_type, i.row_index, i.field, i.severity) for i in workspace.issues}
    assert found == {
        (EntityType.CLIENTS, 3, "PriorityLevel", Severity.ERROR),
        (EntityType.CLIENTS, 3, "AttributesJSON", Severity.ERROR),
        (EntityType.CLIENTS, 3, "RequestedTaskIDs", Severity.WARNING),
        (EntityType.TASKS, 2, "RequiredSkills", Severity.WARNING),
    }
    assert not workspace.is_allocation_ready()

    report = export_issues_csv(workspace.issues).decode("utf-8")
    assert "rust" in report


def test_fixing_errors_makes_data_ready(workspace):
    fixed = [
        c.model_copy(update={"priority_level": 5, "attributes_json": "{}"})
        if c.client_id == "C4"
        else c
        for c in workspace.clients
    ]
    workspace.set_clients(fixed)
    workspace.run_validation()
    assert all(i.severity == Severity.WARNING for i in workspace.issues)
    assert workspace.is_allocation_ready()


def test_mined_recommendations(workspace):
    recs = workspace.recommendations
    assert [r.type for r in recs] == ["co-run", "pattern-match", "pattern-match"]

    co_run = recs[0]
    assert co_run.suggested_rule.parameters.task_ids == ["T1", "T2"]
    assert co_run.confidence == pytest.approx(0.75)

    flagged = [r.data_context.affected_entities[0] for r in recs[1:]]
    assert flagged == ["T2", "T3"]
    assert "rust" in recs[2].reasoning


def test_accept_author_and_export(workspace):
    co_run_id = workspace.recommendations[0].id
    workspace.accept_recommendation(co_run_id)

    rule = parse_rule_text(
        "Limit backend workload to 1 per phase",
        workspace.clients,
        workspace.workers,
        workspace.tasks,
    )
    workspace.add_rule(rule)
    disabled = workspace.add_rule(
        parse_rule_text("T3 should only run in phase 3", [], [], workspace.tasks)
    )
    workspace.toggle_rule(disabled.id)
    workspace.set_active_profile("maximize-fulfillment")

    files = {f.filename: f for f in build_export(ExportConfiguration(), workspace)}
    assert set(files) == {
        "clients_cleaned.csv",
        "workers_cleaned.csv",
        "tasks_cleaned.csv",
        "rules.json",
        "prioritization.json",
    }

    rules_doc = json.loads(files["rules.json"].content)
    assert [r["type"] for r in rules_doc["rules"]] == ["co-run", "load-limit"]
    assert rules_doc["rules"][0]["parameters"]["taskIds"] == ["T1", "T2"]
    assert rules_doc["rules"][0]["source"] == "ai-generated"
    assert rules_doc["metadata"]["totalRules"] == 3
    assert rules_doc["metadata"]["enabledRules"] == 2

    profile_doc = json.loads(files["prioritization.json"].content)
    assert profile_doc["profile"]["id"] == "maximize-fulfillment"

    reloaded = load_csv(files["clients_cleaned.csv"].content, EntityType.CLIENTS)
    assert reloaded == workspace.clients


def test_search_over_uploaded_data(workspace):
    result = run_query(
        "high priority clients who requested task T3",
        workspace.clients,
        workspace.workers,
        workspace.tasks,
    )
    assert [c.client_id for c in result.clients] == ["C2"]
