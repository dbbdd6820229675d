"""Input handlers for the Data Alchemist UI.

Contains the logic behind uploads, buttons and forms. Handlers mutate the
session Workspace and return a user-facing error message (or None), so the
views only decide how to display results.
"""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from dataalchemist.analysis import parse_rule_text, run_query
from dataalchemist.exceptions import DataAlchemistError
from dataalchemist.ingestion import load_file
from dataalchemist.models import (
    CoRunParameters,
    CoRunRule,
    EntityType,
    LoadLimitParameters,
    LoadLimitRule,
    PatternMatchParameters,
    PatternMatchRule,
    PhaseWindowParameters,
    PhaseWindowRule,
    PrecedenceOverrideParameters,
    PrecedenceOverrideRule,
    RuleType,
    SlotRestrictionParameters,
    SlotRestrictionRule,
)
from dataalchemist.sample_data import get_sample
from dataalchemist.ui.state import (
    get_workspace,
    is_file_already_processed,
    set_action_message,
    set_last_uploaded_file,
    set_query_result,
    set_rule_text_feedback,
)
from dataalchemist.workspace import Workspace

logger = logging.getLogger(__name__)

_SETTERS = {
    EntityType.CLIENTS: Workspace.set_clients,
    EntityType.WORKERS: Workspace.set_workers,
    EntityType.TASKS: Workspace.set_tasks,
}


def _refresh(workspace: Workspace) -> None:
    """Re-run validation and mining after any data change."""
    workspace.run_validation()
    workspace.refresh_recommendations()


def _format_pydantic_error(e: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
    )


def handle_file_upload(entity_type: EntityType, uploaded_file: Any) -> str | None:
    """Load an uploaded file into the workspace.

    Args:
        entity_type: Which collection the upload replaces.
        uploaded_file: Streamlit UploadedFile object.

    Returns:
        A user-facing error message, or None on success/skip.
    """
    if uploaded_file is None:
        return None

    if is_file_already_processed(entity_type, uploaded_file.name, uploaded_file.size):
        logger.debug("File already processed, skipping: %s", uploaded_file.name)
        return None

    # Mark as processed first so a failing file is not retried on every rerun
    set_last_uploaded_file(entity_type, uploaded_file.name, uploaded_file.size)

    try:
        records, file_format = load_file(
            uploaded_file.name, uploaded_file.getvalue(), entity_type
        )
    except DataAlchemistError as e:
        logger.warning("Upload of %s failed: %s", uploaded_file.name, e)
        return e.user_message

    workspace = get_workspace()
    _SETTERS[entity_type](workspace, records, file_format)
    _refresh(workspace)
    return None


def handle_load_sample(entity_type: EntityType) -> None:
    workspace = get_workspace()
    _SETTERS[entity_type](workspace, get_sample(entity_type), "csv")
    _refresh(workspace)


def handle_query(query: str) -> None:
    workspace = get_workspace()
    if not query.strip():
        set_query_result(None)
        return
    set_query_result(run_query(query, workspace.clients, workspace.workers, workspace.tasks))


def handle_rule_text(text: str) -> None:
    """Convert a plain-English request into a rule and add it."""
    workspace = get_workspace()
    rule = parse_rule_text(text, workspace.clients, workspace.workers, workspace.tasks)
    if rule is None:
        set_rule_text_feedback(
            "warning",
            "Could not turn that into a rule. Try e.g. 'Run T001 and T003 together' or "
            "'Limit backend workload to 3 per phase'.",
        )
        return
    workspace.add_rule(rule)
    set_rule_text_feedback("success", f"Added rule: {rule.name}")


def build_rule_from_form(rule_type: RuleType, name: str, values: dict[str, Any]):
    """Build a rule from the builder form's raw values.

    Raises:
        pydantic.ValidationError: If the values do not form a valid rule.
    """
    description = values.get("description", "")
    if rule_type == RuleType.CO_RUN:
        return CoRunRule(
            name=name,
            description=description,
            parameters=CoRunParameters(task_ids=values["task_ids"]),
        )
    if rule_type == RuleType.SLOT_RESTRICTION:
        return SlotRestrictionRule(
            name=name,
            description=description,
            parameters=SlotRestrictionParameters(
                target_group=values["target_group"],
                group_type=values["group_type"],
                min_common_slots=values["min_common_slots"],
                phases=values["phases"],
            ),
        )
    if rule_type == RuleType.LOAD_LIMIT:
        return LoadLimitRule(
            name=name,
            description=description,
            parameters=LoadLimitParameters(
                worker_group=values["worker_group"],
                max_slots_per_phase=values["max_slots_per_phase"],
                phases=values["phases"],
            ),
        )
    if rule_type == RuleType.PHASE_WINDOW:
        return PhaseWindowRule(
            name=name,
            description=description,
            parameters=PhaseWindowParameters(
                task_id=values.get("task_id") or None,
                allowed_phases=values["allowed_phases"],
                restricted_phases=values.get("restricted_phases", []),
            ),
        )
    if rule_type == RuleType.PATTERN_MATCH:
        return PatternMatchRule(
            name=name,
            description=description,
            parameters=PatternMatchParameters(
                pattern=values["pattern"],
                field=values["field"],
                entity_type=values["entity_type"],
                action=values["action"],
            ),
        )
    return PrecedenceOverrideRule(
        name=name,
        description=description,
        parameters=PrecedenceOverrideParameters(
            global_rule_id=values["global_rule_id"],
            specific_rule_id=values["specific_rule_id"],
            priority=values["priority"],
        ),
    )


def handle_builder_rule(rule_type: RuleType, name: str, values: dict[str, Any]) -> str | None:
    """Add a manually built rule. Returns an error message if it is invalid."""
    try:
        rule = build_rule_from_form(rule_type, name, values)
    except PydanticValidationError as e:
        logger.info("Rule builder rejected %s rule: %s", rule_type.value, e)
        return f"Invalid rule: {_format_pydantic_error(e)}"
    get_workspace().add_rule(rule)
    return None


def _report(action: str, e: DataAlchemistError) -> str:
    """Keep a callback error for the next run; callbacks cannot display directly."""
    logger.info("%s failed: %s", action, e)
    set_action_message(e.user_message)
    return e.user_message


def handle_accept_recommendation(recommendation_id: str) -> str | None:
    try:
        get_workspace().accept_recommendation(recommendation_id)
    except DataAlchemistError as e:
        return _report("Accepting recommendation", e)
    return None


def handle_dismiss_recommendation(recommendation_id: str) -> str | None:
    try:
        get_workspace().dismiss_recommendation(recommendation_id)
    except DataAlchemistError as e:
        return _report("Dismissing recommendation", e)
    return None


def handle_toggle_rule(rule_id: str) -> str | None:
    try:
        get_workspace().toggle_rule(rule_id)
    except DataAlchemistError as e:
        return _report("Toggling rule", e)
    return None


def handle_remove_rule(rule_id: str) -> str | None:
    try:
        get_workspace().remove_rule(rule_id)
    except DataAlchemistError as e:
        return _report("Removing rule", e)
    return None


def handle_profile_change(profile_id: str) -> str | None:
    try:
        get_workspace().set_active_profile(profile_id)
    except DataAlchemistError as e:
        return _report("Switching profile", e)
    return None


def handle_weight_change(criterion_id: str, weight: float) -> str | None:
    try:
        get_workspace().update_criterion_weight(criterion_id, weight)
    except DataAlchemistError as e:
        return _report("Reweighting criterion", e)
    return None
