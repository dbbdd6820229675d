"""View rendering functions for the Data Alchemist UI.

Contains all Streamlit rendering logic: header, sidebar and the main tabs.
"""

import pandas as pd
import streamlit as st

from dataalchemist.config import settings
from dataalchemist.export import (
    ExportConfiguration,
    build_export,
    export_issues_csv,
)
from dataalchemist.models import (
    BusinessRule,
    EntityType,
    RuleRecommendation,
    RuleType,
    ValidationIssue,
)
from dataalchemist.profile_presets import PREVIEW_SCENARIOS
from dataalchemist.ui.handlers import (
    handle_accept_recommendation,
    handle_builder_rule,
    handle_dismiss_recommendation,
    handle_file_upload,
    handle_load_sample,
    handle_profile_change,
    handle_query,
    handle_remove_rule,
    handle_rule_text,
    handle_toggle_rule,
    handle_weight_change,
)
from dataalchemist.ui.state import (
    get_file_upload_key,
    get_query_result,
    get_rule_text_feedback,
    get_workspace,
    pop_action_message,
    request_reset,
)
from dataalchemist.ui.styles import (
    COLORS,
    apply_custom_css,
    confidence_label,
    severity_badge,
)
from dataalchemist.validation import group_issues, summarize_issues


def configure_page() -> None:
    """Configure Streamlit page settings."""
    st.set_page_config(
        page_title="Data Alchemist",
        page_icon=None,
        layout="wide",
        initial_sidebar_state="expanded",
    )
    apply_custom_css()


def render_header() -> None:
    st.markdown(
        f"""
        <div style="padding-bottom: 1rem; border-bottom: 1px solid {COLORS['border']};
                    margin-bottom: 1rem;">
            <h1 style="margin: 0; font-size: 1.5rem;">Data Alchemist</h1>
            <p style="margin: 0; font-size: 0.875rem; color: {COLORS['text_muted']};">
                Clean resource-allocation data, define rules, set priorities
            </p>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_sidebar() -> None:
    """Dataset counts, validation status and reset."""
    workspace = get_workspace()
    summary = summarize_issues(workspace.issues)

    with st.sidebar:
        st.markdown("### Session")
        st.metric("Clients", len(workspace.clients))
        st.metric("Workers", len(workspace.workers))
        st.metric("Tasks", len(workspace.tasks))

        st.divider()
        col1, col2 = st.columns(2)
        col1.metric("Errors", summary.error_count)
        col2.metric("Warnings", summary.warning_count)
        if workspace.is_allocation_ready():
            st.success("Ready for allocation")
        elif workspace.has_data:
            st.warning("Fix errors before exporting")

        st.divider()
        st.button("Start over", on_click=request_reset, use_container_width=True)


def render_main_content() -> None:
    action_message = pop_action_message()
    if action_message:
        st.warning(action_message)

    tabs = st.tabs(["Data", "Validation", "Search", "Rules", "Prioritization", "Export"])
    with tabs[0]:
        render_data_tab()
    with tabs[1]:
        render_validation_tab()
    with tabs[2]:
        render_query_tab()
    with tabs[3]:
        render_rules_tab()
    with tabs[4]:
        render_prioritization_tab()
    with tabs[5]:
        render_export_tab()


# --- Data ---


def _records_frame(entity_type: EntityType) -> pd.DataFrame:
    return pd.DataFrame([r.to_row() for r in get_workspace().records(entity_type)])


def render_data_tab() -> None:
    for entity_type, tab in zip(
        EntityType, st.tabs([e.value.capitalize() for e in EntityType]), strict=True
    ):
        with tab:
            _render_entity_upload(entity_type)


def _render_entity_upload(entity_type: EntityType) -> None:
    col1, col2 = st.columns([3, 1])
    with col1:
        uploaded = st.file_uploader(
            f"Upload {entity_type.value} (.csv or .xlsx)",
            type=["csv", "xlsx"],
            key=f"upload_{entity_type.value}_{get_file_upload_key()}",
        )
    with col2:
        st.write("")
        st.button(
            "Load sample data",
            key=f"sample_{entity_type.value}",
            on_click=handle_load_sample,
            args=(entity_type,),
        )

    error = handle_file_upload(entity_type, uploaded)
    if error:
        st.error(error)

    df = _records_frame(entity_type)
    if df.empty:
        st.info(f"No {entity_type.value} loaded yet.")
        return
    st.caption(f"{len(df)} {entity_type.value} loaded (limit {settings.max_upload_rows} rows)")
    st.dataframe(df, use_container_width=True, hide_index=True)


# --- Validation ---


def _render_issue(issue: ValidationIssue) -> None:
    st.markdown(
        f"{severity_badge(issue.severity)} **{issue.field}**: {issue.message}",
        unsafe_allow_html=True,
    )
    if issue.suggestion:
        st.caption(issue.suggestion)


def render_validation_tab() -> None:
    workspace = get_workspace()
    if not workspace.has_data:
        st.info("Upload or load sample data to validate it.")
        return

    summary = summarize_issues(workspace.issues)
    col1, col2, col3 = st.columns(3)
    col1.metric("Errors", summary.error_count)
    col2.metric("Warnings", summary.warning_count)
    col3.metric("Records", sum(len(workspace.records(e)) for e in EntityType))

    if summary.total == 0:
        st.success("No issues found.")
        return

    st.download_button(
        label="Download report (CSV)",
        data=export_issues_csv(workspace.issues),
        file_name="validation_report.csv",
        mime="text/csv",
    )

    for entity_type, rows in group_issues(workspace.issues).items():
        st.markdown(f"#### {entity_type.value.capitalize()}")
        for row_index, issues in rows.items():
            label = "Dataset" if row_index < 0 else f"Row {row_index + 1}"
            with st.expander(f"{label} ({len(issues)} issues)", expanded=row_index < 0):
                for issue in issues:
                    _render_issue(issue)


# --- Search ---


def render_query_tab() -> None:
    query = st.text_input(
        "Search your data in plain English",
        placeholder="e.g. workers with python skills, tasks with duration longer than 2",
    )
    if st.button("Search", key="run_query"):
        handle_query(query)

    result = get_query_result()
    if result is None:
        return
    if not result.understood:
        st.warning(result.explanation)
        return

    st.caption(f"{result.explanation} ({result.total} results)")
    for label, records in (
        ("Clients", result.clients),
        ("Workers", result.workers),
        ("Tasks", result.tasks),
    ):
        if records:
            st.markdown(f"**{label}**")
            st.dataframe(
                pd.DataFrame([r.to_row() for r in records]),
                use_container_width=True,
                hide_index=True,
            )


# --- Rules ---


def _phase_options() -> list[int]:
    return list(settings.default_rule_phases)


def _render_rule_form(rule_type: RuleType) -> None:
    workspace = get_workspace()
    task_ids = [t.task_id for t in workspace.tasks]
    phases = _phase_options()

    with st.form(f"rule_form_{rule_type.value}", clear_on_submit=True):
        name = st.text_input("Rule name")
        description = st.text_input("Description (optional)")
        values: dict = {"description": description}

        if rule_type == RuleType.CO_RUN:
            values["task_ids"] = st.multiselect("Tasks that must run together", task_ids)
        elif rule_type == RuleType.SLOT_RESTRICTION:
            values["group_type"] = st.selectbox("Group type", ["client", "worker"])
            values["target_group"] = st.text_input("Group")
            values["min_common_slots"] = st.number_input("Minimum common slots", min_value=1, value=1)
            values["phases"] = st.multiselect("Phases", phases, default=phases)
        elif rule_type == RuleType.LOAD_LIMIT:
            groups = sorted({w.worker_group for w in workspace.workers if w.worker_group})
            values["worker_group"] = (
                st.selectbox("Worker group", groups) if groups else st.text_input("Worker group")
            )
            values["max_slots_per_phase"] = st.number_input("Max slots per phase", min_value=1, value=2)
            values["phases"] = st.multiselect("Phases", phases, default=phases)
        elif rule_type == RuleType.PHASE_WINDOW:
            values["task_id"] = st.selectbox("Task (optional)", ["", *task_ids])
            values["allowed_phases"] = st.multiselect("Allowed phases", phases)
            values["restricted_phases"] = st.multiselect("Restricted phases", phases)
        elif rule_type == RuleType.PATTERN_MATCH:
            values["entity_type"] = st.selectbox("Applies to", [e.value for e in EntityType])
            values["field"] = st.text_input("Field", value="TaskID")
            values["pattern"] = st.text_input("Regex pattern")
            values["action"] = st.selectbox("Action", ["flag", "allow", "deny"])
        else:
            rule_ids = [r.id for r in workspace.rules]
            values["global_rule_id"] = st.selectbox("Global rule", rule_ids)
            values["specific_rule_id"] = st.selectbox("Specific rule", rule_ids)
            values["priority"] = st.number_input("Priority", min_value=1, value=1)

        if st.form_submit_button("Add rule"):
            error = handle_builder_rule(rule_type, name, values)
            if error:
                st.error(error)
            else:
                st.success(f"Added rule: {name}")


def _render_recommendation(rec: RuleRecommendation) -> None:
    with st.container(border=True):
        st.markdown(
            f"**{rec.description}** · {rec.type} · "
            f"{rec.confidence:.0%} confidence ({confidence_label(rec.confidence)})"
        )
        st.caption(rec.reasoning)
        if rec.data_context.patterns:
            st.caption(" | ".join(rec.data_context.patterns))
        col1, col2, _ = st.columns([1, 1, 4])
        col1.button(
            "Accept",
            key=f"accept_{rec.id}",
            on_click=handle_accept_recommendation,
            args=(rec.id,),
        )
        col2.button(
            "Dismiss",
            key=f"dismiss_{rec.id}",
            on_click=handle_dismiss_recommendation,
            args=(rec.id,),
        )


def _render_rule(rule: BusinessRule) -> None:
    col1, col2, col3 = st.columns([5, 1, 1])
    with col1:
        status = "enabled" if rule.enabled else "disabled"
        st.markdown(f"**{rule.name}** · {rule.type} · {rule.source.value} · {status}")
        if rule.description:
            st.caption(rule.description)
    col2.button(
        "Disable" if rule.enabled else "Enable",
        key=f"toggle_{rule.id}",
        on_click=handle_toggle_rule,
        args=(rule.id,),
    )
    col3.button("Remove", key=f"remove_{rule.id}", on_click=handle_remove_rule, args=(rule.id,))


def render_rules_tab() -> None:
    workspace = get_workspace()

    st.markdown("#### Describe a rule")
    text = st.text_input(
        "Rule in plain English",
        placeholder="e.g. Run T001 and T003 together",
        key="rule_text",
    )
    if st.button("Create rule", key="create_rule_text") and text.strip():
        handle_rule_text(text)
    feedback = get_rule_text_feedback()
    if feedback:
        level, message = feedback
        (st.success if level == "success" else st.warning)(message)

    st.markdown("#### Build a rule")
    rule_type = RuleType(
        st.selectbox("Rule type", [t.value for t in RuleType], key="builder_rule_type")
    )
    _render_rule_form(rule_type)

    st.markdown("#### Recommendations")
    if not workspace.recommendations:
        st.caption("No recommendations for the current data.")
    for rec in workspace.recommendations:
        _render_recommendation(rec)

    st.markdown(f"#### Rules ({len(workspace.enabled_rules)} of {len(workspace.rules)} enabled)")
    for rule in workspace.rules:
        _render_rule(rule)


# --- Prioritization ---


def _on_weight_change(criterion_id: str, key: str) -> None:
    handle_weight_change(criterion_id, st.session_state[key])


def render_prioritization_tab() -> None:
    workspace = get_workspace()
    profile_ids = [p.id for p in workspace.profiles]

    selected = st.selectbox(
        "Profile",
        profile_ids,
        index=profile_ids.index(workspace.active_profile_id),
        format_func=lambda pid: workspace.get_profile(pid).name,
    )
    if selected != workspace.active_profile_id:
        error = handle_profile_change(selected)
        if error:
            st.warning(error)

    profile = workspace.active_profile
    st.caption(profile.description)

    for criterion in profile.criteria:
        key = f"weight_{profile.id}_{criterion.id}"
        st.slider(
            criterion.name,
            min_value=0.0,
            max_value=1.0,
            value=float(criterion.weight),
            step=0.05,
            key=key,
            help=criterion.description,
            on_change=_on_weight_change,
            args=(criterion.id, key),
        )

    st.caption(f"Total weight: {profile.weight_sum:.2f}")
    by_category = profile.weights_by_category()
    st.bar_chart(pd.Series({c.value: w for c, w in by_category.items()}, name="weight"))

    st.markdown("#### Weight shares")
    shares = profile.normalized()
    st.dataframe(
        pd.DataFrame(
            [{"Criterion": c.name, "Share": f"{c.weight:.0%}"} for c in shares.criteria]
        ),
        hide_index=True,
    )

    st.markdown("#### Example scores")
    st.dataframe(
        pd.DataFrame(
            [
                {
                    "Scenario": s["name"],
                    "Description": s["description"],
                    "Score": round(profile.score(s["scores"]), 3),
                }
                for s in PREVIEW_SCENARIOS
            ]
        ),
        hide_index=True,
    )


# --- Export ---


def render_export_tab() -> None:
    workspace = get_workspace()
    if not workspace.is_allocation_ready():
        st.warning("Exported data still has validation errors.")

    col1, col2, col3 = st.columns(3)
    include_data = col1.checkbox("Cleaned data", value=True)
    include_rules = col2.checkbox("Rules", value=True)
    include_profile = col3.checkbox("Prioritization", value=True)
    data_format = st.selectbox(
        "Data format",
        ["original", "csv", "xlsx", "json"],
        help="'original' keeps each dataset in the format it was uploaded in",
    )

    config = ExportConfiguration(
        include_cleaned_data=include_data,
        include_rules=include_rules,
        include_prioritization=include_profile,
        format=None if data_format == "original" else data_format,
    )
    for export_file in build_export(config, workspace):
        st.download_button(
            label=f"Download {export_file.filename}",
            data=export_file.content,
            file_name=export_file.filename,
            mime=export_file.mime_type,
            key=f"download_{export_file.filename}",
        )
