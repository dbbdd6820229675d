from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    log_level: str = "INFO"  # DEBUG for development

    # Prioritization
    default_profile_id: str = Field(
        default="balanced",
        description="Prioritization profile selected when a workspace is created.",
    )

    # Rules
    default_rule_phases: list[int] = Field(
        default_factory=lambda: [1, 2, 3, 4, 5, 6],
        description="Phases attached to generated load-limit and slot-restriction rules.",
    )

    # Ingestion / export
    max_upload_rows: int = Field(
        default=10_000,
        ge=1,
        description="Uploads with more data rows than this are rejected.",
    )
    export_json_indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Indentation used for rules.json and prioritization.json.",
    )


settings = Settings()
