"""Custom exceptions for Data Alchemist.

Exception hierarchy:
- DataAlchemistError (base)
  - ConfigurationError: Invalid or missing configuration
  - ExtractionError: Failed to read/parse an uploaded file
  - SchemaError: Uploaded data has no recognizable columns
  - RuleNotFoundError: Rule or recommendation id is not known
  - ProfileNotFoundError: Prioritization profile or criterion id is not known
  - ExportError: Export request cannot be fulfilled

Data problems inside records (bad ranges, malformed JSON, duplicates) are
never raised; they are reported as ValidationIssue records instead.
"""


class DataAlchemistError(Exception):
    """Base exception for all Data Alchemist errors."""

    def __init__(self, message: str, user_message: str | None = None) -> None:
        """Initialize with technical message and optional user-friendly message.

        Args:
            message: Technical error message for logging/debugging.
            user_message: Human-readable message for UI display.
                         If None, uses the technical message.
        """
        super().__init__(message)
        self.user_message = user_message or message


class ConfigurationError(DataAlchemistError):
    """Raised when configuration is invalid or missing.

    Example: Unknown default prioritization profile.
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.config_key = config_key


class ExtractionError(DataAlchemistError):
    """Raised when an uploaded file cannot be read.

    Example: CSV parsing failed, Excel file is corrupted, unsupported extension.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.source = source


class SchemaError(DataAlchemistError):
    """Raised when uploaded data cannot be mapped onto an entity type.

    Example: A "workers" upload whose headers match none of the worker fields.
    """

    def __init__(
        self,
        message: str,
        entity_type: str | None = None,
        missing_fields: list[str] | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.entity_type = entity_type
        self.missing_fields = missing_fields or []


class RuleNotFoundError(DataAlchemistError):
    """Raised when a rule or recommendation id is not present in the workspace."""

    def __init__(
        self,
        message: str,
        rule_id: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.rule_id = rule_id


class ProfileNotFoundError(DataAlchemistError):
    """Raised when a prioritization profile or one of its criteria is not known.

    Example: A weight slider left over from a profile that was replaced.
    """

    def __init__(
        self,
        message: str,
        profile_id: str | None = None,
        criterion_id: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.profile_id = profile_id
        self.criterion_id = criterion_id


class ExportError(DataAlchemistError):
    """Raised when an export cannot be produced.

    Example: Unsupported export format.
    """

    def __init__(
        self,
        message: str,
        format: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.format = format
