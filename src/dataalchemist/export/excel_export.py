"""Excel export for cleaned datasets (pandas + openpyxl)."""

import logging
from collections.abc import Sequence
from io import BytesIO

import pandas as pd

from dataalchemist.models import Entity

logger = logging.getLogger(__name__)

SHEET_NAME = "Data"


def export_entities_xlsx(records: Sequence[Entity], sheet_name: str = SHEET_NAME) -> bytes:
    """Export records to a single-sheet workbook with external column names."""
    df = pd.DataFrame([r.to_row() for r in records])
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)

    logger.info("Exported %d rows to Excel sheet '%s'", len(df), sheet_name)
    return buffer.getvalue()
