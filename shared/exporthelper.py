from typing import Dict, List, Optional

import pandas as pd

from shared.core.schemas import ExportResponse


def export_to_excel(
    data: List[Dict],
    filename: str = "export.xlsx",
    column_map: Optional[Dict[str, str]] = None,
) -> ExportResponse:
    """
    Shape a list of report rows into spreadsheet-ready records.

    Args:
        data: List of dictionaries (each dict = row)
        filename: Name the client should save the sheet under
        column_map: Mapping of data keys -> friendly column names, in column order
    """
    if not data:
        return ExportResponse(filename=filename, data=[])

    df = pd.DataFrame(data)

    if column_map:
        # Missing keys become empty columns
        df = df.reindex(columns=list(column_map.keys()))
        df = df.rename(columns=column_map)

    # NaN is not valid JSON
    df = df.astype(object).where(pd.notnull(df), None)

    return ExportResponse(filename=filename, data=df.to_dict(orient="records"))
