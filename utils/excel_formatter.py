"""
Writes DataFrames to styled Excel tables.

Each call to add_to_sheet puts one DataFrame on its own sheet as a striped
Excel table with fitted column widths. If no location is passed to save, the
workbook goes to an 'output' folder at the repository root.
"""

import os
import pathlib

import pandas as pd
from openpyxl import Workbook
from openpyxl.worksheet.table import Table, TableStyleInfo
from openpyxl.utils import get_column_letter
from openpyxl.utils.dataframe import dataframe_to_rows


DEFAULT_OUTPUT_DIR = os.path.join(pathlib.Path(__file__).parent.parent, "output")


class ExcelFormatter:
    def __init__(self):
        self.wb = Workbook()
        self._table_names = set()
        # The default sheet is untouched until the first add_to_sheet call
        self._default_sheet_free = True

    def add_to_sheet(self, df: pd.DataFrame, sheet_name: str, transform_fn=None) -> None:
        """
        Add a DataFrame to the workbook as a styled table on its own sheet.

        :param df: The dataframe to write
        :param sheet_name: Name of the sheet that will hold the data
        :param transform_fn: Optional callable applied to df before writing
        """
        if self._default_sheet_free:
            ws = self.wb.active
            ws.title = sheet_name
            self._default_sheet_free = False
        elif sheet_name in self.wb.sheetnames:
            ws = self.wb[sheet_name]
        else:
            ws = self.wb.create_sheet(title=sheet_name)

        if transform_fn:
            df = transform_fn(df)

        for row in dataframe_to_rows(df, index=False, header=True):
            ws.append(row)

        if df.empty:
            return

        num_rows = ws.max_row
        num_cols = ws.max_column
        table_ref = f"A1:{get_column_letter(num_cols)}{num_rows}"

        # Table display names must be unique and space-free
        display_name = "".join(sheet_name.split(" "))
        base_name = display_name
        counter = 2
        while display_name in self._table_names:
            display_name = f"{base_name}_{counter}"
            counter += 1
        self._table_names.add(display_name)

        table = Table(displayName=display_name, ref=table_ref)
        table.tableStyleInfo = TableStyleInfo(
            name="TableStyleMedium9",
            showFirstColumn=False,
            showLastColumn=False,
            showRowStripes=True,
            showColumnStripes=False
        )
        ws.add_table(table)

        for i, col in enumerate(df.columns, start=1):
            col_letter = get_column_letter(i)
            max_len = max(len(str(cell)) for cell in [col] + df[col].astype(str).tolist())
            ws.column_dimensions[col_letter].width = min(max_len + 4, 60)

    def save(self, filename: str, location: str = None) -> str:
        """
        Save the workbook and start a fresh one.

        :param filename: Output file name, must end in .xlsx
        :param location: Directory to save into (defaults to ./output)
        :return: Full path of the saved file
        """
        if pathlib.Path(filename).suffix != ".xlsx":
            self._reset_workbook()
            raise ValueError(f"Expected an .xlsx filename, got '{filename}'")

        fpath = location or DEFAULT_OUTPUT_DIR
        if location is None:
            os.makedirs(fpath, exist_ok=True)
        elif not os.path.exists(fpath):
            self._reset_workbook()
            raise FileNotFoundError(f"Output location does not exist: {location}")

        spath = os.path.join(fpath, filename)
        self.wb.save(spath)
        self._reset_workbook()
        return spath

    def _reset_workbook(self):
        self.wb = Workbook()
        self._table_names = set()
        self._default_sheet_free = True
