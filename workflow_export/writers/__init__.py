"""Output writers for flat records (delimited text, XLSX)."""

from workflow_export.writers.csv_writer import records_to_csv_text, write_csv
from workflow_export.writers.xlsx_writer import write_xlsx

__all__ = ["records_to_csv_text", "write_csv", "write_xlsx"]
