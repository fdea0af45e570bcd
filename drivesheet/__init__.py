"""Mirror Google Drive file metadata into a Google Sheets spreadsheet."""

__version__ = "0.1.0"
