"""Google Drive / Sheets tabular store with OAuth 2.0 credentials."""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from pydantic import BaseModel, ConfigDict, Field

from gemini_fitness.exceptions import SheetsStoreError, StoreNotConnectedError
from gemini_fitness.models.sheet_rows import HISTORY_SHEET_HEADERS, TEMPLATES_SHEET_HEADERS
from gemini_fitness.storage.default_templates import DEFAULT_TEMPLATES
from gemini_fitness.utils.sheet_serializers import (
    HISTORY_SHEET_NAME,
    TEMPLATES_SHEET_NAME,
    template_to_rows,
)

logger = logging.getLogger(__name__)

APP_FOLDER_NAME = "Gemini Workout Tracker"
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
SPREADSHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"


class SheetIds(BaseModel):
    """Spreadsheet IDs backing the templates and history sheets."""

    model_config = ConfigDict(populate_by_name=True)

    templates_sheet_id: str = Field(..., alias="templatesSheetId")
    history_sheet_id: str = Field(..., alias="historySheetId")


class GoogleSheetsStore:
    """Spreadsheets in the user's Drive, accessed as a tabular store.

    The store does nothing until ``connect()`` builds the API services, and
    ``close()`` releases them again. It can also be used as a context manager.
    """

    def __init__(self, credentials: Credentials) -> None:
        """
        Initialize the store with OAuth credentials.

        Args:
            credentials: Google OAuth 2.0 credentials from user authentication
        """
        self.credentials = credentials
        self.drive_service: Optional[Any] = None
        self.sheets_service: Optional[Any] = None

    @property
    def is_connected(self) -> bool:
        return self.drive_service is not None and self.sheets_service is not None

    def connect(self) -> "GoogleSheetsStore":
        if not self.is_connected:
            self.drive_service = build("drive", "v3", credentials=self.credentials)
            self.sheets_service = build("sheets", "v4", credentials=self.credentials)
            logger.info("Connected to Google Drive and Sheets")
        return self

    def close(self) -> None:
        for service in (self.drive_service, self.sheets_service):
            if service is not None:
                service.close()
        self.drive_service = None
        self.sheets_service = None

    def __enter__(self) -> "GoogleSheetsStore":
        return self.connect()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _drive(self) -> Any:
        if self.drive_service is None:
            raise StoreNotConnectedError("Store is not connected. Call connect() first.")
        return self.drive_service

    def _sheets(self) -> Any:
        if self.sheets_service is None:
            raise StoreNotConnectedError("Store is not connected. Call connect() first.")
        return self.sheets_service

    @staticmethod
    def _execute(request: Any, action: str) -> Dict[str, Any]:
        try:
            return request.execute()
        except HttpError as e:
            status = getattr(e.resp, "status", None)
            raise SheetsStoreError(f"Failed to {action}: {e}", status_code=status) from e

    def list_files(self, query: str) -> List[Dict[str, Any]]:
        """
        List Drive files matching a query.

        Args:
            query: Drive search query

        Returns:
            List of file metadata dictionaries with 'id' and 'name'
        """
        results = self._execute(
            self._drive().files().list(q=query, spaces="drive", fields="files(id, name)"),
            "list files",
        )
        return results.get("files", [])

    def create_folder(self, name: str) -> str:
        folder = self._execute(
            self._drive().files().create(
                body={"name": name, "mimeType": FOLDER_MIME_TYPE}, fields="id"
            ),
            f"create folder '{name}'",
        )
        return folder["id"]

    def create_spreadsheet(self, name: str, parent_id: str) -> str:
        body = {"name": name, "parents": [parent_id], "mimeType": SPREADSHEET_MIME_TYPE}
        sheet = self._execute(
            self._drive().files().create(body=body, fields="id"),
            f"create spreadsheet '{name}'",
        )
        return sheet["id"]

    def read_values(self, spreadsheet_id: str, range_: str) -> List[List[Any]]:
        result = self._execute(
            self._sheets().spreadsheets().values().get(
                spreadsheetId=spreadsheet_id, range=range_
            ),
            f"read '{range_}'",
        )
        return result.get("values", [])

    def append_values(self, spreadsheet_id: str, range_: str, rows: Sequence[Sequence[Any]]) -> None:
        self._execute(
            self._sheets().spreadsheets().values().append(
                spreadsheetId=spreadsheet_id,
                range=range_,
                valueInputOption="RAW",
                body={"values": [list(row) for row in rows]},
            ),
            f"append to '{range_}'",
        )

    def update_values(self, spreadsheet_id: str, range_: str, rows: Sequence[Sequence[Any]]) -> None:
        self._execute(
            self._sheets().spreadsheets().values().update(
                spreadsheetId=spreadsheet_id,
                range=range_,
                valueInputOption="RAW",
                body={"values": [list(row) for row in rows]},
            ),
            f"update '{range_}'",
        )

    def rename_first_sheet(self, spreadsheet_id: str, title: str) -> None:
        request = {
            "updateSheetProperties": {
                "properties": {"sheetId": 0, "title": title},
                "fields": "title",
            }
        }
        self._execute(
            self._sheets().spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id, body={"requests": [request]}
            ),
            f"rename sheet to '{title}'",
        )


def _find_spreadsheet(store: GoogleSheetsStore, name: str, folder_id: str) -> Optional[str]:
    files = store.list_files(
        f"mimeType='{SPREADSHEET_MIME_TYPE}' and name='{name}' and "
        f"'{folder_id}' in parents and trashed=false"
    )
    return files[0]["id"] if files else None


def setup_workout_sheets(
    store: GoogleSheetsStore, on_status: Optional[Callable[[str], None]] = None
) -> SheetIds:
    """
    Find or create the app folder with its templates and history sheets.

    A newly created templates sheet is seeded with the default templates.

    Args:
        store: Connected store
        on_status: Optional callback receiving progress messages

    Returns:
        IDs of both spreadsheets
    """
    def report(message: str) -> None:
        logger.info(message)
        if on_status:
            on_status(message)

    report("Searching for app folder...")
    folders = store.list_files(
        f"mimeType='{FOLDER_MIME_TYPE}' and name='{APP_FOLDER_NAME}' and trashed=false"
    )
    if folders:
        folder_id = folders[0]["id"]
    else:
        report("Creating app folder...")
        folder_id = store.create_folder(APP_FOLDER_NAME)

    report(f"Searching for '{TEMPLATES_SHEET_NAME}' sheet...")
    templates_sheet_id = _find_spreadsheet(store, TEMPLATES_SHEET_NAME, folder_id)
    if templates_sheet_id is None:
        report(f"Creating '{TEMPLATES_SHEET_NAME}' sheet...")
        templates_sheet_id = store.create_spreadsheet(TEMPLATES_SHEET_NAME, folder_id)
        store.update_values(templates_sheet_id, "Sheet1!A1", [TEMPLATES_SHEET_HEADERS])
        report("Populating initial workout templates...")
        rows = [row.to_values() for t in DEFAULT_TEMPLATES for row in template_to_rows(t)]
        store.append_values(templates_sheet_id, "Sheet1!A2", rows)
        store.rename_first_sheet(templates_sheet_id, TEMPLATES_SHEET_NAME)

    report(f"Searching for '{HISTORY_SHEET_NAME}' sheet...")
    history_sheet_id = _find_spreadsheet(store, HISTORY_SHEET_NAME, folder_id)
    if history_sheet_id is None:
        report(f"Creating '{HISTORY_SHEET_NAME}' sheet...")
        history_sheet_id = store.create_spreadsheet(HISTORY_SHEET_NAME, folder_id)
        store.update_values(history_sheet_id, "Sheet1!A1", [HISTORY_SHEET_HEADERS])
        store.rename_first_sheet(history_sheet_id, HISTORY_SHEET_NAME)

    return SheetIds(templates_sheet_id=templates_sheet_id, history_sheet_id=history_sheet_id)
