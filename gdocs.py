from datetime import datetime, timezone

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from models import SourceError

SCOPES = ["https://www.googleapis.com/auth/drive", "https://www.googleapis.com/auth/documents"]
GOOGLE_DOC_MIME_TYPE = "application/vnd.google-apps.document"


class DocsClient:
    def __init__(self, service_account_file, folder_id, drive_service=None):
        self.service_account_file = service_account_file
        self.folder_id = folder_id
        self.drive_service = drive_service

    def drive(self):
        if self.drive_service is None:
            creds = Credentials.from_service_account_file(self.service_account_file, scopes=SCOPES)
            self.drive_service = build("drive", "v3", credentials=creds)
        return self.drive_service

    def folder_link(self):
        return f"https://drive.google.com/drive/folders/{self.folder_id}"

    def create_fire_doc(self, now=None):
        now = now or datetime.now(timezone.utc)
        file_metadata = {
            "name": f"{now.strftime('%Y-%m-%dT%H:%M:%SZ')} Fire",
            "parents": [self.folder_id],
            "mimeType": GOOGLE_DOC_MIME_TYPE,
        }
        try:
            created = self.drive().files().create(
                body=file_metadata,
                fields="id, name, webViewLink",
                supportsAllDrives=True
            ).execute()
        except (HttpError, OSError, ValueError) as e:
            raise SourceError(f"Fire doc creation failed: {e}") from e

        print(f"✅ Created fire doc {created['name']}")
        return created.get("webViewLink") or f"https://docs.google.com/document/d/{created['id']}/edit"
