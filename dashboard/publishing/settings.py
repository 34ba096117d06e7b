from __future__ import annotations

POLL_INTERVAL_SECONDS = 10.0
POLLING_STATUS = "processing"

PAGE_SIZE_OPTIONS = (5, 10, 20, 50)
DEFAULT_PAGE_SIZE = 10
DEFAULT_SORT_KEY = "createdAt"
DEFAULT_SORT_DIR = "desc"

IDENTIFIER_KEYS = ("videoId", "postId", "mediaId")
STATUS_KEYS = ("status", "uploadStatus", "upload_status")
UPLOAD_STATUS_KEYS = ("uploadStatus", "upload_status", "status")
ERROR_KEYS = ("error", "message")
