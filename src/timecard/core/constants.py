"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import timedelta, timezone

LOCAL_TZ = timezone(timedelta(hours=9), "JST")

DEFAULT_COLLECTION_KEY = "attendance"
COMMENT_MAX_LENGTH = 200

EXPORT_FILENAME_PREFIX = "勤怠記録"
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
