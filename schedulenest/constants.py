STORAGE_PREFIX = "schedulenest_"
MAPPING_PREFIX = "schedulenest-map_"
DARK_MODE_KEY = "schedulenest-darkmode"

KV_TABLE = "kv_store"

CODE_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
SYSTEM_CODE_LENGTH = 6
ACCESS_CODE_MIN_LENGTH = 4
ACCESS_CODE_MAX_LENGTH = 8
ACCESS_CODE_PATTERN = r"^[a-z0-9]+$"

DEFAULT_CATEGORIES = ["개인", "업무", "학교", "기타"]
FALLBACK_CATEGORY = "기타"
DEFAULT_FOLDER_ID_PREFIX = "folder_"

TODO_STATUS_FILTERS = ["all", "completed", "pending"]

ENTITY_ID_PREFIXES = {
    "schedule": "schedule",
    "todo": "todo",
    "note": "note",
    "folder": "folder",
}
