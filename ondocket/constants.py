import os

APP_DIR = os.path.dirname(os.path.abspath(__file__))
CONFIG_DIR = os.environ.get('ONDOCKET_CONFIG_DIR', os.path.join(APP_DIR, 'config'))
DATA_DIR = os.environ.get('ONDOCKET_DATA_DIR', os.path.join(APP_DIR, 'data'))
CONFIG_FILE = os.path.join(CONFIG_DIR, 'settings.yaml')
CONTENTS_FILE = os.path.join(DATA_DIR, 'contents.json')

BUILD_VERSION = '0.2.0'

# Record field names as they appear in the JSON file and on the wire
FIELD_FILE_NAME = 'File Name'
FIELD_POST_TITLE = 'Post Title'
FIELD_DESCRIPTION = 'Description'
FIELD_PUBLICATION_DATE = 'Publication Date'
FIELD_DURATION = 'Duration'
FIELD_YOUTUBE = 'YouTube'
FIELD_TIKTOK = 'TikTok'
FIELD_X = 'X.com'
FIELD_TYPE = 'Type'
FIELD_CASE = 'Case'
FIELD_DOCKET = 'SCOTUS Docket no.'

RECORD_FIELDS = [
    FIELD_FILE_NAME,
    FIELD_POST_TITLE,
    FIELD_DESCRIPTION,
    FIELD_PUBLICATION_DATE,
    FIELD_DURATION,
    FIELD_YOUTUBE,
    FIELD_TIKTOK,
    FIELD_X,
    FIELD_TYPE,
    FIELD_CASE,
    FIELD_DOCKET,
]

# Open enumeration offered by the content form
CONTENT_TYPE_PRIMARY = 'Primary'
CONTENT_TYPES = [
    CONTENT_TYPE_PRIMARY,
    'Short (landscape)',
    'Short (portrait)',
]

TYPE_FILTER_ALL = 'all'
ORDER_ASC = 'asc'
ORDER_DESC = 'desc'

UPCOMING_WINDOW_DAYS = 14
PAST_SENTINEL_DAYS = -999

DEFAULT_SETTINGS = {
    "storage": {
        "contents_file": CONTENTS_FILE,
    },
    "server": {
        "host": "0.0.0.0",
        "port": 8465,
    },
    "logging": {
        "format": "console",
        "level": "INFO",
    },
    "views": {
        "timeline_order": ORDER_ASC,
        "archive_order": ORDER_DESC,
    },
}
