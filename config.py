from dotenv import load_dotenv
import os

load_dotenv()  # Loads variables from .env

DEV_MODE = os.getenv("DEV_MODE")
SLACK_BOT_TOKEN = os.getenv("SLACK_BOT_TOKEN")
SLACK_SIGNING_SECRET = os.getenv("SLACK_SIGNING_SECRET")
SF_URL = os.getenv("SF_URL")
SF_USER = os.getenv("SF_USER")
SF_PASSWORD = os.getenv("SF_PASSWORD")
SF_TOKEN = os.getenv("SF_TOKEN")
NX_USER = os.getenv("NX_USER")
NX_PASSWORD = os.getenv("NX_PASSWORD")
METABASE_URL = os.getenv("METABASE_URL", "https://metabase.kube.searchspring.io/")
METABASE_USER = os.getenv("METABASE_USER")
METABASE_PASSWORD = os.getenv("METABASE_PASSWORD")
GDRIVE_FIRE_DOC_FOLDER_ID = os.getenv("GDRIVE_FIRE_DOC_FOLDER_ID")
GOOGLE_SERVICE_ACCOUNT_FILE = os.getenv("GOOGLE_SERVICE_ACCOUNT_FILE")
NPS_CHANNEL_ID = os.getenv("NPS_CHANNEL_ID")
PORT = int(os.getenv("PORT", 10000))


def env_vars():
    return [
        ("SLACK_BOT_TOKEN", SLACK_BOT_TOKEN),
        ("SLACK_SIGNING_SECRET", SLACK_SIGNING_SECRET),
        ("SF_URL", SF_URL),
        ("SF_USER", SF_USER),
        ("SF_PASSWORD", SF_PASSWORD),
        ("SF_TOKEN", SF_TOKEN),
        ("NX_USER", NX_USER),
        ("NX_PASSWORD", NX_PASSWORD),
        ("METABASE_USER", METABASE_USER),
        ("METABASE_PASSWORD", METABASE_PASSWORD),
        ("GDRIVE_FIRE_DOC_FOLDER_ID", GDRIVE_FIRE_DOC_FOLDER_ID),
        ("NPS_CHANNEL_ID", NPS_CHANNEL_ID),
    ]


def find_blank_env_vars(pairs=None):
    if pairs is None:
        pairs = env_vars()
    return [name for name, value in pairs if not value or not str(value).strip()]


def contains_empty_string(*values):
    return any(not value for value in values)


def is_development():
    return DEV_MODE == "development"
