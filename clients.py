from slack_bolt import App
from slack_bolt.adapter.flask import SlackRequestHandler
from slack_sdk import WebClient
from flask import Flask

from boost import BoostClient
from commands import Services
from config import (
    SLACK_BOT_TOKEN, SLACK_SIGNING_SECRET,
    SF_URL, SF_USER, SF_PASSWORD, SF_TOKEN,
    NX_USER, NX_PASSWORD,
    METABASE_URL, METABASE_USER, METABASE_PASSWORD,
    GDRIVE_FIRE_DOC_FOLDER_ID, GOOGLE_SERVICE_ACCOUNT_FILE,
    contains_empty_string,
)
from gdocs import DocsClient
from metabase import MetabaseClient
from nextopia import NextopiaClient
from salesforce import SalesforceClient

slack_app = App(token=SLACK_BOT_TOKEN, signing_secret=SLACK_SIGNING_SECRET)
flask_app = Flask(__name__)
handler = SlackRequestHandler(slack_app)
web_client = WebClient(token=SLACK_BOT_TOKEN)


def build_services():
    """Create one client per configured upstream; missing credentials leave it as None."""
    services = Services(boost=BoostClient(), fire_folder_id=GDRIVE_FIRE_DOC_FOLDER_ID)

    if not contains_empty_string(METABASE_URL, METABASE_USER, METABASE_PASSWORD):
        services.analytics = MetabaseClient(METABASE_URL, METABASE_USER, METABASE_PASSWORD)
    if not contains_empty_string(SF_URL, SF_USER, SF_PASSWORD, SF_TOKEN):
        services.crm = SalesforceClient(SF_URL, SF_USER, SF_PASSWORD, SF_TOKEN)
    if not contains_empty_string(NX_USER, NX_PASSWORD):
        services.nextopia = NextopiaClient(NX_USER, NX_PASSWORD)
    if not contains_empty_string(GOOGLE_SERVICE_ACCOUNT_FILE, GDRIVE_FIRE_DOC_FOLDER_ID):
        services.docs = DocsClient(GOOGLE_SERVICE_ACCOUNT_FILE, GDRIVE_FIRE_DOC_FOLDER_ID)
    return services
