import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import boost
from formatting import (
    IN_CHANNEL,
    ephemeral,
    format_account_infos,
    format_map_response,
    format_nextopia_customers,
    message,
)
from models import AccountSource, SourceError
from prompts import (
    fire_down_message,
    fire_help_message,
    get_fire_checklist,
    meet_help_message,
    nebo_help_message,
    neboid_help_message,
)
from recon import aggregate_accounts, sort_by_website_length, truncate_accounts
from utils import clean_accounts, is_platform_search


@dataclass
class Services:
    analytics: Optional[AccountSource] = None
    crm: Optional[AccountSource] = None
    nextopia: Optional[object] = None
    boost: Optional[object] = None
    docs: Optional[object] = None
    fire_folder_id: Optional[str] = None


def wants_help(text, allow_empty=True):
    text = (text or "").strip()
    return text == "help" or (allow_empty and text == "")


def nebo_response(text, services):
    if wants_help(text):
        return ephemeral(nebo_help_message)
    if services.crm is None:
        return ephemeral("❌ missing required Salesforce credentials")

    search = text.strip()
    accounts = aggregate_accounts(search, services.analytics, services.crm)
    return format_account_infos(accounts, search)


def neboid_salesforce_response(text, services):
    if wants_help(text):
        return ephemeral(neboid_help_message)
    if services.crm is None:
        return ephemeral("❌ missing required Salesforce credentials")

    search = text.strip()
    try:
        accounts = clean_accounts(services.crm.query_by_site_id(search))
    except SourceError as e:
        print(f"❌ Salesforce id lookup failed: {e}")
        return ephemeral(f"❌ Salesforce lookup failed: {e}")

    if not is_platform_search(search):
        accounts = sort_by_website_length(accounts)
    return format_account_infos(truncate_accounts(accounts), search)


def neboid_nextopia_response(text, services):
    if wants_help(text):
        return ephemeral(neboid_help_message)
    if services.nextopia is None:
        return ephemeral("❌ missing required Nextopia credentials")

    try:
        customers = services.nextopia.query(text.strip())
    except SourceError as e:
        print(f"❌ Nextopia lookup failed: {e}")
        return ephemeral(f"❌ Nextopia lookup failed: {e}")
    return format_nextopia_customers(customers)


def get_meet_link(name=""):
    name = (name or "").strip().replace(" ", "-")
    if not name:
        name = f"meet-{secrets.token_hex(4)}"
    return f"g.co/meet/{name}"


def meet_response(text):
    if wants_help(text, allow_empty=False):
        return ephemeral(meet_help_message)
    return message(get_meet_link(text))


def timestamp(now):
    return now.astimezone(timezone.utc).strftime("%Y-%m-%d-%H-%M")


def fire_doc_line(services):
    if services.docs is not None:
        try:
            return f"Fire doc maintainer fills in the new doc: <{services.docs.create_fire_doc()}>"
        except SourceError as e:
            print(f"⚠️ {e}")
    return f"Fire doc maintainer creates a new doc here: <https://drive.google.com/drive/folders/{services.fire_folder_id}>"


def fire_response(text, services, now=None):
    if wants_help(text, allow_empty=False):
        return ephemeral(fire_help_message)
    now = now or datetime.now(timezone.utc)
    meet_link = get_meet_link(f"fire-investigation-{timestamp(now)}")
    return message(get_fire_checklist(fire_doc_line(services), meet_link))


def fire_down_response():
    return message(fire_down_message)


def boost_response(text, services):
    if wants_help(text, allow_empty=False):
        return ephemeral(boost.help_text())
    if services.boost is None:
        return ephemeral("❌ Boost admin is not configured")

    args = (text or "").split()
    try:
        if args == [boost.RESTART_HUNG]:
            restarted = services.boost.restart_hung_sites()
            return message(f"Restarted {len(restarted)} hung sites: {', '.join(restarted) or 'none'}")

        if len(args) == 2:
            command, site_id = args
            if command == boost.STATUS:
                return message(format_map_response(services.boost.status(site_id)))
            if command == boost.EXCLUSIONS:
                return message(format_map_response(services.boost.exclusion_stats(site_id)))
            if command == boost.RESTART:
                services.boost.restart(site_id)
                return message(format_map_response(services.boost.status(site_id)))
    except SourceError as e:
        print(f"❌ Boost request failed: {e}")
        return ephemeral(f"❌ {e}")

    return ephemeral(boost.help_text())


def register_commands(slack_app, services):
    """Wire every slash command onto the Bolt app.

    Commands are acknowledged straight away and answered through the
    response_url, so slow upstream queries do not trip Slack's 3 second
    acknowledgement window.
    """

    def reply(respond, msg):
        respond(
            text=msg["text"],
            response_type=msg.get("response_type", IN_CHANNEL),
            attachments=msg.get("attachments"),
        )

    @slack_app.command(re.compile(r"^/(rep|nebo|alpha-nebo)$"))
    def handle_nebo(ack, respond, command):
        ack()
        reply(respond, nebo_response(command.get("text", ""), services))

    @slack_app.command("/neboidss")
    def handle_neboid_salesforce(ack, respond, command):
        ack()
        reply(respond, neboid_salesforce_response(command.get("text", ""), services))

    @slack_app.command(re.compile(r"^/neboid(nx)?$"))
    def handle_neboid_nextopia(ack, respond, command):
        ack()
        reply(respond, neboid_nextopia_response(command.get("text", ""), services))

    @slack_app.command(re.compile(r"^/fire(test)?$"))
    def handle_fire(ack, respond, command):
        ack()
        reply(respond, fire_response(command.get("text", ""), services))

    @slack_app.command("/firedown")
    def handle_fire_down(ack, respond):
        ack()
        reply(respond, fire_down_response())

    @slack_app.command(re.compile(r"^/meet(test)?$"))
    def handle_meet(ack, respond, command):
        ack()
        reply(respond, meet_response(command.get("text", "")))

    @slack_app.command(re.compile(r"^/boost(test)?$"))
    def handle_boost(ack, respond, command):
        ack()
        reply(respond, boost_response(command.get("text", ""), services))
