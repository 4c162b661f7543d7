from models import UNKNOWN
from utils import format_money

IN_CHANNEL = "in_channel"
EPHEMERAL = "ephemeral"

PURPLE = "#3A23AD"
RED = "#FF0000"

NPS_ICON = "https://avatars.slack-edge.com/2020-01-08/900543610438_6d658dd2df4b32187c53_512.png"
NPS_GREEN = "#35a64f"
NPS_YELLOW = "#b8ba31"
NPS_RED = "#eb0101"


def message(text, response_type=IN_CHANNEL, attachments=None):
    msg = {"response_type": response_type, "text": text}
    if attachments is not None:
        msg["attachments"] = attachments
    return msg


def ephemeral(text):
    return message(text, response_type=EPHEMERAL)


def account_attachment(account):
    revenue = f"{format_money(account.mrr)} (Family MRR: {format_money(account.family_mrr)})"
    location = account.city
    if account.state and account.state != UNKNOWN:
        location += f", {account.state}"

    text = "\n".join([
        f"Rep: {account.manager}",
        f"MRR: {revenue}",
        f"Platform: {account.platform}",
        f"Integration: {account.integration}",
        f"Provider: {account.provider}",
        f"Location: {location}",
    ])
    return {
        "color": RED if account.manager == UNKNOWN else PURPLE,
        "text": text,
        "author_name": f"{account.website} ({account.active}) (SiteId: {account.site_id})",
    }


def format_account_infos(accounts, search):
    text = f"Reps for search: {search}" if accounts else f"No results for: {search}"
    return message(text, attachments=[account_attachment(account) for account in accounts])


def format_nextopia_customers(customers):
    attachments = [
        {
            "color": PURPLE,
            "author_name": customer.name,
            "text": (
                f"URL: {customer.url}\nID 1: {customer.id1}\nID 2: {customer.id2}"
                f"\nType: {customer.type}\nVersion: {customer.version}, System: {customer.system}"
            ),
        }
        for customer in customers
    ]
    return message("matches" if customers else "No Matches :(", attachments=attachments)


def format_map_response(values):
    lines = [f"{key}: {value}" for key, value in (values or {}).items()]
    return "```" + "\n".join(lines) + "\n```"


def nps_attachment(name, email, website, nps_info, rating=None, feedback=None):
    mrr, rep = "Unknown", "Unknown"
    if nps_info is not None:
        if nps_info.family_mrr >= 0:
            mrr = f"${int(nps_info.family_mrr):,}"
        rep = nps_info.manager

    attachment = {
        "author_name": "New NPS Rating",
        "author_icon": NPS_ICON,
        "fields": [
            {"title": "Name", "value": name, "short": True},
            {"title": "Website", "value": website, "short": True},
            {"title": "Email", "value": email, "short": True},
            {"title": "Family MRR", "value": mrr, "short": True},
            {"title": "Customer Success Manager", "value": rep, "short": True},
        ],
    }

    if rating is not None:
        first = {"title": "Rating", "value": str(rating), "short": True}
        if rating > 8:
            attachment["color"] = NPS_GREEN
        elif rating > 6:
            attachment["color"] = NPS_YELLOW
        else:
            attachment["color"] = NPS_RED
    elif feedback is not None:
        attachment["author_name"] = "New NPS Feedback"
        first = {"title": "Feedback", "value": feedback}
    else:
        attachment["author_name"] = "Error"
        first = {"title": "Error", "value": "No rating or feedback was given"}

    attachment["fields"].insert(0, first)
    return attachment
