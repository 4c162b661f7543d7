import re
from dataclasses import replace

from models import PLATFORMS

SEARCH_SANITIZER = re.compile(r"[^a-zA-Z0-9_.-]+")


def sanitize_search(search):
    # Terms end up inside SQL/SOQL string literals
    return SEARCH_SANITIZER.sub("", search or "")


def strip_website(website):
    if website.startswith("http://") or website.startswith("https://"):
        website = website[website.index(":") + 3:]
    if website.startswith("www."):
        website = website[4:]
    if website.endswith("/"):
        website = website[:-1]
    return website


def normalize_website(raw: str) -> str:
    website = raw or ""
    # Repeat until stable so "www.www.x//" style values are idempotent too
    while True:
        stripped = strip_website(website)
        if stripped == website:
            return website
        website = stripped


def clean_accounts(accounts):
    """Return copies of the accounts with canonical websites.

    The input records are left untouched so callers can share them between
    requests.
    """
    return [replace(account, website=normalize_website(account.website)) for account in accounts]


def is_platform_search(search, platforms=PLATFORMS):
    term = (search or "").strip().casefold()
    return any(term == platform.casefold() for platform in platforms)


def format_money(value):
    if value is None or value <= 0:
        return "unknown"
    return f"${value:,.2f}"
