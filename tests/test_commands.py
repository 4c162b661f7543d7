from datetime import datetime, timezone
from unittest.mock import MagicMock

from commands import (
    Services,
    boost_response,
    fire_down_response,
    fire_response,
    get_meet_link,
    meet_response,
    nebo_response,
    neboid_nextopia_response,
    neboid_salesforce_response,
)
from models import AccountRecord, NextopiaCustomer, SourceError


class FakeAccounts:
    def __init__(self, accounts=None, error=None):
        self.accounts = accounts or []
        self.error = error

    def query_accounts(self, search):
        if self.error:
            raise self.error
        return self.accounts

    def query_by_site_id(self, search):
        return self.query_accounts(search)


def test_nebo_help():
    for text in ("", "  ", "help"):
        msg = nebo_response(text, Services())
        assert msg["response_type"] == "ephemeral"
        assert msg["text"].startswith("Nebo usage:")


def test_nebo_requires_salesforce():
    msg = nebo_response("shoes", Services(analytics=FakeAccounts()))

    assert msg["response_type"] == "ephemeral"
    assert "Salesforce" in msg["text"]


def test_nebo_reconciles_both_sources():
    analytics = FakeAccounts([
        AccountRecord(site_id="123456", website="one.com", mrr=10),
        AccountRecord(site_id="abcdef", website="https://www.two.com/", mrr=30, manager="Jane"),
    ])
    crm = FakeAccounts([
        AccountRecord(site_id="123abc", website="three.com", record_type="Customer", mrr=20),
        AccountRecord(site_id="123456", website="one.com", record_type="Prospect"),
    ])

    msg = nebo_response(" shoes ", Services(analytics=analytics, crm=crm))

    assert msg["response_type"] == "in_channel"
    assert msg["text"] == "Reps for search: shoes"
    authors = [a["author_name"] for a in msg["attachments"]]
    assert authors == [
        "two.com (Active) (SiteId: abcdef)",
        "three.com (Active) (SiteId: 123abc)",
    ]


def test_nebo_with_failing_analytics_still_answers():
    crm = FakeAccounts([AccountRecord(site_id="x1", website="x.com", record_type="Customer")])
    services = Services(analytics=FakeAccounts(error=SourceError("down")), crm=crm)

    msg = nebo_response("x", services)

    assert len(msg["attachments"]) == 1


def test_neboidss_formats_salesforce_accounts():
    crm = FakeAccounts([AccountRecord(site_id="abc123", website="http://www.shoes.com/", record_type="Customer")])

    msg = neboid_salesforce_response("abc123", Services(crm=crm))

    assert msg["attachments"][0]["author_name"].startswith("shoes.com ")


def test_neboidss_reports_errors():
    msg = neboid_salesforce_response("abc123", Services(crm=FakeAccounts(error=SourceError("expired"))))

    assert msg["response_type"] == "ephemeral"
    assert "expired" in msg["text"]


def test_neboid_nextopia():
    nextopia = MagicMock()
    nextopia.query.return_value = [NextopiaCustomer("id1", "id2", "ec_shoes", "shoes.com", "Trial", "v2", "legacy")]

    msg = neboid_nextopia_response("ec_", Services(nextopia=nextopia))

    nextopia.query.assert_called_once_with("ec_")
    assert msg["text"] == "matches"
    assert msg["attachments"][0]["author_name"] == "ec_shoes"


def test_neboid_nextopia_missing_credentials():
    msg = neboid_nextopia_response("ec_", Services())

    assert "Nextopia" in msg["text"]


def test_meet_links():
    assert get_meet_link("team sync") == "g.co/meet/team-sync"
    assert get_meet_link("").startswith("g.co/meet/meet-")
    assert meet_response("help")["response_type"] == "ephemeral"
    assert meet_response("standup")["text"] == "g.co/meet/standup"


def test_fire_uses_new_doc_when_available():
    docs = MagicMock()
    docs.create_fire_doc.return_value = "https://docs.google.com/document/d/doc1/edit"
    now = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)

    msg = fire_response("", Services(docs=docs, fire_folder_id="folder1"), now=now)

    assert msg["response_type"] == "in_channel"
    assert "<https://docs.google.com/document/d/doc1/edit>" in msg["text"]
    assert "g.co/meet/fire-investigation-2024-03-01-12-30" in msg["text"]


def test_fire_falls_back_to_folder():
    docs = MagicMock()
    docs.create_fire_doc.side_effect = SourceError("no access")

    msg = fire_response("", Services(docs=docs, fire_folder_id="folder1"))

    assert "https://drive.google.com/drive/folders/folder1" in msg["text"]


def test_fire_help_and_down():
    assert fire_response("help", Services())["response_type"] == "ephemeral"
    assert "post mortem" in fire_down_response()["text"]


def test_boost_status():
    client = MagicMock()
    client.status.return_value = {"status": "running"}

    msg = boost_response("status abc123", Services(boost=client))

    client.status.assert_called_once_with("abc123")
    assert msg["text"] == "```status: running\n```"


def test_boost_restart_reports_status():
    client = MagicMock()
    client.status.return_value = {"status": "restarting"}

    msg = boost_response("restart abc123", Services(boost=client))

    client.restart.assert_called_once_with("abc123")
    assert "restarting" in msg["text"]


def test_boost_unknown_command_shows_help():
    msg = boost_response("explode abc123", Services(boost=MagicMock()))

    assert msg["response_type"] == "ephemeral"
    assert "Try a command" in msg["text"]


def test_boost_errors_are_reported():
    client = MagicMock()
    client.exclusion_stats.side_effect = SourceError("boom")

    msg = boost_response("exclusions abc123", Services(boost=client))

    assert msg["response_type"] == "ephemeral"
    assert "boom" in msg["text"]
