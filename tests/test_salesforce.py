from unittest.mock import MagicMock

import pytest

from models import AccountSource, SourceError
from salesforce import SalesforceClient, record_to_account

LOGIN_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/"
    xmlns="urn:partner.soap.sforce.com">
  <soapenv:Body>
    <loginResponse>
      <result>
        <serverUrl>https://na1.salesforce.com/services/Soap/u/43.0/00D000000000001</serverUrl>
        <sessionId>SESSION123</sessionId>
      </result>
    </loginResponse>
  </soapenv:Body>
</soapenv:Envelope>"""


def http_response(status_code=200, content=b"", payload=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = content
    resp.text = content.decode()
    resp.json.return_value = payload or {}
    return resp


def test_record_to_account_maps_fields():
    account = record_to_account({
        "Type": "Customer",
        "Website": "https://www.shoes.com/",
        "CS_Manager__r": {"Name": "Jane Rep"},
        "Chargify_MRR__c": 120.0,
        "Family_MRR__c": 300.0,
        "Platform__c": "Magento",
        "Integration_Type__c": "v3",
        "Chargify_Source__c": "Searchspring",
        "Tracking_Code__c": "abc123",
        "BillingCity": "Denver",
        "BillingState": "CO",
    })

    assert account.website == "https://www.shoes.com/"
    assert account.manager == "Jane Rep"
    assert account.active == "Active"
    assert account.record_type == "Customer"
    assert account.mrr == 120.0
    assert account.family_mrr == 300.0
    assert account.site_id == "abc123"
    assert (account.city, account.state) == ("Denver", "CO")


def test_record_to_account_defaults():
    account = record_to_account({"Type": "Prospect", "Website": "shoes.com", "BillingCity": "Denver"})

    assert account.active == "Not active"
    assert account.record_type == "Prospect"
    assert account.manager == "unknown"
    assert account.mrr == -1
    assert account.family_mrr == -1
    assert account.site_id == "unknown"
    assert (account.city, account.state) == ("unknown", "unknown")


def test_query_accounts_logs_in_then_queries():
    session = MagicMock()
    session.post.return_value = http_response(content=LOGIN_RESPONSE)
    session.get.return_value = http_response(payload={"records": [{"Type": "Customer", "Website": "shoes.com"}]})
    client = SalesforceClient("https://login.salesforce.com", "user", "pw", "tok", session=session)

    accounts = client.query_accounts("shoes")

    login_body = session.post.call_args.kwargs["data"].decode()
    assert "<n1:password>pwtok</n1:password>" in login_body
    url = session.get.call_args.args[0]
    assert url == "https://na1.salesforce.com/services/data/v43.0/query"
    assert session.get.call_args.kwargs["headers"] == {"Authorization": "Bearer SESSION123"}
    soql = session.get.call_args.kwargs["params"]["q"]
    assert "Type IN" not in soql
    assert "Website LIKE '%shoes%'" in soql
    assert accounts[0].record_type == "Customer"


def test_query_by_site_id_only_returns_customers():
    session = MagicMock()
    session.post.return_value = http_response(content=LOGIN_RESPONSE)
    session.get.return_value = http_response(payload={"records": []})
    client = SalesforceClient("https://login.salesforce.com", "user", "pw", "tok", session=session)

    client.query_by_site_id("abc123")

    soql = session.get.call_args.kwargs["params"]["q"]
    assert "Type IN ('Customer', 'Inactive Customer')" in soql
    assert "Tracking_Code__c = 'abc123'" in soql


def test_login_failure_raises_source_error():
    session = MagicMock()
    session.post.return_value = http_response(status_code=500, content=b"<fault/>")
    client = SalesforceClient("https://login.salesforce.com", "user", "pw", "tok", session=session)

    with pytest.raises(SourceError):
        client.query_accounts("shoes")


def test_query_failure_raises_source_error():
    session = MagicMock()
    session.post.return_value = http_response(content=LOGIN_RESPONSE)
    session.get.return_value = http_response(status_code=400, content=b"MALFORMED_QUERY")
    client = SalesforceClient("https://login.salesforce.com", "user", "pw", "tok", session=session)

    with pytest.raises(SourceError):
        client.query_accounts("shoes")


def test_expired_session_logs_in_again_once():
    session = MagicMock()
    session.post.return_value = http_response(content=LOGIN_RESPONSE)
    session.get.side_effect = [
        http_response(payload={"records": []}),
        http_response(status_code=401, content=b'[{"errorCode":"INVALID_SESSION_ID"}]'),
        http_response(payload={"records": [{"Type": "Customer", "Website": "shoes.com"}]}),
    ]
    client = SalesforceClient("https://login.salesforce.com", "user", "pw", "tok", session=session)

    client.query_accounts("a")
    accounts = client.query_accounts("shoes")

    assert session.post.call_count == 2
    assert session.get.call_count == 3
    assert [a.website for a in accounts] == ["shoes.com"]


def test_second_unauthorized_raises_source_error():
    session = MagicMock()
    session.post.return_value = http_response(content=LOGIN_RESPONSE)
    session.get.return_value = http_response(status_code=401, content=b"INVALID_SESSION_ID")
    client = SalesforceClient("https://login.salesforce.com", "user", "pw", "tok", session=session)

    with pytest.raises(SourceError):
        client.query_accounts("shoes")
    assert session.post.call_count == 2
    assert session.get.call_count == 2


def test_client_is_an_account_source():
    client = SalesforceClient("https://login.salesforce.com", "user", "pw", "tok", session=MagicMock())

    assert isinstance(client, AccountSource)
