import xml.etree.ElementTree as ET
from xml.sax.saxutils import escape

import requests

from models import AccountRecord, SourceError, UNKNOWN, UNKNOWN_MRR
from utils import sanitize_search

API_VERSION = "43.0"
REQUEST_TIMEOUT = 30

SELECT_FIELDS = (
    "Type, Website, CS_Manager__r.Name, Family_MRR__c, Chargify_MRR__c, Platform__c, "
    "Integration_Type__c, Chargify_Source__c, Tracking_Code__c, BillingCity, BillingCountry, BillingState"
)

PARTNER_NS = "{urn:partner.soap.sforce.com}"

LOGIN_ENVELOPE = """<?xml version="1.0" encoding="utf-8" ?>
<env:Envelope xmlns:xsd="http://www.w3.org/2001/XMLSchema"
    xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
    xmlns:env="http://schemas.xmlsoap.org/soap/envelope/">
  <env:Body>
    <n1:login xmlns:n1="urn:partner.soap.sforce.com">
      <n1:username>{username}</n1:username>
      <n1:password>{password}</n1:password>
    </n1:login>
  </env:Body>
</env:Envelope>"""


class SalesforceClient:
    def __init__(self, url, user, password, token, session=None):
        self.url = url.rstrip("/")
        self.user = user
        self.password = password
        self.token = token
        self.http = session or requests.Session()
        self.session_id = None
        self.instance_url = None

    def login(self):
        body = LOGIN_ENVELOPE.format(
            username=escape(self.user),
            password=escape(self.password + self.token),
        )
        try:
            response = self.http.post(
                f"{self.url}/services/Soap/u/{API_VERSION}",
                data=body.encode("utf-8"),
                headers={"Content-Type": "text/xml; charset=UTF-8", "SOAPAction": "login"},
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise SourceError(f"Salesforce login failed: {e}") from e
        if response.status_code != 200:
            raise SourceError(f"Salesforce login failed with status {response.status_code}")

        try:
            root = ET.fromstring(response.content)
        except ET.ParseError as e:
            raise SourceError(f"Salesforce login response is not XML: {e}") from e
        session_id = root.find(f".//{PARTNER_NS}sessionId")
        server_url = root.find(f".//{PARTNER_NS}serverUrl")
        if session_id is None or server_url is None:
            raise SourceError("Salesforce login response is missing the session")

        self.session_id = session_id.text
        # serverUrl looks like https://na1.salesforce.com/services/Soap/u/43.0/00D...
        self.instance_url = server_url.text.split("/services/")[0]
        return self.session_id

    def send_query(self, soql):
        try:
            return self.http.get(
                f"{self.instance_url}/services/data/v{API_VERSION}/query",
                params={"q": soql},
                headers={"Authorization": f"Bearer {self.session_id}"},
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise SourceError(f"Salesforce request failed: {e}") from e

    def query(self, soql):
        if self.session_id is None:
            self.login()
        response = self.send_query(soql)
        if response.status_code == 401:
            # Session expired (INVALID_SESSION_ID), log in again once
            print("⚠️ Salesforce session expired, logging in again")
            self.session_id = None
            self.login()
            response = self.send_query(soql)
        if response.status_code >= 300:
            raise SourceError(f"Salesforce query failed with status {response.status_code}: {response.text}")
        return response.json().get("records", [])

    def query_accounts(self, search):
        sanitized = sanitize_search(search)
        soql = (
            f"SELECT {SELECT_FIELDS} FROM Account "
            f"WHERE (Website LIKE '%{sanitized}%' OR Platform__c LIKE '%{sanitized}%' "
            f"OR Tracking_Code__c = '{sanitized}') ORDER BY Chargify_MRR__c DESC"
        )
        return records_to_accounts(self.query(soql))

    def query_by_site_id(self, search):
        sanitized = sanitize_search(search)
        soql = (
            f"SELECT {SELECT_FIELDS} FROM Account "
            f"WHERE Type IN ('Customer', 'Inactive Customer') AND Tracking_Code__c = '{sanitized}' "
            "ORDER BY Chargify_MRR__c DESC"
        )
        return records_to_accounts(self.query(soql))


def text_or_unknown(value):
    return UNKNOWN if value is None else str(value)


def record_to_account(record):
    manager = record.get("CS_Manager__r") or {}
    record_type = record.get("Type") or ""

    city = state = UNKNOWN
    if record.get("BillingCity") is not None and record.get("BillingState") is not None:
        city = str(record["BillingCity"])
        state = str(record["BillingState"])

    return AccountRecord(
        website=text_or_unknown(record.get("Website")),
        site_id=text_or_unknown(record.get("Tracking_Code__c")),
        manager=text_or_unknown(manager.get("Name")),
        active="Active" if record_type == "Customer" else "Not active",
        record_type=record_type,
        mrr=float(record["Chargify_MRR__c"]) if record.get("Chargify_MRR__c") is not None else UNKNOWN_MRR,
        family_mrr=float(record["Family_MRR__c"]) if record.get("Family_MRR__c") is not None else UNKNOWN_MRR,
        platform=text_or_unknown(record.get("Platform__c")),
        integration=text_or_unknown(record.get("Integration_Type__c")),
        provider=text_or_unknown(record.get("Chargify_Source__c")),
        city=city,
        state=state,
    )


def records_to_accounts(records):
    return [record_to_account(record) for record in records]
