import requests

from models import AccountRecord, NpsInfo, SourceError, UNKNOWN_MRR
from utils import sanitize_search

DATABASE_ID = 5
MAX_ROWS = 21
REQUEST_TIMEOUT = 30

NPS_FIELDS = "active, mrr, familyMrr, csm, name"
ACCOUNT_FIELDS = "domainName, csm, active, familyMrr, mrr, platform_smart, integrationType, trackingCode, city, state"

# Metabase column -> AccountRecord field
ACCOUNT_COLUMNS = {
    "domainName": "website",
    "csm": "manager",
    "mrr": "mrr",
    "familyMrr": "family_mrr",
    "platform_smart": "platform",
    "integrationType": "integration",
    "trackingCode": "site_id",
    "city": "city",
    "state": "state",
}
NUMERIC_FIELDS = ("mrr", "family_mrr")


class MetabaseClient:
    def __init__(self, base_url, user, password, session=None):
        self.base_url = base_url.rstrip("/")
        self.user = user
        self.password = password
        self.http = session or requests.Session()
        self.session_id = None

    def login(self):
        try:
            response = self.http.post(
                f"{self.base_url}/api/session",
                json={"username": self.user, "password": self.password},
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            self.session_id = response.json()["id"]
        except (requests.RequestException, KeyError, ValueError) as e:
            raise SourceError(f"Metabase login failed: {e}") from e
        return self.session_id

    def send_query(self, sql):
        try:
            return self.http.post(
                f"{self.base_url}/api/dataset",
                headers={"X-Metabase-Session": self.session_id},
                json={"database": DATABASE_ID, "type": "native", "native": {"query": sql}},
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise SourceError(f"Metabase request failed: {e}") from e

    def query_sql(self, sql):
        if self.session_id is None:
            self.login()
        response = self.send_query(sql)
        if response.status_code == 401:
            # Session expired, log in again once
            print("⚠️ Metabase session expired, logging in again")
            self.session_id = None
            self.login()
            response = self.send_query(sql)

        if response.status_code >= 300:
            raise SourceError(f"Metabase returned STATUS_CODE [{response.status_code}]")
        data = response.json().get("data") or {}
        cols = [col["name"] for col in data.get("cols", [])]
        return cols, data.get("rows", [])

    def query_accounts(self, search):
        sanitized = sanitize_search(search)
        sql = (
            f"SELECT {ACCOUNT_FIELDS} FROM websites WHERE active AND !presales AND !sandbox "
            f"AND (name LIKE '%{sanitized}%' OR platform_smart LIKE '%{sanitized}%' "
            f"OR trackingCode = '{sanitized}') ORDER BY mrr DESC"
        )
        cols, rows = self.query_sql(sql)
        return rows_to_accounts(cols, rows)

    def query_nps(self, search):
        sanitized = sanitize_search(search)
        sql = (
            f"SELECT {NPS_FIELDS} FROM websites WHERE active "
            f"AND name LIKE '%{sanitized}%' ORDER BY mrr DESC"
        )
        cols, rows = self.query_sql(sql)
        return rows_to_nps_info(cols, rows)


def rows_to_accounts(cols, rows):
    accounts = []
    for row in rows[:MAX_ROWS]:
        fields = {"provider": "Searchspring"}
        for name, value in zip(cols, row):
            field = ACCOUNT_COLUMNS.get(name)
            if field is None or value is None:
                continue
            fields[field] = float(value) if field in NUMERIC_FIELDS else str(value)
        accounts.append(AccountRecord(**fields))
    return accounts


def rows_to_nps_info(cols, rows):
    if not rows:
        return NpsInfo(manager="No company found", mrr=UNKNOWN_MRR, family_mrr=UNKNOWN_MRR)

    values = dict(zip(cols, rows[0]))
    return NpsInfo(
        manager=str(values["csm"]) if values.get("csm") is not None else "Unknown",
        mrr=float(values["mrr"]) if values.get("mrr") is not None else UNKNOWN_MRR,
        family_mrr=float(values["familyMrr"]) if values.get("familyMrr") is not None else UNKNOWN_MRR,
    )
