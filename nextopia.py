import requests

from models import NextopiaCustomer, SourceError

REPORT_URL = "http://client-report.nxtpd.com/api/data-table.php"
REQUEST_TIMEOUT = 30
MAX_MATCHES = 100

# Column positions in the client report rows
ID1, ID2, NAME, URL, TYPE, VERSION, SYSTEM = 0, 1, 2, 4, 5, 7, 8


class NextopiaClient:
    def __init__(self, user, password, session=None):
        self.user = user
        self.password = password
        self.http = session or requests.Session()
        self.customers = None

    def load_customers(self):
        try:
            response = self.http.get(
                REPORT_URL,
                params={"table": "accounts"},
                auth=(self.user, self.password),
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            rows = response.json().get("data", [])
        except (requests.RequestException, ValueError) as e:
            raise SourceError(f"Nextopia client report failed: {e}") from e

        self.customers = {}
        for row in rows:
            if len(row) <= SYSTEM:
                continue
            self.customers[row[ID1]] = NextopiaCustomer(
                id1=row[ID1],
                id2=row[ID2],
                name=row[NAME],
                url=row[URL],
                type=row[TYPE],
                version=row[VERSION],
                system=row[SYSTEM],
            )
        print(f"📥 Loaded {len(self.customers)} Nextopia customers")
        return self.customers

    def query(self, search):
        if self.customers is None:
            self.load_customers()
        matches = []
        for customer in self.customers.values():
            if matches_customer(customer, search):
                matches.append(customer)
            if len(matches) >= MAX_MATCHES:
                break
        return matches


def matches_customer(customer, search):
    return (
        customer.id1.startswith(search)
        or customer.id2.startswith(search)
        or search in customer.name
    )
