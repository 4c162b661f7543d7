import requests

from models import SourceError

BOOST_ADMIN_URL = "https://boostadmin.azurewebsites.net"
REQUEST_TIMEOUT = 30

STATUS = "status"
EXCLUSIONS = "exclusions"
RESTART = "restart"
RESTART_HUNG = "restartHung"

SLACK_OPTIONS = [
    f"`/boost {STATUS} <siteId>` - gets current status of a site",
    f"`/boost {EXCLUSIONS} <siteId>` - list exclusion stats for a site",
    f"`/boost {RESTART} <siteId>` - restart a site and show its status",
    f"`/boost {RESTART_HUNG}` - restart every hung site",
]


class BoostClient:
    def __init__(self, base_url=BOOST_ADMIN_URL, session=None):
        self.base_url = base_url.rstrip("/")
        self.http = session or requests.Session()

    def get_json(self, path):
        url = f"{self.base_url}{path}"
        try:
            response = self.http.get(url, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise SourceError(f"Error reading response from {url}: {e}") from e

    def status(self, site_id):
        return self.get_json(f"/sites/{site_id}/status")

    def exclusion_stats(self, site_id):
        return self.get_json(f"/sites/{site_id}/exclusionStats")

    def restart(self, site_id):
        url = f"{self.base_url}/sites/{site_id}/restart"
        try:
            response = self.http.post(url, json=None, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as e:
            raise SourceError(f"Error restarting {site_id}: {e}") from e
        print(f"✅ Restarted {site_id}")

    def hung_sites(self):
        return self.get_json("/sites?status=hung") or []

    def restart_hung_sites(self):
        restarted = []
        for site in self.hung_sites():
            site_id = site.get("siteId") or site.get("SiteId") or ""
            if len(site_id) == 6:
                self.restart(site_id)
                restarted.append(site_id)
        return restarted


def help_text():
    return "Try a command from this here list:\n\n" + "\n".join(SLACK_OPTIONS)
