from concurrent.futures import ThreadPoolExecutor

from models import MAX_ACCOUNTS, UNKNOWN, UNKNOWN_MRR, SourceError
from utils import clean_accounts, is_platform_search


def has_site_id(account):
    return bool(account.site_id) and account.site_id != UNKNOWN


def has_website(account):
    return bool(account.website) and account.website != UNKNOWN


def same_account(a, b):
    if has_site_id(a) and a.site_id == b.site_id:
        return True
    return has_website(a) and a.website == b.website


def find_match(account, candidates):
    for candidate in candidates:
        if same_account(account, candidate):
            return candidate
    return None


def add_analytics_accounts(analytics_accounts, crm_accounts):
    merged = []
    for account in analytics_accounts:
        match = find_match(account, crm_accounts)
        # Not in the CRM yet, keep it until it gets classified
        if match is None or match.is_customer:
            merged.append(account)
    return merged


def add_crm_accounts(merged, crm_accounts):
    combined = list(merged)
    for account in crm_accounts:
        if account.is_customer and find_match(account, combined) is None:
            combined.append(account)
    return combined


def sort_by_website_length(accounts):
    return sorted(accounts, key=lambda account: len(account.website))


def sort_by_mrr(accounts):
    return sorted(
        accounts,
        key=lambda account: (account.mrr != UNKNOWN_MRR, account.mrr),
        reverse=True,
    )


def truncate_accounts(accounts, limit=MAX_ACCOUNTS):
    return accounts[:limit]


def reconcile_accounts(analytics_accounts, crm_accounts, search):
    """Merge analytics and CRM accounts into one ranked list.

    Analytics records win when both sources know an account, unless the CRM
    says it is not a customer. Customers only the CRM knows are appended.
    Shorter domains survive the cut to MAX_ACCOUNTS for free text searches,
    then the survivors are ranked by MRR with unknown revenue last.
    """
    analytics_accounts = clean_accounts(analytics_accounts or [])
    crm_accounts = clean_accounts(crm_accounts or [])

    merged = add_analytics_accounts(analytics_accounts, crm_accounts)
    merged = add_crm_accounts(merged, crm_accounts)

    if not is_platform_search(search):
        merged = sort_by_website_length(merged)
    merged = truncate_accounts(merged)
    return sort_by_mrr(merged)


def query_source(source, search, name):
    if source is None:
        print(f"⚠️ {name} is not configured, skipping")
        return []
    try:
        return source.query_accounts(search)
    except SourceError as e:
        print(f"❌ {name} query failed: {e}")
        return []


def aggregate_accounts(search, analytics, crm):
    with ThreadPoolExecutor(max_workers=2) as pool:
        analytics_future = pool.submit(query_source, analytics, search, "Metabase")
        crm_future = pool.submit(query_source, crm, search, "Salesforce")
        analytics_accounts = analytics_future.result()
        crm_accounts = crm_future.result()

    print(f"✅ {len(analytics_accounts)} Metabase and {len(crm_accounts)} Salesforce accounts for '{search}'")
    return reconcile_accounts(analytics_accounts, crm_accounts, search)
