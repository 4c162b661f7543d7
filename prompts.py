from models import PLATFORMS

platforms_joined = ", ".join(PLATFORMS).lower()

nebo_help_message = f"""Nebo usage:
`/nebo shoes` - find all customers with shoe in the name
`/nebo shopify` - show {{{platforms_joined}}} clients sorted by MRR
`/meet <optional name>` - create a google meet link (this link has to be opened in your searchspring chrome profile or you'll end up in a different meeting :/ )
`/fire` - used when our product is broken and the fire team should assemble immediately to fix it
`/firedown` - used when the fire is out to produce a checklist of tasks that we forget after an intense fire
`/neboidnx` - gets a Nextopia customer ID based on name or id
`/neboidss` - gets a Searchspring customer ID based on name or id
`/nebo help` - this message"""

neboid_help_message = """Neboid usage:
`/neboid <id prefix>` - find all customers with an id that starts with this prefix
`/neboid help` - this message"""

meet_help_message = """Meet usage:
`/meet` - generate a random meet
`/meet name` - generate a meet with a name
`/meet help` - this message"""

fire_help_message = """Fire usage:
`/fire` - generate a fire checklist to handle the fire"""

fire_down_message = """1. Ask if there are any cleanup tasks to do
2. Update the <#C024FV14Z>  channel
3. If applicable, schedule a blameless post mortem
"""


def get_fire_checklist(doc_line, meet_link):
    return f"""1. Assemble the <!subteam^S01DXD4HKCH> in the <#C01DFMK1F4M> channel
2. Designate fire leader, document maintainer, announcements updater
3. {doc_line}
4. Post link to the fire doc
5. If a real fire - announcer posts to the <#C024FV14Z> channel "There is a fire and engineering is investigating, updates will be posted in a thread on this message"
6. Post a link to the fire document in the <#C024FV14Z> channel thread
7. Fight! {meet_link}


8. Use `/firedown` when the fire is out
"""
