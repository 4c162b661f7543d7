from slack_sdk.errors import SlackApiError

from formatting import nps_attachment

REQUIRED_FIELDS = ("name", "email", "website")


class NpsRequestError(ValueError):
    pass


def parse_nps_args(args):
    missing = [field for field in REQUIRED_FIELDS if not args.get(field)]
    if missing:
        raise NpsRequestError(f"missing required fields: {', '.join(missing)}")

    rating = args.get("rating")
    if rating not in (None, ""):
        try:
            rating = int(rating)
        except ValueError:
            raise NpsRequestError(f"rating must be a number, got {rating!r}")
    else:
        rating = None

    return {
        "name": args["name"],
        "email": args["email"],
        "website": args["website"],
        "rating": rating,
        "feedback": args.get("feedback"),
    }


def send_nps_message(args, analytics, web_client, channel):
    """Look up the account behind an NPS submission and post it to Slack.

    Raises NpsRequestError for bad input and SourceError / SlackApiError when
    an upstream call fails.
    """
    nps = parse_nps_args(args)
    query = nps["website"].split(".")[0]

    nps_info = analytics.query_nps(query) if analytics is not None else None
    attachment = nps_attachment(nps_info=nps_info, **nps)

    try:
        response = web_client.chat_postMessage(
            channel=channel,
            text=attachment["author_name"],
            attachments=[attachment],
        )
    except SlackApiError as e:
        print(f"❌ Failed to send NPS message: {e}")
        raise
    print(f"✅ Message successfully sent to channel {response['channel']} at {response['ts']}")
    return attachment
