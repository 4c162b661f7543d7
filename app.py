from flask import request, jsonify
from slack_sdk.errors import SlackApiError

from clients import slack_app, flask_app, handler, web_client, build_services
from commands import register_commands
from config import NPS_CHANNEL_ID, PORT, find_blank_env_vars, is_development
from models import SourceError
from nps import NpsRequestError, send_nps_message

services = build_services()
register_commands(slack_app, services)


@flask_app.route("/slack/events", methods=["POST"])
def slack_events():
    return handler.handle(request)


@flask_app.route("/nps", methods=["GET", "OPTIONS"])
def nps():
    if request.method == "OPTIONS":
        response = flask_app.make_response("")
    else:
        try:
            attachment = send_nps_message(request.args, services.analytics, web_client, NPS_CHANNEL_ID)
            response = jsonify({"ok": True, "title": attachment["author_name"]})
        except NpsRequestError as e:
            response = flask_app.make_response((str(e), 400))
        except (SourceError, SlackApiError) as e:
            print(f"❌ NPS request failed: {e}")
            response = flask_app.make_response((str(e), 500))
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


def check_env():
    blanks = find_blank_env_vars()
    if not blanks:
        return
    error = f"the following env vars are blank: {', '.join(blanks)}"
    if not is_development():
        raise RuntimeError(error)
    print(f"⚠️ {error}")


if __name__ == "__main__":
    check_env()
    print(f"🚀 Flask starting on port {PORT}")
    flask_app.run(host="0.0.0.0", port=PORT)
