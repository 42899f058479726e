"""
CLI for Mindmate. For the API, use: uvicorn app.main:app --reload.

  python cli.py chat "What's new?" [--api-url URL] [--api-password PW]
  python cli.py history [--url URL]
  python cli.py settings [--set chatMessageApiUrl=https://... ...]

Settings are kept in the local settings file (MINDMATE_SETTINGS_PATH, default ~/.mindmate/settings.json).
"""
import argparse
import sys

from dotenv import load_dotenv

load_dotenv()

from pydantic import ValidationError

from app.core.agent import chat
from app.core.history import HistoryLoadError, load_history
from app.core.settings_store import SettingsStore
from app.models.schemas import ChatRequest


def _cmd_chat(args: argparse.Namespace, store: SettingsStore) -> int:
    saved = store.load()
    try:
        req = ChatRequest(
            user_input=args.message,
            custom_api_url=args.api_url if args.api_url is not None else saved.chat_message_api_url,
            custom_api_password=args.api_password if args.api_password is not None else saved.chat_message_api_password,
        )
    except ValidationError as e:
        print(f"Invalid request: {e}", file=sys.stderr)
        return 2
    print(chat(req).response)
    return 0


def _cmd_history(args: argparse.Namespace, store: SettingsStore) -> int:
    url = args.url or store.load().chat_history_api_url
    try:
        messages = load_history(url)
    except HistoryLoadError as e:
        print(f"Error loading history: {e}", file=sys.stderr)
        return 1
    for m in messages:
        print(f"[{m.timestamp.isoformat()}] {m.sender}: {m.text}")
    return 0


def _cmd_settings(args: argparse.Namespace, store: SettingsStore) -> int:
    if args.set:
        changes = {}
        for pair in args.set:
            key, sep, value = pair.partition("=")
            if not sep:
                print(f"Expected key=value, got: {pair}", file=sys.stderr)
                return 2
            changes[key.strip()] = value.strip()
        try:
            settings = store.update(**changes)
        except (KeyError, ValidationError) as e:
            print(f"Could not update settings: {e}", file=sys.stderr)
            return 2
    else:
        settings = store.load()
    for key, value in settings.model_dump(by_alias=True).items():
        if key == "chatMessageApiPassword" and value:
            value = "********"
        print(f"{key}={value}")
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Mindmate chat CLI")
    ap.add_argument("--settings-file", help="Settings file (default: MINDMATE_SETTINGS_PATH or ~/.mindmate/settings.json)")
    sub = ap.add_subparsers(dest="command", required=True)

    p_chat = sub.add_parser("chat", help="Send one message to Mindmate")
    p_chat.add_argument("message")
    p_chat.add_argument("--api-url", help="Custom Python API URL (overrides saved setting)")
    p_chat.add_argument("--api-password", help="Custom Python API password (overrides saved setting)")

    p_hist = sub.add_parser("history", help="Load chat history from a URL")
    p_hist.add_argument("--url", help="History URL (overrides saved setting)")

    p_set = sub.add_parser("settings", help="Show or update saved settings")
    p_set.add_argument("--set", nargs="+", metavar="KEY=VALUE")

    args = ap.parse_args(argv)
    store = SettingsStore(args.settings_file)
    handlers = {"chat": _cmd_chat, "history": _cmd_history, "settings": _cmd_settings}
    return handlers[args.command](args, store)


if __name__ == "__main__":
    sys.exit(main())
