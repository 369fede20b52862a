"""Typed chat against the rule engine, no audio. Usage: python scripts/chat_cli.py [hi|en]"""
import os, sys

sys.path.insert(0, os.path.abspath("."))

from sarthi.lang import coerce_locale, ui_text
from sarthi.session import ChatSession, SessionState


def _print(event_type, payload):
    if event_type == "message" and payload["role"] == "bot":
        print(f"\n🤖 {payload['text']}\n")
    elif event_type in ("notice", "locale"):
        print(f"[{event_type}] {payload}")


def main():
    locale = coerce_locale(sys.argv[1] if len(sys.argv) > 1 else None)
    session = ChatSession(state=SessionState(locale=locale, muted=True), emit=_print)
    print(ui_text(locale, "title"))
    session.start()
    prompt = "> "
    while True:
        try:
            line = input(prompt)
        except (EOFError, KeyboardInterrupt):
            break
        cmd = line.strip()
        if cmd in ("/quit", "/exit"):
            break
        if cmd in ("/hi", "/en"):
            session.set_locale(cmd[1:])
            continue
        session.state.pending_input = line
        session.submit(line)
    session.close()


if __name__ == "__main__":
    main()
