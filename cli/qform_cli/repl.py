"""REPL for qform CLI: edit a questionnaire, undo/redo, submit."""

import asyncio
import shlex
from datetime import date, timedelta

from qform.config import settings
from qform.kernel import events
from qform.kernel.assembly import EditorSession
from qform.kernel.http_store import HttpStore
from qform.kernel.types import MULTIPLE_CHOICE, QUESTION_TYPES, SETTINGS_KEYS
from qform_cli.client import ApiClient
from qform_cli.config import Config

HELP = """
  /title <text>              Rename the questionnaire
  /add                       Append a new question
  /text <id> <text>          Change a question's text
  /type <id> <type>          multiple_choice | text | boolean
  /option <id>               Append an empty option
  /setopt <id> <n> <value>   Set option n (1-based)
  /remove <id>               Delete a question
  /clone <id>                Duplicate a question below itself
  /move <from> <to>          Move question at position <from> to <to> (1-based)
  /settings key=value ...    start_date, end_date, answers_limit, anonymous
  /undo  /redo               Step through the editing history
  /show                      Print the questionnaire
  /submit                    Send it to the server; the prompt waits for the
                             reply, edits resume once it returns
  /stats [days]              Response statistics for the last n days (default 7)
  /help  /quit
"""


def _notify(title: str, description: str) -> None:
    color = "32" if title == "Success" else "31"
    print(f"  \033[{color}m{title}:\033[0m {description}")


def _parse_setting(key: str, raw: str):
    if key == "answers_limit":
        return int(raw)
    if key == "anonymous":
        lowered = raw.lower()
        if lowered not in ("true", "false", "yes", "no"):
            raise ValueError(f"anonymous must be true or false, got {raw!r}")
        return lowered in ("true", "yes")
    return raw


class Repl:
    """Interactive questionnaire editor."""

    def __init__(self, config: Config, session: EditorSession | None = None):
        self.config = config
        self.session = session or EditorSession(
            HttpStore(config.api_url, settings.CREATE_PATH, settings.SUBMIT_TIMEOUT),
            lambda: self.config.token,
            notify=_notify,
            max_past=settings.HISTORY_LIMIT or None,
        )
        self.running = True

    def start(self):
        """Start the REPL."""
        print(f"qform > {self.session.present['title']}")
        print("Type /help for commands.")

        while self.running:
            try:
                line = input("qform > ").strip()
                if line:
                    self.handle_line(line)
            except (EOFError, KeyboardInterrupt):
                print()
                break

    def handle_line(self, line: str):
        """Run one command. Errors are printed, never raised."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            print(f"  Error: {e}")
            return
        if not parts:
            return

        cmd, args = parts[0].lower(), parts[1:]
        handler = self._commands().get(cmd)
        if handler is None:
            print(f"Unknown command: {cmd}")
            print("Type /help for available commands.")
            return

        try:
            handler(args)
        except (ValueError, IndexError) as e:
            print(f"  Error: {e}")

    def _commands(self) -> dict:
        return {
            "/title": self._set_title,
            "/add": lambda args: self._apply(events.add_question()),
            "/text": self._set_text,
            "/type": self._set_type,
            "/option": lambda args: self._apply(events.add_option(int(args[0]))),
            "/setopt": self._set_option,
            "/remove": lambda args: self._apply(events.remove_question(int(args[0]))),
            "/clone": lambda args: self._apply(events.clone_question(int(args[0]))),
            "/move": self._move,
            "/settings": self._set_settings,
            "/undo": self._undo,
            "/redo": self._redo,
            "/show": lambda args: self._show(),
            "/submit": lambda args: self._submit(),
            "/stats": self._stats,
            "/help": lambda args: print(HELP),
            "/quit": self._quit,
        }

    # -- editing --

    def _apply(self, action):
        if not self.session.dispatch(action):
            print("  Nothing changed.")

    def _set_title(self, args: list[str]):
        if not args:
            raise ValueError("usage: /title <text>")
        self._apply(events.set_title(" ".join(args)))

    def _set_text(self, args: list[str]):
        if len(args) < 2:
            raise ValueError("usage: /text <id> <text>")
        self._apply(events.update_question_title(int(args[0]), " ".join(args[1:])))

    def _set_type(self, args: list[str]):
        if len(args) != 2:
            raise ValueError("usage: /type <id> <type>")
        question_type = args[1].upper()
        if question_type not in QUESTION_TYPES:
            raise ValueError(f"unknown type {args[1]!r}")
        self._apply(events.update_question_type(int(args[0]), question_type))

    def _set_option(self, args: list[str]):
        if len(args) < 3:
            raise ValueError("usage: /setopt <id> <n> <value>")
        self._apply(events.update_option(int(args[0]), int(args[1]) - 1, " ".join(args[2:])))

    def _move(self, args: list[str]):
        if len(args) != 2:
            raise ValueError("usage: /move <from> <to>")
        if not self.session.move(int(args[0]) - 1, int(args[1]) - 1):
            print("  Invalid position.")

    def _set_settings(self, args: list[str]):
        fields = {}
        for arg in args:
            key, sep, raw = arg.partition("=")
            if not sep or key not in SETTINGS_KEYS:
                raise ValueError(f"expected one of {', '.join(sorted(SETTINGS_KEYS))} as key=value")
            fields[key] = _parse_setting(key, raw)
        if not fields:
            raise ValueError("usage: /settings key=value ...")
        self._apply(events.update_settings(**fields))

    def _undo(self, args: list[str]):
        if not self.session.undo():
            print("  Nothing to undo.")

    def _redo(self, args: list[str]):
        if not self.session.redo():
            print("  Nothing to redo.")

    # -- output --

    def _show(self):
        doc = self.session.present
        opts = doc["options"]
        print(f"  {doc['title']}  (#{doc['id']})")
        print(
            f"  {opts['start_date']} → {opts['end_date']}, "
            f"limit {opts['answers_limit']}, anonymous={opts['anonymous']}"
        )
        for position, q in enumerate(doc["questions"], 1):
            print(f"  {position}. [{q['id']}] {q['text']}  ({q['type'].lower()})")
            if q["type"] == MULTIPLE_CHOICE:
                for n, option in enumerate(q["options"], 1):
                    print(f"       {n}) {option or '…'}")
        undo_mark = "undo" if self.session.can_undo else "-"
        redo_mark = "redo" if self.session.can_redo else "-"
        print(f"  [{undo_mark} | {redo_mark}]")

    def _submit(self):
        # blocks until the store answers or the timeout fires
        print(f"  Submitting to {self.config.api_url} ...")
        asyncio.run(self.session.submit())

    def _stats(self, args: list[str]):
        days = int(args[0]) if args else 7
        start = date.today()
        end = start + timedelta(days=days)
        client = ApiClient(self.config.api_url, self.config.token)
        try:
            stats = client.get_statistics(start, end)
        except Exception as e:
            print(f"  Failed to load statistics: {e}")
            return
        finally:
            client.close()

        print(f"  Responses:              {stats.get('totalResponses', 0)}")
        print(f"  Active questionnaires:  {stats.get('totalQuestionnairesActive', 0)}")
        print(f"  Average response rate:  {stats.get('averageResponseRate', 0)}")

    def _quit(self, args: list[str]):
        self.running = False
        print("Goodbye.")
