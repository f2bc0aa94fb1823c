"""Terminal prompts and the interactive command loop (prompt_toolkit-based).

The prompts are kept separate from the controller so they can be driven in
tests through a pipe input. ``run_session`` is the loop the console
entrypoint starts; it reads one command per line and delegates to
:class:`~expense_tracker.controller.ExpenseTrackerController`.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.validation import ValidationError, Validator

from .controller import ExpenseTrackerController
from .logging_setup import get_logger
from .models import ALLOWED_CATEGORIES, validate_amount, validate_category
from .view import render_table

_logger = get_logger("expense_tracker.term_ui")

COMMANDS: tuple[str, ...] = ("add", "remove", "mark", "clear", "show", "help", "quit")

HELP_TEXT = """\
Commands:
  add [AMOUNT CATEGORY]   add a transaction (prompts when arguments are omitted)
  remove ROW              remove the transaction at ROW (1-based)
  mark ROW [ROW ...]      highlight the given rows
  clear                   remove all highlights
  show                    print the table
  help                    show this help
  quit                    leave the session (Ctrl-D works too)"""


def _derive_session(session: PromptSession | None, kb: KeyBindings | None = None) -> PromptSession:
    """Return a fresh session sharing ``session``'s input/output when given."""

    if session is None:
        return PromptSession(key_bindings=kb)
    return PromptSession(
        input=getattr(session, "input", None),
        output=getattr(session, "output", None),
        key_bindings=kb,
    )


def _cancel_bindings() -> KeyBindings:
    kb = KeyBindings()

    @kb.add("escape")
    def _(event) -> None:  # pragma: no cover - exercised indirectly
        event.app.exit(result=None)

    @kb.add("c-c", eager=True)
    def _(event) -> None:  # pragma: no cover - exercised indirectly
        event.app.exit(result=None)

    return kb


# ----------------------------------------------------------------------------
# Field prompts
# ----------------------------------------------------------------------------


def prompt_amount(
    *,
    session: PromptSession | None = None,
    message: str = "Amount (Esc to cancel): ",
) -> float | None:
    """Prompt for an amount with inline validation.

    Returns the parsed amount, or ``None`` when canceled via Esc or Ctrl+C.
    """

    class _AmountValidator(Validator):
        def validate(self, document) -> None:
            v = validate_amount(document.text)
            if not v.ok:
                raise ValidationError(message=v.reason or "Invalid amount")

    sess = _derive_session(session, _cancel_bindings())
    value = sess.prompt(message, validator=_AmountValidator(), validate_while_typing=False)
    if value is None:
        return None
    return float(value.strip())


def prompt_category(
    categories: Sequence[str] = ALLOWED_CATEGORIES,
    *,
    default: str = "",
    session: PromptSession | None = None,
    message: str = "Category (Tab to complete, Esc to cancel): ",
) -> str | None:
    """Prompt for one of ``categories`` with completion.

    Input is matched case-insensitively and normalized to the canonical
    spelling. Returns ``None`` when canceled.
    """

    words = list(categories)
    canonical = {w.lower(): w for w in words}
    completer = WordCompleter(words, ignore_case=True, match_middle=True, sentence=False)

    class _CategoryValidator(Validator):
        def validate(self, document) -> None:
            v = validate_category(document.text, allowed=words)
            if not v.ok:
                raise ValidationError(message=v.reason or "Invalid category")

    sess = _derive_session(session, _cancel_bindings())
    value = sess.prompt(
        message,
        default=default,
        completer=completer,
        validator=_CategoryValidator(),
        validate_while_typing=False,
    )
    if value is None:
        return None
    return canonical.get(value.strip().lower(), value.strip())


# ----------------------------------------------------------------------------
# Command loop
# ----------------------------------------------------------------------------


def _parse_rows(args: Sequence[str]) -> list[int] | None:
    """Convert 1-based row arguments to 0-based positions; ``None`` if malformed."""

    try:
        return [int(a) - 1 for a in args]
    except ValueError:
        return None


def _handle_add(
    controller: ExpenseTrackerController,
    args: Sequence[str],
    *,
    session: PromptSession | None,
) -> bool | None:
    if len(args) == 2:
        return controller.add_transaction(args[0], args[1])
    if args:
        controller.last_error = "usage: add [AMOUNT CATEGORY]"
        return False
    amount = prompt_amount(session=session)
    if amount is None:
        return None
    category = prompt_category(session=session)
    if category is None:
        return None
    return controller.add_transaction(amount, category)


def run_session(
    controller: ExpenseTrackerController,
    *,
    session: PromptSession | None = None,
    out: TextIO | None = None,
) -> int:
    """Run the interactive loop until ``quit`` or end of input.

    End of input (Ctrl-D) ends the loop both at the command prompt and inside
    the ``add`` field prompts. Returns the number of commands processed
    (blank lines are not counted).
    Controller rejections are printed as ``Error: ...`` and the loop
    continues.
    """

    out = out if out is not None else sys.stdout
    sess = _derive_session(session)
    completer = WordCompleter(list(COMMANDS), ignore_case=True, sentence=True)
    processed = 0

    while True:
        try:
            line = sess.prompt("> ", completer=completer)
        except EOFError:
            break
        except KeyboardInterrupt:
            continue

        parts = line.split()
        if not parts:
            continue
        cmd, args = parts[0].lower(), parts[1:]
        processed += 1
        _logger.debug("command=%s args=%s", cmd, args)

        if cmd in {"quit", "exit"}:
            break
        if cmd == "help":
            print(HELP_TEXT, file=out)
            continue
        if cmd == "show":
            print(render_table(controller.model), file=out)
            continue

        if cmd == "add":
            try:
                ok = _handle_add(controller, args, session=sess)
            except EOFError:
                # Ctrl-D inside a field prompt ends the session like it does at "> ".
                break
            if ok is None:
                print("Canceled.", file=out)
                continue
        elif cmd in {"remove", "mark"}:
            rows = _parse_rows(args)
            if rows is None or (cmd == "remove" and len(rows) != 1) or (cmd == "mark" and not rows):
                print(f"Error: usage: {cmd} ROW{' [ROW ...]' if cmd == 'mark' else ''}", file=out)
                continue
            ok = controller.remove_transaction(rows[0]) if cmd == "remove" else controller.mark(rows)
        elif cmd == "clear":
            ok = controller.clear_marks()
        else:
            print(f"Unknown command: {cmd!r}. Type 'help' for a list of commands.", file=out)
            continue

        if not ok:
            print(f"Error: {controller.last_error}", file=out)

    return processed


__all__ = [
    "COMMANDS",
    "HELP_TEXT",
    "prompt_amount",
    "prompt_category",
    "run_session",
]
