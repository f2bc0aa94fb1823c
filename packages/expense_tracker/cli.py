"""CLI for the ``expense_tracker`` package.

A Typer-based console interface. The root callback loads a local ``.env``
(without overriding variables that are already set) and configures logging;
``run`` starts the interactive session against a fresh in-memory ledger.
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from dotenv import load_dotenv

from .controller import ExpenseTrackerController
from .ledger import Ledger
from .logging_setup import configure_logging, get_logger
from .view import TransactionTableView

_logger = get_logger("expense_tracker.cli")


def cmd_run(*, session=None, out=None) -> int:
    """Build the ledger, controller and table view and run the session.

    Returns a process exit code: ``0`` on a normal exit, ``1`` when the
    session fails unexpectedly (the error is written to stderr).
    """

    # Deferred import keeps ``--help`` fast and free of terminal setup.
    from .term_ui import run_session

    out = out if out is not None else sys.stdout
    model = Ledger()
    view = TransactionTableView(out)
    controller = ExpenseTrackerController(model, view)

    print("Expense tracker. Type 'help' for commands.", file=out)
    try:
        processed = run_session(controller, session=session, out=out)
    except Exception as e:
        _logger.exception("interactive session failed")
        print(f"Error: session failed: {e}", file=sys.stderr)
        return 1

    _logger.info(
        "session finished commands=%d transactions=%d",
        processed,
        len(model.get_transactions()),
    )
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Track expenses in an interactive terminal session.",
)


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Log level name or number (falls back to EXPENSE_TRACKER_LOG_LEVEL).",
    ),
) -> None:
    """Load ``.env`` from the working directory and configure logging once."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)


@app.command("run")
def run_cmd() -> None:
    """Start an interactive session with an empty ledger."""

    code = cmd_run()
    if code:
        raise typer.Exit(code)


def main() -> None:  # pragma: no cover - console-script shim
    app()


if __name__ == "__main__":  # pragma: no cover - `python -m expense_tracker.cli`
    main()
