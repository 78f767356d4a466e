"""Command-line interface for twinpane."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .compare import CompareSnapshot
from .diff import DEFAULT_LOOKAHEAD
from .hashing import ALGORITHMS, compute_file_hash
from .models import CompareStatus, DiffKind, FileEntry, Side, SyncDirection
from .session import CloseAction, CloseResult, DiffSession, EditOp
from .syncer import CompareSession

STATUS_SYMBOLS = {
    CompareStatus.LEFT_ONLY: ">>>",
    CompareStatus.RIGHT_ONLY: "<<<",
    CompareStatus.DIFFERENT: "<>",
    CompareStatus.IDENTICAL: "==",
}

EDIT_COMMANDS = {
    ":enter": EditOp.SPLIT_LINE,
    ":bs": EditOp.BACKSPACE,
    ":del": EditOp.DELETE,
    ":tab": EditOp.INSERT_TAB,
    ":up": EditOp.UP,
    ":down": EditOp.DOWN,
    ":left": EditOp.LEFT,
    ":right": EditOp.RIGHT,
    ":home": EditOp.HOME,
    ":end": EditOp.END,
}


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="twinpane",
        description="Compare and reconcile two files or two directories.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s diff left.txt right.txt
  %(prog)s diff --interactive left.txt right.txt
  %(prog)s compare /path/to/left /path/to/right
  %(prog)s sync --direction both /path/to/left /path/to/right
  %(prog)s hash --algorithm sha256 file.bin
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    diff_parser = subparsers.add_parser("diff", help="Diff two text files side by side")
    diff_parser.add_argument("left", type=Path, help="Left file")
    diff_parser.add_argument("right", type=Path, help="Right file")
    diff_parser.add_argument(
        "--lookahead", "-k",
        type=int,
        default=DEFAULT_LOOKAHEAD,
        help=f"Lines to look ahead when resynchronizing (default: {DEFAULT_LOOKAHEAD})"
    )
    diff_parser.add_argument(
        "--interactive", "-i",
        action="store_true",
        help="Navigate, merge, edit and save interactively"
    )

    compare_parser = subparsers.add_parser("compare", help="Compare two directories")
    compare_parser.add_argument("left", type=Path, help="Left directory")
    compare_parser.add_argument("right", type=Path, help="Right directory")

    sync_parser = subparsers.add_parser("sync", help="Synchronize two directories")
    sync_parser.add_argument("left", type=Path, help="Left directory")
    sync_parser.add_argument("right", type=Path, help="Right directory")
    sync_parser.add_argument("names", nargs="*", help="Entries to sync (one-way only)")
    sync_parser.add_argument(
        "--direction",
        choices=["left-to-right", "right-to-left", "both"],
        default="both",
        help="Sync direction (default: both)"
    )

    hash_parser = subparsers.add_parser("hash", help="Hash a file")
    hash_parser.add_argument("file", type=Path, help="File to hash")
    hash_parser.add_argument(
        "--algorithm", "-a",
        choices=ALGORITHMS,
        default="xxh64",
        help="Hash algorithm (default: xxh64)"
    )

    return parser.parse_args(argv)


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments."""
    if args.command == "hash":
        if not args.file.is_file():
            print(f"Error: File does not exist: {args.file}")
            sys.exit(1)
        return

    want_dir = args.command in ("compare", "sync")
    kind = "directory" if want_dir else "file"
    for label, path in (("Left", args.left), ("Right", args.right)):
        if not path.exists():
            print(f"Error: {label} {kind} does not exist: {path}")
            sys.exit(1)
        if want_dir and not path.is_dir():
            print(f"Error: {label} path is not a directory: {path}")
            sys.exit(1)


def _entry_for(path: Path) -> FileEntry:
    return FileEntry(name=path.name, path=str(path), is_dir=path.is_dir())


def print_blocks(session: DiffSession) -> None:
    """Print every non-equal block with its lines."""
    for index, block in enumerate(session.blocks):
        if block.kind is DiffKind.EQUAL:
            continue
        print(
            f"@@ {index + 1}/{len(session.blocks)} {block.kind.value} "
            f"L{block.left_start + 1}-{block.left_end + 1} "
            f"R{block.right_start + 1}-{block.right_end + 1} @@"
        )
        for line in session.left_lines[block.left_start:block.left_end + 1]:
            print(f"- {line}")
        for line in session.right_lines[block.right_start:block.right_end + 1]:
            print(f"+ {line}")


def print_snapshot(snapshot: CompareSnapshot) -> None:
    """Print one line per compared name, then the summary."""
    for name in snapshot.names():
        entry = snapshot[name]
        suffix = "/" if (entry.left or entry.right).is_dir else ""
        print(f"  {STATUS_SYMBOLS[entry.status]:>3}  {name}{suffix}")
    print(snapshot.summary())


def prompt_close(session: DiffSession) -> CloseResult:
    """Ask how to leave a session with unsaved changes."""
    if not session.is_modified:
        return session.close(CloseAction.DISCARD)

    while True:
        print("\nUnsaved changes:")
        print("  s: Save and exit")
        print("  d: Discard changes and exit")
        print("  c: Cancel")
        choice = input("\nEnter your choice (s/d/c): ").strip().lower()
        if choice == "s":
            return session.close(CloseAction.SAVE)
        if choice == "d":
            return session.close(CloseAction.DISCARD)
        if choice == "c":
            return session.close(CloseAction.CANCEL)
        print("Invalid choice. Please enter s, d, or c.")


def run_edit_mode(session: DiffSession) -> None:
    """Read edit commands until ':q'; plain text is typed at the cursor."""
    session.enter_edit()
    print("Type text to insert it. Commands: " + " ".join(EDIT_COMMANDS) + " :q")
    while True:
        row, col = session.cursor
        text = input(f"[{session.active_side.name.lower()} {row + 1}:{col + 1}] ")
        if text == ":q":
            break
        if text in EDIT_COMMANDS:
            session.edit(EDIT_COMMANDS[text])
            continue
        for ch in text:
            session.edit(EditOp.INSERT_CHAR, ch)
    session.exit_edit()


def run_interactive_diff(session: DiffSession) -> None:
    """Drive a diff session from line-based commands."""
    actions = {
        "n": session.next_difference,
        "p": session.previous_difference,
        ">": session.copy_left_to_right,
        "<": session.copy_right_to_left,
        "t": session.switch_side,
        "s": session.save,
        "l": lambda: print_blocks(session),
    }
    while session.is_open:
        choice = input("\n(n)ext (p)rev (>)copy→ (<)copy← (t)oggle side "
                       "(e)dit (s)ave (l)ist (q)uit: ").strip().lower()
        if choice == "q":
            prompt_close(session)
        elif choice == "e":
            run_edit_mode(session)
        elif choice in actions:
            actions[choice]()
        else:
            print("Invalid choice.")


def cmd_diff(args: argparse.Namespace) -> int:
    session = DiffSession(lookahead=args.lookahead, on_status=print)
    if not session.open(_entry_for(args.left), _entry_for(args.right)):
        return 2

    if args.interactive:
        run_interactive_diff(session)
        return 0

    print_blocks(session)
    differs = any(b.kind is not DiffKind.EQUAL for b in session.blocks)
    session.close()
    return 1 if differs else 0


def cmd_compare(args: argparse.Namespace) -> int:
    compare = CompareSession(args.left.absolute(), args.right.absolute(), on_status=print)
    snapshot = compare.rebuild()
    print_snapshot(snapshot)
    return 0


def cmd_sync(args: argparse.Namespace) -> int:
    compare = CompareSession(
        args.left.absolute(), args.right.absolute(), progress=True, on_status=print
    )
    compare.enter()

    if args.direction == "both":
        result = compare.sync_both_ways()
    else:
        direction = SyncDirection(args.direction)
        source = Side.LEFT if direction is SyncDirection.LEFT_TO_RIGHT else Side.RIGHT
        names = args.names or [e.name for e in compare.entries(source) if not e.is_parent]
        for name in names:
            compare.select(source, name)
        result = compare.sync_one_direction(direction)

    print_snapshot(compare.snapshot)
    return 1 if result.errors else 0


def cmd_hash(args: argparse.Namespace) -> int:
    digest = compute_file_hash(args.file, args.algorithm)
    print(f"{args.algorithm}  {digest}  {args.file}")
    return 0


COMMANDS = {
    "diff": cmd_diff,
    "compare": cmd_compare,
    "sync": cmd_sync,
    "hash": cmd_hash,
}


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    validate_args(args)

    try:
        code = COMMANDS[args.command](args)
    except KeyboardInterrupt:
        if args.command == "diff":
            print("\n\nInterrupted! Unsaved changes were discarded.")
        else:
            print("\n\nInterrupted!")
        sys.exit(1)
    sys.exit(code)
