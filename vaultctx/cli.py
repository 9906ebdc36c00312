"""CLI interface for vaultctx - export vault notes as LLM context from the terminal."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from vaultctx.builder import ContextBuilder
from vaultctx.config import get_settings
from vaultctx.export import (
    ContextExporter,
    EmptySelectionError,
    ExportError,
    FileSink,
    OutputSink,
    StdoutSink,
)
from vaultctx.selection import Resolver, SelectionSet
from vaultctx.storage import SettingsStorage, coerce_setting
from vaultctx.vault import FileSystemVault

logger = logging.getLogger(__name__)


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    CYAN = "\033[36m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"


HELP_TEXT = f"""
{Colors.BOLD}Context Builder Commands:{Colors.RESET}
  /add <path>        - Add a note
  /folder <path>     - Add every note in a folder ('/' for the whole vault)
  /tag <tag>         - Add every note under a tag
  /remove <path|#tag> - Remove a note, folder or tag root
  /exclude <key>     - Hide a note path or tag node ('#tag/sub') from the tree
  /search <query>    - Search notes by path
  /tags <query>      - Search tags
  /tree              - Show the selection
  /clear             - Clear the selection
  /export [file]     - Export the selection (stdout if no file) and exit
  /help              - Show this help message
  exit               - Exit without exporting
"""


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for CLI."""
    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if verbose else logging.INFO,
    )


def notice(text: str, color: str = "") -> None:
    """Print a user-facing notice to stderr, keeping stdout for the export."""
    print(f"{color}{text}{Colors.RESET if color else ''}", file=sys.stderr)


def make_sink(output: Path | None) -> OutputSink:
    return FileSink(output) if output else StdoutSink()


def run_export(exporter: ContextExporter, selection: SelectionSet) -> bool:
    """Run an export and report the outcome. Returns True on success."""
    try:
        result = asyncio.run(exporter.export(selection))
    except EmptySelectionError as e:
        notice(str(e), Colors.YELLOW)
        return False
    except ExportError as e:
        logger.debug(f"Export failed: {e!r}")
        notice(f"Failed to export context: {e}", Colors.RED)
        return False

    notice(f"✓ {result.get_summary()}", Colors.GREEN)
    return True


def _print_list(items: list[str], empty: str) -> None:
    if not items:
        print(f"{Colors.DIM}{empty}{Colors.RESET}")
        return
    for item in items:
        print(f"  {item}")


def interactive_mode(builder: ContextBuilder, exporter: ContextExporter) -> bool:
    """Run the context builder REPL. Returns True if an export succeeded."""
    print(f"{Colors.GREEN}{Colors.BOLD}Context Builder{Colors.RESET}")
    print(f"{Colors.DIM}Type /help for commands. Use 'exit' or Ctrl+C to quit.{Colors.RESET}")
    print()

    selection = builder.selection

    while True:
        try:
            user_input = input(
                f"{Colors.BOLD}{Colors.BLUE}[{len(selection.selected_documents)} notes, "
                f"{len(selection.selected_tag_roots)} tags]>{Colors.RESET} "
            ).strip()

            if not user_input:
                continue

            command, _, argument = user_input.partition(" ")
            command = command.lower()
            argument = argument.strip()

            if command in ("exit", "quit", "/exit", "/quit"):
                print(f"{Colors.DIM}Goodbye!{Colors.RESET}")
                return False

            if command == "/help":
                print(HELP_TEXT)

            elif command == "/add" and argument:
                if builder.store.exists(argument.strip("/")):
                    selection.add_document(argument)
                    print(f"{Colors.GREEN}Added {argument}{Colors.RESET}")
                else:
                    print(f"{Colors.RED}Note not found: {argument}{Colors.RESET}")

            elif command == "/folder":
                count = builder.add_folder(argument)
                print(f"{Colors.GREEN}Added {count} notes from {argument or '/'}{Colors.RESET}")

            elif command == "/tag" and argument:
                selection.add_tag_root(argument)
                print(f"{Colors.GREEN}Added tag #{argument.lstrip('#')}{Colors.RESET}")

            elif command == "/remove" and argument:
                if argument.startswith("#"):
                    selection.remove_tag_root(argument)
                elif argument.strip("/") in selection.selected_documents:
                    selection.remove_document(argument)
                else:
                    selection.remove_folder(argument)
                print(f"{Colors.GREEN}Removed {argument}{Colors.RESET}")

            elif command == "/exclude" and argument:
                selection.exclude(argument)
                print(f"{Colors.GREEN}Excluded {argument}{Colors.RESET}")

            elif command == "/search":
                _print_list(builder.search_notes(argument), "No matching files found.")

            elif command == "/tags":
                _print_list(builder.search_tags(argument), "No matching tags found.")

            elif command == "/tree":
                tree = builder.selected_tree()
                print(tree.rstrip("\n") if tree else f"{Colors.DIM}No files selected.{Colors.RESET}")

            elif command == "/clear":
                builder.clear()
                print(f"{Colors.GREEN}Selection cleared.{Colors.RESET}")

            elif command == "/export":
                exporter.sink = make_sink(Path(argument) if argument else None)
                if run_export(exporter, selection):
                    return True

            else:
                print(f"{Colors.YELLOW}Unknown command. Type /help for commands.{Colors.RESET}")

        except (KeyboardInterrupt, EOFError):
            print(f"\n{Colors.DIM}Goodbye!{Colors.RESET}")
            return False
        except (ValueError, OSError) as e:
            print(f"{Colors.RED}Error: {e}{Colors.RESET}")


def show_settings(storage: SettingsStorage) -> None:
    for key, value in storage.get().to_dict().items():
        print(f"{Colors.BOLD}{key}{Colors.RESET} = {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vaultctx",
        description="Export notes from your Obsidian vault as context for an LLM prompt.",
    )
    parser.add_argument("--vault", type=Path, help="Vault folder (default: VAULT_PATH)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    folder_parser = subparsers.add_parser("folder", help="Export every note in a folder")
    folder_parser.add_argument("path", help="Folder relative to the vault root ('/' for all)")

    files_parser = subparsers.add_parser("files", help="Export specific notes")
    files_parser.add_argument("paths", nargs="+", help="Note paths relative to the vault root")

    tag_parser = subparsers.add_parser("tag", help="Export every note under one or more tags")
    tag_parser.add_argument("tags", nargs="+", help="Tags, with or without '#'")

    for export_parser in (folder_parser, files_parser, tag_parser):
        export_parser.add_argument(
            "-o", "--output", type=Path, help="Write to a file instead of stdout"
        )
        export_parser.add_argument(
            "--exclude",
            action="append",
            default=[],
            metavar="KEY",
            help="Note path or tag node ('#tag/sub') to leave out (repeatable)",
        )

    builder_parser = subparsers.add_parser("builder", help="Open the interactive context builder")
    builder_parser.add_argument("--folder", help="Start with the notes of a folder")

    config_parser = subparsers.add_parser("config", help="Show or update export settings")
    config_parser.add_argument(
        "assignments", nargs="*", metavar="KEY=VALUE", help="Settings to update"
    )

    return parser


def cli(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)

    # Load settings
    try:
        settings = get_settings(vault_path=args.vault)
        logger.debug(f"Vault: {settings.vault_path}")
    except Exception as e:
        logger.error(f"{Colors.RED}Failed to load settings: {e}{Colors.RESET}")
        logger.error(f"{Colors.RED}Set VAULT_PATH in a .env file or pass --vault.{Colors.RESET}")
        sys.exit(1)

    storage = SettingsStorage(settings.vault_path)

    if args.command == "config":
        try:
            updates = {}
            for assignment in args.assignments:
                key, sep, value = assignment.partition("=")
                if not sep:
                    raise ValueError(f"Expected KEY=VALUE, got: {assignment}")
                updates[key.strip()] = coerce_setting(key.strip(), value)
            if updates:
                storage.update(**updates)
        except (KeyError, ValueError) as e:
            notice(f"Invalid setting: {e}", Colors.RED)
            sys.exit(1)
        show_settings(storage)
        return

    export_settings = storage.get()
    store = FileSystemVault(settings.vault_path)
    resolver = Resolver(store, export_settings.ignored_tags)
    exporter = ContextExporter(
        store, export_settings, make_sink(getattr(args, "output", None)), resolver
    )

    if args.command == "builder":
        builder = ContextBuilder(resolver, search_limit=settings.search_limit)
        if args.folder:
            builder.add_folder(args.folder)
        interactive_mode(builder, exporter)
        return

    selection = SelectionSet()
    try:
        if args.command == "folder":
            for path in resolver.collect_folder(args.path.strip("/")):
                selection.add_document(path)
        elif args.command == "files":
            for path in args.paths:
                selection.add_document(path)
        elif args.command == "tag":
            for tag in args.tags:
                selection.add_tag_root(tag)
    except (ValueError, OSError) as e:
        notice(f"Error: {e}", Colors.RED)
        sys.exit(1)

    for key in args.exclude:
        selection.exclude(key)

    if not run_export(exporter, selection):
        sys.exit(1)


if __name__ == "__main__":
    cli()
