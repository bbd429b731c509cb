# steambox/main.py
from __future__ import annotations

import argparse
import sys
from typing import Callable, Dict, List, Optional, Tuple

import requests

from steambox import config, gist, splice, steam, storage, summary
from steambox.config import ConfigError, Settings


# -----------------------------
# Titles
# -----------------------------

def markdown_title(settings: Settings) -> str:
    if settings.gist_id:
        return (
            f'#### <a href="https://gist.github.com/{settings.gist_id}" '
            f'target="_blank">{settings.title}</a>'
        )
    return f"#### {settings.title}"


# -----------------------------
# Targets
# -----------------------------

# (label, new bytes, writer)
Pending = Tuple[str, bytes, Callable[[], None]]


def _prepare_gist(settings: Settings, lines: List[str]) -> Pending:
    filename, current = gist.get_document(
        settings.gist_id,
        settings.gist_filename,
        token=settings.gh_token,
        user=settings.gh_user,
    )
    print(f"[gist] fetched {filename!r} ({len(current)} bytes)")
    updated = splice.splice(current, filename, lines)

    def write() -> None:
        gist.put_document(
            settings.gist_id, filename, updated, token=settings.gh_token, user=settings.gh_user
        )

    return f"gist {settings.gist_id}/{filename}", updated, write


def _prepare_markdown(settings: Settings, lines: List[str]) -> Pending:
    path = settings.markdown_file
    current = storage.read_document(path)
    print(f"[markdown] read {path} ({len(current)} bytes)")
    updated = splice.splice(current, markdown_title(settings), lines)
    return f"markdown {path}", updated, lambda: storage.write_document(path, updated)


PREPARERS: Dict[str, Callable[[Settings, List[str]], Pending]] = {
    config.UPDATE_GIST: _prepare_gist,
    config.UPDATE_MARKDOWN: _prepare_markdown,
}


# -----------------------------
# Pipeline
# -----------------------------

def run(settings: Settings, *, dry_run: Optional[bool] = None) -> List[str]:
    """
    Fetch playtime, render the lines, splice them into every configured target.
    Every target is spliced before the first write, so a missing marker
    anywhere leaves all documents untouched. Returns the rendered lines.
    """
    dry_run = settings.dry_run if dry_run is None else dry_run

    records = steam.get_recent_playtime(
        settings.steam_id, settings.steam_api_key, count=settings.recent_count
    )
    print(f"[steam] {len(records)} recently played game(s)")

    lines = summary.summarize(records, max_lines=settings.max_lines)

    pending = [PREPARERS[target](settings, lines) for target in settings.targets]

    for label, updated, write in pending:
        if dry_run:
            print(f"[dry-run] would update {label}:")
            print(updated.decode("utf-8", "replace"))
            continue
        write()
        print(f"[ok] updated {label}")

    return lines


# -----------------------------
# CLI
# -----------------------------

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="steambox",
        description="Write recently played Steam games into a gist and/or a markdown file.",
    )
    parser.add_argument(
        "--update",
        choices=config.UPDATE_OPTIONS,
        default=None,
        help="Which documents to update (default: $UPDATE_OPTION or GIST).",
    )
    parser.add_argument(
        "--markdown-file", default=None, help="Markdown file holding the steam-box markers."
    )
    parser.add_argument(
        "--max-lines", type=int, default=None, help="Number of games to show (default 3)."
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Print the updated documents instead of writing them."
    )

    args = parser.parse_args(argv)
    if args.max_lines is not None and args.max_lines < 0:
        parser.error("--max-lines must be >= 0")

    try:
        settings = config.load_settings(
            update_option=args.update,
            markdown_file=args.markdown_file,
            max_lines=args.max_lines,
            dry_run=args.dry_run or None,
        )
        run(settings)
    except requests.RequestException as e:
        print(f"[error] request failed: {e}", file=sys.stderr)
        return 1
    except (ConfigError, splice.MarkerNotFound, gist.DocumentNotFound, OSError) as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1
    return 0


def cli() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n[aborted]")
        sys.exit(130)


if __name__ == "__main__":
    cli()
