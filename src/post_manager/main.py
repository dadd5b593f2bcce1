"""
Main Entry Point

Command-line front end for the Post Manager. Every command goes through
the ResourceStore, exactly as an interactive UI would:

1. list    - load and print all posts
2. create  - validate and create a post, then reload
3. update  - validate and update a post, then reload
4. delete  - confirm, delete a post, then reload

Use --offline to run against the in-memory backend instead of a server.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import config
from .api import InMemoryPostsBackend, Post, PostFields, ResourceClient
from .exceptions import PostManagerError, ValidationError
from .store import CollectionState, ResourceStore, Status


# Configure logging
def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Set up logging for the application."""
    # Ensure log directory exists
    config.log.log_directory.mkdir(parents=True, exist_ok=True)

    # Create logger
    logger = logging.getLogger("post_manager")
    logger.setLevel(logging.DEBUG)

    # Console handler goes to stderr so command output stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, log_level.upper()))
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S"
    )
    console_handler.setFormatter(console_format)

    # File handler
    file_handler = logging.FileHandler(
        config.log.log_file_path,
        mode='a',
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(config.log.log_format))

    logger.handlers.clear()
    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    return logger


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="post-manager",
        description="Manage posts on a REST server.",
    )
    parser.add_argument("--base-url", help=f"Server root (default: {config.api.base_url})")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use an in-memory backend seeded with sample posts",
    )
    parser.add_argument("--log-level", default="WARNING", help="Console log level")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List all posts")

    create = commands.add_parser("create", help="Create a post")
    _add_field_arguments(create)

    update = commands.add_parser("update", help="Update a post")
    update.add_argument("id", help="Id of the post to update")
    _add_field_arguments(update)

    delete = commands.add_parser("delete", help="Delete a post")
    delete.add_argument("id", help="Id of the post to delete")
    delete.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    return parser


def _add_field_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--date", required=True)
    parser.add_argument("--title", required=True)
    parser.add_argument("--read-time", dest="read_time", required=True)


def render(state: CollectionState) -> str:
    """Render the collection the way the list screen shows it."""
    lines = []
    if state.status is Status.LOADING:
        lines.append(config.display.loading_message)
    if state.status is Status.FAILED:
        lines.append(config.display.load_failed_message)
    if state.is_empty:
        lines.append(config.display.empty_message)

    for post in state.records:
        lines.append(f"[{post.id}] {post.format_summary()}")

    return "\n".join(lines)


async def prompt_delete(post: Optional[Post]) -> bool:
    """Ask on the terminal before deleting, without blocking the event loop."""
    name = f" '{post.title}'" if post else ""
    print(f"{config.display.delete_title}{name} {config.display.delete_message}")
    answer = await asyncio.to_thread(input, "Delete? [y/N] ")
    return answer.strip().lower() in ("y", "yes")


async def run(args: argparse.Namespace) -> int:
    """Execute one command and return the process exit code."""
    logger = logging.getLogger("post_manager.main")

    backend = None
    http_client = None
    base_url = args.base_url
    if args.offline:
        backend = InMemoryPostsBackend().seed_samples()
        http_client = backend.client()
        base_url = base_url or "http://posts.local"

    async with ResourceClient(base_url, http_client=http_client) as client:
        store = ResourceStore(client)
        try:
            if args.command == "list":
                state = await store.load()
                print(render(state))
                return 0 if state.status is Status.READY else 1

            fields = None
            if args.command in ("create", "update"):
                fields = PostFields(
                    date=args.date, title=args.title, read_time=args.read_time
                )

            if args.command == "create":
                await store.create(fields)
            elif args.command == "update":
                await store.load()
                store.start_editing(args.id)
                await store.update(args.id, fields)
            elif args.command == "delete":
                await store.load()
                confirm = (lambda post: True) if args.yes else prompt_delete
                if not await store.remove(args.id, confirm):
                    print("Cancelled.")
                    return 0

            print(render(store.state))
            return 0

        except ValidationError as e:
            labels = config.display.field_labels
            for name in e.missing:
                print(config.display.required_template.format(label=labels.get(name, name)))
            return 1

        except PostManagerError as e:
            logger.error(f"{args.command} failed: {e}")
            print(str(e), file=sys.stderr)
            return 1

        finally:
            store.close()
            if http_client is not None:
                await http_client.aclose()


def main(argv: Optional[List[str]] = None):
    """Main entry point for the post manager."""
    args = build_parser().parse_args(argv)

    # Set up logging
    logger = setup_logging(args.log_level)

    try:
        sys.exit(asyncio.run(run(args)))

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
