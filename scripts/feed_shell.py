#!/usr/bin/env python
"""Interactive terminal client: log in, page through the feed and toggle likes."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from imagefeed.clients import HTTPExchange, InMemoryTokenStore  # noqa: E402
from imagefeed.core.config import AppSettings, _load_env_file  # noqa: E402
from imagefeed.core.context import MainContext  # noqa: E402
from imagefeed.core.errors import ImageFeedError  # noqa: E402
from imagefeed.core.logging import configure_logging  # noqa: E402
from imagefeed.schemas.events import FeedChangeEvent, PhotosAppended  # noqa: E402
from imagefeed.services import (  # noqa: E402
    AuthSession,
    FeedStore,
    LikeCoordinator,
    LoginFlow,
    LogoutService,
    ProfileSession,
)

HELP = "Commands: next | list | like N | unlike N | logout | quit"


class FeedShell:
    def __init__(self, settings: AppSettings, exchange: HTTPExchange) -> None:
        context = MainContext()
        self.token_store = InMemoryTokenStore()
        self.auth = AuthSession(settings.unsplash, exchange, self.token_store, context)
        self.profile = ProfileSession(settings.unsplash, exchange, context)
        self.feed = FeedStore(
            settings.unsplash,
            exchange,
            self.token_store,
            context,
            page_size=settings.feed.page_size,
        )
        self.likes = LikeCoordinator(
            settings.unsplash, exchange, self.token_store, self.feed, context
        )
        self.login_flow = LoginFlow(self.auth, self.profile)
        self.logout_service = LogoutService(
            self.token_store, self.auth, self.profile, self.feed, context
        )
        self.feed.subscribe(self._on_feed_change)

    def _on_feed_change(self, event: FeedChangeEvent) -> None:
        if isinstance(event, PhotosAppended):
            for index in event.indices:
                self._print_photo(index)

    def _print_photo(self, index: int) -> None:
        photo = self.feed.photo(index)
        heart = "♥" if photo.is_liked else " "
        created = photo.created_at.date().isoformat() if photo.created_at else "----------"
        print(f"{index:4d} {heart} {created} {photo.description or photo.id}")

    async def login(self) -> bool:
        url = self.auth.build_authorization_url()
        if url is None:
            print("Authorization URL could not be built; check UNSPLASH_AUTH_BASE_URL.")
            return False
        print(f"Open this URL and sign in:\n  {url}\n")
        while True:
            redirect = (await asyncio.to_thread(input, "Paste the final redirect URL: ")).strip()
            if redirect.lower() in {"exit", "quit"}:
                return False
            try:
                profile = await self.login_flow.complete(redirect)
            except ImageFeedError as exc:
                print(f"Login failed: {exc}")
                return False
            if profile is None:
                print("That URL does not carry an authorization code, try again.")
                continue
            print(f"Signed in as {profile.display_name or profile.username} ({profile.login_handle})\n")
            return True

    async def _toggle(self, argument: str, is_liked: bool) -> None:
        try:
            photo = self.feed.photo(int(argument))
        except (ValueError, IndexError):
            print("Unknown photo index.")
            return
        await self.likes.toggle_like(photo.id, is_liked)
        self._print_photo(int(argument))

    async def run(self) -> int:
        if not await self.login():
            return 1
        print(HELP)
        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except (EOFError, KeyboardInterrupt):
                print("\nGoodbye!")
                return 0
            command, _, argument = line.strip().partition(" ")
            try:
                if command in {"quit", "exit"}:
                    print("Goodbye!")
                    return 0
                if command == "next":
                    if await self.feed.fetch_next_page() is None:
                        print("A page is already loading.")
                elif command == "list":
                    for index in range(len(self.feed)):
                        self._print_photo(index)
                elif command == "like":
                    await self._toggle(argument, True)
                elif command == "unlike":
                    await self._toggle(argument, False)
                elif command == "logout":
                    await self.logout_service.logout()
                    print("Signed out.")
                    return 0
                elif command:
                    print(HELP)
            except ImageFeedError as exc:
                print(f"Request failed: {exc}")


async def _main(settings: AppSettings) -> int:
    async with HTTPExchange(timeout=settings.http_timeout_seconds) as exchange:
        return await FeedShell(settings, exchange).run()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Browse the Unsplash feed from a terminal.")
    parser.add_argument(
        "--env-file",
        default=".env",
        type=Path,
        help="Environment file holding UNSPLASH_ACCESS_KEY and UNSPLASH_SECRET_KEY.",
    )
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    _load_env_file(str(args.env_file))
    configure_logging(args.log_level)
    settings = AppSettings()  # type: ignore[call-arg]
    return asyncio.run(_main(settings))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
