"""Command-line front end.

Usage:
    channelkit logo "minimalist fox"
    channelkit banner "retro synthwave gaming" --logo logo.png
    channelkit thumbnail "Song Title" "Artist" artist.jpg
    channelkit description "Song Title" "Artist" --language Spanish
    channelkit about "The Tech Sphere" "Technology reviews" --tone Informative
    channelkit intro "The Tech Sphere" logo.png
    channelkit history
    channelkit clear-history
"""

import argparse
import asyncio
import logging
import sys

from ..errors import ChannelKitError
from ..models import (
    AboutPayload,
    BannerPayload,
    DescriptionPayload,
    GenerationRequest,
    IntroPayload,
    JobHandle,
    JobStatus,
    LogoPayload,
    ReferenceImage,
    ThumbnailPayload,
)
from ..config import DEFAULT_LANGUAGE, DEFAULT_TONE, YOUTUBE_BANNER_SIZE
from ..services import Studio


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="channelkit", description="Generate YouTube channel assets with AI.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    logo = sub.add_parser("logo", help="Generate a channel logo")
    logo.add_argument("prompt", help="What the logo should show")

    banner = sub.add_parser("banner", help="Generate a channel banner")
    banner.add_argument("prompt", help="Banner theme")
    banner.add_argument("--logo", help="Channel logo image to place on the banner")
    banner.add_argument("--width", type=int, default=YOUTUBE_BANNER_SIZE.width)
    banner.add_argument("--height", type=int, default=YOUTUBE_BANNER_SIZE.height)

    thumbnail = sub.add_parser("thumbnail", help="Generate a song thumbnail")
    thumbnail.add_argument("song_title")
    thumbnail.add_argument("artist")
    thumbnail.add_argument("image", help="Photo of the artist")

    description = sub.add_parser("description", help="Generate a video description")
    description.add_argument("song_title")
    description.add_argument("artist")
    description.add_argument("--language", default=DEFAULT_LANGUAGE)

    about = sub.add_parser("about", help="Generate channel 'About' text")
    about.add_argument("channel_name")
    about.add_argument("category")
    about.add_argument("--tone", default=DEFAULT_TONE)
    about.add_argument("--language", default=DEFAULT_LANGUAGE)

    intro = sub.add_parser("intro", help="Generate a 5-second intro video")
    intro.add_argument("channel_name")
    intro.add_argument("logo", help="Channel logo image")

    sub.add_parser("history", help="List generated assets, newest first")

    clear = sub.add_parser("clear-history", help="Delete the generation history")
    clear.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    return parser


def build_request(args: argparse.Namespace) -> GenerationRequest:
    """Turn parsed arguments into a request. Raises ChannelKitError on bad image files."""
    if args.command == "logo":
        payload = LogoPayload(prompt=args.prompt)
    elif args.command == "banner":
        logo = ReferenceImage.from_path(args.logo) if args.logo else None
        payload = BannerPayload(prompt=args.prompt, logo=logo, width=args.width, height=args.height)
    elif args.command == "thumbnail":
        payload = ThumbnailPayload(
            song_title=args.song_title,
            artist=args.artist,
            image=ReferenceImage.from_path(args.image),
        )
    elif args.command == "description":
        payload = DescriptionPayload(song_title=args.song_title, artist=args.artist, language=args.language)
    elif args.command == "about":
        payload = AboutPayload(
            channel_name=args.channel_name,
            category=args.category,
            tone=args.tone,
            language=args.language,
        )
    elif args.command == "intro":
        payload = IntroPayload(channel_name=args.channel_name, logo=ReferenceImage.from_path(args.logo))
    else:
        raise ValueError(f"Not a generation command: {args.command}")
    return GenerationRequest.of(payload)


def print_progress(handle: JobHandle) -> None:
    suffix = f" (check {handle.attempts})" if handle.status is JobStatus.POLLING and handle.attempts else ""
    print(f"  [{handle.request.kind.value}] {handle.phase}{suffix}", flush=True)


async def generate(studio: Studio, request: GenerationRequest) -> int:
    print(f"Generating {request.kind.value}: {request.prompt}", flush=True)
    handle = studio.submit_request(request, on_update=print_progress)
    try:
        if handle.task is not None:
            await handle.task
    except asyncio.CancelledError:
        studio.cancel_request(handle)
        raise

    if handle.status is not JobStatus.SUCCEEDED:
        print(f"Error: {handle.error}", flush=True)
        return 1

    if handle.artifact is not None and handle.artifact.text is not None:
        print()
        print(handle.artifact.text)
        print()
    print(f"Saved: {handle.artifact_path}", flush=True)
    return 0


def show_history(studio: Studio) -> int:
    items = studio.get_history()
    if not items:
        print("No generation history yet.")
        return 0
    for item in items:
        created = item.created_at.astimezone().strftime("%Y-%m-%d %H:%M")
        print(f"{created}  {item.type.value:<12} {item.prompt}")
        print(f"                  {item.artifact_ref}")
    return 0


def clear_history(studio: Studio, yes: bool) -> int:
    if not yes:
        answer = input(
            "Are you sure you want to clear your entire generation history? "
            "This action cannot be undone. [y/N] "
        )
        if answer.strip().lower() not in ("y", "yes"):
            print("Cancelled.")
            return 0
    studio.clear_history()
    print("History cleared.")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        studio = Studio.from_config()
    except (ChannelKitError, ValueError) as e:
        print(f"Error: {e}", flush=True)
        return 2

    if args.command == "history":
        return show_history(studio)
    if args.command == "clear-history":
        return clear_history(studio, args.yes)

    try:
        request = build_request(args)
    except ChannelKitError as e:
        print(f"Error: {e}", flush=True)
        return 2

    try:
        return asyncio.run(generate(studio, request))
    except KeyboardInterrupt:
        print("\nCancelled.", flush=True)
        return 130


if __name__ == "__main__":
    sys.exit(main())
