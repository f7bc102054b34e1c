"""Prompt text sent to the generative models, one builder per asset kind."""

from .config import YOUTUBE_BANNER_SAFE_AREA, YOUTUBE_THUMBNAIL_SIZE
from .models.request import (
    AboutPayload,
    BannerPayload,
    DescriptionPayload,
    IntroPayload,
    LogoPayload,
    ThumbnailPayload,
)


def logo_prompt(payload: LogoPayload) -> str:
    return (
        "Create a professional, circular YouTube channel logo with a transparent background. "
        f'The logo should be based on this description: "{payload.prompt}". '
        "It needs to be simple, memorable, and visually appealing in small sizes."
    )


def banner_prompt(payload: BannerPayload) -> str:
    safe_area = YOUTUBE_BANNER_SAFE_AREA.dimensions
    if payload.logo is not None:
        return (
            f"Create a visually stunning YouTube channel banner ({payload.dimensions} pixels) "
            "with a 16:9 aspect ratio.\n"
            f'- Theme: "{payload.prompt}"\n'
            "- Instructions:\n"
            "1. Use the provided channel logo image. Place it tastefully and prominently within "
            f"the banner's central safe area ({safe_area} pixels), usually on the left or right side.\n"
            "2. Design a background and overall aesthetic that complements the logo and the channel theme.\n"
            "3. The core content (like channel name or tagline, which you should create if not "
            "specified) should be clearly visible within the safe area.\n"
            "4. The final design must be cohesive, professional, and captivating on all devices."
        )
    return (
        f"Create a visually stunning YouTube channel banner ({payload.dimensions} pixels). "
        f"The core content and channel name should be clearly visible within the central safe area "
        f"({safe_area} pixels). The banner's theme should be: \"{payload.prompt}\". "
        "Design it to be captivating on desktop, mobile, and TV screens."
    )


def thumbnail_theme_prompt(payload: ThumbnailPayload) -> str:
    """First step of a thumbnail: ask the text model for a visual theme."""
    return (
        "Generate a short, creative, and visually descriptive prompt for a YouTube song thumbnail. "
        f'Based on the song title "{payload.song_title}" by "{payload.artist}", describe a fitting '
        "mood, style, color palette, and background elements."
    )


def thumbnail_prompt(payload: ThumbnailPayload, theme: str) -> str:
    size = YOUTUBE_THUMBNAIL_SIZE.dimensions
    return (
        f"Create an eye-catching YouTube song thumbnail ({size} pixels).\n"
        f'- Song Title: "{payload.song_title}"\n'
        f'- Artist: "{payload.artist}"\n'
        f'- Visual Theme: "{theme}"\n\n'
        "Instructions:\n"
        "1. Use the provided image of the artist as the main subject, integrating them seamlessly.\n"
        "2. Create a professional, high-quality background based on the Visual Theme.\n"
        "3. Add the song title and artist's name using a stylish, highly readable font. "
        "Ensure text is prominent and well-placed.\n"
        f"4. The final image must be exactly {size} pixels and look like a professional music thumbnail."
    )


def description_prompt(payload: DescriptionPayload) -> str:
    return (
        f"Generate a compelling YouTube video description in {payload.language} for the song "
        f'"{payload.song_title}" by "{payload.artist}". The description should be enthusiastic, '
        "mention both the song title and artist, include a call to action (e.g., \"Listen now on "
        "your favorite streaming platforms!\", \"Don't forget to Like, Share, and Subscribe!\"), "
        "and end with a list of 5 relevant hashtags in the same language."
    )


def about_prompt(payload: AboutPayload) -> str:
    return (
        f"Generate a compelling YouTube channel 'About' page description in {payload.language}.\n"
        f'- Channel Name: "{payload.channel_name}"\n'
        f'- Channel Category/Topic: "{payload.category}"\n'
        f'- Desired Tone: "{payload.tone}"\n\n'
        "The description should be engaging for the target audience. It must clearly explain what "
        "the channel is about, detail the type of content and upload frequency (you can invent a "
        "realistic schedule, e.g., 'new videos every week'), and conclude with a strong call to "
        "action, encouraging viewers to subscribe."
    )


def intro_prompt(payload: IntroPayload) -> str:
    return (
        "Create a professional, 5-second YouTube channel intro video with a 16:9 aspect ratio.\n"
        f'- Channel Name: "{payload.channel_name}"\n'
        "- Instructions:\n"
        "1. Incorporate the provided channel logo.\n"
        "2. The style should be modern, dynamic, and engaging with clean animations.\n"
        "3. The logo and channel name should be revealed creatively.\n"
        "4. The final output must be high-energy and suitable as a channel intro."
    )
